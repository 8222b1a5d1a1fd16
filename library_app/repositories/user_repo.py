from sqlalchemy import select

from library_app.models.user import User


class UserRepo:
    def __init__(self, session):
        self.session = session

    def get(self, user_id):
        return self.session.get(User, user_id)

    def get_by_email(self, email: str):
        return self.session.scalars(select(User).filter_by(email=email)).first()

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def list_all(self):
        return self.session.scalars(select(User).order_by(User.name)).all()

    def add(self, user: User):
        self.session.add(user)
        self.session.flush()
        return user
