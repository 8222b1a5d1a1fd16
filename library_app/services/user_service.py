from flask import current_app

from library_app.errors import UserNotFound, ValidationError
from library_app.repositories.user_repo import UserRepo
from library_app.services.auth_service import save_new_user
from library_app.utils.validators import clean_text, validate_password, validate_user


class UserService:
    ROLES = ("user", "admin")

    def __init__(self, users: UserRepo):
        self.users = users

    @classmethod
    def for_session(cls, session):
        return cls(UserRepo(session))

    def list_users(self):
        return self.users.list_all()

    def get_user(self, user_id):
        user = self.users.get(user_id)
        if not user:
            raise UserNotFound(user_id)
        return user

    def create_user(self, name: str, email: str, password: str, role: str = "user"):
        name = clean_text(name)
        email = clean_text(email)
        password = "" if password is None else str(password)

        err = validate_user(name, email) or validate_password(password)
        if err:
            raise ValidationError.from_field_error(err)
        if role not in self.ROLES:
            raise ValidationError("role", f"Role must be one of: {', '.join(self.ROLES)}")

        user = save_new_user(self.users, name, email, password, role=role)
        current_app.logger.info(f"[users] created user id={user.id} role={role}")
        return user
