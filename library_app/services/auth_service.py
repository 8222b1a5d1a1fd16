from flask import current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from library_app.errors import EmailTaken, InvalidCredentials, StorageError, ValidationError
from library_app.models.user import User
from library_app.repositories.unit_of_work import unit_of_work
from library_app.repositories.user_repo import UserRepo
from library_app.utils.clock import utcnow
from library_app.utils.serializers import user_to_dict
from library_app.utils.validators import clean_text, validate_login, validate_registration


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return check_password_hash(password_hash, password)


def save_new_user(users: UserRepo, name: str, email: str, password: str, role: str = "user") -> User:
    if users.email_exists(email):
        raise EmailTaken()

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role,
        created_at=utcnow(),
    )
    try:
        with unit_of_work(users.session, "register user"):
            users.add(user)
    except StorageError as e:
        # lost a race with another registration for the same address
        if isinstance(e.__cause__, IntegrityError):
            raise EmailTaken() from e
        raise
    return user


class AuthService:
    def __init__(self, users: UserRepo):
        self.users = users

    @classmethod
    def for_session(cls, session):
        return cls(UserRepo(session))

    def register(self, email: str, username: str, password: str) -> dict:
        email = clean_text(email)
        username = clean_text(username)
        password = "" if password is None else str(password)

        err = validate_registration(email, username, password)
        if err:
            raise ValidationError.from_field_error(err)

        user = save_new_user(self.users, username, email, password)
        current_app.logger.info(f"[auth] registered user id={user.id}")
        return user_to_dict(user)

    def login(self, email: str, password: str) -> dict:
        email = clean_text(email)
        password = "" if password is None else str(password)

        err = validate_login(email, password)
        if err:
            raise ValidationError.from_field_error(err)

        user = self.users.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            current_app.logger.warning("[auth] rejected login attempt")
            raise InvalidCredentials()

        return user_to_dict(user)
