# pdf_gallery/services/users.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..auth.security import hash_password, verify_password, create_access_token
from ..errors import UserAlreadyExistsError, InvalidCredentialsError, IncorrectPasswordError
from ..models import User
from ..repositories import PdfRepository, UserRepository
from ..schemas.user import ProfileStats
from ..utils.logging import auth_logger

BYTES_PER_MB = 1024 * 1024


class UserService:
    def register_user(self, db: Session, username: str, email: str, password: str) -> tuple[User, str]:
        auth_logger.info("Attempting to register user", extra={"username": username})
        users = UserRepository(db)

        if users.get_by_username(username) is not None:
            auth_logger.warning("Registration failed: username taken", extra={"username": username})
            raise UserAlreadyExistsError(f"Username '{username}' already exists")
        if users.get_by_email(email) is not None:
            auth_logger.warning("Registration failed: email taken", extra={"username": username})
            raise UserAlreadyExistsError("Email is already registered")

        try:
            user = users.add(User(
                username=username,
                email=email,
                password_hash=hash_password(password),
            ))
        except IntegrityError:
            db.rollback()
            auth_logger.warning("Registration failed due to integrity error", extra={"username": username})
            raise UserAlreadyExistsError("User already exists")

        auth_logger.info("Registered user", extra={"username": username, "user_id": user.id})
        return user, create_access_token(user.id)

    def login_user(self, db: Session, password: str, username: str | None = None,
                   email: str | None = None) -> tuple[User, str]:
        users = UserRepository(db)
        user = users.get_by_username(username) if username else users.get_by_email(email)
        if user is None:
            auth_logger.warning("Login failed: unknown user", extra={"login": username or email})
            raise InvalidCredentialsError()

        if not verify_password(password, user.password_hash):
            auth_logger.warning("Login failed: wrong password", extra={"user_id": user.id})
            raise InvalidCredentialsError()

        auth_logger.info("User logged in", extra={"user_id": user.id})
        return user, create_access_token(user.id)

    def change_password(self, db: Session, user: User, current_password: str, new_password: str) -> None:
        if not verify_password(current_password, user.password_hash):
            auth_logger.warning("Password change rejected", extra={"user_id": user.id})
            raise IncorrectPasswordError()

        UserRepository(db).update_password(user, hash_password(new_password))
        auth_logger.info("Password updated", extra={"user_id": user.id})

    def profile_stats(self, db: Session, user: User) -> ProfileStats:
        stats = PdfRepository(db).owner_stats(user.id)
        return ProfileStats(
            total_pdfs=stats.total_pdfs,
            public_pdfs=stats.public_pdfs,
            private_pdfs=stats.private_pdfs,
            total_storage=round(stats.total_bytes / BYTES_PER_MB, 2),
        )


user_service = UserService()
