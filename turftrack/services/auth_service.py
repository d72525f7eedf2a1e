from datetime import datetime, timezone
import re

from sqlalchemy.exc import IntegrityError

from turftrack.errors import AppError
from turftrack.extensions import bcrypt, db
from turftrack.models import User

EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
MIN_PASSWORD_LENGTH = 8


def _clean_name(value):
    if value is None:
        return None
    return str(value).strip() or None


class AuthService:
    @staticmethod
    def _normalize_email(email):
        normalized = email.strip().lower() if isinstance(email, str) else ""
        if not EMAIL_PATTERN.fullmatch(normalized):
            raise AppError("A valid email address is required.", 400, field="email")
        return normalized

    @staticmethod
    def register_user(email, password, first_name=None, last_name=None):
        normalized_email = AuthService._normalize_email(email)
        if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
            raise AppError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
                400,
                field="password",
            )

        if User.query.filter_by(email=normalized_email).first():
            raise AppError("Email already registered.", 409, field="email")

        user = User(
            email=normalized_email,
            first_name=_clean_name(first_name),
            last_name=_clean_name(last_name),
            password_hash=bcrypt.generate_password_hash(password).decode("utf-8"),
        )
        try:
            db.session.add(user)
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            raise AppError("Email already registered.", 409, field="email") from exc
        return user

    @staticmethod
    def authenticate_user(email, password):
        if not isinstance(email, str) or not isinstance(password, str):
            raise AppError("Invalid credentials.", 401)
        user = User.query.filter_by(email=email.strip().lower()).first()
        if not user:
            raise AppError("Invalid credentials.", 401)

        try:
            is_valid = bcrypt.check_password_hash(user.password_hash, password or "")
        except ValueError:
            is_valid = False

        if not is_valid:
            raise AppError("Invalid credentials.", 401)
        if not user.is_active_user:
            raise AppError("User account is inactive.", 403)
        user.last_login = datetime.now(timezone.utc)
        db.session.commit()
        return user
