"""
Authentication service layer for user management and authentication
"""
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, func, select

from api.auth.models import User, UserRegister, TokenResponse
from core.exceptions import PersistError, ValidationError
from core.logger import logger
from core.security import hash_password, verify_password, create_access_token


def get_user_by_id(session: Session, user_id: uuid.UUID) -> User | None:
    return session.get(User, user_id)


def authenticate_user(
    session: Session, email: str, password: str
) -> User | None:
    """
    Authenticate user with email and password

    Returns:
        User object if authentication successful, None otherwise
    """
    user = session.exec(select(User).where(User.email == email.lower())).first()

    if not user:
        logger.info("Login attempt failed: no user with email %s", email)
        return None

    if not verify_password(password, user.hashed_password):
        logger.info("Login attempt failed: password mismatch for %s", email)
        return None

    return user


def register_user(session: Session, user_data: UserRegister) -> User:
    """
    Register a new user.
    The first account ever created becomes the admin; later accounts never do.

    Raises:
        ValidationError: If the email is already registered
    """
    email = user_data.email.lower()
    if session.exec(select(User).where(User.email == email)).first():
        raise ValidationError("User already exists with this email")

    is_first_account = session.exec(select(func.count()).select_from(User)).one() == 0

    user = User(
        name=user_data.name,
        email=email,
        hashed_password=hash_password(user_data.password),
        is_admin=is_first_account,
    )
    try:
        session.add(user)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Failed to register user %s: %s", email, exc)
        raise PersistError("Failed to register user") from exc
    session.refresh(user)

    logger.info("Registered user %s (admin=%s)", user.email, user.is_admin)
    return user


def issue_token(user: User) -> TokenResponse:
    """Build the login/register response for a user"""
    return TokenResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        is_admin=user.is_admin,
        access_token=create_access_token({"sub": str(user.id)}),
    )
