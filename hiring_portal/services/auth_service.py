"""Registration and login."""

from typing import Tuple

import structlog

from hiring_portal.core.exceptions import EmailAlreadyExists, InvalidCredential
from hiring_portal.core.security import Role, create_access_token, get_password_hash, verify_password
from hiring_portal.models import User
from hiring_portal.services.repository import Repository

logger = structlog.get_logger(__name__)


def register_user(repository: Repository, email: str, password: str, role: Role) -> User:
    """Create a user; the email must not be registered yet."""
    if repository.find_user(email=email) is not None:
        raise EmailAlreadyExists()

    user = repository.create_user(
        email=email,
        password_hash=get_password_hash(password),
        role=Role(role).value,
    )
    logger.info("user_registered", email=email, role=user.role)
    return user


def authenticate(repository: Repository, email: str, password: str) -> Tuple[str, User]:
    """
    Check credentials and issue an access token.

    Raises:
        InvalidCredential: unknown email or wrong password
    """
    user = repository.find_user(email=email)
    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredential("Invalid email or password")

    token = create_access_token({"sub": user.id, "role": user.role})
    logger.info("user_logged_in", email=email)
    return token, user
