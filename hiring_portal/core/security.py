"""Security utilities: JWT, password hashing, RBAC."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from hiring_portal.config import settings
from hiring_portal.core.exceptions import Forbidden, InvalidCredential, Unauthenticated


class Role(str, Enum):
    """User roles."""

    MANAGER = "manager"
    CANDIDATE = "candidate"


class Permission(str, Enum):
    """Operations guarded by the authorization predicate."""

    PROJECTS_READ = "projects:read"
    PROJECTS_SAVE = "projects:save"
    SAVED_PROJECTS_READ = "saved_projects:read"
    ANALYTICS_READ = "analytics:read"
    MESSAGES_READ = "messages:read"


# Permission definitions
ROLE_PERMISSIONS = {
    Role.MANAGER: [
        "projects:*",
        "saved_projects:*",
        "analytics:*",
        "messages:*",
    ],
    Role.CANDIDATE: [
        "messages:read",
    ],
}


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, as established by the authentication gate."""

    id: str
    email: str
    role: str


# bcrypt only looks at the first 72 bytes and newer releases refuse anything longer
MAX_PASSWORD_BYTES = 72


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Check a password against its bcrypt hash."""
    secret = plain_password.encode("utf-8")
    if not password_hash or len(secret) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(secret, password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and verify JWT token."""
    if not token:
        raise Unauthenticated()
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise InvalidCredential()


def resolve_identity(token: str, repository) -> Identity:
    """
    Authentication gate: bearer token -> Identity.

    Raises:
        Unauthenticated: no token
        InvalidCredential: bad/expired token, or the user no longer exists
    """
    payload = decode_token(token)
    user_id = payload.get("sub")
    if user_id is None or payload.get("type") != "access":
        raise InvalidCredential()

    user = repository.find_user(id=user_id)
    if user is None:
        raise InvalidCredential()

    return Identity(id=user.id, email=user.email, role=user.role)


def check_permission(user_role: str, permission: str) -> bool:
    """Check if a role has a specific permission."""
    try:
        role = Role(user_role)
    except ValueError:
        return False
    permissions = ROLE_PERMISSIONS.get(role, [])

    if "*" in permissions:
        return True

    if permission in permissions:
        return True

    # Resource wildcard (e.g., "projects:*" matches "projects:read")
    resource = permission.split(":")[0]
    return f"{resource}:*" in permissions


def authorize(identity: Identity, permission: Permission) -> Identity:
    """Single authorization predicate for every guarded operation."""
    if not check_permission(identity.role, Permission(permission).value):
        raise Forbidden()
    return identity
