"""
API Dependencies
Repository accessor, authentication and authorization for endpoints
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from hiring_portal.core.security import Identity, Permission, authorize, resolve_identity
from hiring_portal.services.repository import Repository

# auto_error=False so a missing header maps to our own Unauthenticated error
bearer_scheme = HTTPBearer(auto_error=False)


def get_repository(request: Request) -> Repository:
    return request.app.state.repository


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    repository: Repository = Depends(get_repository),
) -> Identity:
    """
    Get the authenticated caller from the Bearer token.
    """
    token = credentials.credentials if credentials else None
    return resolve_identity(token, repository)


def require_permission(permission: Permission):
    """Dependency to check that the caller may perform `permission`."""

    async def permission_checker(identity: Identity = Depends(get_current_identity)) -> Identity:
        return authorize(identity, permission)

    return permission_checker
