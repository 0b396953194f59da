"""Authentication endpoints."""

from fastapi import APIRouter, Depends, status

from hiring_portal.api.deps import get_current_identity, get_repository
from hiring_portal.core.security import Identity
from hiring_portal.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from hiring_portal.schemas.user import UserView
from hiring_portal.services import auth_service
from hiring_portal.services.hydration import user_view
from hiring_portal.services.repository import Repository

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, repository: Repository = Depends(get_repository)):
    """Register a new manager or candidate."""
    user = auth_service.register_user(repository, request.email, request.password, request.role)
    return RegisterResponse(message="User registered", user=user_view(user))


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, repository: Repository = Depends(get_repository)):
    """Login with email and password."""
    token, user = auth_service.authenticate(repository, request.email, request.password)
    return LoginResponse(token=token, user=user_view(user))


@router.get("/me", response_model=UserView)
async def get_current_user_info(identity: Identity = Depends(get_current_identity)):
    """Get current user information."""
    return UserView(id=identity.id, email=identity.email, role=identity.role)
