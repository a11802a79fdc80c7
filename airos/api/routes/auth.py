"""Authentication endpoints: register, login, profile, logout."""

from fastapi import APIRouter, Depends, status

from airos.api.dependencies import (
    get_authenticate_user_use_case,
    get_bearer_token,
    get_current_user,
    get_register_user_use_case,
    get_token_issuer,
    get_update_profile_use_case,
    get_usr_store,
)
from airos.application.dto.mappers import user_to_response
from airos.application.dto.requests import LoginRequest, RegisterRequest, UpdateProfileRequest
from airos.application.dto.responses import (
    AuthResponse,
    ErrorResponse,
    MessageResponse,
    UserResponse,
)
from airos.application.use_cases import (
    AuthenticateUserUseCase,
    RegisterUserUseCase,
    UpdateProfileUseCase,
)
from airos.core.entities.user import AuthPrincipal
from airos.core.exceptions import UserNotFoundError
from airos.core.interfaces.auth import ITokenIssuer
from airos.infrastructure.storage.sqlite import SQLiteUserStore

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def register(
    request: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
) -> AuthResponse:
    """Create a staff account and return a bearer token."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse}},
)
async def login(
    request: LoginRequest,
    use_case: AuthenticateUserUseCase = Depends(get_authenticate_user_use_case),
) -> AuthResponse:
    """Exchange email and password for a bearer token."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("/profile", response_model=UserResponse, responses={401: {"model": ErrorResponse}})
async def get_profile(
    principal: AuthPrincipal = Depends(get_current_user),
    store: SQLiteUserStore = Depends(get_usr_store),
) -> UserResponse:
    """The caller's own account."""
    user = await store.get_user(principal.user_id)
    if user is None:
        raise UserNotFoundError(principal.user_id)
    return user_to_response(user)


@router.put(
    "/profile",
    response_model=UserResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def update_profile(
    request: UpdateProfileRequest,
    principal: AuthPrincipal = Depends(get_current_user),
    use_case: UpdateProfileUseCase = Depends(get_update_profile_use_case),
) -> UserResponse:
    """Update the caller's name, email, department or password."""
    user = await use_case.execute(principal.user_id, request)
    return user_to_response(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: str = Depends(get_bearer_token),
    principal: AuthPrincipal = Depends(get_current_user),
    issuer: ITokenIssuer = Depends(get_token_issuer),
) -> MessageResponse:
    """Revoke the presented token."""
    await issuer.revoke_token(token)
    return MessageResponse(message="Logged out")
