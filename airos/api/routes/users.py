"""User administration endpoints."""

from fastapi import APIRouter, Depends, status

from airos.api.dependencies import (
    get_delete_user_use_case,
    get_update_user_use_case,
    get_usr_store,
    require_admin,
    require_manager,
)
from airos.application.dto.mappers import user_to_response
from airos.application.dto.requests import UpdateUserRequest
from airos.application.dto.responses import ErrorResponse, UserResponse
from airos.application.use_cases import DeleteUserUseCase, UpdateUserUseCase
from airos.core.entities.user import AuthPrincipal
from airos.core.exceptions import UserNotFoundError
from airos.infrastructure.storage.sqlite import SQLiteUserStore

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    _: AuthPrincipal = Depends(require_manager),
    store: SQLiteUserStore = Depends(get_usr_store),
) -> list[UserResponse]:
    """List all users, newest first."""
    return [user_to_response(u) for u in await store.list_users()]


@router.get("/{user_id}", response_model=UserResponse, responses={404: {"model": ErrorResponse}})
async def get_user(
    user_id: int,
    _: AuthPrincipal = Depends(require_manager),
    store: SQLiteUserStore = Depends(get_usr_store),
) -> UserResponse:
    """Get a user by ID."""
    user = await store.get_user(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user_to_response(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_user(
    user_id: int,
    request: UpdateUserRequest,
    _: AuthPrincipal = Depends(require_admin),
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
) -> UserResponse:
    """Edit a user's profile, role or active flag."""
    return user_to_response(await use_case.execute(user_id, request))


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_user(
    user_id: int,
    principal: AuthPrincipal = Depends(require_admin),
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
) -> None:
    """Delete a user. Admins cannot delete themselves."""
    await use_case.execute(principal.user_id, user_id)
