"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/users.py
===============================================================================

Responsibilities:
    - Endpoints de administración de usuarios (ADMIN, salvo GET /users/{id}).
    - El chequeo de rol lo hace el caso de uso; acá solo se resuelve el actor.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response

from scheduler.application.usecases import (
    CreateUserInput,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersByRoleUseCase,
    ListUsersUseCase,
    SearchUsersByNameUseCase,
    UpdateUserInput,
    UpdateUserRoleUseCase,
    UpdateUserUseCase,
    UserListResult,
    UserResult,
)
from scheduler.container import (
    get_create_user_use_case,
    get_delete_user_use_case,
    get_get_user_use_case,
    get_list_users_by_role_use_case,
    get_list_users_use_case,
    get_search_users_use_case,
    get_update_user_role_use_case,
    get_update_user_use_case,
)
from scheduler.domain.policy import Actor
from scheduler.identity.auth_users import require_actor
from scheduler.identity.users import UserRole

from ..error_mapping import raise_scheduler_error
from ..schemas.users import (
    CreateUserReq,
    UpdateUserReq,
    UpdateUserRoleReq,
    UserRes,
    UsersListRes,
)

router = APIRouter(prefix="/users", tags=["users"])


def _user_res(result: UserResult) -> UserRes:
    if result.error is not None:
        raise_scheduler_error(result.error)
    return UserRes.from_entity(result.user)


def _users_res(result: UserListResult) -> UsersListRes:
    if result.error is not None:
        raise_scheduler_error(result.error)
    return UsersListRes(users=[UserRes.from_entity(u) for u in result.users])


@router.get("", response_model=UsersListRes)
def list_users(
    role: UserRole | None = Query(None),
    list_all: ListUsersUseCase = Depends(get_list_users_use_case),
    by_role: ListUsersByRoleUseCase = Depends(get_list_users_by_role_use_case),
    actor: Actor = Depends(require_actor()),
):
    if role is not None:
        return _users_res(by_role.execute(actor, role))
    return _users_res(list_all.execute(actor))


@router.get("/search", response_model=UsersListRes)
def search_users(
    q: str = Query("", max_length=100),
    use_case: SearchUsersByNameUseCase = Depends(get_search_users_use_case),
    actor: Actor = Depends(require_actor()),
):
    return _users_res(use_case.execute(actor, q))


@router.get("/{user_id}", response_model=UserRes)
def get_user(
    user_id: int,
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
    actor: Actor = Depends(require_actor()),
):
    return _user_res(use_case.execute(user_id, actor))


@router.post("", response_model=UserRes, status_code=201)
def create_user(
    req: CreateUserReq,
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
    actor: Actor = Depends(require_actor()),
):
    return _user_res(
        use_case.execute(
            CreateUserInput(
                actor=actor,
                username=req.username,
                email=req.email,
                password=req.password,
                confirm_password=req.confirm_password,
                first_name=req.first_name,
                last_name=req.last_name,
                role=req.role,
            )
        )
    )


@router.patch("/{user_id}", response_model=UserRes)
def update_user(
    user_id: int,
    req: UpdateUserReq,
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
    actor: Actor = Depends(require_actor()),
):
    return _user_res(
        use_case.execute(
            UpdateUserInput(
                actor=actor,
                user_id=user_id,
                username=req.username,
                email=req.email,
                first_name=req.first_name,
                last_name=req.last_name,
                password=req.password,
                confirm_password=req.confirm_password,
            )
        )
    )


@router.put("/{user_id}/role", response_model=UserRes)
def update_user_role(
    user_id: int,
    req: UpdateUserRoleReq,
    use_case: UpdateUserRoleUseCase = Depends(get_update_user_role_use_case),
    actor: Actor = Depends(require_actor()),
):
    return _user_res(use_case.execute(user_id, req.role, actor))


@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: int,
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
    actor: Actor = Depends(require_actor()),
):
    result = use_case.execute(user_id, actor)
    if result.error is not None:
        raise_scheduler_error(result.error)
    return Response(status_code=204)
