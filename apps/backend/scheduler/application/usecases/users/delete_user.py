"""
===============================================================================
USE CASE: Delete User (admin, hard delete)
===============================================================================

Notas:
    - El borrado es físico; las cascadas sobre reservas/asignaciones son
      responsabilidad del storage.
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.policy import Actor, is_admin
from ....domain.repositories import UserRepository
from ..results import DeleteResult, not_found, unauthorized


class DeleteUserUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, user_id: int, actor: Actor | None) -> DeleteResult:
        if not is_admin(actor):
            return DeleteResult(
                deleted=False, error=unauthorized("Only admins can delete users.")
            )

        if not self._users.delete_user(user_id):
            return DeleteResult(deleted=False, error=not_found("User", user_id))

        logger.info(
            "User deleted", extra={"user_id": user_id, "actor_id": actor.user_id}
        )
        return DeleteResult(deleted=True)
