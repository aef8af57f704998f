"""
===============================================================================
TARJETA CRC — scheduler/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer repositorios y casos de uso siguiendo DIP.
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons de repositorios con lru_cache.
  - Decidir in-memory vs Postgres según Settings (app_env).

Colaboradores:
  - crosscutting.config.get_settings
  - domain.repositories.* (puertos)
  - infrastructure.repositories.* (implementaciones)
  - application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio ni depende de FastAPI.
  - El reloj de los casos de uso es date.today (default); los tests lo
    inyectan construyendo los casos de uso a mano.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    AssignDutyUseCase,
    CompleteAssignmentUseCase,
    CreateDutyUseCase,
    CreateReservationUseCase,
    CreateUserUseCase,
    DeactivateDutyUseCase,
    DeleteReservationUseCase,
    DeleteUserUseCase,
    FilterDutiesUseCase,
    GetUserUseCase,
    ListActiveDutiesUseCase,
    ListAssignmentsByStatusUseCase,
    ListAssignmentsUseCase,
    ListMyAssignmentsUseCase,
    ListMyReservationsUseCase,
    ListOverdueAssignmentsUseCase,
    ListOverdueDutiesUseCase,
    ListReservationsBetweenUseCase,
    ListUpcomingReservationsUseCase,
    ListUsersByRoleUseCase,
    ListUsersUseCase,
    SearchDutiesUseCase,
    SearchUsersByNameUseCase,
    UpdateUserRoleUseCase,
    UpdateUserUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import (
    DutyAssignmentRepository,
    DutyRepository,
    ReservationRepository,
    UserRepository,
)
from .identity.auth_users import hash_password
from .infrastructure.repositories.in_memory import (
    InMemoryDutyAssignmentRepository,
    InMemoryDutyRepository,
    InMemoryReservationRepository,
    InMemoryUserRepository,
)
from .infrastructure.repositories.postgres import (
    PostgresDutyAssignmentRepository,
    PostgresDutyRepository,
    PostgresReservationRepository,
    PostgresUserRepository,
)

# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Repositorio de usuarios (in-memory en test; Postgres en runtime)."""
    if get_settings().is_test():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_reservation_repository() -> ReservationRepository:
    """Repositorio de reservas (in-memory en test; Postgres en runtime)."""
    if get_settings().is_test():
        return InMemoryReservationRepository()
    return PostgresReservationRepository()


@lru_cache(maxsize=1)
def get_duty_repository() -> DutyRepository:
    """Catálogo de duties (in-memory en test; Postgres en runtime)."""
    if get_settings().is_test():
        return InMemoryDutyRepository()
    return PostgresDutyRepository()


@lru_cache(maxsize=1)
def get_assignment_repository() -> DutyAssignmentRepository:
    """Repositorio de asignaciones (in-memory en test; Postgres en runtime)."""
    if get_settings().is_test():
        return InMemoryDutyAssignmentRepository(get_duty_repository())
    return PostgresDutyAssignmentRepository()


def reset_repositories() -> None:
    """Descarta los singletons (tests)."""
    for factory in (
        get_user_repository,
        get_reservation_repository,
        get_duty_repository,
        get_assignment_repository,
    ):
        factory.cache_clear()


# =============================================================================
# Reservas
# =============================================================================


def get_create_reservation_use_case() -> CreateReservationUseCase:
    return CreateReservationUseCase(
        get_reservation_repository(),
        get_user_repository(),
        max_notes_chars=get_settings().max_notes_chars,
    )


def get_delete_reservation_use_case() -> DeleteReservationUseCase:
    return DeleteReservationUseCase(get_reservation_repository())


def get_list_upcoming_reservations_use_case() -> ListUpcomingReservationsUseCase:
    return ListUpcomingReservationsUseCase(get_reservation_repository())


def get_list_my_reservations_use_case() -> ListMyReservationsUseCase:
    return ListMyReservationsUseCase(get_reservation_repository())


def get_list_reservations_between_use_case() -> ListReservationsBetweenUseCase:
    return ListReservationsBetweenUseCase(get_reservation_repository())


# =============================================================================
# Duties
# =============================================================================


def get_create_duty_use_case() -> CreateDutyUseCase:
    settings = get_settings()
    return CreateDutyUseCase(
        get_duty_repository(),
        max_name_chars=settings.max_duty_name_chars,
        max_description_chars=settings.max_description_chars,
    )


def get_deactivate_duty_use_case() -> DeactivateDutyUseCase:
    return DeactivateDutyUseCase(get_duty_repository())


def get_list_active_duties_use_case() -> ListActiveDutiesUseCase:
    return ListActiveDutiesUseCase(get_duty_repository())


def get_filter_duties_use_case() -> FilterDutiesUseCase:
    return FilterDutiesUseCase(get_duty_repository())


def get_search_duties_use_case() -> SearchDutiesUseCase:
    return SearchDutiesUseCase(get_duty_repository())


def get_list_overdue_duties_use_case() -> ListOverdueDutiesUseCase:
    return ListOverdueDutiesUseCase(
        get_assignment_repository(),
        overdue_after_days=get_settings().overdue_after_days,
    )


def get_list_overdue_assignments_use_case() -> ListOverdueAssignmentsUseCase:
    return ListOverdueAssignmentsUseCase(
        get_assignment_repository(),
        overdue_after_days=get_settings().overdue_after_days,
    )


# =============================================================================
# Asignaciones
# =============================================================================


def get_assign_duty_use_case() -> AssignDutyUseCase:
    return AssignDutyUseCase(
        get_assignment_repository(),
        get_duty_repository(),
        get_user_repository(),
        max_notes_chars=get_settings().max_notes_chars,
    )


def get_complete_assignment_use_case() -> CompleteAssignmentUseCase:
    return CompleteAssignmentUseCase(get_assignment_repository())


def get_list_assignments_use_case() -> ListAssignmentsUseCase:
    return ListAssignmentsUseCase(get_assignment_repository())


def get_list_my_assignments_use_case() -> ListMyAssignmentsUseCase:
    return ListMyAssignmentsUseCase(get_assignment_repository())


def get_list_assignments_by_status_use_case() -> ListAssignmentsByStatusUseCase:
    return ListAssignmentsByStatusUseCase(get_assignment_repository())


# =============================================================================
# Usuarios
# =============================================================================


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(get_user_repository())


def get_list_users_by_role_use_case() -> ListUsersByRoleUseCase:
    return ListUsersByRoleUseCase(get_user_repository())


def get_search_users_use_case() -> SearchUsersByNameUseCase:
    return SearchUsersByNameUseCase(get_user_repository())


def get_get_user_use_case() -> GetUserUseCase:
    return GetUserUseCase(get_user_repository())


def get_create_user_use_case() -> CreateUserUseCase:
    return CreateUserUseCase(
        get_user_repository(),
        hash_password,
        min_password_chars=get_settings().min_password_chars,
    )


def get_update_user_use_case() -> UpdateUserUseCase:
    return UpdateUserUseCase(
        get_user_repository(),
        hash_password,
        min_password_chars=get_settings().min_password_chars,
    )


def get_update_user_role_use_case() -> UpdateUserRoleUseCase:
    return UpdateUserRoleUseCase(get_user_repository())


def get_delete_user_use_case() -> DeleteUserUseCase:
    return DeleteUserUseCase(get_user_repository())
