"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/duties.py
===============================================================================

Responsibilities:
    - Endpoints del catálogo de duties (alta/baja admin, consultas, overdue).
    - Endpoints del ciclo de vida de asignaciones (assign / complete / listados).

Notes:
    - IN_PROGRESS / CANCELLED no se exponen por HTTP (solo COMPLETE).
    - Las rutas fijas (/search, /overdue, /mine) se declaran antes que las
      rutas con path params.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from scheduler.application.usecases import (
    AssignDutyInput,
    AssignDutyUseCase,
    AssignmentListResult,
    AssignmentResult,
    CompleteAssignmentUseCase,
    CreateDutyInput,
    CreateDutyUseCase,
    DeactivateDutyUseCase,
    DutyListResult,
    DutyResult,
    FilterDutiesUseCase,
    ListActiveDutiesUseCase,
    ListAssignmentsByStatusUseCase,
    ListAssignmentsUseCase,
    ListMyAssignmentsUseCase,
    ListOverdueAssignmentsUseCase,
    ListOverdueDutiesUseCase,
    SearchDutiesUseCase,
)
from scheduler.container import (
    get_assign_duty_use_case,
    get_complete_assignment_use_case,
    get_create_duty_use_case,
    get_deactivate_duty_use_case,
    get_filter_duties_use_case,
    get_list_active_duties_use_case,
    get_list_assignments_by_status_use_case,
    get_list_assignments_use_case,
    get_list_my_assignments_use_case,
    get_list_overdue_assignments_use_case,
    get_list_overdue_duties_use_case,
    get_search_duties_use_case,
)
from scheduler.domain.entities import AssignmentStatus, DutyPriority
from scheduler.domain.policy import Actor
from scheduler.identity.auth_users import require_actor

from ..error_mapping import raise_scheduler_error
from ..schemas.duties import (
    AssignDutyReq,
    AssignmentRes,
    AssignmentsListRes,
    CreateDutyReq,
    DutiesListRes,
    DutyRes,
)

router = APIRouter()


def _duty_res(result: DutyResult) -> DutyRes:
    if result.error is not None:
        raise_scheduler_error(result.error)
    return DutyRes.from_entity(result.duty)


def _duties_res(result: DutyListResult) -> DutiesListRes:
    if result.error is not None:
        raise_scheduler_error(result.error)
    return DutiesListRes(duties=[DutyRes.from_entity(d) for d in result.duties])


def _assignment_res(result: AssignmentResult) -> AssignmentRes:
    if result.error is not None:
        raise_scheduler_error(result.error)
    return AssignmentRes.from_entity(result.assignment)


def _assignments_res(result: AssignmentListResult) -> AssignmentsListRes:
    if result.error is not None:
        raise_scheduler_error(result.error)
    return AssignmentsListRes(
        assignments=[AssignmentRes.from_entity(a) for a in result.assignments]
    )


# =============================================================================
# Duties
# =============================================================================


@router.get("/duties", response_model=DutiesListRes, tags=["duties"])
def list_active_duties(
    use_case: ListActiveDutiesUseCase = Depends(get_list_active_duties_use_case),
    actor: Actor = Depends(require_actor()),
):
    return _duties_res(use_case.execute(actor))


@router.get("/duties/filter", response_model=DutiesListRes, tags=["duties"])
def filter_duties(
    priority: DutyPriority = Query(...),
    is_active: bool = Query(True),
    use_case: FilterDutiesUseCase = Depends(get_filter_duties_use_case),
    actor: Actor = Depends(require_actor()),
):
    return _duties_res(use_case.execute(actor, priority=priority, is_active=is_active))


@router.get("/duties/search", response_model=DutiesListRes, tags=["duties"])
def search_duties(
    q: str = Query("", max_length=200),
    use_case: SearchDutiesUseCase = Depends(get_search_duties_use_case),
    actor: Actor = Depends(require_actor()),
):
    return _duties_res(use_case.execute(actor, q))


@router.get("/duties/overdue", response_model=DutiesListRes, tags=["duties"])
def list_overdue_duties(
    use_case: ListOverdueDutiesUseCase = Depends(get_list_overdue_duties_use_case),
    actor: Actor = Depends(require_actor()),
):
    return _duties_res(use_case.execute(actor))


@router.post("/duties", response_model=DutyRes, status_code=201, tags=["duties"])
def create_duty(
    req: CreateDutyReq,
    use_case: CreateDutyUseCase = Depends(get_create_duty_use_case),
    actor: Actor = Depends(require_actor()),
):
    return _duty_res(
        use_case.execute(
            CreateDutyInput(
                actor=actor,
                name=req.name,
                description=req.description,
                estimated_hours=req.estimated_hours,
                priority=req.priority,
            )
        )
    )


@router.post("/duties/{duty_id}/deactivate", response_model=DutyRes, tags=["duties"])
def deactivate_duty(
    duty_id: int,
    use_case: DeactivateDutyUseCase = Depends(get_deactivate_duty_use_case),
    actor: Actor = Depends(require_actor()),
):
    return _duty_res(use_case.execute(duty_id, actor))


@router.post(
    "/duties/{duty_id}/assignments",
    response_model=AssignmentRes,
    status_code=201,
    tags=["assignments"],
)
def assign_duty(
    duty_id: int,
    req: AssignDutyReq,
    use_case: AssignDutyUseCase = Depends(get_assign_duty_use_case),
    actor: Actor = Depends(require_actor()),
):
    return _assignment_res(
        use_case.execute(
            AssignDutyInput(
                actor=actor,
                duty_id=duty_id,
                user_id=req.user_id,
                assigned_date=req.assigned_date,
                notes=req.notes,
            )
        )
    )


# =============================================================================
# Assignments
# =============================================================================


@router.get("/assignments", response_model=AssignmentsListRes, tags=["assignments"])
def list_assignments(
    status: AssignmentStatus | None = Query(None),
    list_all: ListAssignmentsUseCase = Depends(get_list_assignments_use_case),
    by_status: ListAssignmentsByStatusUseCase = Depends(
        get_list_assignments_by_status_use_case
    ),
    actor: Actor = Depends(require_actor()),
):
    if status is not None:
        return _assignments_res(by_status.execute(actor, status))
    return _assignments_res(list_all.execute(actor))


@router.get(
    "/assignments/mine", response_model=AssignmentsListRes, tags=["assignments"]
)
def list_my_assignments(
    use_case: ListMyAssignmentsUseCase = Depends(get_list_my_assignments_use_case),
    actor: Actor = Depends(require_actor()),
):
    return _assignments_res(use_case.execute(actor))


@router.get(
    "/assignments/overdue", response_model=AssignmentsListRes, tags=["assignments"]
)
def list_overdue_assignments(
    use_case: ListOverdueAssignmentsUseCase = Depends(
        get_list_overdue_assignments_use_case
    ),
    actor: Actor = Depends(require_actor()),
):
    return _assignments_res(use_case.execute(actor))


@router.post(
    "/assignments/{assignment_id}/complete",
    response_model=AssignmentRes,
    tags=["assignments"],
)
def complete_assignment(
    assignment_id: int,
    use_case: CompleteAssignmentUseCase = Depends(get_complete_assignment_use_case),
    actor: Actor = Depends(require_actor()),
):
    return _assignment_res(use_case.execute(assignment_id, actor))
