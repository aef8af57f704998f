"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/reservations.py
===============================================================================

Responsibilities:
    - Endpoints de reservas del recurso compartido.
    - HTTP -> inputs de casos de uso; SchedulerError -> RFC7807.
    - El actor sale del Bearer JWT (require_actor), nunca del body.

Collaborators:
    - scheduler.container (factories)
    - scheduler.identity.auth_users.require_actor
    - error_mapping.raise_scheduler_error
===============================================================================
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Response

from scheduler.application.usecases import (
    CreateReservationInput,
    CreateReservationUseCase,
    DeleteReservationUseCase,
    ListMyReservationsUseCase,
    ListReservationsBetweenUseCase,
    ListUpcomingReservationsUseCase,
    ReservationListResult,
)
from scheduler.container import (
    get_create_reservation_use_case,
    get_delete_reservation_use_case,
    get_list_my_reservations_use_case,
    get_list_reservations_between_use_case,
    get_list_upcoming_reservations_use_case,
)
from scheduler.domain.policy import Actor
from scheduler.identity.auth_users import require_actor

from ..error_mapping import raise_scheduler_error
from ..schemas.reservations import (
    CreateReservationReq,
    ReservationRes,
    ReservationsListRes,
)

router = APIRouter(prefix="/reservations", tags=["reservations"])


def _to_list_res(result: ReservationListResult) -> ReservationsListRes:
    if result.error is not None:
        raise_scheduler_error(result.error)
    return ReservationsListRes(
        reservations=[ReservationRes.from_entity(r) for r in result.reservations]
    )


@router.get("", response_model=ReservationsListRes)
def list_upcoming_reservations(
    use_case: ListUpcomingReservationsUseCase = Depends(
        get_list_upcoming_reservations_use_case
    ),
    actor: Actor = Depends(require_actor()),
):
    return _to_list_res(use_case.execute(actor))


@router.get("/mine", response_model=ReservationsListRes)
def list_my_reservations(
    use_case: ListMyReservationsUseCase = Depends(get_list_my_reservations_use_case),
    actor: Actor = Depends(require_actor()),
):
    return _to_list_res(use_case.execute(actor))


@router.get("/between", response_model=ReservationsListRes)
def list_reservations_between(
    start_date: date = Query(...),
    end_date: date = Query(...),
    use_case: ListReservationsBetweenUseCase = Depends(
        get_list_reservations_between_use_case
    ),
    actor: Actor = Depends(require_actor()),
):
    return _to_list_res(use_case.execute(actor, start_date, end_date))


@router.post("", response_model=ReservationRes, status_code=201)
def create_reservation(
    req: CreateReservationReq,
    use_case: CreateReservationUseCase = Depends(get_create_reservation_use_case),
    actor: Actor = Depends(require_actor()),
):
    result = use_case.execute(
        CreateReservationInput(
            actor=actor,
            start_date=req.start_date,
            end_date=req.end_date,
            notes=req.notes,
        )
    )
    if result.error is not None:
        raise_scheduler_error(result.error, conflicts=result.conflicts)
    return ReservationRes.from_entity(result.reservation)


@router.delete("/{reservation_id}", status_code=204)
def delete_reservation(
    reservation_id: int,
    use_case: DeleteReservationUseCase = Depends(get_delete_reservation_use_case),
    actor: Actor = Depends(require_actor()),
):
    result = use_case.execute(reservation_id, actor)
    if result.error is not None:
        raise_scheduler_error(result.error)
    return Response(status_code=204)
