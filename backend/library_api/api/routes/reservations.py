"""Reservation Routes — list, add, and change reservation status.

Invariants:
    - status must be one of Active, Completed, Cancelled; otherwise 400, no write
    - Any status may replace any other (no transition checks)
    - Status update affecting no row -> 404
"""

from fastapi import APIRouter, Depends

from library_api.api.dependencies import get_repository, request_fields
from library_api.core.domain_types import ReservationId, ReservationStatus
from library_api.core.errors import InvalidArgumentError, NotFoundError
from library_api.core.repository_protocols import LibraryStore
from library_api.core.resolve_params import FieldRule
from library_api.schemas.responses import (
    ReservationCreated, ReservationStatusUpdated,
)

router = APIRouter(tags=["reservations"])

INVALID_STATUS = "Invalid status. Must be 'Active', 'Completed', or 'Cancelled'"

RESERVATION_CREATE_FIELDS = (
    FieldRule("member_id", int),
    FieldRule("book_id", int),
    FieldRule("status", default=ReservationStatus.ACTIVE.value),
)

RESERVATION_STATUS_FIELDS = (
    FieldRule("status"),
)


def _require_status(value: object) -> ReservationStatus:
    status = ReservationStatus.parse(value)
    if status is None:
        raise InvalidArgumentError(INVALID_STATUS, "status")
    return status


@router.get("/reservations")
async def list_reservations(repo: LibraryStore = Depends(get_repository)):
    return await repo.list_rows("reservations")


@router.post("/reservations", response_model=ReservationCreated)
async def add_reservation(
    fields: dict = Depends(request_fields(RESERVATION_CREATE_FIELDS)),
    repo: LibraryStore = Depends(get_repository),
):
    fields["status"] = _require_status(fields["status"]).value
    reservation_id = await repo.insert_row("reservations", fields)
    return ReservationCreated(
        message="Reservation added", reservation_id=reservation_id,
    )


@router.put(
    "/reservations/{reservation_id}/status",
    response_model=ReservationStatusUpdated,
)
async def update_reservation_status(
    reservation_id: int,
    fields: dict = Depends(request_fields(RESERVATION_STATUS_FIELDS)),
    repo: LibraryStore = Depends(get_repository),
):
    """Set a reservation's status."""
    status = _require_status(fields["status"])
    affected = await repo.update_row(
        "reservations", ReservationId(reservation_id), {"status": status.value},
    )
    if affected == 0:
        raise NotFoundError("Reservation", reservation_id)
    return ReservationStatusUpdated(
        message="Reservation status updated successfully",
        reservation_id=reservation_id,
        status=status,
    )
