"""Response Schemas — success bodies of the write endpoints."""

from pydantic import BaseModel

from library_api.core.domain_types import ReservationStatus


class MessageResponse(BaseModel):
    message: str


class BookCreated(MessageResponse):
    book_id: int


class BookUpdated(MessageResponse):
    """Book update outcome, including the reconciliation it applied."""
    book_id: int
    copyDifference: int
    newAvailableCopies: int


class MemberUpdated(MessageResponse):
    member_id: int


class ReservationCreated(MessageResponse):
    reservation_id: int


class ReservationStatusUpdated(MessageResponse):
    reservation_id: int
    status: ReservationStatus


class LoanReturned(MessageResponse):
    loan_id: int | None


class FinePaid(MessageResponse):
    fine_id: int
