"""Loan Routes — loan listings and the issue/return stored procedures.

Invariants:
    - POST /issue relays the procedure's first result set verbatim
    - Loan rows are only ever written by the store's procedures
"""

from fastapi import APIRouter, Depends

from library_api.api.dependencies import (
    get_procedures, get_repository, request_fields,
)
from library_api.core.domain_types import LoanId
from library_api.core.repository_protocols import (
    CirculationProcedures, LibraryStore,
)
from library_api.core.resolve_params import FieldRule
from library_api.schemas.responses import LoanReturned

router = APIRouter(tags=["loans"])

ISSUE_FIELDS = (
    FieldRule("member_id", int),
    FieldRule("book_id", int),
    FieldRule("due_days", int),
)

RETURN_FIELDS = (
    FieldRule("loan_id", int),
)


@router.get("/loans")
async def list_loans(repo: LibraryStore = Depends(get_repository)):
    return await repo.list_rows("loans")


@router.get("/loan-summary")
async def list_loan_summary(repo: LibraryStore = Depends(get_repository)):
    """Rows of the loan_summary view."""
    return await repo.list_loan_summary()


@router.post("/issue")
async def issue_book(
    fields: dict = Depends(request_fields(ISSUE_FIELDS)),
    procedures: CirculationProcedures = Depends(get_procedures),
):
    """Issue a book via the issue_book stored procedure."""
    return await procedures.issue_book(**fields)


@router.post("/return", response_model=LoanReturned)
async def return_book(
    fields: dict = Depends(request_fields(RETURN_FIELDS)),
    procedures: CirculationProcedures = Depends(get_procedures),
):
    loan_id = fields["loan_id"]
    await procedures.return_book(
        LoanId(loan_id) if loan_id is not None else None,
    )
    return LoanReturned(message="Book returned successfully", loan_id=loan_id)
