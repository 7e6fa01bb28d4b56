"""Member Routes — list, register (stored procedure), and update members.

Invariants:
    - Registration goes through the register_member procedure, never a direct insert
    - PUT /members/{member_id} affecting no row -> 404
"""

from fastapi import APIRouter, Depends

from library_api.api.dependencies import (
    get_procedures, get_repository, request_fields,
)
from library_api.core.domain_types import MemberId
from library_api.core.errors import NotFoundError
from library_api.core.repository_protocols import (
    CirculationProcedures, LibraryStore,
)
from library_api.core.resolve_params import FieldRule
from library_api.schemas.responses import MemberUpdated, MessageResponse

router = APIRouter(tags=["members"])

MEMBER_FIELDS = (
    FieldRule("name"),
    FieldRule("email"),
    FieldRule("phone"),
    FieldRule("address"),
)


@router.get("/members")
async def list_members(repo: LibraryStore = Depends(get_repository)):
    return await repo.list_rows("members")


@router.post("/register", response_model=MessageResponse)
async def register_member(
    fields: dict = Depends(request_fields(MEMBER_FIELDS)),
    procedures: CirculationProcedures = Depends(get_procedures),
):
    """Register a member via the register_member stored procedure."""
    await procedures.register_member(**fields)
    return MessageResponse(message="Member registered successfully")


@router.put("/members/{member_id}", response_model=MemberUpdated)
async def update_member(
    member_id: int,
    fields: dict = Depends(request_fields(MEMBER_FIELDS)),
    repo: LibraryStore = Depends(get_repository),
):
    affected = await repo.update_row("members", MemberId(member_id), fields)
    if affected == 0:
        raise NotFoundError("Member", member_id)
    return MemberUpdated(
        message="Member updated successfully", member_id=member_id,
    )
