"""Fine Routes — list fines and mark one paid."""

from fastapi import APIRouter, Depends

from library_api.api.dependencies import get_repository
from library_api.core.domain_types import FineId
from library_api.core.repository_protocols import LibraryStore
from library_api.schemas.responses import FinePaid

router = APIRouter(tags=["fines"])


@router.get("/fines")
async def list_fines(repo: LibraryStore = Depends(get_repository)):
    return await repo.list_rows("fines")


@router.put("/fines/{fine_id}/pay", response_model=FinePaid)
async def pay_fine(
    fine_id: int, repo: LibraryStore = Depends(get_repository),
):
    """Mark a fine as paid. An unknown id is not an error."""
    await repo.update_row("fines", FineId(fine_id), {"paid": True})
    return FinePaid(message="Fine marked as paid", fine_id=fine_id)
