"""Book Routes — list, add, and update books.

Invariants:
    - POST /books: total_copies defaults to 1, available_copies to the resolved total
    - PUT /books/{book_id}: available_copies is always recomputed, never accepted
    - Unknown book id on update -> 404 with no write

Design Decisions:
    - The read-reconcile-write sequence lives in services/book_update.py
"""

from fastapi import APIRouter, Depends

from library_api.api.dependencies import get_repository, request_fields
from library_api.core.domain_types import BookId
from library_api.core.repository_protocols import LibraryStore
from library_api.core.resolve_params import FieldRule
from library_api.schemas.responses import BookCreated, BookUpdated
from library_api.services.book_update import update_book

router = APIRouter(tags=["books"])

BOOK_CREATE_FIELDS = (
    FieldRule("title"),
    FieldRule("author"),
    FieldRule("publisher"),
    FieldRule("year_published", int),
    FieldRule("isbn"),
    FieldRule("total_copies", int, default=1),
    FieldRule("available_copies", int, default_from="total_copies"),
)

BOOK_UPDATE_FIELDS = (
    FieldRule("title"),
    FieldRule("author"),
    FieldRule("publisher"),
    FieldRule("year_published", int),
    FieldRule("isbn"),
    FieldRule("total_copies", int),
)


@router.get("/books")
async def list_books(repo: LibraryStore = Depends(get_repository)):
    """All books."""
    return await repo.list_rows("books")


@router.post("/books", response_model=BookCreated)
async def add_book(
    fields: dict = Depends(request_fields(BOOK_CREATE_FIELDS)),
    repo: LibraryStore = Depends(get_repository),
):
    """Add a new book."""
    book_id = await repo.insert_row("books", fields)
    return BookCreated(message="Book added", book_id=book_id)


@router.put("/books/{book_id}", response_model=BookUpdated)
async def edit_book(
    book_id: int,
    fields: dict = Depends(request_fields(BOOK_UPDATE_FIELDS)),
    repo: LibraryStore = Depends(get_repository),
):
    """Update book details, reconciling available copies with the new total."""
    result = await update_book(repo, BookId(book_id), fields)
    return BookUpdated(
        message="Book updated successfully",
        book_id=result.book_id,
        copyDifference=result.reconciliation.copy_difference,
        newAvailableCopies=result.reconciliation.new_available,
    )
