"""Pydantic schemas for registry snapshots."""

from enum import IntEnum

from pydantic import BaseModel, Field


class BorrowStatus(IntEnum):
    """Borrow status of one (account, book) pair."""

    NONE = 0
    BORROWED = 1
    RETURNED = 2


class BookResponse(BaseModel):
    """Snapshot of a book record."""

    id: int
    title: str
    total_copies: int = Field(..., ge=1)
    borrowed_count: int = Field(..., ge=0)
    distinct_borrowers: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}

    @property
    def available_copies(self) -> int:
        """Copies not currently on loan."""
        return self.total_copies - self.borrowed_count


class AvailableBook(BaseModel):
    """A book with at least one free copy."""

    id: int
    title: str

    model_config = {"from_attributes": True}
