"""Database module for registry storage."""

from .models import Base, Book, BookBorrower, BorrowRecord
from .schemas import AvailableBook, BookResponse, BorrowStatus
from .sqlite import Database, get_db, reset_db

__all__ = [
    "Base",
    "Book",
    "BookBorrower",
    "BorrowRecord",
    "AvailableBook",
    "BookResponse",
    "BorrowStatus",
    "Database",
    "get_db",
    "reset_db",
]
