"""Lending registry: catalog inventory and per-account borrow tracking."""

import threading
from typing import Optional

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..db.models import Book, BookBorrower, BorrowRecord
from ..db.schemas import AvailableBook, BookResponse, BorrowStatus
from ..db.sqlite import Database, get_db
from .access import AccessController
from .errors import (
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    InvalidStateError,
    LendingError,
    NotFoundError,
    UnavailableError,
)


class LendingRegistry:
    """Manages the book catalog and borrow/return operations.

    Every call runs in its own session and validates all preconditions
    before touching state, so a rejected call leaves nothing behind.
    """

    def __init__(self, access: AccessController, db: Optional[Database] = None):
        """Initialize the registry.

        Args:
            access: Decides which account is the administrator
            db: Database instance
        """
        self.access = access
        self.db = db or get_db()
        self.db.create_tables()
        self._lock = threading.Lock()

    def _reject(self, error: LendingError, operation: str, **context) -> LendingError:
        """Log a rejected call and hand the error back for raising."""
        logger.warning("{} rejected ({}): {} {}", operation, type(error).__name__, error, context)
        return error

    def _in_catalog(self, session: Session, book_id: int) -> bool:
        """Check an id against the catalog size; ids are 0..size-1."""
        size = session.scalar(select(func.count()).select_from(Book))
        return 0 <= book_id < size

    def _get_book(self, session: Session, book_id: int, operation: str, **context) -> Book:
        """Load a book or raise NotFoundError."""
        book = session.get(Book, book_id) if self._in_catalog(session, book_id) else None
        if book is None:
            raise self._reject(
                NotFoundError("Book does not exist."), operation, book_id=book_id, **context
            )
        return book

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_book(self, caller: str, title: str, copies: int) -> BookResponse:
        """Add copies of a title to the catalog.

        A new title gets the next sequential id; a known title only has
        its total copy count increased.

        Args:
            caller: Account making the call, must be the administrator
            title: Exact title (case-sensitive)
            copies: Number of copies to add

        Returns:
            Snapshot of the book after the change

        Raises:
            ForbiddenError: If caller is not the administrator
            InvalidArgumentError: If copies is not positive
        """
        with self._lock, self.db.get_session() as session:
            if not self.access.is_admin(caller):
                raise self._reject(
                    ForbiddenError("Only the owner can add books."), "add_book", caller=caller
                )
            if copies <= 0:
                raise self._reject(
                    InvalidArgumentError("Please add at least one copy."),
                    "add_book",
                    copies=copies,
                )

            book = session.execute(select(Book).where(Book.title == title)).scalar_one_or_none()

            if book is None:
                next_id = session.scalar(select(func.count()).select_from(Book))
                book = Book(id=next_id, title=title, total_copies=copies, borrowed_count=0)
                session.add(book)
                session.flush()
                logger.info("Added book {} '{}' with {} copies", book.id, title, copies)
            else:
                book.total_copies += copies
                session.flush()
                logger.info(
                    "Added {} copies to book {} '{}' (total {})",
                    copies,
                    book.id,
                    title,
                    book.total_copies,
                )

            return BookResponse.model_validate(book)

    def borrow(self, account_id: str, book_id: int) -> None:
        """Borrow one copy of a book.

        Args:
            account_id: Borrowing account
            book_id: Catalog id of the book

        Raises:
            NotFoundError: If the book does not exist
            ConflictError: If the account already holds the book
            ForbiddenError: If the account is the administrator
            UnavailableError: If no copies are free
        """
        with self._lock, self.db.get_session() as session:
            book = self._get_book(session, book_id, "borrow", account_id=account_id)
            record = session.get(BorrowRecord, (account_id, book_id))
            status = BorrowStatus(record.status) if record else BorrowStatus.NONE

            if status == BorrowStatus.BORROWED:
                raise self._reject(
                    ConflictError("Please return the book first."),
                    "borrow",
                    account_id=account_id,
                    book_id=book_id,
                )
            # The owner is refused even when no copies are free
            if self.access.is_admin(account_id):
                raise self._reject(
                    ForbiddenError("Owner can't borrow the book."), "borrow", account_id=account_id
                )
            if book.available_copies <= 0:
                raise self._reject(
                    UnavailableError("No copies of this book are available."),
                    "borrow",
                    book_id=book_id,
                )

            # Only first-time borrows extend the borrower history
            if status == BorrowStatus.NONE:
                book.borrowers.append(BookBorrower(account_id=account_id))

            if record is None:
                record = BorrowRecord(account_id=account_id, book_id=book_id)
                session.add(record)
            record.status = BorrowStatus.BORROWED.value
            book.borrowed_count += 1

            logger.info("Account '{}' borrowed book {} '{}'", account_id, book_id, book.title)

    def return_book(self, account_id: str, book_id: int) -> None:
        """Return a borrowed copy of a book.

        Args:
            account_id: Returning account
            book_id: Catalog id of the book

        Raises:
            NotFoundError: If the book does not exist
            InvalidStateError: If the account does not currently hold the book
        """
        with self._lock, self.db.get_session() as session:
            book = self._get_book(session, book_id, "return_book", account_id=account_id)
            record = session.get(BorrowRecord, (account_id, book_id))

            if record is None or record.status != BorrowStatus.BORROWED.value:
                raise self._reject(
                    InvalidStateError("You need to have the book first!"),
                    "return_book",
                    account_id=account_id,
                    book_id=book_id,
                )

            record.status = BorrowStatus.RETURNED.value
            book.borrowed_count -= 1

            logger.info("Account '{}' returned book {} '{}'", account_id, book_id, book.title)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def status_of(self, account_id: str, book_id: int) -> BorrowStatus:
        """Get the borrow status of an account for a book.

        Unknown pairs (including unknown book ids) report NONE.
        """
        with self._lock, self.db.get_session() as session:
            if not self._in_catalog(session, book_id):
                return BorrowStatus.NONE
            record = session.get(BorrowRecord, (account_id, book_id))
            return BorrowStatus(record.status) if record else BorrowStatus.NONE

    def list_books(self) -> list[BookResponse]:
        """List every book in creation order."""
        with self._lock, self.db.get_session() as session:
            books = session.execute(select(Book).order_by(Book.id)).scalars().all()
            return [BookResponse.model_validate(b) for b in books]

    def list_available(self) -> list[AvailableBook]:
        """List books with at least one free copy, in creation order."""
        with self._lock, self.db.get_session() as session:
            stmt = (
                select(Book)
                .where(Book.total_copies - Book.borrowed_count > 0)
                .order_by(Book.id)
            )
            books = session.execute(stmt).scalars().all()
            return [AvailableBook.model_validate(b) for b in books]

    def list_borrowed_titles(self) -> list[str]:
        """List titles with at least one outstanding loan, one entry per book."""
        with self._lock, self.db.get_session() as session:
            stmt = select(Book.title).where(Book.borrowed_count > 0).order_by(Book.id)
            return list(session.execute(stmt).scalars().all())

    def list_borrowers(self) -> list[str]:
        """List every book's borrower history, concatenated in book order.

        An account appears once per book it has ever borrowed, whether or
        not it still holds a copy.
        """
        with self._lock, self.db.get_session() as session:
            stmt = select(BookBorrower.account_id).order_by(
                BookBorrower.book_id, BookBorrower.id
            )
            return list(session.execute(stmt).scalars().all())
