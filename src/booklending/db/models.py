"""SQLAlchemy ORM models for the lending registry.

Tables:
- books: Catalog entries, one per distinct title
- book_borrowers: Accounts that have ever borrowed a book, in borrow order
- borrow_records: Current status per (account, book) pair
"""

from datetime import datetime, timezone

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from .schemas import BorrowStatus


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class Book(Base):
    """Book model - one row per title with aggregate copy counts."""

    __tablename__ = "books"

    # Sequential, assigned by the registry (0, 1, 2, ...)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)

    # Unique title doubles as the title index
    title: Mapped[str] = mapped_column(String(500), nullable=False, unique=True, index=True)

    total_copies: Mapped[int] = mapped_column(Integer, nullable=False)
    borrowed_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[str] = mapped_column(
        String(32), default=lambda: datetime.now(timezone.utc).isoformat()
    )

    borrowers: Mapped[list["BookBorrower"]] = relationship(
        "BookBorrower",
        back_populates="book",
        order_by="BookBorrower.id",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return (
            f"<Book(id={self.id}, title='{self.title}', "
            f"borrowed={self.borrowed_count}/{self.total_copies})>"
        )

    @property
    def available_copies(self) -> int:
        """Copies not currently on loan."""
        return self.total_copies - self.borrowed_count

    @property
    def distinct_borrowers(self) -> list[str]:
        """Accounts that have borrowed this book at least once."""
        return [b.account_id for b in self.borrowers]


class BookBorrower(Base):
    """Append-only list of accounts that have borrowed a book."""

    __tablename__ = "book_borrowers"
    __table_args__ = (UniqueConstraint("book_id", "account_id"),)

    # Autoincrement key preserves append order
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    book_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True
    )
    account_id: Mapped[str] = mapped_column(String(200), nullable=False)

    book: Mapped["Book"] = relationship("Book", back_populates="borrowers")

    def __repr__(self) -> str:
        return f"<BookBorrower(book_id={self.book_id}, account_id='{self.account_id}')>"


class BorrowRecord(Base):
    """Borrow status for an (account, book) pair.

    Missing rows mean BorrowStatus.NONE.
    """

    __tablename__ = "borrow_records"

    account_id: Mapped[str] = mapped_column(String(200), primary_key=True)
    book_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True
    )
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=BorrowStatus.NONE.value)

    updated_at: Mapped[str] = mapped_column(
        String(32),
        default=lambda: datetime.now(timezone.utc).isoformat(),
        onupdate=lambda: datetime.now(timezone.utc).isoformat(),
    )

    def __repr__(self) -> str:
        return (
            f"<BorrowRecord(account_id='{self.account_id}', book_id={self.book_id}, "
            f"status={BorrowStatus(self.status).name})>"
        )
