"""Errors raised by the lending registry.

Every error rejects a single call; the registry state is left untouched.
"""


class LendingError(Exception):
    """Base exception for rejected registry calls."""

    pass


class InvalidArgumentError(LendingError):
    """Raised when an argument is out of range (e.g. zero copies)."""

    pass


class ForbiddenError(LendingError):
    """Raised when the caller may not perform the operation."""

    pass


class NotFoundError(LendingError):
    """Raised when a book id does not exist in the catalog."""

    pass


class ConflictError(LendingError):
    """Raised when the account already holds the book."""

    pass


class UnavailableError(LendingError):
    """Raised when no free copies of a book remain."""

    pass


class InvalidStateError(LendingError):
    """Raised when returning a book the account does not hold."""

    pass
