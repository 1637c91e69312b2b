"""Book lending registry module.

Provides functionality for:
- Cataloging books with copy counts (owner only)
- Borrowing and returning copies
- Availability, loan and borrower views
"""

from .access import AccessController, OwnerAccessController
from .errors import (
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    InvalidStateError,
    LendingError,
    NotFoundError,
    UnavailableError,
)
from .manager import LendingRegistry

__all__ = [
    "AccessController",
    "OwnerAccessController",
    "LendingRegistry",
    "LendingError",
    "InvalidArgumentError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "UnavailableError",
    "InvalidStateError",
]
