"""Access control for the lending registry."""

from abc import ABC, abstractmethod


class AccessController(ABC):
    """Decides whether an account is the registry administrator."""

    @abstractmethod
    def is_admin(self, account_id: str) -> bool:
        """Return True if account_id is the administrator."""
        pass


class OwnerAccessController(AccessController):
    """Treats a single fixed owner identity as the administrator."""

    def __init__(self, owner: str):
        """Initialize with the owner identity.

        Args:
            owner: Account id of the owner

        Raises:
            ValueError: If owner is empty
        """
        if not owner or not owner.strip():
            raise ValueError("Owner identity must not be empty")
        self.owner = owner

    def is_admin(self, account_id: str) -> bool:
        return account_id == self.owner

    def __repr__(self) -> str:
        return f"<OwnerAccessController(owner='{self.owner}')>"
