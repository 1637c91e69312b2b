"""Tests for access control."""

import pytest

from booklending.registry import AccessController, LendingRegistry, OwnerAccessController
from booklending.registry.errors import ForbiddenError


class TestOwnerAccessController:
    """Tests for OwnerAccessController."""

    def test_owner_is_admin(self):
        """Test the owner identity is the admin."""
        access = OwnerAccessController("0xabc")
        assert access.is_admin("0xabc") is True

    def test_other_accounts_are_not_admin(self):
        """Test other identities, including case variants, are not admin."""
        access = OwnerAccessController("0xabc")
        assert access.is_admin("0xABC") is False
        assert access.is_admin("") is False

    @pytest.mark.parametrize("owner", ["", "  "])
    def test_empty_owner_rejected(self, owner):
        """Test an empty owner identity is rejected."""
        with pytest.raises(ValueError):
            OwnerAccessController(owner)


class TestCustomController:
    """Tests for injecting a custom access controller."""

    def test_registry_uses_injected_check(self, db):
        """Test the registry defers admin decisions to the controller."""

        class StaffAccess(AccessController):
            def is_admin(self, account_id: str) -> bool:
                return account_id.startswith("staff:")

        registry = LendingRegistry(StaffAccess(), db)
        registry.add_book("staff:ann", "Dune", 1)

        with pytest.raises(ForbiddenError):
            registry.add_book("reader:bo", "Emma", 1)
        with pytest.raises(ForbiddenError):
            registry.borrow("staff:ann", 0)

        registry.borrow("reader:bo", 0)
        assert registry.list_borrowers() == ["reader:bo"]

    def test_abstract_controller_cannot_be_instantiated(self):
        """Test AccessController requires is_admin."""
        with pytest.raises(TypeError):
            AccessController()
