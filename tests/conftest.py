"""Pytest configuration and shared fixtures.

Provides in-memory databases, registries and CLI runners for the
booklending tests.
"""

from typing import Generator

import pytest
from loguru import logger

from booklending.config import reset_config
from booklending.db.sqlite import Database, reset_db
from booklending.registry import LendingRegistry, OwnerAccessController

OWNER = "owner"


# ============================================================================
# Global State
# ============================================================================


@pytest.fixture(autouse=True)
def reset_globals() -> Generator[None, None, None]:
    """Reset singletons and loguru handlers around every test."""
    reset_db()
    reset_config()
    yield
    reset_db()
    reset_config()
    logger.remove()


# ============================================================================
# Registry Fixtures
# ============================================================================


@pytest.fixture
def db() -> Database:
    """Create an in-memory database for testing."""
    database = Database(":memory:")
    database.create_tables()
    return database


@pytest.fixture
def access() -> OwnerAccessController:
    """Access controller with a fixed owner."""
    return OwnerAccessController(OWNER)


@pytest.fixture
def registry(db: Database, access: OwnerAccessController) -> LendingRegistry:
    """Create an empty registry."""
    return LendingRegistry(access, db)


@pytest.fixture
def stocked_registry(registry: LendingRegistry) -> LendingRegistry:
    """Registry with three books: Dune (2), Emma (1), Ulysses (3)."""
    registry.add_book(OWNER, "Dune", 2)
    registry.add_book(OWNER, "Emma", 1)
    registry.add_book(OWNER, "Ulysses", 3)
    return registry


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    from typer.testing import CliRunner
    return CliRunner()


@pytest.fixture
def cli_app():
    """Get the CLI app for testing."""
    from booklending.cli import app
    return app
