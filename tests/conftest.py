# ABOUTME: Shared pytest fixtures for identity-graph tests.
# ABOUTME: Provides temporary databases, services and a registered sample population.

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from identity_graph.database import DatabaseService
from identity_graph.service import IdentityGraphService


@pytest.fixture
def temp_db_path() -> Generator[Path, None, None]:
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def db_service(temp_db_path: Path) -> Generator[DatabaseService, None, None]:
    """Create an initialized DatabaseService with a temporary database."""
    service = DatabaseService(db_path=temp_db_path)
    service.init_db()
    yield service
    service.dispose()


@pytest.fixture
def service(db_service: DatabaseService) -> IdentityGraphService:
    """Create an IdentityGraphService over the temporary database."""
    return IdentityGraphService(db_service)


@pytest.fixture
def populated(service: IdentityGraphService) -> IdentityGraphService:
    """Service with alice, bob and carol registered and nobody connected."""
    service.register("alice", "Alice", "Engineer", ["Go"])
    service.register("bob", "Bob", "Designer", ["Figma"])
    service.register("carol", "Carol", "Researcher", ["Python", "Statistics"])
    return service
