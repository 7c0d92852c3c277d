"""Shared fixtures: mocked AsyncSession and identifiers"""
import os
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest


def pytest_collection_modifyitems(config, items):
    """Database tests only run against a real PostgreSQL when RUN_DB_TESTS=1"""
    if os.getenv("RUN_DB_TESTS") == "1":
        return
    skip_db = pytest.mark.skip(reason="set RUN_DB_TESTS=1 to run PostgreSQL tests")
    for item in items:
        if item.get_closest_marker("integration") is not None:
            item.add_marker(skip_db)


@pytest.fixture
def mock_db():
    """AsyncSession mock; tests queue results on mock_db.execute.side_effect"""
    db = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def student_id():
    return uuid.uuid4()


@pytest.fixture
def semester_id():
    return uuid.uuid4()
