from datetime import datetime

import pytest

# Monday of ISO week 43 of 2026
NOW = datetime(2026, 10, 19, 10, 0)


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_tracker.db")
    return db_path


@pytest.fixture
def now():
    return NOW
