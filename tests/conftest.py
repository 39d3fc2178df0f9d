"""
Pytest configuration and shared fixtures.
"""
import pytest
import sqlite3


class FakeClock:
    """Manually advanced time source for rate limiter tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Return a fake monotonic clock starting at t=1000."""
    return FakeClock()


@pytest.fixture
def users_db(tmp_path):
    """
    Create a temporary SQLite database with a small users table.
    Yields an open connection.
    """
    db_path = tmp_path / "users.sqlite"
    conn = sqlite3.connect(str(db_path))

    conn.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            role TEXT NOT NULL DEFAULT 'member'
        )
    """)

    sample_data = [
        ("alice", "admin"),
        ("bob", "member"),
        ("carol", "member"),
    ]

    conn.executemany("INSERT INTO users (name, role) VALUES (?, ?)", sample_data)
    conn.commit()

    yield conn
    conn.close()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every LUNAR_* setting so defaults apply."""
    for name in (
        "LUNAR_RATE_LIMIT_MAX_REQUESTS",
        "LUNAR_RATE_LIMIT_WINDOW_SECONDS",
        "LUNAR_RATE_LIMIT_EVICT_AFTER_WINDOWS",
        "LUNAR_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# Markers
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
