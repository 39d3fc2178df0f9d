"""
Integration tests: finalized statements run against SQLite.
Injection payloads must be stored or compared as plain data.
"""
import sqlite3

import pytest
from hypothesis import given, settings, strategies as st

from lunar_security.sql.builder import PreparedStatement

pytestmark = pytest.mark.integration


def _run(conn, template, *values):
    with PreparedStatement(template) as stmt:
        sql = stmt.bind_all(*values).finalize()
    return conn.execute(sql).fetchall()


def _table_exists(conn, name):
    row = conn.execute(
        "SELECT COUNT(*) FROM sqlite_master WHERE type = 'table' AND name = ?", (name,)
    ).fetchone()
    return row[0] == 1


class TestPreparedStatementOnSQLite:
    """Test finalized SQL executes as a single, intact statement."""

    def test_lookup_by_name(self, users_db):
        rows = _run(users_db, "SELECT name, role FROM users WHERE name = ?", "alice")
        assert rows == [("alice", "admin")]

    def test_drop_table_payload_is_stored_as_data(self, users_db):
        """Test the drop-table payload lands in a row and the table survives."""
        payload = "'; DROP TABLE users; --"
        _run(users_db, "INSERT INTO users (name) VALUES (?)", payload)
        users_db.commit()

        assert _table_exists(users_db, "users")
        count = users_db.execute("SELECT COUNT(*) FROM users").fetchone()[0]
        assert count == 4
        stored = users_db.execute("SELECT name FROM users WHERE id = 4").fetchone()[0]
        assert stored == "'\\; DROP TABLE users\\; \\-\\-"

    def test_tautology_matches_nothing(self, users_db):
        """Test ' OR '1'='1 is compared as a literal name."""
        rows = _run(users_db, "SELECT * FROM users WHERE name = ?", "' OR '1'='1")
        assert rows == []

    def test_comment_truncation_matches_nothing(self, users_db):
        rows = _run(
            users_db,
            "SELECT * FROM users WHERE name = ? AND role = ?",
            "alice' --",
            "member",
        )
        assert rows == []

    def test_backslash_escapes_are_stored(self, users_db):
        """Test SQLite keeps the backslash escapes: the stored value differs from the input."""
        _run(users_db, "INSERT INTO users (name) VALUES (?)", 'say "hi"; ok')
        stored = users_db.execute("SELECT name FROM users WHERE id = 4").fetchone()[0]
        assert stored == 'say \\"hi\\"\\; ok'
        assert stored != 'say "hi"; ok'

    def test_plain_value_round_trips(self, users_db):
        _run(users_db, "INSERT INTO users (name) VALUES (?)", "dave smith")
        rows = _run(users_db, "SELECT name FROM users WHERE name = ?", "dave smith")
        assert rows == [("dave smith",)]

    def test_quote_round_trips(self, users_db):
        """Test a name containing a quote is stored and found again unchanged."""
        _run(users_db, "INSERT INTO users (name) VALUES (?)", "O'Brien")
        rows = _run(users_db, "SELECT name FROM users WHERE name = ?", "O'Brien")
        assert rows == [("O'Brien",)]


@settings(max_examples=100, deadline=None)
@given(value=st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=60))
def test_any_value_inserts_exactly_one_row(value):
    """
    Property: whatever the bound value, the finalized INSERT is one
    statement that adds one row and leaves the schema intact.
    """
    conn = sqlite3.connect(":memory:")
    try:
        conn.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL)")
        _run(conn, "INSERT INTO users (name) VALUES (?)", value)
        assert conn.execute("SELECT COUNT(*) FROM users").fetchone()[0] == 1
        assert _table_exists(conn, "users")
    finally:
        conn.close()
