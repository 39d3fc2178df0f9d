#!/usr/bin/env python
"""
Walk through the library against a throwaway SQLite database.

Run with: python -m scripts.validate_demo
"""

import logging
import sqlite3

from lunar_security import (
    PreparedStatement,
    RateLimiter,
    get_settings,
    is_valid,
    sanitize,
)


def run_demo():
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    safe_input = "SELECT * FROM users"
    unsafe_input = "SELECT * FROM users; DROP TABLE users;"

    print(f"Safe input is {'valid' if is_valid(safe_input) else 'invalid'}")
    print(f"Unsafe input is {'valid' if is_valid(unsafe_input) else 'invalid'}")
    print(f"Sanitized: {sanitize(unsafe_input)}")

    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL)")

    payload = "'; DROP TABLE users; --"
    with PreparedStatement("INSERT INTO users (name) VALUES (?)") as stmt:
        sql = stmt.bind(payload).finalize()
    print(f"Finalized: {sql}")
    conn.execute(sql)
    conn.commit()

    name = conn.execute("SELECT name FROM users").fetchone()[0]
    print(f"✅ Stored as data: {name!r}")

    with RateLimiter(3, settings.rate_limit_window_seconds) as limiter:
        results = [limiter.check("127.0.0.1") for _ in range(5)]
    print(f"Rate limit (3 per window), 5 requests: {results}")

    conn.close()


if __name__ == "__main__":
    run_demo()
