from __future__ import annotations

import sqlite3


def bootstrap(conn: sqlite3.Connection) -> None:
    """Create the candidates table and indexes (idempotent)."""
    cur = conn.cursor()

    # Blank placeholder rows are allowed: name and linkedin_url may be NULL
    cur.execute(
        (
            "CREATE TABLE IF NOT EXISTS candidates (\n"
            "  id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
            "  name TEXT,\n"
            "  linkedin_url TEXT UNIQUE,\n"
            "  location TEXT,\n"
            "  current_role TEXT,\n"
            "  company TEXT,\n"
            "  tags_json TEXT,\n"
            "  experience_years INTEGER,\n"
            "  source TEXT,\n"
            "  date_added TEXT,\n"
            "  status TEXT,\n"
            "  created_at TEXT NOT NULL DEFAULT (datetime('now'))\n"
            ")"
        )
    )
    cur.execute("CREATE INDEX IF NOT EXISTS idx_candidates_name ON candidates(name);")
    cur.execute("CREATE INDEX IF NOT EXISTS idx_candidates_location ON candidates(location);")

    conn.commit()
