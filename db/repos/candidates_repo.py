from __future__ import annotations

import json
import sqlite3
from typing import Any, Dict, Optional

from errors import StoreError


# Store field alias -> candidates column
COLUMNS: Dict[str, str] = {
    "Name": "name",
    "LinkedIn URL": "linkedin_url",
    "Location": "location",
    "Current Role": "current_role",
    "Company": "company",
    "Avaloq Keywords": "tags_json",
    "Years of Experience": "experience_years",
    "Source": "source",
    "Date Added": "date_added",
    "Status": "status",
}


def _to_row(fields: Dict[str, Any]) -> Dict[str, Any]:
    row: Dict[str, Any] = {}
    for alias, column in COLUMNS.items():
        if alias not in fields:
            continue
        value = fields[alias]
        if column == "tags_json" and value is not None:
            value = json.dumps(list(value))
        row[column] = value
    return row


class CandidatesRepo:
    """Candidate store over the local `candidates` table."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def find_existing(self, linkedin_url: str) -> bool:
        try:
            cur = self.conn.cursor()
            cur.execute("SELECT 1 FROM candidates WHERE linkedin_url = ? LIMIT 1", (linkedin_url,))
            return cur.fetchone() is not None
        except sqlite3.Error as e:
            raise StoreError(f"candidate lookup failed: {e}") from e

    def find_first_blank_row(self) -> Optional[str]:
        """Id of the first row with an empty name, in name ascending order."""
        try:
            cur = self.conn.cursor()
            cur.execute(
                "SELECT id FROM candidates WHERE name IS NULL OR TRIM(name) = '' "
                "ORDER BY name ASC, id ASC LIMIT 1"
            )
            row = cur.fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"blank row scan failed: {e}") from e
        return str(row[0]) if row else None

    def write_row(self, row_id: Optional[str], fields: Dict[str, Any]) -> str:
        row = _to_row(fields)
        if not row:
            raise StoreError("no known candidate fields to write")
        columns = list(row.keys())
        values = [row[c] for c in columns]
        try:
            cur = self.conn.cursor()
            if row_id:
                assignments = ", ".join(f"{c} = ?" for c in columns)
                cur.execute(f"UPDATE candidates SET {assignments} WHERE id = ?", (*values, int(row_id)))
                if cur.rowcount == 0:
                    raise StoreError(f"candidate row {row_id} not found")
                self.conn.commit()
                return str(row_id)
            placeholders = ", ".join("?" for _ in columns)
            cur.execute(
                f"INSERT INTO candidates ({', '.join(columns)}) VALUES ({placeholders})",
                values,
            )
            self.conn.commit()
            return str(cur.lastrowid)
        except sqlite3.Error as e:
            self.conn.rollback()
            raise StoreError(f"candidate write failed: {e}") from e

    def insert_blank_row(self) -> str:
        """Append a placeholder row with no name, to be reused by the next write."""
        cur = self.conn.cursor()
        cur.execute("INSERT INTO candidates (name) VALUES (NULL)")
        self.conn.commit()
        return str(cur.lastrowid)

    def get_by_url(self, linkedin_url: str) -> Optional[Dict[str, Any]]:
        cur = self.conn.cursor()
        cur.execute(
            "SELECT id, name, linkedin_url, location, current_role, company, tags_json, "
            "experience_years, source, date_added, status FROM candidates WHERE linkedin_url = ?",
            (linkedin_url,),
        )
        row = cur.fetchone()
        if not row:
            return None
        keys = ["id", "name", "linkedin_url", "location", "current_role", "company", "tags", "experience_years", "source", "date_added", "status"]
        record = dict(zip(keys, row))
        record["tags"] = json.loads(record["tags"]) if record["tags"] else []
        return record

    def count(self) -> int:
        cur = self.conn.cursor()
        cur.execute("SELECT COUNT(*) FROM candidates")
        return int(cur.fetchone()[0])


class SqliteCandidateStore(CandidatesRepo):
    """CandidatesRepo that owns its connection and schema, built from a db path."""

    def __init__(self, db_path: str):
        from db.connection import get_connection
        from db.schema import bootstrap

        conn = get_connection(db_path)
        bootstrap(conn)
        super().__init__(conn)
        self.db_path = db_path

    def close(self) -> None:
        self.conn.close()
