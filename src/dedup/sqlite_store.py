# src/dedup/sqlite_store.py — v1
"""SQLite-based record store.

Uses stdlib sqlite3 — no external dependency. Records live in
``analysis_records``; subject liveness is checked against a table owned by
the web layer (``resumes`` by default) sharing the same database file.
"""

from __future__ import annotations

import json
import logging
import re
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any

from resumeai.dedup.base_record_store import BaseRecordStore
from resumeai.dedup.models import AnalysisRecord, RecordKind

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS analysis_records (
    id TEXT PRIMARY KEY,
    owner_user_id TEXT NOT NULL,
    subject_id TEXT NOT NULL,
    input_hash TEXT NOT NULL,
    kind TEXT NOT NULL DEFAULT 'analysis',
    result_payload TEXT NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_subject_hash ON analysis_records(subject_id, input_hash, kind);
CREATE INDEX IF NOT EXISTS idx_user_hash ON analysis_records(owner_user_id, input_hash, kind);
"""

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_COLUMNS = "id, owner_user_id, subject_id, input_hash, kind, result_payload, created_at"


class SqliteRecordStore(BaseRecordStore):
    """SQLite-backed analysis record store."""

    def __init__(
        self,
        db_path: Path | str,
        subject_table: str = "resumes",
        subject_key: str = "id",
    ) -> None:
        for name in (subject_table, subject_key):
            if not _IDENTIFIER.match(name):
                raise ValueError(f"Invalid SQL identifier: {name!r}")
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._subject_query = (
            f"SELECT 1 FROM {subject_table} WHERE {subject_key} = ? LIMIT 1"
        )
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    async def find_record(
        self, subject_id: str, input_hash: str, kind: RecordKind = "analysis"
    ) -> AnalysisRecord | None:
        cursor = self._conn.execute(
            f"SELECT {_COLUMNS} FROM analysis_records "
            "WHERE subject_id = ? AND input_hash = ? AND kind = ? "
            "ORDER BY created_at DESC, rowid DESC LIMIT 1",
            (subject_id, input_hash, kind),
        )
        row = cursor.fetchone()
        return _row_to_record(row) if row else None

    async def find_records_by_user_and_fingerprint(
        self, user_id: str, input_hash: str, kind: RecordKind = "analysis"
    ) -> list[AnalysisRecord]:
        cursor = self._conn.execute(
            f"SELECT {_COLUMNS} FROM analysis_records "
            "WHERE owner_user_id = ? AND input_hash = ? AND kind = ? "
            "ORDER BY created_at DESC, rowid DESC",
            (user_id, input_hash, kind),
        )
        return [_row_to_record(row) for row in cursor.fetchall()]

    async def subject_exists(self, subject_id: str) -> bool:
        cursor = self._conn.execute(self._subject_query, (subject_id,))
        return cursor.fetchone() is not None

    async def delete_record(self, record_id: str) -> None:
        self._conn.execute("DELETE FROM analysis_records WHERE id = ?", (record_id,))
        self._conn.commit()

    async def create_record(
        self,
        owner_user_id: str,
        subject_id: str,
        input_hash: str,
        result_payload: dict[str, Any],
        kind: RecordKind = "analysis",
    ) -> AnalysisRecord:
        record = AnalysisRecord(
            owner_user_id=owner_user_id,
            subject_id=subject_id,
            input_hash=input_hash,
            result_payload=result_payload,
            kind=kind,
        )
        self._conn.execute(
            f"INSERT INTO analysis_records ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                record.id,
                record.owner_user_id,
                record.subject_id,
                record.input_hash,
                record.kind,
                json.dumps(record.result_payload),
                record.created_at.isoformat(),
            ),
        )
        self._conn.commit()
        return record

    async def delete_records_for_subject(self, subject_id: str) -> int:
        cursor = self._conn.execute(
            "DELETE FROM analysis_records WHERE subject_id = ?", (subject_id,)
        )
        self._conn.commit()
        return cursor.rowcount

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()


def _row_to_record(row: tuple) -> AnalysisRecord:
    return AnalysisRecord(
        id=row[0],
        owner_user_id=row[1],
        subject_id=row[2],
        input_hash=row[3],
        kind=row[4],
        result_payload=json.loads(row[5]),
        created_at=datetime.fromisoformat(row[6]),
    )
