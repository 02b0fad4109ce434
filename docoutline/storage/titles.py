from __future__ import annotations

import asyncio
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from docoutline.interfaces.resolver import TitleResolver
from docoutline.logging_utils import get_logger
from docoutline.models.outline import REFERENCE_NODE_TYPE, OutlineNode, referenced_document_id

logger = get_logger(__name__)


class SQLiteTitleStore(TitleResolver):
    """Persists document titles and their outgoing references in SQLite."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self._ensure_parent()
        self._initialize()

    def _ensure_parent(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _initialize(self) -> None:
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS document_references (
                    source_id TEXT NOT NULL,
                    node_id TEXT NOT NULL,
                    target_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    priority INTEGER NOT NULL,
                    order_index INTEGER NOT NULL,
                    PRIMARY KEY (source_id, order_index)
                );
                """
            )

    # ------------------------------------------------------------------ titles
    def upsert_title(self, document_id: str, title: str) -> None:
        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO documents(id, title, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    title=excluded.title,
                    updated_at=excluded.updated_at
                """,
                (document_id, title, now),
            )

    def get_title(self, document_id: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT title FROM documents WHERE id = ?",
                (document_id,),
            ).fetchone()
        return row["title"] if row else None

    async def resolve(self, document_id: str) -> Optional[str]:
        return await asyncio.to_thread(self.get_title, document_id)

    def delete_document(self, document_id: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM document_references WHERE source_id = ?", (document_id,))
            conn.execute("DELETE FROM documents WHERE id = ?", (document_id,))

    # ------------------------------------------------------------------ references
    def record_references(self, document_id: str, references: Iterable[OutlineNode]) -> int:
        """Replace the stored reference list of ``document_id``; returns the count written."""

        rows = []
        for node in references:
            target_id = referenced_document_id(node.id)
            if target_id is None:
                raise ValueError(f"Outline node {node.id!r} is not a reference")
            rows.append((document_id, node.id, target_id, node.title, node.priority, len(rows)))

        with self._connect() as conn:
            conn.execute("DELETE FROM document_references WHERE source_id = ?", (document_id,))
            conn.executemany(
                """
                INSERT INTO document_references(source_id, node_id, target_id, title, priority, order_index)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
        logger.debug("Recorded %d references for %s", len(rows), document_id)
        return len(rows)

    def list_references(self, document_id: str) -> List[OutlineNode]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT node_id, title, priority FROM document_references
                WHERE source_id = ?
                ORDER BY order_index
                """,
                (document_id,),
            ).fetchall()
        return [
            OutlineNode(
                id=row["node_id"],
                title=row["title"],
                priority=row["priority"],
                node_type=REFERENCE_NODE_TYPE,
            )
            for row in rows
        ]


__all__ = ["SQLiteTitleStore"]
