"""SQLite-backed audit store for attribute changes and mutations."""

from __future__ import annotations

import json
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import aiosqlite

from svcrecovery.audit.migrations import TABLES
from svcrecovery.exceptions import AuditError
from svcrecovery.models.change import MutationResult
from svcrecovery.reconciler.notifications import ChangeSink


class AuditStore(ChangeSink):
    def __init__(self, db_path: Path | str = ":memory:") -> None:
        self.db_path = str(db_path)
        self._db: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        try:
            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._db = await aiosqlite.connect(self.db_path)
            for table_sql in TABLES:
                await self._db.execute(table_sql)
            await self._db.commit()
        except (OSError, sqlite3.Error) as exc:
            await self.close()
            raise AuditError(f"Cannot open audit database {self.db_path}: {exc}") from exc

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    def _get_db(self) -> aiosqlite.Connection:
        if self._db is None:
            raise RuntimeError("AuditStore not initialized; call initialize() first")
        return self._db

    async def attribute_changed(
        self, service: str, attribute: str, old: Any, new: Any, dry_run: bool = False
    ) -> None:
        db = self._get_db()
        await db.execute(
            "INSERT INTO attribute_changes "
            "(service, attribute, old_value, new_value, dry_run, recorded_at) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (
                service,
                attribute,
                json.dumps(old),
                json.dumps(new),
                int(dry_run),
                datetime.now(timezone.utc).isoformat(),
            ),
        )
        await db.commit()

    async def log_mutation(self, result: MutationResult) -> str:
        db = self._get_db()
        mutation_id = uuid.uuid4().hex
        await db.execute(
            "INSERT INTO mutations (id, service, applied, dry_run, arguments, output, executed_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                mutation_id,
                result.service,
                int(result.applied),
                int(result.dry_run),
                json.dumps(result.arguments),
                result.output,
                result.executed_at.isoformat(),
            ),
        )
        await db.commit()
        return mutation_id

    async def get_changes(
        self,
        service: str | None = None,
        limit: int = 50,
        include_dry_run: bool = False,
    ) -> list[dict]:
        """Return recorded attribute changes, newest first.

        Changes reported by dry runs are left out unless ``include_dry_run``.
        """
        db = self._get_db()
        query = (
            "SELECT service, attribute, old_value, new_value, dry_run, recorded_at "
            "FROM attribute_changes"
        )
        conditions: list[str] = []
        params: list[Any] = []
        if service is not None:
            conditions.append("service = ?")
            params.append(service)
        if not include_dry_run:
            conditions.append("dry_run = 0")
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY id DESC LIMIT ?"
        params.append(limit)

        cursor = await db.execute(query, params)
        rows = await cursor.fetchall()
        return [
            {
                "service": r[0],
                "attribute": r[1],
                "old": json.loads(r[2]) if r[2] is not None else None,
                "new": json.loads(r[3]) if r[3] is not None else None,
                "dry_run": bool(r[4]),
                "recorded_at": r[5],
            }
            for r in rows
        ]

    async def get_history(self, limit: int = 20) -> list[dict]:
        db = self._get_db()
        cursor = await db.execute(
            "SELECT id, service, applied, dry_run, arguments, executed_at "
            "FROM mutations ORDER BY executed_at DESC LIMIT ?",
            (limit,),
        )
        rows = await cursor.fetchall()
        results: list[dict] = []
        for r in rows:
            results.append(
                {
                    "mutation_id": r[0],
                    "service": r[1],
                    "applied": bool(r[2]),
                    "dry_run": bool(r[3]),
                    "arguments": json.loads(r[4]),
                    "executed_at": r[5],
                }
            )
        return results
