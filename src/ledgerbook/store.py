from __future__ import annotations

import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from .models import LedgerEntry


logger = logging.getLogger(__name__)

# model field -> column
_COLUMNS = {
    "serial_number": "serial_number",
    "display_date": "display_date",
    "date": "date",
    "weight": "weight",
    "amount": "amount",
}
_CAMEL_TO_FIELD = {
    "serialNumber": "serial_number",
    "displayDate": "display_date",
}


class LedgerStore:
    """
    Local SQLite home for ledger entries (add / list / get / update / delete).

    Stores only the raw entry fields; interest is always recomputed on read.
    """

    def __init__(self, db_path: str) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._backup_path = self.db_path.with_name(self.db_path.name + ".bak")
        self._conn = sqlite3.connect(self.db_path)
        self._conn.execute("PRAGMA journal_mode=WAL;")
        self._ensure_schema()

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "LedgerStore":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _ensure_schema(self) -> None:
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS ledger_entries (
              id TEXT PRIMARY KEY,
              seq INTEGER NOT NULL,
              serial_number TEXT NOT NULL,
              display_date TEXT NOT NULL,
              date TEXT NOT NULL,
              weight TEXT NOT NULL,
              amount REAL NOT NULL,
              created_at TEXT NOT NULL,
              updated_at TEXT NOT NULL
            );
            """
        )
        self._conn.commit()

    def _row_to_entry(self, row: tuple) -> LedgerEntry:
        id_, serial, display_date, iso_date, weight, amount = row
        return LedgerEntry(
            id=id_,
            serial_number=serial,
            display_date=display_date,
            date=iso_date,
            weight=weight,
            amount=amount,
        )

    def add_entry(self, entry: LedgerEntry) -> str:
        entry_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc).isoformat()
        (seq,) = self._conn.execute("SELECT COALESCE(MAX(seq), 0) + 1 FROM ledger_entries;").fetchone()
        self._conn.execute(
            """
            INSERT INTO ledger_entries(
              id, seq, serial_number, display_date, date, weight, amount, created_at, updated_at
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?);
            """,
            (
                entry_id,
                seq,
                entry.serial_number,
                entry.display_date,
                entry.date,
                entry.weight,
                float(entry.amount),
                now,
                now,
            ),
        )
        self._conn.commit()
        logger.debug("Added entry id=%s serial=%s", entry_id, entry.serial_number)
        return entry_id

    def list_entries(self) -> list[LedgerEntry]:
        rows = self._conn.execute(
            "SELECT id, serial_number, display_date, date, weight, amount FROM ledger_entries ORDER BY seq;"
        ).fetchall()
        return [self._row_to_entry(r) for r in rows]

    def get_entry(self, entry_id: str) -> Optional[LedgerEntry]:
        row = self._conn.execute(
            "SELECT id, serial_number, display_date, date, weight, amount FROM ledger_entries WHERE id = ?;",
            (entry_id,),
        ).fetchone()
        return self._row_to_entry(row) if row else None

    def update_entry(self, entry_id: str, **changes: object) -> None:
        """
        Partial update. Accepts field names (`serial_number`) or store keys (`serialNumber`).
        """
        fields: dict[str, object] = {}
        for name, value in changes.items():
            field = _CAMEL_TO_FIELD.get(name, name)
            if field not in _COLUMNS:
                raise ValueError(f"Unknown ledger entry field: {name!r}")
            fields[field] = float(value) if field == "amount" else value
        if not fields:
            return

        assignments = ", ".join(f"{_COLUMNS[f]} = ?" for f in fields)
        now = datetime.now(timezone.utc).isoformat()
        cur = self._conn.execute(
            f"UPDATE ledger_entries SET {assignments}, updated_at = ? WHERE id = ?;",
            (*fields.values(), now, entry_id),
        )
        self._conn.commit()
        if cur.rowcount == 0:
            raise KeyError(entry_id)
        logger.debug("Updated entry id=%s fields=%s", entry_id, ",".join(fields))

    def delete_entry(self, entry_id: str) -> bool:
        cur = self._conn.execute("DELETE FROM ledger_entries WHERE id = ?;", (entry_id,))
        self._conn.commit()
        return cur.rowcount > 0

    def delete_entries(self, entry_ids: Iterable[str]) -> int:
        ids = list(entry_ids)
        cur = self._conn.executemany("DELETE FROM ledger_entries WHERE id = ?;", [(i,) for i in ids])
        self._conn.commit()
        logger.debug("Deleted %d of %d requested entries", cur.rowcount, len(ids))
        return cur.rowcount

    def backup(self) -> Path:
        """
        Write/refresh a snapshot of the ledger at `<db_path>.bak`.
        """
        out = self._backup_path
        tmp = out.with_name(out.name + ".tmp")
        if tmp.exists():
            tmp.unlink()

        # SQLite online backup API gives a consistent snapshot.
        dst = sqlite3.connect(tmp)
        try:
            self._conn.backup(dst)
            dst.commit()
        finally:
            dst.close()

        tmp.replace(out)
        return out
