"""SQLite ledger adapter.

Implements the core LedgerPort using a simple SQLite database.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from decimal import Decimal

from smsledger.core.models import Direction, Parsed, RawMessage, Rejected


class SQLiteLedger:
    """Thin SQLite wrapper that satisfies the LedgerPort contract."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create tables if they do not exist.

        Tables:
        - transactions: one row per distinct dedup_key
        - rejections: append-only diagnostic log of skipped messages
        """

        with self._connect() as conn:
            # Amounts are stored as TEXT so Decimal values survive unchanged.
            # Fields:
            # - dedup_key: SHA-256 of sender|occurred_at|amount (PRIMARY KEY)
            # - occurred_at: message timestamp in ms epoch
            # - direction: "debit" or "credit"
            # - merchant_guess: NULL when no counterparty was found
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS transactions (
                    dedup_key TEXT PRIMARY KEY,
                    occurred_at INTEGER NOT NULL,
                    amount TEXT NOT NULL,
                    direction TEXT NOT NULL,
                    institution TEXT NOT NULL,
                    merchant_guess TEXT,
                    description TEXT NOT NULL,
                    raw_text TEXT NOT NULL,
                    created_at TIMESTAMP NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS rejections (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    message_id TEXT,
                    sender TEXT,
                    received_at INTEGER,
                    code TEXT,
                    reason TEXT,
                    created_at TIMESTAMP NOT NULL
                )
                """
            )

    def exists(self, dedup_key: str) -> bool:
        """Check if a transaction with this dedup key is already stored."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM transactions WHERE dedup_key = ?",
                (dedup_key,),
            ).fetchone()
        return row is not None

    def insert(self, parsed: Parsed) -> bool:
        """Insert a transaction; return False if the dedup key already existed."""

        created_at = datetime.now(timezone.utc)
        with self._connect() as conn:
            cur = conn.execute(
                """
                INSERT OR IGNORE INTO transactions (
                    dedup_key,
                    occurred_at,
                    amount,
                    direction,
                    institution,
                    merchant_guess,
                    description,
                    raw_text,
                    created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    parsed.dedup_key,
                    parsed.occurred_at,
                    str(parsed.amount),
                    parsed.direction.value,
                    parsed.institution,
                    parsed.merchant_guess,
                    parsed.description_snippet,
                    parsed.raw_text,
                    created_at.isoformat(),
                ),
            )
            return cur.rowcount == 1

    def record_rejection(self, message: RawMessage, rejected: Rejected) -> None:
        """Append a skipped message to the diagnostic log."""

        created_at = datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO rejections (message_id, sender, received_at, code, reason, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    message.id,
                    message.sender,
                    message.received_at,
                    rejected.code.value,
                    rejected.reason,
                    created_at.isoformat(),
                ),
            )

    def count(self) -> int:
        with self._connect() as conn:
            row = conn.execute("SELECT COUNT(*) AS n FROM transactions").fetchone()
        return int(row["n"])

    def totals(self, start: int = 0, end: int | None = None) -> dict[str, Decimal]:
        """Return inflow, outflow, and net for transactions in [start, end]."""

        query = "SELECT amount, direction FROM transactions WHERE occurred_at >= ?"
        params: list[int] = [start]
        if end is not None:
            query += " AND occurred_at <= ?"
            params.append(end)

        inflow = Decimal("0")
        outflow = Decimal("0")
        with self._connect() as conn:
            for row in conn.execute(query, params):
                amount = Decimal(row["amount"])
                if row["direction"] == Direction.CREDIT.value:
                    inflow += amount
                else:
                    outflow += amount
        return {"inflow": inflow, "outflow": outflow, "net": inflow - outflow}
