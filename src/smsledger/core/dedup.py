"""Deduplication helpers (core domain)."""

from __future__ import annotations

import hashlib
from decimal import Decimal


def canonical_amount(amount: Decimal) -> str:
    """Render an amount the same way on every platform and locale.

    Plain notation, no thousands separators, trailing zeros dropped but at
    least one fractional digit: 500 -> "500.0", 1234.50 -> "1234.5".
    """

    text = format(amount.normalize(), "f")
    if "." not in text:
        text = f"{text}.0"
    return text


def compute_dedup_key(sender: str, occurred_at: int, amount: Decimal) -> str:
    """Return the SHA-256 hex digest of ``sender|occurred_at|amount``.

    Two messages with the same sender, timestamp, and amount share a key;
    storage uses that to ignore repeated ingestion of the same alert.
    """

    payload = f"{sender}|{occurred_at}|{canonical_amount(amount)}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
