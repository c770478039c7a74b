from __future__ import annotations

import hashlib
from decimal import Decimal

from smsledger.core.dedup import canonical_amount, compute_dedup_key


def test_canonical_amount_is_plain_and_trimmed() -> None:
    assert canonical_amount(Decimal("500.00")) == "500.0"
    assert canonical_amount(Decimal("1234.50")) == "1234.5"
    assert canonical_amount(Decimal("10000")) == "10000.0"
    assert canonical_amount(Decimal("100000000")) == "100000000.0"


def test_dedup_key_is_sha256_of_sender_time_amount() -> None:
    expected = hashlib.sha256(b"VM-HDFCBK|1704412800000|500.0").hexdigest()
    key = compute_dedup_key("VM-HDFCBK", 1704412800000, Decimal("500.00"))
    assert key == expected
    assert len(key) == 64
    assert key == key.lower()


def test_dedup_key_ignores_amount_formatting() -> None:
    first = compute_dedup_key("HDFCBK", 1, Decimal("500"))
    second = compute_dedup_key("HDFCBK", 1, Decimal("500.00"))
    assert first == second


def test_dedup_key_changes_with_any_input() -> None:
    base = compute_dedup_key("HDFCBK", 1, Decimal("500"))
    assert compute_dedup_key("ICICIB", 1, Decimal("500")) != base
    assert compute_dedup_key("HDFCBK", 2, Decimal("500")) != base
    assert compute_dedup_key("HDFCBK", 1, Decimal("501")) != base
