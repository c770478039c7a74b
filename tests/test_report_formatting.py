from __future__ import annotations

from decimal import Decimal

from smsledger.adapters.report_formatting import (
    build_outcome_table,
    format_amount,
    format_outcome_line,
    format_stats,
)
from smsledger.core.models import (
    Direction,
    IngestStats,
    Parsed,
    RawMessage,
    Rejected,
    RejectionCode,
)

MESSAGE = RawMessage(id="1", sender="VM-HDFCBK", body="Rs 500 debited at SWIGGY.", received_at=1704412800000)


def _parsed(direction: Direction, amount: str = "500") -> Parsed:
    return Parsed(
        amount=Decimal(amount),
        direction=direction,
        institution="HDFC Bank",
        merchant_guess="SWIGGY",
        description_snippet="SWIGGY",
        occurred_at=MESSAGE.received_at,
        dedup_key="0" * 64,
        raw_text=MESSAGE.body,
    )


def test_amount_sign_follows_direction() -> None:
    assert format_amount(_parsed(Direction.DEBIT)) == "-₹500.00"
    assert format_amount(_parsed(Direction.CREDIT, "10000")) == "+₹10,000.00"


def test_outcome_lines() -> None:
    parsed_line = format_outcome_line(MESSAGE, _parsed(Direction.DEBIT))
    assert "HDFC Bank: -₹500.00 SWIGGY" in parsed_line

    rejected = Rejected(code=RejectionCode.AMOUNT_NOT_FOUND, reason="could not extract amount")
    rejected_line = format_outcome_line(MESSAGE, rejected)
    assert "VM-HDFCBK: skipped (could not extract amount)" in rejected_line


def test_outcome_table_has_a_row_per_message() -> None:
    rejected = Rejected(code=RejectionCode.AMOUNT_NOT_FOUND, reason="could not extract amount")
    table = build_outcome_table([(MESSAGE, _parsed(Direction.DEBIT)), (MESSAGE, rejected)])
    assert table.row_count == 2


def test_stats_summary_lists_rejection_codes() -> None:
    stats = IngestStats(seen=3, parsed=2, inserted=1, duplicates=1)
    stats.record_rejection(RejectionCode.INFORMATIONAL_MESSAGE)

    summary = format_stats(stats)

    assert "Inserted:        1" in summary
    assert "informational_message: 1" in summary
