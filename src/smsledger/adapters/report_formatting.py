"""Shared report formatting helpers.

Keeping formatting here prevents drift between CLI commands and keeps
outcome lines consistent regardless of where they are printed.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Tuple

from rich.table import Table
from rich.text import Text

from smsledger.core.models import Direction, IngestStats, ParseOutcome, Parsed, RawMessage


def format_timestamp(epoch_ms: int) -> str:
    moment = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    return moment.astimezone().strftime("%H:%M:%S %d-%m-%Y")


def format_amount(parsed: Parsed) -> str:
    """Signed rupee amount: outflows negative, inflows positive."""

    sign = "+" if parsed.direction is Direction.CREDIT else "-"
    return f"{sign}₹{parsed.amount:,.2f}"


def format_outcome_line(message: RawMessage, outcome: ParseOutcome) -> str:
    """Return a single plain-text line describing the outcome."""

    timestamp = format_timestamp(message.received_at)
    if isinstance(outcome, Parsed):
        counterparty = outcome.merchant_guess or outcome.description_snippet
        return f"[{timestamp}] {outcome.institution}: {format_amount(outcome)} {counterparty}"
    return f"[{timestamp}] {message.sender}: skipped ({outcome.reason})"


def build_outcome_table(rows: Iterable[Tuple[RawMessage, ParseOutcome]]) -> Table:
    """Create the rich table used by the ``parse`` command."""

    table = Table(title="SMS classification")
    table.add_column("When")
    table.add_column("Sender")
    table.add_column("Result")
    table.add_column("Amount", justify="right")
    table.add_column("Details")

    for message, outcome in rows:
        timestamp = format_timestamp(message.received_at)
        if isinstance(outcome, Parsed):
            style = "green" if outcome.direction is Direction.CREDIT else "red"
            table.add_row(
                timestamp,
                outcome.institution,
                outcome.direction.value,
                Text(format_amount(outcome), style=style),
                outcome.merchant_guess or outcome.description_snippet,
            )
        else:
            table.add_row(
                timestamp,
                message.sender,
                Text("skipped", style="dim"),
                "",
                Text(outcome.reason, style="dim"),
            )
    return table


def format_stats(stats: IngestStats) -> str:
    """Return a multi-line summary of an ingestion run."""

    lines = [
        f"Messages seen:   {stats.seen}",
        f"Transactions:    {stats.parsed}",
        f"Inserted:        {stats.inserted}",
        f"Duplicates:      {stats.duplicates}",
        f"Skipped:         {stats.rejected_total}",
    ]
    for code, count in sorted(stats.rejected.items(), key=lambda item: item[0].value):
        lines.append(f"  {code.value}: {count}")
    return "\n".join(lines)
