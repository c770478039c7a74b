"""Message source adapter for SMS inbox exports.

Reads a JSON array of ``{"id", "address" | "sender", "body", "date"}``
objects, the shape most Android SMS backup tools produce, and maps each
record to a RawMessage.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

from smsledger.core.models import RawMessage


def _require(record: dict, index: int, *names: str) -> Any:
    for name in names:
        if record.get(name) is not None:
            return record[name]
    raise ValueError(f"Record {index} is missing field {' / '.join(names)}")


def to_raw_message(record: dict, index: int) -> RawMessage:
    """Build a RawMessage from one export record."""

    if not isinstance(record, dict):
        raise ValueError(f"Record {index} is not an object")

    date = _require(record, index, "date", "received_at")
    try:
        received_at = int(date)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Record {index} has a non-numeric date: {date!r}") from exc

    return RawMessage(
        id=str(record.get("id", index)),
        sender=str(_require(record, index, "address", "sender")),
        body=str(_require(record, index, "body")),
        received_at=received_at,
    )


def load_messages(path: str | Path, since: Optional[int] = None) -> List[RawMessage]:
    """Load messages worth classifying from an export file.

    Bodies without a single digit cannot carry an amount and are skipped, as
    are messages at or before ``since`` (ms epoch) when given.
    """

    with open(path, "r", encoding="utf-8") as handle:
        try:
            records = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{path} is not valid JSON: {exc}") from exc

    if not isinstance(records, list):
        raise ValueError(f"{path} must contain a JSON array of messages")

    messages: List[RawMessage] = []
    for index, record in enumerate(records):
        message = to_raw_message(record, index)
        if not any(ch.isdigit() for ch in message.body):
            continue
        if since is not None and message.received_at <= since:
            continue
        messages.append(message)
    return messages
