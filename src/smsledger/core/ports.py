"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for storage and verifier adapters so that
the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Protocol

from smsledger.core.models import Parsed, RawMessage, Rejected, VerifierVerdict


class LedgerPort(Protocol):
    """Storage operations required by ingestion."""

    def exists(self, dedup_key: str) -> bool:
        ...

    def insert(self, parsed: Parsed) -> bool:
        ...

    def record_rejection(self, message: RawMessage, rejected: Rejected) -> None:
        ...


class VerifierPort(Protocol):
    """Advisory second opinion on whether a message is a transaction."""

    async def verify(self, raw_text: str) -> VerifierVerdict:
        ...
