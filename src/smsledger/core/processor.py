"""Core classification and ingestion pipeline.

This module is integration-agnostic. It only relies on ports for storage and
the optional verifier, enabling other message sources or backends without
changes here.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import Iterable, List, Optional

from smsledger.core.config import ClassificationMode, ClassifierConfig, IngestConfig
from smsledger.core.identity import is_financial_sender
from smsledger.core.models import (
    IngestStats,
    ParseOutcome,
    Parsed,
    RawMessage,
    Rejected,
    RejectionCode,
    VerifierVerdict,
)
from smsledger.core.parser import MessageParser
from smsledger.core.ports import LedgerPort, VerifierPort

LOGGER = logging.getLogger(__name__)


class TransactionClassifier:
    """Runs the local parser and, in hybrid mode, consults the verifier."""

    def __init__(
        self,
        config: ClassifierConfig,
        verifier: Optional[VerifierPort] = None,
    ) -> None:
        self._config = config
        self._verifier = verifier
        self._parser = MessageParser(snippet_chars=config.snippet_chars)

    @property
    def uses_verifier(self) -> bool:
        return self._config.mode is ClassificationMode.HYBRID and self._verifier is not None

    async def classify(self, message: RawMessage) -> ParseOutcome:
        """Classify one message. Always returns an outcome, never raises."""

        verifier = self._verifier if self.uses_verifier else None
        if verifier is None:
            return self._parser.parse(message, strict=self._config.strict)

        # Strict local rules first: a confident local result needs no second opinion.
        local = self._parser.parse(message, strict=True)
        if isinstance(local, Parsed) or local.code is RejectionCode.INFORMATIONAL_MESSAGE:
            return local

        candidate = self._parser.parse(message, strict=False)
        if isinstance(candidate, Rejected):
            return candidate

        verdict = await self._consult(verifier, message)
        if verdict is None:
            return local
        return self._apply_verdict(message, candidate, verdict)

    async def classify_all(self, messages: Iterable[RawMessage]) -> List[ParseOutcome]:
        return [await self.classify(message) for message in messages]

    async def _consult(self, verifier: VerifierPort, message: RawMessage) -> Optional[VerifierVerdict]:
        """Ask the verifier; None means it was unavailable."""

        try:
            return await asyncio.wait_for(
                verifier.verify(message.body),
                timeout=self._config.verifier_timeout_seconds,
            )
        except asyncio.TimeoutError:
            LOGGER.warning(
                "Verifier timed out after %ss for message %s; using local rules",
                self._config.verifier_timeout_seconds,
                message.id,
            )
        except Exception:
            LOGGER.warning("Verifier failed for message %s; using local rules", message.id, exc_info=True)
        return None

    @staticmethod
    def _apply_verdict(message: RawMessage, candidate: Parsed, verdict: VerifierVerdict) -> ParseOutcome:
        if not verdict.is_transaction:
            return Rejected(
                code=RejectionCode.VERIFIER_REJECTED,
                reason=f"verifier rejected: {verdict.reason}",
            )

        # Amount and merchant stay local; only direction is taken from the verifier.
        if verdict.amount is not None and verdict.amount != candidate.amount:
            LOGGER.debug(
                "Verifier amount %s differs from local %s for message %s",
                verdict.amount,
                candidate.amount,
                message.id,
            )
        if verdict.direction is not None and verdict.direction is not candidate.direction:
            return dataclasses.replace(candidate, direction=verdict.direction)
        return candidate


class LedgerIngestor:
    """Orchestrates sender filtering, classification, dedup, and persistence."""

    def __init__(
        self,
        classifier: TransactionClassifier,
        ledger: LedgerPort,
        ingest_config: IngestConfig,
    ) -> None:
        self._classifier = classifier
        self._ledger = ledger
        self._ingest = ingest_config

    async def handle(self, message: RawMessage, stats: IngestStats) -> ParseOutcome:
        """Process one message through the pipeline and update the counters."""

        stats.seen += 1

        if self._ingest.sender_filter == "known" and not is_financial_sender(message.sender):
            outcome: ParseOutcome = Rejected(
                code=RejectionCode.SENDER_NOT_ALLOWED,
                reason=f"sender {message.sender} is not a known financial sender",
            )
        else:
            outcome = await self._classifier.classify(message)

        if isinstance(outcome, Rejected):
            stats.record_rejection(outcome.code)
            self._ledger.record_rejection(message, outcome)
            return outcome

        stats.parsed += 1
        # Same sender, time, and amount means the same alert seen again.
        if self._ledger.exists(outcome.dedup_key):
            LOGGER.info("Dedup skip for %s (message %s)", message.sender, message.id)
            stats.duplicates += 1
            return outcome

        if self._ledger.insert(outcome):
            stats.inserted += 1
        else:
            stats.duplicates += 1
        return outcome

    async def ingest(self, messages: Iterable[RawMessage]) -> IngestStats:
        stats = IngestStats()
        for message in messages:
            await self.handle(message, stats)
        LOGGER.info(
            "Ingestion complete: seen=%s, parsed=%s, inserted=%s, duplicates=%s, rejected=%s",
            stats.seen,
            stats.parsed,
            stats.inserted,
            stats.duplicates,
            stats.rejected_total,
        )
        return stats
