"""Synchronous message classification pipeline.

The parser enforces a strict order:
1) Informational veto
2) Positive evidence (strict mode only)
3) Amount extraction
4) Range validation
5) Direction scoring
6) Institution and merchant extraction
7) Dedup key

Every message ends in exactly one Parsed or Rejected outcome. Only the first
MAX_SCAN_CHARS of a body are scanned, so regex cost stays bounded on any
input. Nothing here mutates shared state, so a parser instance can be used
from many threads.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from smsledger.core.amounts import MAX_AMOUNT, MIN_AMOUNT, extract_amount, is_amount_in_range
from smsledger.core.dedup import compute_dedup_key
from smsledger.core.direction import resolve_direction
from smsledger.core.evidence import has_clear_transaction_indicator
from smsledger.core.identity import describe, extract_institution, extract_merchant
from smsledger.core.informational import informational_categories
from smsledger.core.models import ParseOutcome, Parsed, RawMessage, Rejected, RejectionCode

LOGGER = logging.getLogger(__name__)

DEFAULT_SNIPPET_CHARS = 80

# Regex stages only see this much of a body; ten concatenated SMS segments fit.
MAX_SCAN_CHARS = 2000

# Longest amount text quoted back in a rejection reason.
MAX_REASON_AMOUNT_CHARS = 24


class MessageParser:
    """Rule-based classifier for bank, wallet, and telecom SMS."""

    def __init__(self, snippet_chars: int = DEFAULT_SNIPPET_CHARS) -> None:
        self._snippet_chars = snippet_chars

    def parse(self, message: RawMessage, strict: bool = False) -> ParseOutcome:
        """Classify one message.

        In strict mode a message also needs an explicit transaction phrase (or
        an amount next to a debit/credit keyword). Non-strict mode skips that
        check and leaves the final say to an external verifier.
        """

        outcome = self._parse(message, strict)
        if isinstance(outcome, Rejected):
            LOGGER.debug("Rejected message %s from %s: %s", message.id, message.sender, outcome.reason)
        return outcome

    def _parse(self, message: RawMessage, strict: bool) -> ParseOutcome:
        body = message.body[:MAX_SCAN_CHARS]

        categories = informational_categories(body)
        if categories:
            return Rejected(
                code=RejectionCode.INFORMATIONAL_MESSAGE,
                reason=f"informational message - no transaction ({', '.join(categories)})",
            )

        if strict and not has_clear_transaction_indicator(body):
            return Rejected(
                code=RejectionCode.NO_TRANSACTION_INDICATOR,
                reason="no clear transaction indicator",
            )

        amount = extract_amount(body)
        if amount is None:
            return Rejected(code=RejectionCode.AMOUNT_NOT_FOUND, reason="could not extract amount")

        if not is_amount_in_range(amount):
            return Rejected(
                code=RejectionCode.AMOUNT_OUT_OF_RANGE,
                reason=f"amount out of range [{MIN_AMOUNT}, {MAX_AMOUNT}]: {_clip(str(amount))}",
            )

        merchant = extract_merchant(body)
        return Parsed(
            amount=amount,
            direction=resolve_direction(body),
            institution=extract_institution(message.sender),
            merchant_guess=merchant,
            description_snippet=describe(merchant, body, self._snippet_chars),
            occurred_at=message.received_at,
            dedup_key=compute_dedup_key(message.sender, message.received_at, amount),
            raw_text=message.body,
        )

    def parse_outcomes(self, messages: Iterable[RawMessage], strict: bool = False) -> List[ParseOutcome]:
        """Classify every message; the result lines up with the input order."""

        return [self.parse(message, strict) for message in messages]

    def parse_all(self, messages: Iterable[RawMessage], strict: bool = False) -> List[Parsed]:
        """Return only the messages that classified as transactions."""

        return [
            outcome
            for outcome in self.parse_outcomes(messages, strict)
            if isinstance(outcome, Parsed)
        ]


def _clip(text: str, limit: int = MAX_REASON_AMOUNT_CHARS) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... ({len(text)} chars)"
