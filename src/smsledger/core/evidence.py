"""Positive transaction evidence used by strict mode (core domain)."""

from __future__ import annotations

from smsledger.core.amounts import extract_amount
from smsledger.core.direction import has_direction_keyword
from smsledger.core.patterns import TRANSACTION_EVIDENCE_RULES
from smsledger.core.rules_engine import any_match


def has_transaction_evidence(body: str) -> bool:
    """Return True if the body carries an explicit transaction phrase."""

    return any_match(body, TRANSACTION_EVIDENCE_RULES)


def has_amount_with_direction_context(body: str) -> bool:
    """Fallback check: an extractable amount plus any debit/credit keyword."""

    return has_direction_keyword(body) and extract_amount(body) is not None


def has_clear_transaction_indicator(body: str) -> bool:
    return has_transaction_evidence(body) or has_amount_with_direction_context(body)
