"""Debit/credit scoring (core domain)."""

from __future__ import annotations

from typing import Tuple

from smsledger.core.models import Direction
from smsledger.core.patterns import CREDIT_RULES, DEBIT_RULES
from smsledger.core.rules_engine import any_match, count_matches


def score_direction(body: str) -> Tuple[int, int]:
    """Return (debit_score, credit_score), one point per matching rule."""

    return count_matches(body, DEBIT_RULES), count_matches(body, CREDIT_RULES)


def resolve_direction(body: str) -> Direction:
    """Pick the direction with more evidence. Ties, including 0-0, are debits."""

    debit_score, credit_score = score_direction(body)
    if credit_score > debit_score:
        return Direction.CREDIT
    return Direction.DEBIT


def has_direction_keyword(body: str) -> bool:
    return any_match(body, DEBIT_RULES) or any_match(body, CREDIT_RULES)
