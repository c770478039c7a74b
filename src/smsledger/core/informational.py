"""Informational-message veto (core domain).

A match here is final: reminders, balance checks, OTPs, offers, and payment
requests never become transactions, whatever amount they mention.
"""

from __future__ import annotations

from typing import List

from smsledger.core.patterns import INFORMATIONAL_RULES
from smsledger.core.rules_engine import any_match, matching_rules


def is_informational(body: str) -> bool:
    """Return True if the body matches any informational rule."""

    return any_match(body, INFORMATIONAL_RULES)


def informational_categories(body: str) -> List[str]:
    """Return the distinct categories that matched, in table order."""

    categories: List[str] = []
    for rule in matching_rules(body, INFORMATIONAL_RULES):
        if rule.category not in categories:
            categories.append(rule.category)
    return categories
