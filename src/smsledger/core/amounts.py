"""Amount extraction and range validation (core domain)."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional

from smsledger.core.patterns import AMOUNT_RULES

MIN_AMOUNT = Decimal("1")
MAX_AMOUNT = Decimal("100000000")


def extract_amount(body: str) -> Optional[Decimal]:
    """Return the amount captured by the first matching amount rule.

    Rules are tried in table order, so currency-tagged amounts beat the bare
    number fallbacks (reference ids, phone numbers). Thousands separators are
    dropped before parsing. No match, or a capture that is not a number,
    yields None.
    """

    for rule in AMOUNT_RULES:
        match = rule.pattern.search(body)
        if match is None:
            continue
        cleaned = match.group(1).replace(",", "")
        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            return None
        if not amount.is_finite():
            return None
        return amount
    return None


def is_amount_in_range(amount: Decimal) -> bool:
    return MIN_AMOUNT <= amount <= MAX_AMOUNT
