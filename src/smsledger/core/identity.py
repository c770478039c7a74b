"""Institution and counterparty extraction (core domain)."""

from __future__ import annotations

import re
from typing import Optional

from smsledger.core.patterns import (
    INSTITUTION_MAP,
    KNOWN_FINANCIAL_SENDERS,
    MERCHANT_RULES,
    ROUTING_PREFIX,
)
from smsledger.core.rules_engine import first_capture

MIN_MERCHANT_CHARS = 3


def extract_institution(sender: str) -> str:
    """Map a sender address to a display name for the bank/wallet/telecom.

    Unknown senders fall back to the address without its routing prefix.
    """

    normalized = sender.upper()
    for code, display_name in INSTITUTION_MAP:
        if code in normalized:
            return display_name
    return ROUTING_PREFIX.sub("", sender.strip(), count=1).strip()


def extract_merchant(body: str) -> Optional[str]:
    """Return the counterparty name, or None when nothing usable is found.

    None means "describe the transaction with the body snippet instead"; it
    is never an error.
    """

    found = first_capture(body, MERCHANT_RULES.rules, min_length=MIN_MERCHANT_CHARS)
    if found is None:
        return None
    _, merchant = found
    return merchant


def describe(merchant: Optional[str], body: str, snippet_chars: int) -> str:
    """Return the description shown for a transaction."""

    if merchant is not None:
        return merchant
    return body[:snippet_chars].strip()


def is_financial_sender(sender: str) -> bool:
    """Return True if the sender contains a known financial sender code."""

    letters = re.sub(r"[^A-Z]", "", sender.upper())
    return any(code in letters for code in KNOWN_FINANCIAL_SENDERS)
