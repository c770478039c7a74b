"""Reply contract for the external verifier.

The verifier (an LLM or anything else) answers on its first non-empty line
with one of::

    YES|DEBIT|<amount>
    YES|CREDIT|<amount>
    YES||
    NO|<reason>

Tokens are case-insensitive and the amount is optional. Any other reply is
read as "not a transaction", so a confused verifier can only drop messages,
never invent them.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional

from smsledger.core.models import Direction, VerifierVerdict

PROMPT_TEMPLATE = """You check SMS messages for an expense tracker.
Decide whether money has ACTUALLY moved in or out of the account holder's
account with this message.

SMS: {body}

A debit means money left the account (debited, paid, sent, withdrawn, spent).
A credit means money entered the account (credited, received, refunded, deposited).
Payment requests, bills that are due, OTPs, balance updates, offers, and
account-opened notices are NOT transactions.

Answer with exactly one line:
YES|DEBIT|<amount> or YES|CREDIT|<amount> if money moved,
NO|<short reason> otherwise."""


def build_verification_prompt(body: str) -> str:
    return PROMPT_TEMPLATE.format(body=body.strip())


def _first_line(reply: str) -> str:
    for line in reply.splitlines():
        if line.strip():
            return line.strip()
    return ""


def _parse_direction(token: str) -> Optional[Direction]:
    token = token.strip().upper()
    if token == "DEBIT":
        return Direction.DEBIT
    if token == "CREDIT":
        return Direction.CREDIT
    return None


def _parse_amount(token: str) -> Optional[Decimal]:
    cleaned = token.strip().replace(",", "")
    if not cleaned:
        return None
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def parse_verifier_reply(reply: str) -> VerifierVerdict:
    """Turn a raw verifier reply into a verdict."""

    line = _first_line(reply)
    parts = line.split("|")
    head = parts[0].strip().upper()

    if head == "YES":
        direction = _parse_direction(parts[1]) if len(parts) > 1 else None
        amount = _parse_amount(parts[2]) if len(parts) > 2 else None
        return VerifierVerdict(
            is_transaction=True,
            direction=direction,
            amount=amount,
            reason=line,
        )

    if head == "NO":
        reason = "|".join(parts[1:]).strip() or "verifier said no"
        return VerifierVerdict(is_transaction=False, direction=None, reason=reason)

    return VerifierVerdict(
        is_transaction=False,
        direction=None,
        reason=f"unrecognised verifier reply: {line[:50]!r}",
    )
