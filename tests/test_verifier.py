from __future__ import annotations

import asyncio
import os
import sys
import time
from decimal import Decimal

import pytest

from smsledger.adapters.command_verifier import CommandVerifier
from smsledger.core.config import ClassificationMode, ClassifierConfig
from smsledger.core.models import Direction, RawMessage, Rejected, RejectionCode
from smsledger.core.processor import TransactionClassifier
from smsledger.core.verifier import build_verification_prompt, parse_verifier_reply


def test_yes_reply_with_direction_and_amount() -> None:
    verdict = parse_verifier_reply("YES|DEBIT|500.00")
    assert verdict.is_transaction
    assert verdict.direction is Direction.DEBIT
    assert verdict.amount == Decimal("500.00")


def test_reply_is_case_insensitive_and_uses_first_line() -> None:
    verdict = parse_verifier_reply("\n\n  yes|credit|1,200 \nbecause it says credited")
    assert verdict.is_transaction
    assert verdict.direction is Direction.CREDIT
    assert verdict.amount == Decimal("1200")


def test_yes_without_details() -> None:
    verdict = parse_verifier_reply("YES")
    assert verdict.is_transaction
    assert verdict.direction is None
    assert verdict.amount is None


def test_no_reply_keeps_reason() -> None:
    verdict = parse_verifier_reply("NO|payment request, not paid yet")
    assert not verdict.is_transaction
    assert verdict.reason == "payment request, not paid yet"


def test_unrecognised_reply_is_not_a_transaction() -> None:
    for reply in ["", "DEBIT", "Sure! This is a debit.", "MAYBE|DEBIT"]:
        verdict = parse_verifier_reply(reply)
        assert not verdict.is_transaction
        assert verdict.direction is None


def test_prompt_contains_message_body() -> None:
    prompt = build_verification_prompt("  Rs 500 debited  ")
    assert "SMS: Rs 500 debited\n" in prompt
    assert "YES|DEBIT|<amount>" in prompt


def test_command_verifier_reads_reply_from_stdout() -> None:
    script = "import sys; sys.stdin.read(); print('YES|CREDIT|250')"
    verifier = CommandVerifier([sys.executable, "-c", script])

    verdict = asyncio.run(verifier.verify("Rs 250 credited to your A/c"))

    assert verdict.is_transaction
    assert verdict.direction is Direction.CREDIT
    assert verdict.amount == Decimal("250")


def test_command_verifier_passes_prompt_on_stdin() -> None:
    script = "import sys; body = sys.stdin.read(); print('YES|DEBIT|' if 'ZOMATO' in body else 'NO|missing')"
    verifier = CommandVerifier([sys.executable, "-c", script])

    verdict = asyncio.run(verifier.verify("Rs 300 paid to ZOMATO"))

    assert verdict.is_transaction


def test_command_verifier_raises_on_failure() -> None:
    verifier = CommandVerifier([sys.executable, "-c", "import sys; sys.exit(3)"])
    with pytest.raises(RuntimeError):
        asyncio.run(verifier.verify("anything"))


def test_command_verifier_rejects_empty_command() -> None:
    with pytest.raises(ValueError):
        CommandVerifier("   ")


def test_timed_out_command_is_killed_and_reaped(tmp_path) -> None:
    pid_file = tmp_path / "verifier.pid"
    script = (
        "import os, sys, time; "
        "handle = open(sys.argv[1], 'w'); handle.write(str(os.getpid())); handle.close(); "
        "time.sleep(30)"
    )
    verifier = CommandVerifier([sys.executable, "-c", script, str(pid_file)])
    config = ClassifierConfig(mode=ClassificationMode.HYBRID, verifier_timeout_seconds=2.0)
    classifier = TransactionClassifier(config, verifier=verifier)
    message = RawMessage(id="1", sender="VM-HDFCBK", body="Order 4521 has shipped", received_at=1000)

    started = time.perf_counter()
    outcome = asyncio.run(classifier.classify(message))

    assert time.perf_counter() - started < 10
    assert isinstance(outcome, Rejected)
    assert outcome.code is RejectionCode.NO_TRANSACTION_INDICATOR
    pid = int(pid_file.read_text())
    with pytest.raises(ProcessLookupError):
        os.kill(pid, 0)
