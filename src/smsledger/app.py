"""Application entry point for the smsledger CLI."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import re
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from rich.console import Console

from smsledger import settings
from smsledger.adapters.command_verifier import CommandVerifier
from smsledger.adapters.message_source import load_messages
from smsledger.adapters.report_formatting import build_outcome_table, format_stats
from smsledger.adapters.sqlite_ledger import SQLiteLedger
from smsledger.core.config import ClassificationMode
from smsledger.core.processor import LedgerIngestor, TransactionClassifier

NAME = "SMSLEDGER"
FONT = "tarty-1"

# Account and card numbers in message bodies; the last four digits stay visible.
_LONG_DIGITS = re.compile(r"\d{5,}(?=\d{4})")


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(
        self,
        secrets: list[str],
        fmt: str,
        datefmt: Optional[str] = None,
        mask_account_numbers: bool = False,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]
        self._mask_account_numbers = mask_account_numbers

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        if self._mask_account_numbers:
            message = _LONG_DIGITS.sub(lambda match: "X" * len(match.group(0)), message)
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = []
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    mask_accounts = bool(config.get("redact", {}).get("mask_account_numbers", False))
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt, mask_account_numbers=mask_accounts)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/smsledger.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _build_classifier() -> TransactionClassifier:
    verifier = None
    if settings.MODE is ClassificationMode.HYBRID:
        if not settings.VERIFIER_COMMAND:
            raise RuntimeError("verifier.command is required when classification.mode=hybrid")
        verifier = CommandVerifier(settings.VERIFIER_COMMAND)
    logging.getLogger(__name__).info("Selected classification mode - %s", settings.MODE.value)
    return TransactionClassifier(settings.CLASSIFIER_CONFIG, verifier=verifier)


def _parse(path: str, since: Optional[int]) -> None:
    console = Console()
    messages = load_messages(path, since=since)
    classifier = _build_classifier()
    outcomes = asyncio.run(classifier.classify_all(messages))
    console.print(build_outcome_table(zip(messages, outcomes)))


def _ingest(path: str, since: Optional[int]) -> None:
    logger = logging.getLogger(__name__)
    ledger = SQLiteLedger(settings.DB_PATH)
    ledger.init_db()

    messages = load_messages(path, since=since)
    logger.info("%s messages loaded from %s", len(messages), path)

    ingestor = LedgerIngestor(_build_classifier(), ledger, settings.INGEST_CONFIG)
    stats = asyncio.run(ingestor.ingest(messages))
    print(format_stats(stats))


def _totals() -> None:
    ledger = SQLiteLedger(settings.DB_PATH)
    ledger.init_db()
    totals = ledger.totals()
    print(f"Transactions: {ledger.count()}")
    for name in ("inflow", "outflow", "net"):
        print(f"{name.capitalize():<13} ₹{totals[name]:,.2f}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="smsledger")
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Classify an SMS export and print the results")
    parse_cmd.add_argument("path", help="JSON export of SMS messages")
    parse_cmd.add_argument("--since", type=int, default=None, help="Only messages after this ms epoch")

    ingest_cmd = subparsers.add_parser("ingest", help="Classify an SMS export and store new transactions")
    ingest_cmd.add_argument("path", help="JSON export of SMS messages")
    ingest_cmd.add_argument("--since", type=int, default=None, help="Only messages after this ms epoch")

    subparsers.add_parser("totals", help="Show inflow, outflow, and net for the ledger")

    parser.add_argument("--no-banner", action="store_true", help="Skip the startup banner")

    args = parser.parse_args(argv)
    if not args.no_banner:
        _print_banner()
    _configure_logging()

    try:
        if args.command == "parse":
            _parse(args.path, args.since)
        elif args.command == "ingest":
            _ingest(args.path, args.since)
        else:
            _totals()
    except (OSError, ValueError, RuntimeError) as exc:
        logging.getLogger(__name__).error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
