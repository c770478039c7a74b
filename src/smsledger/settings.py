"""Static configuration for smsledger.

All user-editable settings (classification mode, verifier, storage, logging)
live in a single JSON file for quick edits without touching Python.
"""

import json
import os

from dotenv import load_dotenv

from smsledger.core.config import ClassificationMode, ClassifierConfig, IngestConfig

# .env may point SMSLEDGER_HOME/SMSLEDGER_CONFIG somewhere else.
load_dotenv()

PROJECT_ROOT = os.path.abspath(os.getenv("SMSLEDGER_HOME", os.getcwd()))

CONFIG_PATH = os.getenv("SMSLEDGER_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(PROJECT_ROOT, path)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Where to store the SQLite ledger.
DB_PATH = _resolve_path(_CONFIG.get("db_path", "smsledger.db"))

# Classification controls.
# - MODE: "rules" (local only) or "hybrid" (consult the verifier when strict rules fail)
# - STRICT: require explicit transaction phrases in rules mode
# - SNIPPET_CHARS: description length when no merchant is found
_classification = _CONFIG.get("classification", {})
MODE = ClassificationMode(_classification.get("mode", ClassificationMode.RULES.value))
STRICT = bool(_classification.get("strict", True))
SNIPPET_CHARS = int(_classification.get("snippet_chars", 80))

# Verifier command is only required when MODE is hybrid.
_verifier = _CONFIG.get("verifier", {})
VERIFIER_COMMAND = _verifier.get("command")
VERIFIER_TIMEOUT_SECONDS = float(_verifier.get("timeout_seconds", 10))

# Ingestion: "any" sender or only "known" financial senders.
_ingest = _CONFIG.get("ingest", {})
SENDER_FILTER = _ingest.get("sender_filter", "any")

CLASSIFIER_CONFIG = ClassifierConfig(
    mode=MODE,
    strict=STRICT,
    verifier_timeout_seconds=VERIFIER_TIMEOUT_SECONDS,
    snippet_chars=SNIPPET_CHARS,
)
INGEST_CONFIG = IngestConfig(sender_filter=SENDER_FILTER)

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
