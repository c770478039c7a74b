"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SENDER_FILTERS = ("any", "known")


class ClassificationMode(str, Enum):
    """RULES never calls the verifier; HYBRID may consult it."""

    RULES = "rules"
    HYBRID = "hybrid"


@dataclass(frozen=True)
class ClassifierConfig:
    """Settings for the classification pipeline."""

    mode: ClassificationMode = ClassificationMode.RULES
    strict: bool = True
    verifier_timeout_seconds: float = 10.0
    snippet_chars: int = 80


@dataclass(frozen=True)
class IngestConfig:
    """Settings applied before a message reaches the classifier."""

    # "any" accepts every sender, "known" only recognised financial senders.
    sender_filter: str = "any"

    def __post_init__(self) -> None:
        if self.sender_filter not in SENDER_FILTERS:
            raise ValueError(f"Unsupported sender filter: {self.sender_filter}")
