"""Rule compilation and matching logic (core domain)."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Iterable, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class PatternRule:
    """Compiled rule used by the classification stages."""

    name: str
    category: str
    pattern: re.Pattern
    raw_regex: str


@dataclass(frozen=True)
class RuleSet:
    """An ordered, immutable collection of compiled rules."""

    name: str
    rules: Tuple[PatternRule, ...]

    def __iter__(self):
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)


def build_rule_set(
    name: str,
    entries: Iterable[Tuple[str, str]],
    flags: int = re.IGNORECASE,
) -> RuleSet:
    """Compile (category, regex) pairs into an ordered rule set.

    Tables are compiled once at import time, so an empty table or a broken
    regex surfaces as a startup failure instead of a per-message surprise.
    """

    compiled: List[PatternRule] = []
    for index, (category, raw_regex) in enumerate(entries):
        try:
            pattern = re.compile(raw_regex, flags)
        except re.error as exc:
            raise ValueError(f"Invalid regex in {name}[{index}] ({category}): {exc}") from exc
        compiled.append(
            PatternRule(
                name=f"{name}.{category}.{index}",
                category=category,
                pattern=pattern,
                raw_regex=raw_regex,
            )
        )
    if not compiled:
        raise ValueError(f"Rule set {name} is empty")
    return RuleSet(name=name, rules=tuple(compiled))


def any_match(text: str, rules: Iterable[PatternRule]) -> bool:
    """Return True if any rule matches anywhere in the text."""

    return any(rule.pattern.search(text) for rule in rules)


def matching_rules(text: str, rules: Iterable[PatternRule]) -> List[PatternRule]:
    """Return every rule that matches, in table order."""

    return [rule for rule in rules if rule.pattern.search(text)]


def count_matches(text: str, rules: Iterable[PatternRule]) -> int:
    """Count matching rules. A rule counts once no matter how often it hits."""

    return len(matching_rules(text, rules))


def first_capture(
    text: str,
    rules: Sequence[PatternRule],
    min_length: int = 1,
) -> Optional[Tuple[PatternRule, str]]:
    """Return the first rule (in order) whose first match yields a usable capture.

    Only the first match of each rule is considered. A capture shorter than
    ``min_length`` after trimming moves on to the next rule.
    """

    for rule in rules:
        match = rule.pattern.search(text)
        if match is None:
            continue
        captured = (match.group(1) or "").strip()
        if len(captured) >= min_length:
            return rule, captured
    return None
