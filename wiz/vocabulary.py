"""Keyword tables for intent extraction, loaded from YAML into explicit config objects.

The extractor never reads module-level keyword constants: every function takes
a ``Vocabulary`` (defaulting to the bundled ``vocabulary.yaml``), so alternate
tables can be tested or deployed without mutating globals.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml

from wiz.errors import VocabularyError
from wiz.state import TASK_TYPES

VOCABULARY_PATH = Path(__file__).resolve().parent / "vocabulary.yaml"

MatchPolicy = Literal["first", "all"]
MatchMode = Literal["substring", "word"]

_VALID_POLICIES = {"first", "all"}
_VALID_MODES = {"substring", "word"}


@dataclass(frozen=True)
class MatchEntry:
    category: str
    matchers: tuple[str, ...]


@dataclass(frozen=True)
class MatchTable:
    """Ordered ``{category, matchers}`` table with an explicit matching contract."""

    name: str
    entries: tuple[MatchEntry, ...]
    policy: MatchPolicy = "first"
    mode: MatchMode = "substring"
    default: str | None = None
    default_matcher: str | None = None
    _patterns: dict = field(default_factory=dict, init=False, repr=False, compare=False)

    def _hits(self, matcher: str, lowered: str) -> bool:
        if self.mode == "substring":
            return matcher in lowered
        pattern = self._patterns.get(matcher)
        if pattern is None:
            pattern = re.compile(rf"(?<!\w){re.escape(matcher)}(?:s|es)?(?!\w)")
            self._patterns[matcher] = pattern
        return pattern.search(lowered) is not None

    def first_match(self, text: str) -> tuple[str, str] | None:
        """Return ``(category, matcher)`` for the first hit in table order, or None."""
        lowered = text.lower()
        for entry in self.entries:
            for matcher in entry.matchers:
                if self._hits(matcher, lowered):
                    return entry.category, matcher
        return None

    def all_matches(self, text: str) -> list[str]:
        """Return every category with at least one hit, in table order."""
        lowered = text.lower()
        return [
            entry.category for entry in self.entries
            if any(self._hits(m, lowered) for m in entry.matchers)
        ]

    def categories(self) -> list[str]:
        return [entry.category for entry in self.entries]


@dataclass(frozen=True)
class CountTable:
    word_numbers: tuple[tuple[str, int], ...]
    multiplier_bases: tuple[str, ...]
    scales: tuple[str, ...]
    anchors: tuple[str, ...]
    default: int = 10

    def value_of(self, word: str) -> int | None:
        for candidate, value in self.word_numbers:
            if candidate == word:
                return value
        return None


@dataclass(frozen=True)
class Vocabulary:
    version: int
    counts: CountTable
    naming_styles: MatchTable
    task_verbs: MatchTable
    input_types: MatchTable
    demographics: MatchTable
    outputs: dict[str, tuple[str, str]]  # task type -> (output type, aggregation type)


def _parse_table(name: str, raw: dict) -> MatchTable:
    if not isinstance(raw, dict) or "entries" not in raw:
        raise VocabularyError(f"Table '{name}' missing 'entries'.")

    policy = raw.get("policy", "first")
    if policy not in _VALID_POLICIES:
        raise VocabularyError(
            f"Table '{name}' has invalid policy '{policy}'. Must be one of: {_VALID_POLICIES}"
        )
    mode = raw.get("mode", "substring")
    if mode not in _VALID_MODES:
        raise VocabularyError(
            f"Table '{name}' has invalid mode '{mode}'. Must be one of: {_VALID_MODES}"
        )

    entries = []
    for i, entry in enumerate(raw["entries"]):
        if "category" not in entry or "matchers" not in entry:
            raise VocabularyError(f"Table '{name}' entry {i} missing category or matchers.")
        matchers = tuple(str(m).lower() for m in entry["matchers"])
        entries.append(MatchEntry(category=str(entry["category"]), matchers=matchers))

    return MatchTable(
        name=name,
        entries=tuple(entries),
        policy=policy,
        mode=mode,
        default=raw.get("default"),
        default_matcher=raw.get("default_matcher"),
    )


def _parse_counts(raw: dict) -> CountTable:
    if not isinstance(raw, dict) or "word_numbers" not in raw:
        raise VocabularyError("Counts table missing 'word_numbers'.")
    return CountTable(
        word_numbers=tuple((str(w), int(n)) for w, n in raw["word_numbers"].items()),
        multiplier_bases=tuple(raw.get("multiplier_bases", [])),
        scales=tuple(raw.get("scales", [])),
        anchors=tuple(raw.get("anchors", [])),
        default=int(raw.get("default", 10)),
    )


def _parse_outputs(raw: dict) -> dict[str, tuple[str, str]]:
    if not isinstance(raw, dict):
        raise VocabularyError("Missing 'outputs' table.")

    missing = set(TASK_TYPES) - set(raw)
    if missing:
        raise VocabularyError(f"Outputs table does not cover task types: {sorted(missing)}")

    outputs = {}
    for task_type, row in raw.items():
        if "output" not in row or "aggregation" not in row:
            raise VocabularyError(f"Outputs row '{task_type}' needs output and aggregation.")
        outputs[task_type] = (row["output"], row["aggregation"])
    return outputs


def parse_vocabulary(data: dict) -> Vocabulary:
    """Build a ``Vocabulary`` from an already-parsed YAML mapping."""
    if not isinstance(data, dict):
        raise VocabularyError("Vocabulary must be a mapping.")

    task_verbs = _parse_table("task_verbs", data.get("task_verbs"))
    unknown = set(task_verbs.categories()) - set(TASK_TYPES)
    if unknown:
        raise VocabularyError(f"Unknown task types in task_verbs: {sorted(unknown)}")

    return Vocabulary(
        version=int(data.get("version", 1)),
        counts=_parse_counts(data.get("counts")),
        naming_styles=_parse_table("naming_styles", data.get("naming_styles")),
        task_verbs=task_verbs,
        input_types=_parse_table("input_types", data.get("input_types")),
        demographics=_parse_table("demographics", data.get("demographics")),
        outputs=_parse_outputs(data.get("outputs")),
    )


def load_vocabulary(path: str | Path | None = None) -> Vocabulary:
    """Load keyword tables from YAML. ``None`` loads the bundled tables."""
    vocab_path = Path(path) if path else VOCABULARY_PATH
    return parse_vocabulary(yaml.safe_load(vocab_path.read_text(encoding="utf-8")))


@lru_cache(maxsize=1)
def default_vocabulary() -> Vocabulary:
    """Return the configured vocabulary (``vocabulary_path`` in config, else bundled)."""
    from wiz.config import get_config

    return load_vocabulary(get_config().get("vocabulary_path"))
