# substitute.py
# SPDX-License-Identifier: MIT
"""Literal substring substitution applied to raw documents before parsing.

Rules are applied in one left-to-right pass over the original text. At each
position the longest matching key wins (ties cannot occur because keys are
unique), and replaced text is never rescanned, so a rule's target can not
trigger another rule.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Pattern, Tuple

from .log import get_logger

__all__ = [
    "InvalidSubstitutionRule",
    "SubstitutionRule",
    "SubstitutionTable",
    "apply_substitutions",
]

log = get_logger(__name__)


class InvalidSubstitutionRule(ValueError):
    """Raised when a rule would replace the empty string."""


@dataclass(frozen=True, slots=True)
class SubstitutionRule:
    """A single literal replacement.

    Attributes:
        source (str): Non-empty text to look for.
        target (str): Replacement text; may be empty.
    """
    source: str
    target: str

    def __post_init__(self) -> None:
        if not isinstance(self.source, str) or not self.source:
            raise InvalidSubstitutionRule(
                f"substitution source must be a non-empty string; got {self.source!r}"
            )
        if not isinstance(self.target, str):
            raise InvalidSubstitutionRule(
                f"substitution target must be a string; got {type(self.target).__name__}"
            )


def _rule_order(rule: SubstitutionRule) -> Tuple[int, str]:
    # Longest source first, then lexicographic.
    return (-len(rule.source), rule.source)


class SubstitutionTable:
    """Set of substitution rules keyed by their source text.

    Re-adding a source replaces its target. Iteration and :meth:`rules`
    always return rules in application order (longest source first, ties
    broken lexicographically), independent of insertion order.
    """

    def __init__(self, rules: Iterable[SubstitutionRule] = ()):
        self._targets: Dict[str, str] = {}
        self._pattern: Optional[Pattern[str]] = None
        for rule in rules:
            self._put(rule)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]] | Mapping[str, str]) -> "SubstitutionTable":
        """Build a table from ``(source, target)`` pairs or a mapping."""
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        return cls(SubstitutionRule(source, target) for source, target in items)

    def add(self, source: str, target: str) -> None:
        """Add or replace the rule for ``source``."""
        self._put(SubstitutionRule(source, target))

    def _put(self, rule: SubstitutionRule) -> None:
        previous = self._targets.get(rule.source)
        if previous is not None and previous != rule.target:
            log.debug("Substitution for %r replaced: %r -> %r", rule.source, previous, rule.target)
        self._targets[rule.source] = rule.target
        self._pattern = None

    def rules(self) -> List[SubstitutionRule]:
        """Return the rules in deterministic application order."""
        return sorted(
            (SubstitutionRule(s, t) for s, t in self._targets.items()),
            key=_rule_order,
        )

    def target_for(self, source: str) -> str:
        return self._targets[source]

    def pattern(self) -> Optional[Pattern[str]]:
        """Return the compiled alternation of all sources, or None if empty.

        Python's regex alternation tries branches left to right and takes the
        first that matches, so ordering the branches longest-first makes each
        match the longest source available at that position.
        """
        if not self._targets:
            return None
        if self._pattern is None:
            alternation = "|".join(re.escape(rule.source) for rule in self.rules())
            self._pattern = re.compile(alternation)
        return self._pattern

    def __len__(self) -> int:
        return len(self._targets)

    def __iter__(self) -> Iterator[SubstitutionRule]:
        return iter(self.rules())

    def __contains__(self, source: object) -> bool:
        return source in self._targets

    def __repr__(self) -> str:
        return f"SubstitutionTable({len(self)} rules)"


def apply_substitutions(text: str, table: SubstitutionTable | Mapping[str, str] | None) -> str:
    """Return ``text`` with every rule of ``table`` applied in a single pass.

    Args:
        text (str): Raw document text. Not modified.
        table (SubstitutionTable | Mapping[str, str] | None): Rules to apply.
            Plain mappings are converted with :meth:`SubstitutionTable.from_pairs`.

    Returns:
        str: Rewritten text; ``text`` itself when the table is empty or None.

    Raises:
        InvalidSubstitutionRule: If a mapping contains an empty source.
    """
    if table is None:
        return text
    if not isinstance(table, SubstitutionTable):
        table = SubstitutionTable.from_pairs(table)
    pattern = table.pattern()
    if pattern is None:
        return text
    return pattern.sub(lambda m: table.target_for(m.group(0)), text)
