# elide.py
# SPDX-License-Identifier: MIT
"""Replace oversized code listings with a short placeholder."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .interfaces import Leaf, LeafKind
from .log import get_logger

__all__ = [
    "DEFAULT_ELISION_THRESHOLD",
    "ELIDED_PLACEHOLDER",
    "ElisionPolicy",
    "elide_code_block",
    "elide_leaf",
]

log = get_logger(__name__)

DEFAULT_ELISION_THRESHOLD = 80
ELIDED_PLACEHOLDER = "listing omitted; please see the original source"


@dataclass(slots=True)
class ElisionPolicy:
    """When and how code block payloads are elided.

    Attributes:
        threshold (int): Payloads strictly longer than this many characters
            are replaced.
        placeholder (str): Non-empty replacement text, no longer than
            ``threshold``.
    """
    threshold: int = DEFAULT_ELISION_THRESHOLD
    placeholder: str = ELIDED_PLACEHOLDER

    def validate(self) -> None:
        if self.threshold < 1:
            raise ValueError(f"elision threshold must be a positive integer; got {self.threshold!r}")
        if not self.placeholder:
            raise ValueError("elision placeholder must not be empty")
        if len(self.placeholder) > self.threshold:
            raise ValueError(
                "elision placeholder must not be longer than the threshold "
                f"({len(self.placeholder)} > {self.threshold})"
            )


_DEFAULT_POLICY = ElisionPolicy()


def elide_code_block(text: str, policy: Optional[ElisionPolicy] = None) -> str:
    """Return the placeholder if ``text`` exceeds the threshold, else ``text``."""
    pol = policy or _DEFAULT_POLICY
    if len(text) > pol.threshold:
        log.debug("Eliding code block of %d chars (threshold %d)", len(text), pol.threshold)
        return pol.placeholder
    return text


def elide_leaf(leaf: Leaf, policy: Optional[ElisionPolicy] = None) -> Leaf:
    """Apply :func:`elide_code_block` to code block leaves; pass others through."""
    if leaf.kind is not LeafKind.CODE_BLOCK:
        return leaf
    text = elide_code_block(leaf.text, policy)
    if text is leaf.text:
        return leaf
    return Leaf(leaf.kind, text)
