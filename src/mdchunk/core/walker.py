# walker.py
# SPDX-License-Identifier: MIT
"""Linearize a parsed markdown document into an ordered stream of leaves.

The structural parsing is delegated to ``markdown-it-py``. This module only
walks its token stream depth-first and keeps the tokens that carry literal
text: plain text runs, inline code spans, and fenced or indented code blocks.
Container tokens (headings, paragraphs, list items, emphasis, links, images)
contribute nothing themselves but their children are still visited.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .interfaces import Leaf, LeafKind, LeafWalker
from .log import get_logger

__all__ = [
    "KNOWN_PRESETS",
    "MarkdownLeafWalker",
    "WalkerFactory",
    "register_leaf_walker",
    "get_leaf_walker",
    "available_walkers",
    "iter_leaves",
]

log = get_logger(__name__)

# markdown-it-py presets usable without optional plugins.
KNOWN_PRESETS = ("commonmark", "default", "js-default", "zero")

_LEAF_TOKEN_KINDS: Dict[str, LeafKind] = {
    "text": LeafKind.TEXT,
    # Escapes and entities stay separate when the text_join rule is disabled.
    "text_special": LeafKind.TEXT,
    "code_inline": LeafKind.INLINE_CODE,
    "fence": LeafKind.CODE_BLOCK,
    "code_block": LeafKind.CODE_BLOCK,
}


def _iter_token_leaves(tokens: Sequence[Token]) -> Iterator[Leaf]:
    """Yield leaves from a token list in depth-first order."""
    for tok in tokens:
        kind = _LEAF_TOKEN_KINDS.get(tok.type)
        if kind is not None and tok.content:
            yield Leaf(kind, tok.content)
        if tok.children:
            yield from _iter_token_leaves(tok.children)


class MarkdownLeafWalker:
    """CommonMark walker backed by ``markdown-it-py``.

    Args:
        preset (str): markdown-it-py preset name. ``"commonmark"`` matches
            strict CommonMark with no extensions.
    """

    def __init__(self, preset: str = "commonmark"):
        if preset not in KNOWN_PRESETS:
            raise ValueError(f"Unknown markdown preset {preset!r}; expected one of {list(KNOWN_PRESETS)}")
        self.preset = preset
        self._md = MarkdownIt(preset)

    def __call__(self, text: str) -> Iterator[Leaf]:
        # Parsing is deferred until the first leaf is requested.
        tokens = self._md.parse(text)
        log.debug("Parsed %d chars into %d block tokens", len(text), len(tokens))
        yield from _iter_token_leaves(tokens)

    def __repr__(self) -> str:
        return f"MarkdownLeafWalker(preset={self.preset!r})"


# -------------------------
# Walker registry
# -------------------------
# Factory signature: (**options) -> LeafWalker
WalkerFactory = Callable[..., LeafWalker]

_WALKER_REGISTRY: Dict[str, WalkerFactory] = {
    "markdown": MarkdownLeafWalker,
    "md": MarkdownLeafWalker,
}


def register_leaf_walker(name: str, factory: WalkerFactory) -> None:
    """Register or override a walker factory under ``name``.

    Args:
        name (str): Lookup key, matched case-insensitively.
        factory (WalkerFactory): Callable returning a :class:`LeafWalker`
            when invoked with the walker options.
    """
    _WALKER_REGISTRY[name.strip().lower()] = factory


def available_walkers() -> List[str]:
    return sorted(_WALKER_REGISTRY)


def get_leaf_walker(name: Optional[str] = None, **options: Any) -> LeafWalker:
    """Build the walker registered under ``name`` (default ``"markdown"``).

    Raises:
        KeyError: If no walker is registered under ``name``.
    """
    key = (name or "markdown").strip().lower()
    try:
        factory = _WALKER_REGISTRY[key]
    except KeyError:
        raise KeyError(f"Unknown leaf walker {name!r}; available: {available_walkers()}") from None
    return factory(**options)


def iter_leaves(text: str, *, walker: Optional[str] = None, **options: Any) -> Iterator[Leaf]:
    """Parse ``text`` and yield its leaves in document order.

    Args:
        text (str): Markdown document.
        walker (str | None): Registered walker name; defaults to markdown.
        **options: Passed to the walker factory (e.g. ``preset``).

    Returns:
        Iterator[Leaf]: One-shot iterator over the document's leaves.
    """
    return get_leaf_walker(walker, **options)(text)
