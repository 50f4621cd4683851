# chunk.py
# SPDX-License-Identifier: MIT
"""Size-bounded chunking of a document's leaf sequence.

Leaves are merged greedily, in order, into a single buffer joined by a
separator. The buffer is emitted whenever the next leaf would push it past
the character limit. A leaf that is longer than the limit on its own is
never split; it becomes a chunk by itself.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from .elide import ElisionPolicy, elide_leaf
from .interfaces import ChunkStats, Leaf, LeafWalker
from .log import get_logger
from .walker import get_leaf_walker

__all__ = [
    "DEFAULT_CHUNK_LIMIT",
    "JOIN_SEPARATORS",
    "ChunkPolicy",
    "iter_chunks",
    "chunk_payloads",
    "iter_leaf_chunks",
    "chunk_markdown",
]

log = get_logger(__name__)

DEFAULT_CHUNK_LIMIT = 1500

# Named join policies accepted on the command line.
JOIN_SEPARATORS = {"space": " ", "none": ""}


@dataclass(slots=True)
class ChunkPolicy:
    """Configuration for packing leaves into chunks.

    Attributes:
        limit (int): Maximum characters per chunk. Only a chunk consisting
            of exactly one leaf may exceed it.
        separator (str): Text inserted between consecutive leaves of the same
            chunk. Counted against ``limit``.
    """
    limit: int = DEFAULT_CHUNK_LIMIT
    separator: str = " "

    def validate(self) -> None:
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 1:
            raise ValueError(f"chunk limit must be a positive integer; got {self.limit!r}")
        if not isinstance(self.separator, str):
            raise ValueError("chunk separator must be a string")


def iter_chunks(payloads: Iterable[str], limit: int, *, separator: str = " ") -> Iterator[str]:
    """Merge payloads into chunks of at most ``limit`` characters.

    Args:
        payloads (Iterable[str]): Leaf payloads in document order.
        limit (int): Positive character limit.
        separator (str): Joiner placed between payloads within a chunk.

    Yields:
        str: Non-empty chunks, in order.

    Raises:
        ValueError: If ``limit`` is not a positive integer.
    """
    ChunkPolicy(limit, separator).validate()
    buf = ""
    sep_len = len(separator)
    for text in payloads:
        if buf and len(buf) + sep_len + len(text) > limit:
            yield buf
            buf = ""
        buf = f"{buf}{separator}{text}" if buf else text
    if buf:
        yield buf


def chunk_payloads(payloads: Iterable[str], limit: int = DEFAULT_CHUNK_LIMIT, *, separator: str = " ") -> List[str]:
    """List form of :func:`iter_chunks`."""
    return list(iter_chunks(payloads, limit, separator=separator))


def iter_leaf_chunks(
    leaves: Iterable[Leaf],
    *,
    policy: Optional[ChunkPolicy] = None,
    elision: Optional[ElisionPolicy] = None,
    stats: Optional[ChunkStats] = None,
) -> Iterator[str]:
    """Elide code block leaves and chunk the resulting payloads.

    Args:
        leaves (Iterable[Leaf]): Leaves in document order.
        policy (ChunkPolicy | None): Limit and separator; defaults apply
            when omitted.
        elision (ElisionPolicy | None): Code block elision settings.
        stats (ChunkStats | None): Optional counters updated in place.

    Yields:
        str: Chunks, in order.

    Raises:
        ValueError: If ``elision`` is invalid.
    """
    pol = policy or ChunkPolicy()
    if elision is not None:
        elision.validate()
    counters = stats if stats is not None else ChunkStats()

    def payloads() -> Iterator[str]:
        for leaf in leaves:
            counters.leaves += 1
            if leaf.is_code_block:
                counters.code_blocks += 1
                elided = elide_leaf(leaf, elision)
                if elided is not leaf:
                    counters.elided += 1
                leaf = elided
            yield leaf.text

    for chunk in iter_chunks(payloads(), pol.limit, separator=pol.separator):
        counters.chunks += 1
        counters.chars += len(chunk)
        if len(chunk) > pol.limit:
            counters.oversized += 1
            log.debug("Emitting oversized single-leaf chunk (%d > %d chars)", len(chunk), pol.limit)
        yield chunk


def chunk_markdown(
    text: str,
    *,
    policy: Optional[ChunkPolicy] = None,
    elision: Optional[ElisionPolicy] = None,
    walker: Optional[LeafWalker] = None,
    stats: Optional[ChunkStats] = None,
) -> List[str]:
    """Chunk a markdown document end to end.

    Args:
        text (str): Document text (after any substitutions).
        policy (ChunkPolicy | None): Limit and separator.
        elision (ElisionPolicy | None): Code block elision settings.
        walker (LeafWalker | None): Leaf source; the default markdown walker
            is used when omitted.
        stats (ChunkStats | None): Optional counters updated in place.

    Returns:
        list[str]: Ordered chunks; empty for a document with no text.
    """
    walk = walker if walker is not None else get_leaf_walker()
    return list(iter_leaf_chunks(walk(text), policy=policy, elision=elision, stats=stats))
