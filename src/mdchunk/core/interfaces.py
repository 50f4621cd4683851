# interfaces.py
# SPDX-License-Identifier: MIT
"""Interfaces and shared data types used across walkers, chunkers, and sinks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Protocol, TextIO, runtime_checkable


# -----------------------------------------------------------------------------
# Shared data types
# -----------------------------------------------------------------------------

class LeafKind(str, Enum):
    """Kinds of text-bearing units extracted from a parsed document."""

    TEXT = "text"
    INLINE_CODE = "inline_code"
    CODE_BLOCK = "code_block"


@dataclass(frozen=True, slots=True)
class Leaf:
    """
    A single unit of literal content emitted by a walker.

    Attributes:
        kind (LeafKind): Which structural node produced the payload.
        text (str): Literal payload. For code blocks this is the block body
            exactly as the parser reports it, trailing newline included.
    """
    kind: LeafKind
    text: str

    @property
    def is_code_block(self) -> bool:
        return self.kind is LeafKind.CODE_BLOCK


@dataclass(slots=True)
class ChunkStats:
    """Counters collected over one chunking run.

    Attributes:
        leaves (int): Leaves produced by the walker.
        code_blocks (int): Leaves of kind ``CODE_BLOCK``.
        elided (int): Code blocks replaced by the elision placeholder.
        chunks (int): Chunks emitted.
        oversized (int): Chunks longer than the limit (single-leaf chunks).
        chars (int): Total characters across emitted chunks.
    """
    leaves: int = 0
    code_blocks: int = 0
    elided: int = 0
    chunks: int = 0
    oversized: int = 0
    chars: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "leaves": self.leaves,
            "code_blocks": self.code_blocks,
            "elided": self.elided,
            "chunks": self.chunks,
            "oversized": self.oversized,
            "chars": self.chars,
        }


# -----------------------------------------------------------------------------
# Protocols
# -----------------------------------------------------------------------------

@runtime_checkable
class LeafWalker(Protocol):
    """Turns document text into an ordered, one-shot stream of leaves.

    Implementations wrap a structural parser. They must accept any string
    without raising: unparsable markup is reported as plain text.
    """

    def __call__(self, text: str) -> Iterator[Leaf]:  # pragma: no cover - interface
        ...


@runtime_checkable
class ChunkSink(Protocol):
    """Destination for finished chunks."""

    def open(self, stream: Optional[TextIO] = None) -> None:  # pragma: no cover - interface
        ...

    def write(self, chunk: str) -> None:  # pragma: no cover - interface
        ...

    def close(self) -> None:  # pragma: no cover - interface
        ...


__all__ = ["LeafKind", "Leaf", "ChunkStats", "LeafWalker", "ChunkSink"]
