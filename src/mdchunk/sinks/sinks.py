# sinks.py
# SPDX-License-Identifier: MIT
"""Sinks for writing finished chunks."""
from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

DEFAULT_HEADER_FMT = "--- --- --- {length} --- --- ---"


class ChunkTextSink:
    """Write chunks as human-readable records to a text stream.

    Each record is a header line, the chunk text, and a blank line::

        --- --- --- 11 --- --- ---
        Hello World

    """

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        header_fmt: str = DEFAULT_HEADER_FMT,
    ):
        """Configure the destination and header format.

        Args:
            stream (TextIO | None): Target stream. Resolved to ``sys.stdout``
                at :meth:`open` time when omitted, so captured stdout works.
            header_fmt (str): Header template; ``{length}`` is the chunk's
                character count and ``{index}`` its zero-based position.
        """
        self._stream = stream
        self._header_fmt = header_fmt
        self._fp: TextIO | None = None
        self._count = 0

    @property
    def count(self) -> int:
        """Number of chunks written since the last :meth:`open`."""
        return self._count

    def open(self, stream: TextIO | None = None) -> None:
        """Bind the output stream and reset the record counter."""
        self._fp = stream or self._stream or sys.stdout
        self._count = 0

    def write(self, chunk: str) -> None:
        """Write one chunk record."""
        assert self._fp is not None, "ChunkTextSink.write called before open()"
        header = self._header_fmt.format(length=len(chunk), index=self._count)
        self._fp.write(f"{header}\n{chunk}\n\n")
        self._count += 1

    def write_all(self, chunks: Iterable[str]) -> int:
        """Write every chunk in order and return how many were written."""
        for chunk in chunks:
            self.write(chunk)
        return self._count

    def close(self) -> None:
        """Flush the stream. The stream itself is left open for the caller."""
        if not self._fp:
            return
        try:
            self._fp.flush()
        finally:
            self._fp = None

    def __enter__(self) -> ChunkTextSink:
        """Open the sink for use as a context manager."""
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """Flush and release the stream when used as a context manager."""
        self.close()


__all__ = ["DEFAULT_HEADER_FMT", "ChunkTextSink"]
