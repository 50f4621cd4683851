# decode.py
# SPDX-License-Identifier: MIT
"""Read documents from disk as strict UTF-8 text."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .log import get_logger

__all__ = [
    "DocumentReadError",
    "DecodedText",
    "decode_bytes",
    "read_document",
]

log = get_logger(__name__)

_UTF8_BOM = b"\xEF\xBB\xBF"


class DocumentReadError(RuntimeError):
    """Raised when an input document cannot be read or is not valid UTF-8."""


@dataclass(slots=True, frozen=True)
class DecodedText:
    """Decoded text content with encoding metadata."""

    text: str
    encoding: str
    had_bom: bool


def decode_bytes(data: bytes, *, source: str = "<bytes>") -> DecodedText:
    """Decode bytes as UTF-8, dropping a leading byte order mark.

    Args:
        data (bytes): Raw document bytes.
        source (str): Label used in error messages.

    Returns:
        DecodedText: Text plus the encoding actually used.

    Raises:
        DocumentReadError: If ``data`` is not valid UTF-8.
    """
    had_bom = data.startswith(_UTF8_BOM)
    enc = "utf-8-sig" if had_bom else "utf-8"
    try:
        text = data.decode(enc, errors="strict")
    except UnicodeDecodeError as exc:
        raise DocumentReadError(
            f"{source} is not valid UTF-8 (byte {exc.start}: {exc.reason})"
        ) from exc
    return DecodedText(text, enc, had_bom)


def read_document(path: str | bytes | Path) -> str:
    """Read a whole document into memory.

    Args:
        path (str | bytes | Path): Path to the markdown file.

    Returns:
        str: Decoded document text.

    Raises:
        DocumentReadError: If the file is missing, unreadable, or not
            valid UTF-8.
    """
    if isinstance(path, bytes):
        path = path.decode(errors="replace")
    p = Path(path)
    try:
        data = p.read_bytes()
    except FileNotFoundError as exc:
        raise DocumentReadError(f"input file not found: {p}") from exc
    except OSError as exc:
        raise DocumentReadError(f"failed to read {p}: {exc}") from exc
    dec = decode_bytes(data, source=str(p))
    log.debug("Read %s (%d bytes, %s)", p, len(data), dec.encoding)
    return dec.text
