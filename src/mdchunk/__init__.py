# __init__.py
# SPDX-License-Identifier: MIT
"""
Top-level package exports for :mod:`mdchunk`.

mdchunk splits a markdown document into an ordered sequence of size-bounded
text chunks. A run has four stages:

- an optional substitution table rewrites literal substrings of the raw
  document (:func:`apply_substitutions`);
- a leaf walker parses the document with ``markdown-it-py`` and yields its
  text runs, inline code spans, and code blocks in document order
  (:func:`iter_leaves`);
- code blocks longer than a threshold are replaced by a placeholder
  (:func:`elide_code_block`);
- the leaves are merged greedily into chunks bounded by a character limit
  (:func:`iter_chunks`, :func:`chunk_markdown`).

Examples:
    Library use::

        >>> from mdchunk import chunk_markdown, ChunkPolicy
        >>> chunk_markdown("# Hello\\n\\nWorld foo", policy=ChunkPolicy(limit=10))
        ['Hello', 'World foo']

    Config-driven run (writes records to stdout)::

        >>> from mdchunk import load_config_from_path, run
        >>> stats = run(load_config_from_path("mdchunk.toml"))
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Package version
# ---------------------------------------------------------------------------
try:
    from importlib.metadata import version as _pkg_version

    __version__ = _pkg_version("mdchunk")
except Exception:  # PackageNotFoundError or runtime env oddities
    __version__ = "0.0.0+unknown"


from .cli.runner import chunk_file, make_config, run
from .core.chunk import (
    DEFAULT_CHUNK_LIMIT,
    ChunkPolicy,
    chunk_markdown,
    chunk_payloads,
    iter_chunks,
    iter_leaf_chunks,
)
from .core.config import MdchunkConfig, load_config_from_path
from .core.decode import DocumentReadError, read_document
from .core.elide import ELIDED_PLACEHOLDER, ElisionPolicy, elide_code_block, elide_leaf
from .core.interfaces import ChunkStats, Leaf, LeafKind, LeafWalker
from .core.log import configure_logging, get_logger
from .core.substitute import (
    InvalidSubstitutionRule,
    SubstitutionRule,
    SubstitutionTable,
    apply_substitutions,
)
from .core.walker import MarkdownLeafWalker, get_leaf_walker, iter_leaves, register_leaf_walker
from .sinks.sinks import ChunkTextSink
from .sources.csv_source import SubstitutionTableError, read_substitutions

__all__ = [
    "__version__",
    "MdchunkConfig",
    "load_config_from_path",
    "run",
    "make_config",
    "chunk_file",
    "DEFAULT_CHUNK_LIMIT",
    "ChunkPolicy",
    "iter_chunks",
    "chunk_payloads",
    "iter_leaf_chunks",
    "chunk_markdown",
    "ElisionPolicy",
    "ELIDED_PLACEHOLDER",
    "elide_code_block",
    "elide_leaf",
    "Leaf",
    "LeafKind",
    "LeafWalker",
    "ChunkStats",
    "MarkdownLeafWalker",
    "iter_leaves",
    "get_leaf_walker",
    "register_leaf_walker",
    "SubstitutionRule",
    "SubstitutionTable",
    "InvalidSubstitutionRule",
    "apply_substitutions",
    "read_substitutions",
    "SubstitutionTableError",
    "read_document",
    "DocumentReadError",
    "ChunkTextSink",
    "configure_logging",
    "get_logger",
]
