# runner.py
# SPDX-License-Identifier: MIT

from __future__ import annotations

from copy import deepcopy
from pathlib import Path

from ..core.chunk import chunk_markdown
from ..core.config import MdchunkConfig
from ..core.decode import read_document
from ..core.interfaces import ChunkSink, ChunkStats
from ..core.log import get_logger
from ..core.substitute import SubstitutionTable, apply_substitutions
from ..core.walker import get_leaf_walker
from ..sinks.sinks import ChunkTextSink
from ..sources.csv_source import CSVSubstitutionSource

log = get_logger(__name__)


def load_substitution_table(config: MdchunkConfig) -> SubstitutionTable | None:
    """Read the configured substitution file, or return None when unset."""
    sub = config.substitutions
    if not sub.path:
        return None
    return CSVSubstitutionSource(
        Path(sub.path),
        delimiter=sub.delimiter,
        has_header=sub.has_header,
        encoding=sub.encoding,
    ).load()


def chunk_config_input(config: MdchunkConfig, *, stats: ChunkStats | None = None) -> list[str]:
    """Read, rewrite, and chunk the document named by ``config``.

    All file I/O (document and substitution table) happens before any
    chunking begins.

    Args:
        config (MdchunkConfig): Run configuration with ``input.path`` set.
        stats (ChunkStats | None): Optional counters updated in place.

    Returns:
        list[str]: Ordered chunks.

    Raises:
        ValueError: If the configuration is invalid or has no input path.
        DocumentReadError: If the document cannot be read.
        SubstitutionTableError: If the substitution file cannot be read.
    """
    config.validate()
    if not config.input.path:
        raise ValueError("input.path is required.")

    text = read_document(config.input.path)
    table = load_substitution_table(config)
    if table is not None:
        log.debug("Applying %d substitution rules", len(table))
        text = apply_substitutions(text, table)

    walker = get_leaf_walker(config.parser.walker, **config.parser.walker_options())
    return chunk_markdown(
        text,
        policy=config.chunk.policy,
        elision=config.chunk.elision,
        walker=walker,
        stats=stats,
    )


def run(config: MdchunkConfig, *, sink: ChunkSink | None = None) -> dict[str, int]:
    """Chunk the configured document and write every chunk to ``sink``.

    This is the main programmatic entry point. The default sink writes
    human-readable records to stdout.

    Args:
        config (MdchunkConfig): Declarative run configuration.
        sink (ChunkSink | None): Destination for chunks.

    Returns:
        dict[str, int]: Counters for the completed run.
    """
    stats = ChunkStats()
    chunks = chunk_config_input(config, stats=stats)
    out = sink if sink is not None else ChunkTextSink(header_fmt=config.output.header_fmt)
    out.open()
    try:
        for chunk in chunks:
            out.write(chunk)
    finally:
        out.close()
    log.info("chunking complete: %s", stats.to_dict())
    return stats.to_dict()


def _clone_base_config(base_config: MdchunkConfig | None) -> MdchunkConfig:
    """Deep-copy a base configuration or build a fresh default one."""
    return deepcopy(base_config) if base_config is not None else MdchunkConfig()


def make_config(
    input_path: str | Path,
    *,
    substitutions: str | Path | None = None,
    limit: int | None = None,
    base_config: MdchunkConfig | None = None,
) -> MdchunkConfig:
    """Build a config for one document, layered over ``base_config``."""
    cfg = _clone_base_config(base_config)
    cfg.input.path = str(input_path)
    if substitutions is not None:
        cfg.substitutions.path = str(substitutions)
    if limit is not None:
        cfg.chunk.policy.limit = limit
    return cfg


def chunk_file(
    input_path: str | Path,
    *,
    substitutions: str | Path | None = None,
    limit: int | None = None,
    base_config: MdchunkConfig | None = None,
) -> list[str]:
    """Return the chunks of a markdown file without writing them anywhere."""
    cfg = make_config(input_path, substitutions=substitutions, limit=limit, base_config=base_config)
    return chunk_config_input(cfg)


__all__ = ["load_substitution_table", "chunk_config_input", "run", "make_config", "chunk_file"]
