from pathlib import Path

import pytest

from mdchunk.cli.runner import chunk_file, load_substitution_table, make_config, run
from mdchunk.core.config import MdchunkConfig
from mdchunk.core.decode import DocumentReadError
from mdchunk.core.elide import ELIDED_PLACEHOLDER
from mdchunk.sources.csv_source import SubstitutionTableError


class _CollectingSink:
    def __init__(self):
        self.chunks: list[str] = []
        self.opened = 0
        self.closed = 0

    def open(self, stream=None):
        self.opened += 1

    def write(self, chunk):
        self.chunks.append(chunk)

    def close(self):
        self.closed += 1


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_chunk_file_returns_chunks(tmp_path: Path):
    doc = _write(tmp_path, "doc.md", "# Hello\n\nWorld foo")

    assert chunk_file(doc, limit=10) == ["Hello", "World foo"]
    assert chunk_file(doc) == ["Hello World foo"]


def test_chunk_file_with_substitutions(tmp_path: Path):
    doc = _write(tmp_path, "doc.md", "Use `fn()` with fn.\n")
    subs = _write(tmp_path, "subs.csv", "from,to\nfn,func\n")

    assert chunk_file(doc, substitutions=subs) == ["Use  func()  with func."]


def test_substitution_can_change_markdown_structure(tmp_path: Path):
    doc = _write(tmp_path, "doc.md", "STARboldSTAR and plain\n")
    subs = _write(tmp_path, "subs.csv", "from,to\nSTAR,**\n")

    assert chunk_file(doc, substitutions=subs) == ["bold  and plain"]


def test_run_writes_to_sink_and_returns_stats(tmp_path: Path):
    body = "y" * 90
    doc = _write(tmp_path, "doc.md", f"Intro\n\n```\n{body}\n```\n\nOutro\n")
    sink = _CollectingSink()

    stats = run(make_config(doc, limit=55), sink=sink)

    assert sink.chunks == [f"Intro {ELIDED_PLACEHOLDER}", "Outro"]
    assert sink.opened == 1 and sink.closed == 1
    assert stats["chunks"] == 2
    assert stats["elided"] == 1
    assert stats["code_blocks"] == 1


def test_run_reads_everything_before_opening_sink(tmp_path: Path):
    doc = _write(tmp_path, "doc.md", "text\n")
    sink = _CollectingSink()
    cfg = make_config(doc, substitutions=tmp_path / "missing.csv")

    with pytest.raises(SubstitutionTableError):
        run(cfg, sink=sink)

    assert sink.opened == 0
    assert sink.chunks == []


def test_run_missing_document(tmp_path: Path):
    with pytest.raises(DocumentReadError):
        run(make_config(tmp_path / "nope.md"), sink=_CollectingSink())


def test_make_config_does_not_mutate_base():
    base = MdchunkConfig()
    cfg = make_config("a.md", limit=5, base_config=base)

    assert cfg.chunk.policy.limit == 5
    assert base.chunk.policy.limit == 1500
    assert base.input.path is None


def test_load_substitution_table_unset_returns_none():
    assert load_substitution_table(MdchunkConfig()) is None
