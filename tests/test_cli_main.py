import json
from pathlib import Path

import pytest

from mdchunk.cli.main import main


def _doc(tmp_path: Path, text: str = "# Hello\n\nWorld foo", name: str = "doc.md") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_cli_chunks_document_to_stdout(tmp_path: Path, capsys):
    doc = _doc(tmp_path)

    rc = main(["-i", str(doc), "-l", "10"])

    assert rc == 0
    out = capsys.readouterr().out
    assert out == (
        "--- --- --- 5 --- --- ---\nHello\n\n"
        "--- --- --- 9 --- --- ---\nWorld foo\n\n"
    )


def test_cli_applies_substitutions_before_parsing(tmp_path: Path, capsys):
    doc = _doc(tmp_path)
    subs = tmp_path / "subs.csv"
    subs.write_text("from,to\nfoo,bar\nHello,Hi\n", encoding="utf-8")

    rc = main(["-i", str(doc), "-s", str(subs)])

    assert rc == 0
    assert capsys.readouterr().out == "--- --- --- 12 --- --- ---\nHi World bar\n\n"


def test_cli_join_none(tmp_path: Path, capsys):
    doc = _doc(tmp_path, "a\n\nb\n")

    rc = main(["-i", str(doc), "--join", "none"])

    assert rc == 0
    assert capsys.readouterr().out == "--- --- --- 2 --- --- ---\nab\n\n"


def test_cli_reads_toml_config(tmp_path: Path, capsys):
    doc = _doc(tmp_path)
    cfg = tmp_path / "mdchunk.toml"
    cfg.write_text(
        f'[input]\npath = "{doc.as_posix()}"\n\n[chunk.policy]\nlimit = 10\n',
        encoding="utf-8",
    )

    rc = main(["-c", str(cfg)])

    assert rc == 0
    assert capsys.readouterr().out == (
        "--- --- --- 5 --- --- ---\nHello\n\n"
        "--- --- --- 9 --- --- ---\nWorld foo\n\n"
    )


def test_cli_flags_override_config(tmp_path: Path, capsys):
    doc = _doc(tmp_path)
    cfg = tmp_path / "mdchunk.toml"
    cfg.write_text("[chunk.policy]\nlimit = 10\n", encoding="utf-8")

    rc = main(["-c", str(cfg), "-i", str(doc), "--limit", "1500"])

    assert rc == 0
    assert capsys.readouterr().out == "--- --- --- 15 --- --- ---\nHello World foo\n\n"


def test_cli_dry_run_prints_config(tmp_path: Path, capsys):
    rc = main(["-i", "doc.md", "-l", "42", "--no-header", "--dry-run"])

    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["input"]["path"] == "doc.md"
    assert payload["chunk"]["policy"]["limit"] == 42
    assert payload["substitutions"]["has_header"] is False


def test_cli_missing_input_file_fails(tmp_path: Path, capsys):
    rc = main(["-i", str(tmp_path / "missing.md")])

    assert rc == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Error:" in captured.err
    assert "not found" in captured.err


def test_cli_invalid_utf8_fails_before_output(tmp_path: Path, capsys):
    doc = tmp_path / "bad.md"
    doc.write_bytes(b"# Caf\xe9\n")

    rc = main(["-i", str(doc)])

    assert rc == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "UTF-8" in captured.err


def test_cli_missing_substitution_file_fails(tmp_path: Path, capsys):
    doc = _doc(tmp_path)

    rc = main(["-i", str(doc), "-s", str(tmp_path / "nope.csv")])

    assert rc == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "substitution file not found" in captured.err


def test_cli_without_input_is_usage_error(capsys):
    rc = main([])

    assert rc == 2
    assert "input file is required" in capsys.readouterr().err


@pytest.mark.parametrize("limit", ["0", "-5", "ten"])
def test_cli_rejects_bad_limit(limit: str, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["-i", "doc.md", "--limit", limit])

    assert excinfo.value.code == 2
    assert "positive integer" in capsys.readouterr().err
