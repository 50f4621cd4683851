from pathlib import Path

import pytest

from mdchunk.core.decode import DocumentReadError, decode_bytes, read_document


def test_decode_utf8_happy_path() -> None:
    original = "Hello π – café"

    dec = decode_bytes(original.encode("utf-8"))

    assert dec.text == original
    assert dec.encoding == "utf-8"
    assert dec.had_bom is False


def test_decode_strips_utf8_bom() -> None:
    dec = decode_bytes(b"\xef\xbb\xbf# Hi")

    assert dec.text == "# Hi"
    assert dec.encoding == "utf-8-sig"
    assert dec.had_bom is True


def test_decode_rejects_invalid_utf8() -> None:
    with pytest.raises(DocumentReadError, match="not valid UTF-8"):
        decode_bytes("François".encode("cp1252"), source="doc.md")


def test_read_document_returns_full_text(tmp_path: Path) -> None:
    path = tmp_path / "doc.md"
    path.write_text("# Title\n\nBody\n", encoding="utf-8")

    assert read_document(path) == "# Title\n\nBody\n"
    assert read_document(str(path)) == "# Title\n\nBody\n"


def test_read_document_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DocumentReadError, match="not found"):
        read_document(tmp_path / "nope.md")


def test_read_document_directory_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(DocumentReadError):
        read_document(tmp_path)


def test_read_document_invalid_encoding(tmp_path: Path) -> None:
    path = tmp_path / "latin.md"
    path.write_bytes(b"caf\xe9\n")

    with pytest.raises(DocumentReadError) as excinfo:
        read_document(path)

    assert str(path) in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)
