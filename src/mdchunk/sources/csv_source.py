# csv_source.py
# SPDX-License-Identifier: MIT

"""CSV/TSV reader that turns two-column files into substitution tables."""

from __future__ import annotations

import csv
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from ..core.log import get_logger
from ..core.substitute import InvalidSubstitutionRule, SubstitutionTable

__all__ = ["SubstitutionTableError", "CSVSubstitutionSource", "read_substitutions"]

log = get_logger(__name__)


class SubstitutionTableError(RuntimeError):
    """Raised when a substitution file cannot be opened, decoded, or parsed."""


@dataclass
class CSVSubstitutionSource:
    """Stream ``(from, to)`` pairs from a delimited file.

    Attributes:
        path (Path): File to read.
        delimiter (str | None): Field delimiter; inferred from the suffix
            (``.tsv`` means tab, anything else comma) when None.
        has_header (bool): Whether the first row is a header to skip.
        encoding (str): Text encoding of the file. The default drops a
            leading UTF-8 BOM.
    """
    path: Path
    delimiter: str | None = None
    has_header: bool = True
    encoding: str = "utf-8-sig"

    def iter_pairs(self) -> Iterator[tuple[int, str, str]]:
        """Yield ``(line number, from, to)`` for every well-formed row.

        Rows that do not have exactly two fields are logged and skipped.

        Raises:
            SubstitutionTableError: If the file is missing, unreadable, not
                decodable with ``encoding``, or not parseable as CSV.
        """
        path = Path(self.path)
        delim = self._resolve_delimiter(path)
        try:
            with _open_csv(path, encoding=self.encoding) as fp:
                reader = csv.reader(fp, delimiter=delim)
                header_pending = self.has_header
                for row in reader:
                    lineno = reader.line_num
                    # The header is the first non-blank row.
                    if header_pending and row:
                        header_pending = False
                        continue
                    if len(row) != 2:
                        if row:
                            log.warning(
                                "Skipping %s:%d: expected 2 fields, got %d", path, lineno, len(row)
                            )
                        continue
                    yield lineno, row[0], row[1]
        except FileNotFoundError as exc:
            raise SubstitutionTableError(f"substitution file not found: {path}") from exc
        except UnicodeDecodeError as exc:
            raise SubstitutionTableError(f"substitution file {path} is not valid {self.encoding}") from exc
        except csv.Error as exc:
            raise SubstitutionTableError(f"failed to parse substitution file {path}: {exc}") from exc
        except OSError as exc:
            raise SubstitutionTableError(f"failed to read substitution file {path}: {exc}") from exc

    def load(self) -> SubstitutionTable:
        """Read the whole file into a :class:`SubstitutionTable`.

        Later rows replace earlier rows with the same ``from`` value.

        Raises:
            SubstitutionTableError: See :meth:`iter_pairs`.
            InvalidSubstitutionRule: If a row has an empty ``from`` field.
        """
        table = SubstitutionTable()
        for lineno, source, target in self.iter_pairs():
            try:
                table.add(source, target)
            except InvalidSubstitutionRule as exc:
                raise InvalidSubstitutionRule(f"{self.path}:{lineno}: {exc}") from exc
        log.debug("Loaded %d substitution rules from %s", len(table), self.path)
        return table

    def _resolve_delimiter(self, path: Path) -> str:
        """Return the delimiter for a file, falling back by extension."""
        if self.delimiter is not None:
            return self.delimiter
        if path.suffix.lower() == ".tsv":
            return "\t"
        return ","


def read_substitutions(
    path: str | Path,
    *,
    delimiter: str | None = None,
    has_header: bool = True,
    encoding: str = "utf-8-sig",
) -> SubstitutionTable:
    """Convenience wrapper around :meth:`CSVSubstitutionSource.load`."""
    return CSVSubstitutionSource(
        Path(path),
        delimiter=delimiter,
        has_header=has_header,
        encoding=encoding,
    ).load()


def _open_csv(path: Path, *, encoding: str):
    """Open a CSV file with newline handling for the csv module."""
    # newline="" keeps quoted fields with embedded newlines intact.
    return open(path, encoding=encoding, newline="")
