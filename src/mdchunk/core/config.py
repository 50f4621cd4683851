# config.py
# SPDX-License-Identifier: MIT
"""Configuration models and helpers for mdchunk runs.

This module defines declarative dataclasses for the input document, the
substitution table, the markdown walker, chunking, output, and logging,
along with helpers for serializing and loading configurations from JSON and
TOML.
"""
from __future__ import annotations

import json
try:  # pragma: no cover - optional dependency
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover
    try:
        import tomli as tomllib  # type: ignore[assignment]
    except Exception:  # pragma: no cover
        tomllib = None  # type: ignore[assignment]
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Type, TypeVar, Union, get_args, get_origin, get_type_hints

from .chunk import ChunkPolicy
from .elide import ElisionPolicy
from .log import PACKAGE_LOGGER_NAME, configure_logging
from .walker import KNOWN_PRESETS, available_walkers
from ..sinks.sinks import DEFAULT_HEADER_FMT


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class InputConfig:
    """Where the markdown document comes from.

    Attributes:
        path (str | None): Path to a UTF-8 markdown file.
    """
    path: Optional[str] = None


@dataclass(slots=True)
class SubstitutionConfig:
    """Settings for the optional substitution table.

    Attributes:
        path (str | None): Path to a two-column delimited file, or None to
            skip substitution.
        delimiter (str | None): Field delimiter; inferred from the file
            suffix when None.
        has_header (bool): Whether the first row is a header to skip.
        encoding (str): Encoding of the table file.
    """
    path: Optional[str] = None
    delimiter: Optional[str] = None
    has_header: bool = True
    encoding: str = "utf-8-sig"


@dataclass(slots=True)
class ParserConfig:
    """Selects the leaf walker.

    Attributes:
        walker (str): Registered walker name (see
            :func:`mdchunk.core.walker.register_leaf_walker`).
        preset (str): markdown-it-py preset passed to the markdown walker.
    """
    walker: str = "markdown"
    preset: str = "commonmark"

    def walker_options(self) -> Dict[str, Any]:
        return {"preset": self.preset}


# ---------------------------------------------------------------------------
# Chunk / output / logging
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ChunkConfig:
    """Configuration for chunking behavior.

    Attributes:
        policy (ChunkPolicy): Character limit and leaf separator.
        elision (ElisionPolicy): Code block elision threshold and
            placeholder.
    """
    policy: ChunkPolicy = field(default_factory=ChunkPolicy)
    elision: ElisionPolicy = field(default_factory=ElisionPolicy)


@dataclass(slots=True)
class OutputConfig:
    """Formatting of the chunk records written to stdout."""
    header_fmt: str = DEFAULT_HEADER_FMT


@dataclass(slots=True)
class LoggingConfig:
    """Controls the package logger; set propagate=True/logger_name to
    integrate with host apps.
    """
    level: Union[int, str] = "INFO"
    propagate: bool = False
    fmt: Optional[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    logger_name: str = PACKAGE_LOGGER_NAME

    def apply(self) -> None:
        """Apply this logging configuration to the package logger."""
        configure_logging(
            level=self.level,
            propagate=self.propagate,
            fmt=self.fmt,
            logger_name=self.logger_name or PACKAGE_LOGGER_NAME,
        )


# ---------------------------------------------------------------------------
# Master config
# ---------------------------------------------------------------------------

T = TypeVar("T")


@dataclass(slots=True)
class MdchunkConfig:
    """Declarative spec for an mdchunk run.

    Only plain, serializable knobs live here. Walker instances, open
    streams, and loaded substitution tables are built by the runner.
    """
    input: InputConfig = field(default_factory=InputConfig)
    substitutions: SubstitutionConfig = field(default_factory=SubstitutionConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    chunk: ChunkConfig = field(default_factory=ChunkConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        """Validate the configuration for internal consistency.

        Raises:
            ValueError: If any setting is out of range or unknown.
        """
        self.chunk.policy.validate()
        self.chunk.elision.validate()
        delim = self.substitutions.delimiter
        if delim is not None and len(delim) != 1:
            raise ValueError(f"substitutions.delimiter must be a single character; got {delim!r}.")
        walker = (self.parser.walker or "").strip().lower()
        if walker not in available_walkers():
            raise ValueError(f"parser.walker must be one of {available_walkers()}; got {self.parser.walker!r}.")
        if self.parser.preset not in KNOWN_PRESETS:
            raise ValueError(f"parser.preset must be one of {list(KNOWN_PRESETS)}; got {self.parser.preset!r}.")
        try:
            self.output.header_fmt.format(length=0, index=0)
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(f"output.header_fmt is not a valid template: {exc}") from None

    # -------------------------
    # Serialization helpers
    # -------------------------
    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation of this configuration."""
        return _dataclass_to_dict(self)

    def to_json(self, path: Path | str, *, indent: int = 2) -> str:
        """Serialize the configuration to JSON and write it to disk.

        Args:
            path (Path | str): Target file path.
            indent (int): Indentation level passed to ``json.dumps``.

        Returns:
            str: String path to the written file.
        """
        target = Path(path)
        target.write_text(json.dumps(self.to_dict(), indent=indent, sort_keys=True), encoding="utf-8")
        return str(target)

    @classmethod
    def from_dict(cls: Type[T], data: Mapping[str, Any]) -> T:
        """Instantiate an MdchunkConfig from a mapping produced by :meth:`to_dict`."""
        return _dataclass_from_dict(cls, data)

    @classmethod
    def from_json(cls: Type[T], path: Path | str) -> T:
        """Load a configuration from a JSON file."""
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.from_dict(payload)

    @classmethod
    def from_toml(cls: Type[T], path: Path | str) -> T:
        """
        Load an MdchunkConfig from a TOML file.

        The TOML layout mirrors the dataclass: top-level tables [input],
        [substitutions], [parser], [chunk.policy], [chunk.elision], [output]
        and [logging].
        """
        if tomllib is None:
            raise RuntimeError(
                "TOML support requires Python 3.11+ (tomllib) or installing the 'tomli' package."
            )
        data = tomllib.loads(Path(path).read_bytes().decode("utf-8"))
        if not isinstance(data, Mapping):
            raise TypeError(f"Top-level TOML document must be a mapping; got {type(data).__name__}.")
        return cls.from_dict(data)


def load_config_from_path(path: str | Path) -> MdchunkConfig:
    """Load an MdchunkConfig from a JSON or TOML file.

    Raises:
        ValueError: If the file extension is not ``.toml`` or ``.json``.
    """
    p = Path(path)
    suffix = p.suffix.lower()
    if suffix == ".toml":
        return MdchunkConfig.from_toml(p)
    if suffix == ".json":
        return MdchunkConfig.from_json(p)
    raise ValueError(f"Unsupported config extension {p.suffix!r}; expected .toml or .json.")


def _dataclass_to_dict(obj: Any) -> Dict[str, Any]:
    """Serialize dataclasses to JSON-friendly dicts, skipping None fields."""
    result: Dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is None:
            continue
        result[f.name] = _dataclass_to_dict(value) if is_dataclass(value) else value
    return result


def _dataclass_from_dict(cls: Type[T], data: Mapping[str, Any] | None) -> T:
    """Instantiate a dataclass of type ``cls`` from a mapping.

    Unknown keys are rejected so that typos in config files surface early.
    """
    if data is None:
        return cls()  # type: ignore[call-arg]
    type_hints = get_type_hints(cls)
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} option(s): {unknown}")

    kwargs: Dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        field_type = type_hints.get(f.name, f.type)
        kwargs[f.name] = _coerce_value(field_type, data[f.name])
    return cls(**kwargs)  # type: ignore[arg-type]


def _coerce_value(expected_type: Any, value: Any) -> Any:
    """Coerce ``value`` into the shape implied by ``expected_type``."""
    base_type, _ = _strip_optional(expected_type)
    if value is None:
        return None
    if isinstance(base_type, type) and is_dataclass(base_type):
        return _dataclass_from_dict(base_type, value)
    if base_type is Path:
        return Path(value)
    if base_type in {str, int, float}:
        return base_type(value)
    return value


def _strip_optional(typ: Any) -> Tuple[Any, bool]:
    """Strip Optional from a type annotation.

    Returns:
        tuple[Any, bool]: ``(base_type, is_optional)``.
    """
    origin = get_origin(typ)
    if origin is Union:
        args = [arg for arg in get_args(typ) if arg is not type(None)]
        if len(args) == 1:
            base, _ = _strip_optional(args[0])
            return base, True
    return typ, False


__all__ = [
    "InputConfig",
    "SubstitutionConfig",
    "ParserConfig",
    "ChunkConfig",
    "OutputConfig",
    "LoggingConfig",
    "MdchunkConfig",
    "load_config_from_path",
]
