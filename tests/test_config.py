import json
from pathlib import Path

import pytest

from mdchunk.core.config import MdchunkConfig, load_config_from_path


def test_defaults() -> None:
    cfg = MdchunkConfig()

    assert cfg.chunk.policy.limit == 1500
    assert cfg.chunk.policy.separator == " "
    assert cfg.chunk.elision.threshold == 80
    assert cfg.substitutions.has_header is True
    assert cfg.parser.preset == "commonmark"
    cfg.validate()


def test_json_roundtrip(tmp_path: Path) -> None:
    cfg = MdchunkConfig()
    cfg.input.path = "doc.md"
    cfg.chunk.policy.limit = 300
    cfg.substitutions.delimiter = ";"
    path = tmp_path / "cfg.json"

    cfg.to_json(path)
    loaded = load_config_from_path(path)

    assert loaded == cfg
    assert json.loads(path.read_text(encoding="utf-8"))["chunk"]["policy"]["limit"] == 300


def test_toml_loading(tmp_path: Path) -> None:
    path = tmp_path / "mdchunk.toml"
    path.write_text(
        """
[input]
path = "notes.md"

[substitutions]
path = "subs.csv"
has_header = false

[chunk.policy]
limit = 200
separator = ""

[chunk.elision]
threshold = 120

[logging]
level = "DEBUG"
""",
        encoding="utf-8",
    )

    cfg = load_config_from_path(path)

    assert cfg.input.path == "notes.md"
    assert cfg.substitutions.path == "subs.csv"
    assert cfg.substitutions.has_header is False
    assert cfg.chunk.policy.limit == 200
    assert cfg.chunk.policy.separator == ""
    assert cfg.chunk.elision.threshold == 120
    assert cfg.chunk.elision.placeholder.startswith("listing omitted")
    assert cfg.logging.level == "DEBUG"


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ValueError, match="limt"):
        MdchunkConfig.from_dict({"chunk": {"policy": {"limt": 5}}})


def test_unsupported_extension(tmp_path: Path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text("", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config_from_path(path)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda c: setattr(c.chunk.policy, "limit", 0),
        lambda c: setattr(c.chunk.elision, "threshold", 10),
        lambda c: setattr(c.chunk.elision, "placeholder", ""),
        lambda c: setattr(c.substitutions, "delimiter", ";;"),
        lambda c: setattr(c.parser, "walker", "rst"),
        lambda c: setattr(c.parser, "preset", "gfm"),
        lambda c: setattr(c.output, "header_fmt", "{size}"),
    ],
)
def test_validate_rejects_bad_values(mutate) -> None:
    cfg = MdchunkConfig()
    mutate(cfg)

    with pytest.raises(ValueError):
        cfg.validate()
