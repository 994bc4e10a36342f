from pathlib import Path

import pytest

from achparse.config import ParserConfig, load_config


def test_defaults():
    cfg = ParserConfig()
    assert cfg.encoding == "latin-1"
    assert cfg.allow_block_padding is True
    assert cfg.validate_block_count is False


def test_load_yaml(tmp_path: Path):
    path = tmp_path / "parser.yaml"
    path.write_text("allow_block_padding: false\nvalidate_block_count: true\n")
    cfg = load_config(path)
    assert cfg.allow_block_padding is False
    assert cfg.validate_block_count is True


def test_load_json(tmp_path: Path):
    path = tmp_path / "parser.json"
    path.write_text('{"encoding": "ascii"}')
    assert load_config(path).encoding == "ascii"


def test_empty_yaml_gives_defaults(tmp_path: Path):
    path = tmp_path / "empty.yml"
    path.write_text("")
    assert load_config(path) == ParserConfig()


def test_unknown_keys_rejected():
    with pytest.raises(ValueError, match="strict_mode"):
        ParserConfig.from_mapping({"strict_mode": True})


@pytest.mark.parametrize(
    "payload",
    [
        {"allow_block_padding": "false"},
        {"validate_block_count": "no"},
        {"allow_block_padding": 0},
        {"encoding": 1252},
    ],
)
def test_mistyped_values_rejected(payload):
    with pytest.raises(ValueError, match=next(iter(payload))):
        ParserConfig.from_mapping(payload)


def test_quoted_yaml_boolean_rejected(tmp_path: Path):
    path = tmp_path / "parser.yaml"
    path.write_text('allow_block_padding: "no"\n')
    with pytest.raises(ValueError):
        load_config(path)
