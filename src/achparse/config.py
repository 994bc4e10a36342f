from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml


def _typed(payload: dict[str, Any], key: str, default: Any, kind: type) -> Any:
    # "false" or "no" as strings would otherwise read as True
    value = payload.get(key, default)
    if not isinstance(value, kind):
        raise ValueError(f"Parser config key {key!r} must be {kind.__name__}, got {value!r}")
    return value


@dataclass(frozen=True)
class ParserConfig:
    encoding: str = "latin-1"  # only used when parse() is handed bytes
    allow_block_padding: bool = True  # skip all-9 fill lines after the file control
    validate_block_count: bool = False

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> ParserConfig:
        known = {f.name for f in fields(ParserConfig)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ValueError(f"Unknown parser config keys: {', '.join(unknown)}")
        return ParserConfig(
            encoding=_typed(payload, "encoding", "latin-1", str),
            allow_block_padding=_typed(payload, "allow_block_padding", True, bool),
            validate_block_count=_typed(payload, "validate_block_count", False, bool),
        )


def load_config(path: Path) -> ParserConfig:
    if path.suffix.lower() in {".yml", ".yaml"}:
        payload = yaml.safe_load(path.read_text())
    else:
        payload = json.loads(path.read_text())
    return ParserConfig.from_mapping(payload or {})
