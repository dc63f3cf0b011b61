"""Helpers for reading YAML/JSON data files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml


def load_mapping(path: Path | str) -> dict[str, Any]:
    """Load a YAML or JSON file whose top level is a mapping.

    The format is chosen from the file extension; other extensions are
    auto-detected (JSON if the content looks like JSON, YAML otherwise).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the content cannot be parsed or is not a mapping.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        data = _load_yaml(path)
    elif suffix == ".json":
        data = _load_json(path)
    else:
        data = _load_unknown(path)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top level: {path}")
    return data


def _load_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML: {path}") from e


def _load_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {path}") from e


def _load_unknown(path: Path) -> Any:
    raw = path.read_text(encoding="utf-8")
    stripped = raw.lstrip()

    # JSON is valid YAML, but JSON errors are easier to read.
    if stripped.startswith("{") or stripped.startswith("["):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            pass

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid data file format: {path}") from e
