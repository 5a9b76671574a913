"""Loading structured YAML/JSON documents from disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml


def load_structured_file(path: Path | str) -> Any:
    """Load a YAML or JSON document, choosing the parser by file extension.

    Files with an unknown extension are parsed as JSON when they look like
    JSON and as YAML otherwise. Empty documents load as None.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        return _load_yaml(file_path)
    if suffix == ".json":
        return _load_json(file_path)
    return _load_unknown(file_path)


def _load_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML file: {path}") from e


def _load_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON file: {path}") from e


def _load_unknown(path: Path) -> Any:
    """Auto-detect and load a document when the file extension is unknown."""
    raw = path.read_text(encoding="utf-8")
    raw_stripped = raw.lstrip()

    # Try JSON first if it looks like JSON, otherwise fall back to YAML.
    if raw_stripped.startswith("{") or raw_stripped.startswith("["):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            pass

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid file format: {path}") from e
