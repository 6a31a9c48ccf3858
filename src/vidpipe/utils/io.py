"""File I/O utilities — atomic writes, YAML/JSON handling."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

_yaml = YAML(typ="safe")

YAML_SUFFIXES = (".yaml", ".yml")


def write_atomic(path: Path | str, data: Any) -> None:
    """Write data to a file atomically (write to temp, then rename)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="w",
        dir=path.parent,
        suffix=path.suffix,
        delete=False,
    ) as tmp:
        if isinstance(data, str):
            tmp.write(data)
        else:
            json.dump(data, tmp, indent=2, default=str)
        tmp_path = Path(tmp.name)

    tmp_path.replace(path)


def read_yaml(path: Path | str) -> dict:
    """Read a YAML file and return as dict."""
    with open(path) as f:
        return dict(_yaml.load(f) or {})


def read_json(path: Path | str) -> dict:
    """Read a JSON file and return as dict."""
    with open(path) as f:
        return json.load(f)


def read_document(path: Path | str) -> dict:
    """Read a YAML or JSON document, chosen by file suffix."""
    path = Path(path)
    if path.suffix.lower() in YAML_SUFFIXES:
        return read_yaml(path)
    return read_json(path)


def write_json(path: Path | str, data: Any) -> None:
    """Write data to a JSON file atomically."""
    write_atomic(path, data)
