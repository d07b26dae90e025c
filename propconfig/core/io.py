from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import numpy as np
import yaml

from .errors import TypeMismatchError

_YAML_SUFFIXES = {".yaml", ".yml"}


def load_document(path: Path) -> Dict[str, Any]:
    """Read a YAML or JSON configuration document into a mapping."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        if path.suffix.lower() in _YAML_SUFFIXES:
            doc = yaml.safe_load(f)
        else:
            doc = json.load(f)
    if not isinstance(doc, dict):
        raise TypeMismatchError(f"Config at {path} must parse to a mapping")
    return doc


def _plain(value: Any) -> Any:
    if isinstance(value, np.ndarray):
        return [_plain(v) for v in value.tolist()]
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def write_document(path: Path, doc: Dict[str, Any]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = _plain(doc)
    if path.suffix.lower() in _YAML_SUFFIXES:
        path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
    else:
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
