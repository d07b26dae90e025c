from __future__ import annotations

import copy
import math
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import TypeMismatchError, UndefinedKeyError

KeyPart = Union[str, int]
KeyPath = Tuple[KeyPart, ...]
PathLike = Union[str, Sequence[KeyPart]]
Converter = Callable[[Any, KeyPath], Any]

_REQUIRED = object()


def key_path(path: PathLike, *parts: KeyPart) -> KeyPath:
    if isinstance(path, str):
        base: KeyPath = tuple(p for p in path.split(".") if p)
    else:
        base = tuple(path)
    return base + tuple(parts)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, (bool, np.bool_))


def _lookup(cfg: Any, path: KeyPath) -> Any:
    node = cfg
    for part in path:
        if isinstance(part, int):
            if not isinstance(node, list) or not (-len(node) <= part < len(node)):
                return None
            node = node[part]
        else:
            if not isinstance(node, Mapping):
                return None
            node = node.get(part)
        if node is None:
            return None
    return node


def is_defined(cfg: Any, path: PathLike) -> bool:
    return _lookup(cfg, key_path(path)) is not None


def get_value(
    cfg: Any,
    path: PathLike,
    converter: Optional[Converter] = None,
    default: Any = _REQUIRED,
    base: KeyPath = (),
) -> Any:
    """Read ``path`` from ``cfg`` and convert it.

    Absent (or null) keys return ``default`` when one is given and raise
    :class:`UndefinedKeyError` otherwise. Conversion failures raise
    :class:`TypeMismatchError` naming the key path. ``base`` is the path of
    ``cfg`` itself inside the document and only affects error messages.
    """
    kp = key_path(path)
    node = _lookup(cfg, kp)
    full = tuple(base) + kp
    if node is None:
        if default is _REQUIRED:
            raise UndefinedKeyError("key is not defined", full)
        return default
    if converter is None:
        return node
    return converter(node, full)


def set_value(cfg: Dict[str, Any], path: PathLike, value: Any) -> None:
    kp = key_path(path)
    if not kp:
        raise UndefinedKeyError("cannot set an empty key path")
    node: Any = cfg
    for i, part in enumerate(kp[:-1]):
        if isinstance(part, int):
            if not isinstance(node, list) or not (-len(node) <= part < len(node)):
                raise UndefinedKeyError("list index out of range", kp[: i + 1])
            node = node[part]
            continue
        if not isinstance(node, dict):
            raise TypeMismatchError("expected a mapping", kp[:i])
        child = node.get(part)
        if child is None:
            child = {}
            node[part] = child
        node = child
    last = kp[-1]
    if isinstance(last, int):
        if not isinstance(node, list) or not (-len(node) <= last < len(node)):
            raise UndefinedKeyError("list index out of range", kp)
    elif not isinstance(node, dict):
        raise TypeMismatchError("expected a mapping", kp[:-1])
    node[last] = value


# Typed extraction.


def as_str(value: Any, path: KeyPath = ()) -> str:
    if not isinstance(value, str):
        raise TypeMismatchError(f"expected a string, got {type(value).__name__}", path)
    return value


def as_float(value: Any, path: KeyPath = ()) -> float:
    if not _is_number(value):
        raise TypeMismatchError(f"expected a number, got {type(value).__name__}", path)
    return float(value)


def as_int(value: Any, path: KeyPath = ()) -> int:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise TypeMismatchError(f"expected an integer, got {type(value).__name__}", path)
    return int(value)


def as_bool(value: Any, path: KeyPath = ()) -> bool:
    if not isinstance(value, (bool, np.bool_)):
        raise TypeMismatchError(f"expected a boolean, got {type(value).__name__}", path)
    return bool(value)


def as_mapping(value: Any, path: KeyPath = ()) -> Dict[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeMismatchError(f"expected a mapping, got {type(value).__name__}", path)
    return dict(value)


def as_list(value: Any, path: KeyPath = ()) -> List[Any]:
    if not isinstance(value, (list, tuple)):
        raise TypeMismatchError(f"expected a list, got {type(value).__name__}", path)
    return list(value)


def as_str_list(value: Any, path: KeyPath = ()) -> List[str]:
    items = as_list(value, path)
    return [as_str(item, path + (i,)) for i, item in enumerate(items)]


def as_vector(value: Any, path: KeyPath = ()) -> np.ndarray:
    if isinstance(value, np.ndarray):
        items = value.reshape(-1).tolist()
    elif _is_number(value):
        items = [value]
    else:
        items = as_list(value, path)
    out = np.empty(len(items), dtype=float)
    for i, item in enumerate(items):
        out[i] = as_float(item, path + (i,))
    return out


def as_finite_float(value: Any, path: KeyPath = ()) -> float:
    out = as_float(value, path)
    if not math.isfinite(out):
        raise TypeMismatchError("expected a finite number", path)
    return out


def as_model_list(value: Any, path: KeyPath = ()) -> List[Dict[str, Any]]:
    items = as_list(value, path)
    return [copy.deepcopy(as_mapping(item, path + (i,))) for i, item in enumerate(items)]


def as_body_model_map(value: Any, path: KeyPath = ()) -> Dict[str, List[Dict[str, Any]]]:
    """``{body: [model, ...]}``, e.g. mass-rate models."""
    mapping = as_mapping(value, path)
    return {str(body): as_model_list(models, path + (str(body),)) for body, models in mapping.items()}


def as_body_pair_model_map(value: Any, path: KeyPath = ()) -> Dict[str, Dict[str, List[Dict[str, Any]]]]:
    """``{body_undergoing: {body_exerting: [model, ...]}}``, e.g. accelerations and torques."""
    mapping = as_mapping(value, path)
    return {str(body): as_body_model_map(inner, path + (str(body),)) for body, inner in mapping.items()}
