from __future__ import annotations

from typing import Any, Optional


def format_key_path(path: Any) -> str:
    if path is None:
        return ""
    if isinstance(path, str):
        return path
    text = ""
    for part in path:
        if isinstance(part, int):
            text += f"[{part}]"
        elif text:
            text += f".{part}"
        else:
            text = str(part)
    return text


class PropagationConfigError(ValueError):
    """Base class for configuration errors; carries the offending key path."""

    def __init__(self, message: str, key_path: Any = None) -> None:
        self.key_path = format_key_path(key_path) or None
        if self.key_path:
            message = f"{self.key_path}: {message}"
        super().__init__(message)


class UnknownTagError(PropagationConfigError):
    """The text does not name any entry of the tag table (usually a typo)."""


class UnsupportedTagError(PropagationConfigError):
    """The tag is known but not supported by this layer."""


class UnsupportedVariantError(UnsupportedTagError):
    """The settings variant cannot be decoded or encoded as a single propagator."""


class TypeMismatchError(PropagationConfigError):
    pass


class UndefinedKeyError(PropagationConfigError):
    pass


class MissingTerminationError(PropagationConfigError):
    pass


class UnresolvableInitialStateError(PropagationConfigError):
    pass


class EphemerisUnavailableError(LookupError):
    def __init__(self, message: str, body: Optional[str] = None) -> None:
        self.body = body
        super().__init__(message)
