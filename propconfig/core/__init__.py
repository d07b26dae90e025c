from .config_access import get_value, is_defined, key_path, set_value
from .enums import (
    DependentVariableType,
    IntegratedStateType,
    StateRepresentation,
    TranslationalPropagatorType,
    VariableType,
    enum_from_text,
    text_from_enum,
)
from .errors import (
    EphemerisUnavailableError,
    MissingTerminationError,
    PropagationConfigError,
    TypeMismatchError,
    UndefinedKeyError,
    UnknownTagError,
    UnresolvableInitialStateError,
    UnsupportedTagError,
    UnsupportedVariantError,
)
from .io import load_document, write_document
from .logging_config import setup_logging
from .models import (
    NOT_A_TIME_BOUND,
    CpuTimeVariableSettings,
    DependentVariableSettings,
    DependentVariableTerminationSettings,
    ExportSettings,
    HybridTerminationSettings,
    IndependentVariableSettings,
    MassPropagatorSettings,
    MultiTypePropagatorSettings,
    RotationalStatePropagatorSettings,
    SingleArcPropagatorSettings,
    StateVariableSettings,
    TimeTerminationSettings,
    TranslationalStatePropagatorSettings,
    is_time_bound,
)

__all__ = [
    "get_value",
    "is_defined",
    "key_path",
    "set_value",
    "DependentVariableType",
    "IntegratedStateType",
    "StateRepresentation",
    "TranslationalPropagatorType",
    "VariableType",
    "enum_from_text",
    "text_from_enum",
    "EphemerisUnavailableError",
    "MissingTerminationError",
    "PropagationConfigError",
    "TypeMismatchError",
    "UndefinedKeyError",
    "UnknownTagError",
    "UnresolvableInitialStateError",
    "UnsupportedTagError",
    "UnsupportedVariantError",
    "load_document",
    "write_document",
    "setup_logging",
    "NOT_A_TIME_BOUND",
    "CpuTimeVariableSettings",
    "DependentVariableSettings",
    "DependentVariableTerminationSettings",
    "ExportSettings",
    "HybridTerminationSettings",
    "IndependentVariableSettings",
    "MassPropagatorSettings",
    "MultiTypePropagatorSettings",
    "RotationalStatePropagatorSettings",
    "SingleArcPropagatorSettings",
    "StateVariableSettings",
    "TimeTerminationSettings",
    "TranslationalStatePropagatorSettings",
    "is_time_bound",
]
