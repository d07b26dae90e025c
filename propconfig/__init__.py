from .core import PropagationConfigError, load_document, setup_logging, write_document
from .ephemeris import BodyStore, TabulatedBodyStore
from .propagation import (
    compose_termination,
    decode_propagation_settings,
    dedup_dependent_variables,
    encode_propagation_settings,
    nearest_fixed_epoch,
    reset_dependent_variables,
)

__version__ = "0.1.0"

__all__ = [
    "PropagationConfigError",
    "load_document",
    "setup_logging",
    "write_document",
    "BodyStore",
    "TabulatedBodyStore",
    "compose_termination",
    "decode_propagation_settings",
    "dedup_dependent_variables",
    "encode_propagation_settings",
    "nearest_fixed_epoch",
    "reset_dependent_variables",
]
