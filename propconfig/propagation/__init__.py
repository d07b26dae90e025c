from .export import export_list_from_config, export_settings_from_config, export_settings_to_config
from .initial_states import associated_body_key, determine_initial_states, resolve_epoch
from .multi_type import decode_propagation_settings, encode_propagation_settings
from .propagators import single_arc_from_config, single_arc_to_config
from .termination import (
    MAX_TERMINATION_DEPTH,
    compose_termination,
    has_time_child,
    nearest_fixed_epoch,
    termination_from_config,
    termination_to_config,
)
from .variables import (
    dedup_dependent_variables,
    reset_dependent_variables,
    variable_from_config,
    variable_id,
    variable_to_config,
)

__all__ = [
    "export_list_from_config",
    "export_settings_from_config",
    "export_settings_to_config",
    "associated_body_key",
    "determine_initial_states",
    "resolve_epoch",
    "decode_propagation_settings",
    "encode_propagation_settings",
    "single_arc_from_config",
    "single_arc_to_config",
    "MAX_TERMINATION_DEPTH",
    "compose_termination",
    "has_time_child",
    "nearest_fixed_epoch",
    "termination_from_config",
    "termination_to_config",
    "dedup_dependent_variables",
    "reset_dependent_variables",
    "variable_from_config",
    "variable_id",
    "variable_to_config",
]
