from __future__ import annotations

from typing import Any, Dict, List

from propconfig.core import keys
from propconfig.core.config_access import KeyPath, as_bool, as_int, as_list, as_mapping, as_str, get_value
from propconfig.core.models import ExportSettings

from .variables import variable_from_config, variable_to_config

K = keys.Export

_DEFAULTS = ExportSettings(output_file="", variables=())


def export_settings_from_config(cfg: Any, path: KeyPath = ()) -> ExportSettings:
    cfg = as_mapping(cfg, path)
    variables = get_value(cfg, K.VARIABLES, as_list, base=path)
    return ExportSettings(
        output_file=get_value(cfg, K.FILE, as_str, base=path),
        variables=[variable_from_config(v, path + (K.VARIABLES, i)) for i, v in enumerate(variables)],
        header=get_value(cfg, K.HEADER, as_str, _DEFAULTS.header, base=path),
        epochs_in_first_column=get_value(
            cfg, K.EPOCHS_IN_FIRST_COLUMN, as_bool, _DEFAULTS.epochs_in_first_column, base=path
        ),
        only_initial_step=get_value(cfg, K.ONLY_INITIAL_STEP, as_bool, _DEFAULTS.only_initial_step, base=path),
        only_final_step=get_value(cfg, K.ONLY_FINAL_STEP, as_bool, _DEFAULTS.only_final_step, base=path),
        numerical_precision=get_value(
            cfg, K.NUMERICAL_PRECISION, as_int, _DEFAULTS.numerical_precision, base=path
        ),
    )


def export_settings_to_config(settings: ExportSettings) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        K.FILE: settings.output_file,
        K.VARIABLES: [variable_to_config(v) for v in settings.variables],
    }
    if settings.header != _DEFAULTS.header:
        out[K.HEADER] = settings.header
    if settings.epochs_in_first_column != _DEFAULTS.epochs_in_first_column:
        out[K.EPOCHS_IN_FIRST_COLUMN] = settings.epochs_in_first_column
    if settings.only_initial_step != _DEFAULTS.only_initial_step:
        out[K.ONLY_INITIAL_STEP] = settings.only_initial_step
    if settings.only_final_step != _DEFAULTS.only_final_step:
        out[K.ONLY_FINAL_STEP] = settings.only_final_step
    if settings.numerical_precision != _DEFAULTS.numerical_precision:
        out[K.NUMERICAL_PRECISION] = settings.numerical_precision
    return out


def export_list_from_config(cfg: Any, path: KeyPath = (keys.EXPORT,)) -> List[ExportSettings]:
    """``export`` may hold a single export object or a list of them."""
    if isinstance(cfg, dict):
        return [export_settings_from_config(cfg, path)]
    items = as_list(cfg, path)
    return [export_settings_from_config(item, path + (i,)) for i, item in enumerate(items)]
