from __future__ import annotations

import dataclasses
from typing import Any, Dict, Iterable, List, Sequence

from propconfig.core import keys
from propconfig.core.config_access import KeyPath, as_int, as_mapping, as_str, get_value
from propconfig.core.enums import (
    DEPENDENT_VARIABLE_TYPES,
    VARIABLE_TYPES,
    VariableType,
    enum_from_text,
    text_from_enum,
)
from propconfig.core.errors import UnsupportedVariantError
from propconfig.core.models import (
    CpuTimeVariableSettings,
    DependentVariableSettings,
    ExportSettings,
    IndependentVariableSettings,
    MultiTypePropagatorSettings,
    StateVariableSettings,
    VariableSettings,
)

K = keys.Variable


def variable_from_config(cfg: Any, path: KeyPath = ()) -> VariableSettings:
    cfg = as_mapping(cfg, path)
    variable_type = VariableType.DEPENDENT
    if K.TYPE in cfg:
        variable_type = enum_from_text(cfg[K.TYPE], VARIABLE_TYPES, path=path + (K.TYPE,))

    if variable_type == VariableType.INDEPENDENT:
        return IndependentVariableSettings()
    if variable_type == VariableType.CPU_TIME:
        return CpuTimeVariableSettings()
    if variable_type == VariableType.STATE:
        return StateVariableSettings()

    return DependentVariableSettings(
        dependent_variable_type=enum_from_text(
            get_value(cfg, K.DEPENDENT_VARIABLE_TYPE, base=path),
            DEPENDENT_VARIABLE_TYPES,
            path=path + (K.DEPENDENT_VARIABLE_TYPE,),
        ),
        body=get_value(cfg, K.BODY, as_str, base=path),
        relative_to_body=get_value(cfg, K.RELATIVE_TO_BODY, as_str, "", base=path),
        model_type=get_value(cfg, K.MODEL_TYPE, as_str, "", base=path),
        component_index=get_value(cfg, K.COMPONENT_INDEX, as_int, None, base=path),
    )


def variable_to_config(variable: VariableSettings) -> Dict[str, Any]:
    if isinstance(variable, DependentVariableSettings):
        out: Dict[str, Any] = {
            K.DEPENDENT_VARIABLE_TYPE: text_from_enum(variable.dependent_variable_type, DEPENDENT_VARIABLE_TYPES),
            K.BODY: variable.body,
        }
        if variable.relative_to_body:
            out[K.RELATIVE_TO_BODY] = variable.relative_to_body
        if variable.model_type:
            out[K.MODEL_TYPE] = variable.model_type
        if variable.component_index is not None:
            out[K.COMPONENT_INDEX] = variable.component_index
        return out
    if isinstance(variable, (IndependentVariableSettings, CpuTimeVariableSettings, StateVariableSettings)):
        return {K.TYPE: text_from_enum(variable.variable_type, VARIABLE_TYPES)}
    raise UnsupportedVariantError(f"cannot encode variable of type {type(variable).__name__}")


def variable_id(variable: DependentVariableSettings) -> str:
    """Canonical identifier, e.g. ``altitude(Earth,Moon)`` or ``accelerationNorm(aerodynamic,Apollo,Earth)[0]``."""
    args = [variable.model_type, variable.body, variable.relative_to_body]
    name = text_from_enum(variable.dependent_variable_type, DEPENDENT_VARIABLE_TYPES, unsupported=frozenset())
    out = f"{name}({','.join(a for a in args if a)})"
    if variable.component_index is not None:
        out += f"[{variable.component_index}]"
    return out


def dedup_dependent_variables(export_specs: Iterable[ExportSettings]) -> List[DependentVariableSettings]:
    """Dependent variables requested by ``export_specs``, first-seen order, no duplicates."""
    seen = set()
    out: List[DependentVariableSettings] = []
    for spec in export_specs:
        for variable in spec.variables:
            if not isinstance(variable, DependentVariableSettings):
                continue
            vid = variable_id(variable)
            if vid in seen:
                continue
            seen.add(vid)
            out.append(variable)
    return out


def reset_dependent_variables(
    settings: MultiTypePropagatorSettings,
    export_specs: Sequence[ExportSettings],
) -> MultiTypePropagatorSettings:
    return dataclasses.replace(settings, dependent_variables=tuple(dedup_dependent_variables(export_specs)))
