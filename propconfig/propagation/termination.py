from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional

from propconfig.core import keys
from propconfig.core.config_access import KeyPath, as_bool, as_float, as_list, as_mapping, get_value
from propconfig.core.enums import VariableType
from propconfig.core.errors import (
    MissingTerminationError,
    TypeMismatchError,
    UndefinedKeyError,
    UnsupportedVariantError,
)
from propconfig.core.models import (
    NOT_A_TIME_BOUND,
    DependentVariableSettings,
    DependentVariableTerminationSettings,
    HybridTerminationSettings,
    TerminationSettings,
    TimeTerminationSettings,
    is_time_bound,
)

from .variables import variable_from_config, variable_to_config

logger = logging.getLogger(__name__)

K = keys.Termination

# Termination trees come from user documents; nesting deeper than this is rejected on decode
# and treated as having no time bound on traversal.
MAX_TERMINATION_DEPTH = 64


def termination_from_config(cfg: Any, path: KeyPath = (), _depth: int = 0) -> TerminationSettings:
    if _depth > MAX_TERMINATION_DEPTH:
        raise TypeMismatchError(f"termination conditions nested deeper than {MAX_TERMINATION_DEPTH} levels", path)
    cfg = as_mapping(cfg, path)

    if K.CONDITIONS in cfg:
        items = get_value(cfg, K.CONDITIONS, as_list, base=path)
        if not items:
            raise TypeMismatchError("hybrid termination needs at least one condition", path + (K.CONDITIONS,))
        conditions = [
            termination_from_config(item, path + (K.CONDITIONS, i), _depth + 1) for i, item in enumerate(items)
        ]
        meet_all = get_value(cfg, K.MEET_ALL, as_bool, False, base=path)
        return HybridTerminationSettings(tuple(conditions), fulfill_single_condition=not meet_all)

    variable = variable_from_config(get_value(cfg, K.VARIABLE, base=path), path + (K.VARIABLE,))
    lower = get_value(cfg, K.LOWER_LIMIT, as_float, None, base=path)
    upper = get_value(cfg, K.UPPER_LIMIT, as_float, None, base=path)

    if variable.variable_type == VariableType.INDEPENDENT:
        if upper is None and lower is None:
            raise UndefinedKeyError("time termination needs an upperLimit", path + (K.UPPER_LIMIT,))
        return TimeTerminationSettings(upper if upper is not None else lower)

    if not isinstance(variable, DependentVariableSettings):
        raise UnsupportedVariantError(
            f"termination on a variable of type {variable.variable_type.value} is not supported",
            path + (K.VARIABLE,),
        )
    if lower is None and upper is None:
        raise UndefinedKeyError("one of lowerLimit/upperLimit must be defined", path)
    if lower is not None and upper is not None:
        raise TypeMismatchError("only one of lowerLimit/upperLimit may be defined", path)
    return DependentVariableTerminationSettings(
        variable=variable,
        limit=lower if lower is not None else upper,
        use_as_lower_limit=lower is not None,
        terminate_exactly_on_final_condition=get_value(cfg, K.TERMINATE_EXACTLY, as_bool, False, base=path),
    )


def termination_to_config(settings: TerminationSettings) -> Dict[str, Any]:
    if isinstance(settings, TimeTerminationSettings):
        return {K.VARIABLE: {keys.Variable.TYPE: "independent"}, K.UPPER_LIMIT: settings.epoch}
    if isinstance(settings, DependentVariableTerminationSettings):
        out: Dict[str, Any] = {K.VARIABLE: variable_to_config(settings.variable)}
        out[K.LOWER_LIMIT if settings.use_as_lower_limit else K.UPPER_LIMIT] = settings.limit
        if settings.terminate_exactly_on_final_condition:
            out[K.TERMINATE_EXACTLY] = True
        return out
    if isinstance(settings, HybridTerminationSettings):
        return {
            K.CONDITIONS: [termination_to_config(c) for c in settings.conditions],
            K.MEET_ALL: not settings.fulfill_single_condition,
        }
    raise UnsupportedVariantError(f"cannot encode termination settings of type {type(settings).__name__}")


def has_time_child(condition: TerminationSettings) -> bool:
    """Whether a fixed-epoch condition is among the direct children (or is the condition itself)."""
    if isinstance(condition, HybridTerminationSettings):
        return any(isinstance(c, TimeTerminationSettings) for c in condition.conditions)
    return isinstance(condition, TimeTerminationSettings)


def compose_termination(
    user_condition: Optional[TerminationSettings] = None,
    final_epoch: Optional[float] = None,
) -> TerminationSettings:
    if final_epoch is not None and math.isnan(final_epoch):
        final_epoch = None

    if user_condition is None:
        if final_epoch is None:
            raise MissingTerminationError("no termination conditions and no final epoch defined", keys.FINAL_EPOCH)
        return TimeTerminationSettings(final_epoch)

    if final_epoch is None or has_time_child(user_condition):
        return user_condition

    logger.debug("Adding time termination at %s to user-defined conditions", final_epoch)
    return HybridTerminationSettings(
        (user_condition, TimeTerminationSettings(final_epoch)),
        fulfill_single_condition=True,
    )


def nearest_fixed_epoch(condition: Optional[TerminationSettings], _depth: int = 0) -> float:
    """Epoch of the first fixed-epoch condition found depth-first, or ``NOT_A_TIME_BOUND``."""
    if condition is None or _depth > MAX_TERMINATION_DEPTH:
        return NOT_A_TIME_BOUND
    if isinstance(condition, TimeTerminationSettings):
        return condition.epoch
    if isinstance(condition, HybridTerminationSettings):
        for child in condition.conditions:
            epoch = nearest_fixed_epoch(child, _depth + 1)
            if is_time_bound(epoch):
                return epoch
    return NOT_A_TIME_BOUND
