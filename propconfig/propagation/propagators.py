from __future__ import annotations

import copy
from typing import Any, Dict

import numpy as np

from propconfig.core import keys
from propconfig.core.config_access import (
    KeyPath,
    as_body_model_map,
    as_body_pair_model_map,
    as_mapping,
    as_str_list,
    as_vector,
    get_value,
)
from propconfig.core.enums import (
    INTEGRATED_STATE_TYPES,
    SINGLE_INTEGRATION_SIZE,
    TRANSLATIONAL_PROPAGATOR_TYPES,
    UNSUPPORTED_INTEGRATED_STATE_TYPES,
    IntegratedStateType,
    TranslationalPropagatorType,
    enum_from_text,
    text_from_enum,
)
from propconfig.core.errors import TypeMismatchError, UnsupportedVariantError
from propconfig.core.models import (
    MassPropagatorSettings,
    RotationalStatePropagatorSettings,
    SingleArcPropagatorSettings,
    TranslationalStatePropagatorSettings,
)

K = keys.Propagator

DEFAULT_STATE_TYPE = IntegratedStateType.TRANSLATIONAL
DEFAULT_TRANSLATIONAL_PROPAGATOR = TranslationalPropagatorType.COWELL

_NESTED_MULTI_TYPE = (
    "Multi-type propagation is supported by providing a list of propagators, "
    "but multi-type propagators cannot be nested inside multi-type propagators"
)


def _bodies_to_propagate(cfg: Dict[str, Any], path: KeyPath) -> list:
    bodies = get_value(cfg, K.BODIES_TO_PROPAGATE, as_str_list, base=path)
    if not bodies:
        raise TypeMismatchError("must list at least one body", path + (K.BODIES_TO_PROPAGATE,))
    return bodies


def _initial_states(cfg: Dict[str, Any], path: KeyPath, state_type: IntegratedStateType, n_bodies: int) -> np.ndarray:
    states = get_value(cfg, K.INITIAL_STATES, as_vector, np.zeros(0, dtype=float), base=path)
    expected = SINGLE_INTEGRATION_SIZE[state_type] * n_bodies
    if states.size not in (0, expected):
        raise TypeMismatchError(
            f"expected {expected} values ({SINGLE_INTEGRATION_SIZE[state_type]} per body x {n_bodies} bodies), "
            f"got {states.size}",
            path + (K.INITIAL_STATES,),
        )
    return states


def single_arc_from_config(cfg: Any, path: KeyPath = ()) -> SingleArcPropagatorSettings:
    """Decode one propagator block.

    ``initialStates`` may be absent (empty vector) but, when given, must hold
    exactly one state block per body to propagate.
    """
    cfg = as_mapping(cfg, path)
    state_type = DEFAULT_STATE_TYPE
    if K.INTEGRATED_STATE_TYPE in cfg:
        state_type = enum_from_text(
            cfg[K.INTEGRATED_STATE_TYPE], INTEGRATED_STATE_TYPES, path=path + (K.INTEGRATED_STATE_TYPE,)
        )

    if state_type == IntegratedStateType.HYBRID:
        raise UnsupportedVariantError(_NESTED_MULTI_TYPE, path + (K.INTEGRATED_STATE_TYPE,))
    if state_type in UNSUPPORTED_INTEGRATED_STATE_TYPES:
        raise UnsupportedVariantError(
            f"propagators of state type {state_type.value} are not supported", path + (K.INTEGRATED_STATE_TYPE,)
        )

    bodies = _bodies_to_propagate(cfg, path)
    initial_states = _initial_states(cfg, path, state_type, len(bodies))

    if state_type == IntegratedStateType.TRANSLATIONAL:
        central_bodies = get_value(cfg, K.CENTRAL_BODIES, as_str_list, base=path)
        if len(central_bodies) != len(bodies):
            raise TypeMismatchError(
                f"{len(central_bodies)} central bodies for {len(bodies)} bodies to propagate",
                path + (K.CENTRAL_BODIES,),
            )
        propagator = DEFAULT_TRANSLATIONAL_PROPAGATOR
        if K.TYPE in cfg:
            propagator = enum_from_text(cfg[K.TYPE], TRANSLATIONAL_PROPAGATOR_TYPES, path=path + (K.TYPE,))
        return TranslationalStatePropagatorSettings(
            bodies_to_propagate=bodies,
            initial_states=initial_states,
            central_bodies=central_bodies,
            acceleration_settings=get_value(cfg, K.ACCELERATIONS, as_body_pair_model_map, base=path),
            propagator=propagator,
        )
    if state_type == IntegratedStateType.MASS:
        return MassPropagatorSettings(
            bodies_to_propagate=bodies,
            initial_states=initial_states,
            mass_rate_settings=get_value(cfg, K.MASS_RATE_MODELS, as_body_model_map, base=path),
        )
    if state_type == IntegratedStateType.ROTATIONAL:
        return RotationalStatePropagatorSettings(
            bodies_to_propagate=bodies,
            initial_states=initial_states,
            torque_settings=get_value(cfg, K.TORQUES, as_body_pair_model_map, base=path),
        )
    raise UnsupportedVariantError(f"propagators of state type {state_type.value} are not supported", path)


def single_arc_to_config(settings: SingleArcPropagatorSettings) -> Dict[str, Any]:
    state_type = getattr(settings, "state_type", None)
    if state_type == IntegratedStateType.HYBRID:
        raise UnsupportedVariantError(_NESTED_MULTI_TYPE)
    if state_type not in SINGLE_INTEGRATION_SIZE:
        raise UnsupportedVariantError(f"cannot encode propagator settings of type {type(settings).__name__}")

    out: Dict[str, Any] = {}
    if state_type != DEFAULT_STATE_TYPE:
        out[K.INTEGRATED_STATE_TYPE] = text_from_enum(state_type, INTEGRATED_STATE_TYPES)
    if settings.initial_states.size > 0:
        out[K.INITIAL_STATES] = settings.initial_states.tolist()

    if state_type == IntegratedStateType.TRANSLATIONAL:
        out[K.TYPE] = text_from_enum(settings.propagator, TRANSLATIONAL_PROPAGATOR_TYPES)
        out[K.CENTRAL_BODIES] = list(settings.central_bodies)
        out[K.BODIES_TO_PROPAGATE] = list(settings.bodies_to_propagate)
        out[K.ACCELERATIONS] = copy.deepcopy(settings.acceleration_settings)
    elif state_type == IntegratedStateType.MASS:
        out[K.BODIES_TO_PROPAGATE] = list(settings.bodies_to_propagate)
        out[K.MASS_RATE_MODELS] = copy.deepcopy(settings.mass_rate_settings)
    else:
        out[K.BODIES_TO_PROPAGATE] = list(settings.bodies_to_propagate)
        out[K.TORQUES] = copy.deepcopy(settings.torque_settings)
    return out
