from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from propconfig.core import keys
from propconfig.core.config_access import (
    KeyPath,
    as_float,
    as_mapping,
    as_str,
    as_str_list,
    as_vector,
    get_value,
    is_defined,
    set_value,
)
from propconfig.core.enums import (
    INTEGRATED_STATE_TYPES,
    SINGLE_INTEGRATION_SIZE,
    STATE_REPRESENTATIONS,
    IntegratedStateType,
    StateRepresentation,
    enum_from_text,
)
from propconfig.core.errors import (
    EphemerisUnavailableError,
    PropagationConfigError,
    TypeMismatchError,
    UnresolvableInitialStateError,
    UnsupportedVariantError,
)
from propconfig.core.models import TerminationSettings, is_time_bound
from propconfig.ephemeris import BodyStore, EphemerisLookup, keplerian_to_cartesian, lookup_states

from .termination import nearest_fixed_epoch

logger = logging.getLogger(__name__)

P = keys.Propagator
S = keys.BodyState


def associated_body_key(state_type: IntegratedStateType) -> str:
    """Key of a body entry holding the initial state for ``state_type``."""
    if state_type == IntegratedStateType.TRANSLATIONAL:
        return keys.Body.INITIAL_STATE
    if state_type == IntegratedStateType.MASS:
        return keys.Body.MASS
    if state_type == IntegratedStateType.ROTATIONAL:
        return keys.Body.ROTATIONAL_STATE
    raise UnsupportedVariantError(f"no body key is associated with state type {state_type.value}")


def resolve_epoch(termination: Optional[TerminationSettings], reference_epoch: Optional[float] = None) -> float:
    """Epoch at which ephemerides are queried when inferring initial states."""
    epoch = nearest_fixed_epoch(termination)
    if is_time_bound(epoch):
        return epoch
    if reference_epoch is not None:
        return float(reference_epoch)
    return epoch


def _state_type(entry: Dict[str, Any], path: KeyPath) -> IntegratedStateType:
    text = get_value(entry, P.INTEGRATED_STATE_TYPE, None, None, base=path)
    if text is None:
        return IntegratedStateType.TRANSLATIONAL
    return enum_from_text(text, INTEGRATED_STATE_TYPES, path=path + (P.INTEGRATED_STATE_TYPE,))


def _fast_path(entry: Dict[str, Any], path: KeyPath, body_store: Optional[BodyStore], epoch: float) -> EphemerisLookup:
    try:
        bodies = get_value(entry, P.BODIES_TO_PROPAGATE, as_str_list, base=path)
        central_bodies = get_value(entry, P.CENTRAL_BODIES, as_str_list, base=path)
    except PropagationConfigError as exc:
        return EphemerisLookup(reason=str(exc))
    return lookup_states(body_store, bodies, central_bodies, epoch)


def _require_store(body_store: Optional[BodyStore], what: str) -> BodyStore:
    if body_store is None:
        raise EphemerisUnavailableError(f"no body store available to {what}")
    return body_store


def _cartesian_from_config(
    node: Any,
    central_body: str,
    body_store: Optional[BodyStore],
    epoch: float,
    path: KeyPath,
) -> np.ndarray:
    """Cartesian state relative to ``central_body`` from a body ``initialState`` entry."""
    if not isinstance(node, dict):
        state = as_vector(node, path)
        if state.size != 6:
            raise TypeMismatchError(f"expected 6 Cartesian components, got {state.size}", path)
        return state

    representation = StateRepresentation.CARTESIAN
    if S.TYPE in node:
        representation = enum_from_text(node[S.TYPE], STATE_REPRESENTATIONS, path=path + (S.TYPE,))
    origin = get_value(node, S.CENTRAL_BODY, as_str, central_body, base=path)

    if representation == StateRepresentation.CARTESIAN:
        state = np.array([get_value(node, k, as_float, base=path) for k in S.CARTESIAN_COMPONENTS], dtype=float)
    else:
        elements = [
            get_value(node, k, as_float, base=path)
            for k in (
                S.SEMI_MAJOR_AXIS,
                S.ECCENTRICITY,
                S.INCLINATION,
                S.ARGUMENT_OF_PERIAPSIS,
                S.LONGITUDE_OF_ASCENDING_NODE,
                S.TRUE_ANOMALY,
            )
        ]
        mu = get_value(node, S.CENTRAL_BODY_GRAVITATIONAL_PARAMETER, as_float, None, base=path)
        if mu is None:
            mu = _require_store(body_store, f"get the gravitational parameter of {origin}").gravitational_parameter(
                origin
            )
        try:
            state = keplerian_to_cartesian(elements, mu)
        except ValueError as exc:
            raise TypeMismatchError(f"invalid Keplerian elements: {exc}", path) from exc

    if origin != central_body:
        store = _require_store(body_store, f"express the state of {origin} w.r.t. {central_body}")
        state = state + np.asarray(store.query_state(origin, central_body, epoch), dtype=float)
    return state


def _body_state(
    config: Dict[str, Any],
    state_type: IntegratedStateType,
    body: str,
    central_body: Optional[str],
    body_store: Optional[BodyStore],
    epoch: float,
) -> np.ndarray:
    size = SINGLE_INTEGRATION_SIZE[state_type]
    path: KeyPath = (keys.BODIES, body, associated_body_key(state_type))
    node = get_value(config, path, None, None)

    if state_type == IntegratedStateType.TRANSLATIONAL:
        if node is not None:
            return _cartesian_from_config(node, central_body, body_store, epoch, path)
        if body_store is None:
            raise UnresolvableInitialStateError(
                f"no initial state for {body} and no ephemeris available", path
            )
        try:
            return np.asarray(body_store.query_state(body, central_body, epoch), dtype=float).reshape(-1)
        except EphemerisUnavailableError as exc:
            raise UnresolvableInitialStateError(
                f"no initial state for {body} and ephemeris lookup failed ({exc})", path
            ) from exc

    if node is None:
        raise UnresolvableInitialStateError(f"no {path[-1]} defined for {body}", path)
    state = as_vector(node, path)
    if state.size != size:
        raise TypeMismatchError(f"expected {size} components, got {state.size}", path)
    return state


def _states_from_bodies(
    config: Dict[str, Any],
    entry: Dict[str, Any],
    path: KeyPath,
    body_store: Optional[BodyStore],
    epoch: float,
) -> np.ndarray:
    state_type = _state_type(entry, path)
    if state_type not in SINGLE_INTEGRATION_SIZE:
        raise UnsupportedVariantError(f"cannot infer initial states for state type {state_type.value}", path)
    bodies = get_value(entry, P.BODIES_TO_PROPAGATE, as_str_list, base=path)
    central_bodies: List[Optional[str]] = [None] * len(bodies)
    if state_type == IntegratedStateType.TRANSLATIONAL:
        central_bodies = get_value(entry, P.CENTRAL_BODIES, as_str_list, base=path)
        if len(central_bodies) != len(bodies):
            raise TypeMismatchError(
                f"{len(central_bodies)} central bodies for {len(bodies)} bodies to propagate",
                path + (P.CENTRAL_BODIES,),
            )

    segments = [
        _body_state(config, state_type, body, central, body_store, epoch)
        for body, central in zip(bodies, central_bodies)
    ]
    if not segments:
        return np.zeros(0, dtype=float)
    return np.concatenate(segments)


def determine_initial_states(
    config: Dict[str, Any],
    body_store: Optional[BodyStore] = None,
    epoch: float = math.nan,
) -> None:
    """Fill in missing ``initialStates`` of the propagators in ``config`` (in place).

    A single translational propagator is first resolved with one ephemeris
    query for all its bodies; if that fails for any reason, every propagator
    without initial states is resolved body by body from the ``bodies``
    section. Explicit initial states are never overwritten, and nothing is
    written unless every propagator resolves.
    """
    propagators = get_value(config, keys.PROPAGATORS)
    if not isinstance(propagators, list):
        raise TypeMismatchError("expected a list of propagators", (keys.PROPAGATORS,))

    if len(propagators) == 1:
        path: KeyPath = (keys.PROPAGATORS, 0)
        entry = as_mapping(propagators[0], path)
        if not is_defined(entry, P.INITIAL_STATES) and _state_type(entry, path) == IntegratedStateType.TRANSLATIONAL:
            lookup = _fast_path(entry, path, body_store, epoch)
            if lookup.ok:
                set_value(config, path + (P.INITIAL_STATES,), lookup.states.tolist())
                logger.debug("Initial states of propagators[0] taken from ephemeris at %s", epoch)
                return
            logger.info("Ephemeris lookup of initial states failed (%s); using body settings", lookup.reason)

    resolved: List[Tuple[KeyPath, np.ndarray]] = []
    for i, item in enumerate(propagators):
        path = (keys.PROPAGATORS, i)
        entry = as_mapping(item, path)
        if is_defined(entry, P.INITIAL_STATES):
            continue
        resolved.append((path, _states_from_bodies(config, entry, path, body_store, epoch)))

    for path, states in resolved:
        set_value(config, path + (P.INITIAL_STATES,), states.tolist())
        logger.debug("Initial states of propagators[%d] inferred from body settings (%d values)", path[1], states.size)
