from __future__ import annotations

import copy
import logging
import math
from typing import Any, Dict, Optional

from propconfig.core import keys
from propconfig.core.config_access import as_finite_float, as_float, get_value, is_defined
from propconfig.core.errors import TypeMismatchError
from propconfig.core.models import PRINT_INTERVAL_UNSET, MultiTypePropagatorSettings
from propconfig.ephemeris import BodyStore

from .initial_states import determine_initial_states, resolve_epoch
from .propagators import single_arc_from_config, single_arc_to_config
from .termination import compose_termination, termination_from_config, termination_to_config

logger = logging.getLogger(__name__)


def decode_propagation_settings(
    config: Dict[str, Any],
    body_store: Optional[BodyStore] = None,
    reference_epoch: Optional[float] = None,
) -> MultiTypePropagatorSettings:
    """Build the multi-type propagator settings of a ``propagation`` document.

    Missing ``initialStates`` are resolved (see
    :func:`determine_initial_states`) and, only once the whole document has
    decoded, filled into the propagator entries of ``config``. A failed call
    leaves ``config`` untouched.
    The aggregate keeps the propagators in document order.
    """
    if not isinstance(config, dict):
        raise TypeMismatchError(f"expected a mapping, got {type(config).__name__}")
    propagators = get_value(config, keys.PROPAGATORS)
    if not isinstance(propagators, list) or not propagators:
        raise TypeMismatchError("expected a non-empty list of propagators", (keys.PROPAGATORS,))

    user_termination = None
    if is_defined(config, keys.TERMINATION):
        user_termination = termination_from_config(config[keys.TERMINATION], (keys.TERMINATION,))
    final_epoch = get_value(config, keys.FINAL_EPOCH, as_float, None)
    termination = compose_termination(user_termination, final_epoch)

    if reference_epoch is None:
        reference_epoch = get_value(config, keys.INITIAL_EPOCH, as_float, None)
    epoch = resolve_epoch(termination, reference_epoch)
    logger.debug("Querying ephemerides for initial states at epoch %s", epoch)

    working = dict(config)
    working[keys.PROPAGATORS] = copy.deepcopy(propagators)
    determine_initial_states(working, body_store, epoch)

    decoded = []
    for i, entry in enumerate(working[keys.PROPAGATORS]):
        path = (keys.PROPAGATORS, i)
        settings = single_arc_from_config(entry, path)
        if settings.initial_states.size != settings.expected_state_size:
            raise TypeMismatchError(
                f"expected {settings.expected_state_size} initial state values, got {settings.initial_states.size}",
                path + (keys.Propagator.INITIAL_STATES,),
            )
        decoded.append(settings)

    print_interval = get_value(
        config, (keys.OPTIONS, keys.PRINT_INTERVAL), as_finite_float, PRINT_INTERVAL_UNSET
    )

    for entry, settings in zip(propagators, decoded):
        if not is_defined(entry, keys.Propagator.INITIAL_STATES):
            entry[keys.Propagator.INITIAL_STATES] = settings.initial_states.tolist()
    logger.info(
        "Decoded %d propagator(s), %d state values in total",
        len(decoded),
        sum(p.initial_states.size for p in decoded),
    )
    return MultiTypePropagatorSettings(decoded, termination, print_interval=print_interval)


def encode_propagation_settings(settings: MultiTypePropagatorSettings) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        keys.PROPAGATORS: [single_arc_to_config(p) for p in settings.propagators],
        keys.TERMINATION: termination_to_config(settings.termination),
    }
    if not math.isnan(settings.print_interval):
        out[keys.OPTIONS] = {keys.PRINT_INTERVAL: settings.print_interval}
    return out
