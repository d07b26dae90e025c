from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from propconfig.core import keys
from propconfig.core.config_access import as_float, as_mapping, as_str, as_vector, get_value, key_path
from propconfig.core.errors import EphemerisUnavailableError, TypeMismatchError

logger = logging.getLogger(__name__)

_MAX_ORIGIN_CHAIN = 32


class BodyStore:
    """Source of body states used to infer initial states.

    Implementations raise :class:`EphemerisUnavailableError` when a state
    cannot be provided.
    """

    def query_state(self, body: str, central_body: str, epoch: float) -> np.ndarray:
        raise NotImplementedError

    def query_states(self, bodies: Sequence[str], central_bodies: Sequence[str], epoch: float) -> np.ndarray:
        if len(bodies) != len(central_bodies):
            raise EphemerisUnavailableError(
                f"{len(bodies)} bodies but {len(central_bodies)} central bodies"
            )
        if not bodies:
            return np.zeros(0, dtype=float)
        return np.concatenate(
            [self.query_state(body, central, epoch) for body, central in zip(bodies, central_bodies)]
        )

    def gravitational_parameter(self, body: str) -> float:
        raise EphemerisUnavailableError(f"no gravitational parameter for {body}", body=body)


@dataclass
class TabulatedEphemeris:
    origin: str
    epochs: np.ndarray
    states: np.ndarray

    def __post_init__(self) -> None:
        self.epochs = np.asarray(self.epochs, dtype=float).reshape(-1)
        self.states = np.asarray(self.states, dtype=float).reshape(len(self.epochs), -1)
        if self.states.shape[1] != 6:
            raise ValueError("ephemeris states must have 6 components")
        if self.epochs.size == 0:
            raise ValueError("ephemeris needs at least one epoch")
        if np.any(np.diff(self.epochs) <= 0.0):
            raise ValueError("ephemeris epochs must be strictly increasing")

    def state_at(self, epoch: float) -> np.ndarray:
        if self.epochs.size == 1:
            return self.states[0].copy()
        t0 = float(self.epochs[0])
        t1 = float(self.epochs[-1])
        if not math.isfinite(epoch) or epoch < t0 or epoch > t1:
            raise EphemerisUnavailableError(f"epoch {epoch} outside ephemeris range [{t0}, {t1}]")
        return np.array([np.interp(epoch, self.epochs, self.states[:, k]) for k in range(6)], dtype=float)


class TabulatedBodyStore(BodyStore):
    """Bodies with tabulated states, each relative to an origin body.

    Bodies that only ever appear as an origin are roots of the frame tree and
    sit at the zero state. Two bodies can only be differenced when their
    origin chains end in the same root.
    """

    def __init__(
        self,
        ephemerides: Optional[Mapping[str, TabulatedEphemeris]] = None,
        gravitational_parameters: Optional[Mapping[str, float]] = None,
    ) -> None:
        self.ephemerides: Dict[str, TabulatedEphemeris] = dict(ephemerides or {})
        self.gravitational_parameters: Dict[str, float] = dict(gravitational_parameters or {})

    def _known(self, body: str) -> bool:
        if body in self.ephemerides:
            return True
        return any(eph.origin == body for eph in self.ephemerides.values())

    def _state_wrt_root(self, body: str, epoch: float) -> Tuple[str, np.ndarray]:
        if not self._known(body):
            raise EphemerisUnavailableError(f"no ephemeris for body {body}", body=body)
        state = np.zeros(6, dtype=float)
        current = body
        for _ in range(_MAX_ORIGIN_CHAIN):
            eph = self.ephemerides.get(current)
            if eph is None:
                return current, state
            try:
                state = state + eph.state_at(epoch)
            except EphemerisUnavailableError as exc:
                raise EphemerisUnavailableError(f"{current}: {exc}", body=current) from exc
            current = eph.origin
        raise EphemerisUnavailableError(f"origin chain of {body} does not terminate", body=body)

    def query_state(self, body: str, central_body: str, epoch: float) -> np.ndarray:
        if body == central_body:
            return np.zeros(6, dtype=float)
        body_root, body_state = self._state_wrt_root(body, epoch)
        central_root, central_state = self._state_wrt_root(central_body, epoch)
        if body_root != central_root:
            raise EphemerisUnavailableError(
                f"{body} (origin {body_root}) and {central_body} (origin {central_root}) share no common origin",
                body=body,
            )
        return body_state - central_state

    def gravitational_parameter(self, body: str) -> float:
        mu = self.gravitational_parameters.get(body)
        if mu is None:
            raise EphemerisUnavailableError(f"no gravitational parameter for {body}", body=body)
        return mu

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "TabulatedBodyStore":
        """Build a store from the ``bodies`` section of a configuration document."""
        bodies = get_value(cfg, (keys.BODIES,), as_mapping, {})
        ephemerides: Dict[str, TabulatedEphemeris] = {}
        mus: Dict[str, float] = {}
        for name, body_cfg in bodies.items():
            path = key_path((keys.BODIES, name))
            body = as_mapping(body_cfg, path)
            mu = get_value(body, (keys.Body.GRAVITATIONAL_PARAMETER,), as_float, None)
            if mu is not None:
                mus[name] = mu
            eph_path = path + (keys.Body.EPHEMERIS,)
            eph_cfg = get_value(body, (keys.Body.EPHEMERIS,), as_mapping, None)
            if eph_cfg is None:
                continue
            origin = get_value(eph_cfg, (keys.Ephemeris.ORIGIN,), as_str, "SSB")
            epochs = get_value(eph_cfg, (keys.Ephemeris.EPOCHS,), as_vector)
            rows = get_value(eph_cfg, (keys.Ephemeris.STATES,))
            if not isinstance(rows, list):
                raise TypeMismatchError("expected a list of states", eph_path + (keys.Ephemeris.STATES,))
            states: List[np.ndarray] = [
                as_vector(row, eph_path + (keys.Ephemeris.STATES, i)) for i, row in enumerate(rows)
            ]
            try:
                ephemerides[name] = TabulatedEphemeris(origin, epochs, np.array(states, dtype=float))
            except ValueError as exc:
                raise TypeMismatchError(str(exc), eph_path) from exc
        logger.debug("Loaded %d tabulated ephemerides, %d gravitational parameters", len(ephemerides), len(mus))
        return cls(ephemerides, mus)


@dataclass(frozen=True)
class EphemerisLookup:
    """Outcome of an advisory ephemeris query: either ``states`` or a ``reason``."""

    states: Optional[np.ndarray] = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.states is not None


def lookup_states(
    store: Optional[BodyStore],
    bodies: Sequence[str],
    central_bodies: Sequence[str],
    epoch: float,
) -> EphemerisLookup:
    if store is None:
        return EphemerisLookup(reason="no body store available")
    if epoch is None or not math.isfinite(epoch):
        return EphemerisLookup(reason="no finite epoch to query the ephemeris at")
    if len(bodies) != len(central_bodies):
        return EphemerisLookup(reason=f"{len(bodies)} bodies but {len(central_bodies)} central bodies")
    try:
        states = np.asarray(store.query_states(list(bodies), list(central_bodies), epoch), dtype=float).reshape(-1)
    except (LookupError, ValueError, TypeError) as exc:
        return EphemerisLookup(reason=str(exc))
    if states.size != 6 * len(bodies):
        return EphemerisLookup(reason=f"ephemeris returned {states.size} values for {len(bodies)} bodies")
    return EphemerisLookup(states=states)
