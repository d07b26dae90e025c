from __future__ import annotations

import math
import unittest

import numpy as np
import pytest

from propconfig.core.errors import EphemerisUnavailableError, TypeMismatchError
from propconfig.ephemeris import (
    BodyStore,
    TabulatedBodyStore,
    TabulatedEphemeris,
    keplerian_to_cartesian,
    lookup_states,
)

MU_EARTH = 3.986004418e14


def _store() -> TabulatedBodyStore:
    return TabulatedBodyStore(
        {
            "Earth": TabulatedEphemeris("SSB", [0.0, 100.0], [[1.0e11, 0, 0, 0, 3.0e4, 0], [1.0e11, 3.0e6, 0, 0, 3.0e4, 0]]),
            "Moon": TabulatedEphemeris("Earth", [0.0, 100.0], [[3.8e8, 0, 0, 0, 1.0e3, 0], [3.8e8, 1.0e5, 0, 0, 1.0e3, 0]]),
            "Io": TabulatedEphemeris("JupiterBarycenterFrame", [0.0], [[4.2e8, 0, 0, 0, 1.7e4, 0]]),
        },
        {"Earth": MU_EARTH},
    )


class TabulatedBodyStoreTests(unittest.TestCase):
    def test_interpolates_between_tabulated_epochs(self) -> None:
        state = _store().query_state("Moon", "Earth", 50.0)
        np.testing.assert_allclose(state, [3.8e8, 5.0e4, 0, 0, 1.0e3, 0])

    def test_origin_chains_are_followed(self) -> None:
        store = _store()
        moon_wrt_ssb = store.query_state("Moon", "SSB", 0.0)
        np.testing.assert_allclose(moon_wrt_ssb, [1.0e11 + 3.8e8, 0, 0, 0, 3.1e4, 0])
        earth_wrt_moon = store.query_state("Earth", "Moon", 0.0)
        np.testing.assert_allclose(earth_wrt_moon, [-3.8e8, 0, 0, 0, -1.0e3, 0])

    def test_unrelated_frames_and_unknown_bodies_raise(self) -> None:
        store = _store()
        with self.assertRaises(EphemerisUnavailableError):
            store.query_state("Io", "Earth", 0.0)
        with self.assertRaises(EphemerisUnavailableError) as ctx:
            store.query_state("Apollo", "Earth", 0.0)
        self.assertEqual(ctx.exception.body, "Apollo")

    def test_epoch_outside_table_raises(self) -> None:
        with self.assertRaises(EphemerisUnavailableError):
            _store().query_state("Moon", "Earth", 200.0)

    def test_gravitational_parameter(self) -> None:
        store = _store()
        self.assertEqual(store.gravitational_parameter("Earth"), MU_EARTH)
        with self.assertRaises(EphemerisUnavailableError):
            store.gravitational_parameter("Moon")

    def test_from_config_reads_bodies_section(self) -> None:
        cfg = {
            "bodies": {
                "Earth": {"gravitationalParameter": MU_EARTH},
                "Moon": {"ephemeris": {"origin": "Earth", "epochs": [0.0], "states": [[1, 2, 3, 4, 5, 6]]}},
            }
        }
        store = TabulatedBodyStore.from_config(cfg)
        np.testing.assert_allclose(store.query_state("Moon", "Earth", 1.0e9), [1, 2, 3, 4, 5, 6])
        self.assertEqual(store.gravitational_parameter("Earth"), MU_EARTH)

    def test_from_config_rejects_bad_tables(self) -> None:
        cfg = {"bodies": {"Moon": {"ephemeris": {"epochs": [1.0, 0.0], "states": [[0] * 6, [0] * 6]}}}}
        with self.assertRaises(TypeMismatchError):
            TabulatedBodyStore.from_config(cfg)


def test_lookup_states_reports_reason_instead_of_raising() -> None:
    store = _store()
    ok = lookup_states(store, ["Moon"], ["Earth"], 0.0)
    assert ok.ok and ok.states.size == 6
    failed = lookup_states(store, ["Apollo"], ["Earth"], 0.0)
    assert not failed.ok
    assert "Apollo" in failed.reason
    assert not lookup_states(None, ["Moon"], ["Earth"], 0.0).ok
    assert not lookup_states(store, ["Moon"], ["Earth"], math.nan).ok
    assert not lookup_states(store, ["Moon"], [], 0.0).ok


def test_base_store_has_no_states() -> None:
    with pytest.raises(NotImplementedError):
        BodyStore().query_state("Moon", "Earth", 0.0)
    with pytest.raises(EphemerisUnavailableError):
        BodyStore().gravitational_parameter("Earth")


def test_circular_orbit_speed() -> None:
    state = keplerian_to_cartesian([7.0e6, 0.0, 0.0, 0.0, 0.0, 0.0], MU_EARTH)
    np.testing.assert_allclose(state[:3], [7.0e6, 0.0, 0.0], atol=1e-6)
    assert np.linalg.norm(state[3:]) == pytest.approx(math.sqrt(MU_EARTH / 7.0e6))


def test_invalid_elements_raise_value_error() -> None:
    with pytest.raises(ValueError):
        keplerian_to_cartesian([7.0e6, -0.1, 0.0, 0.0, 0.0, 0.0], MU_EARTH)
    with pytest.raises(ValueError):
        keplerian_to_cartesian([7.0e6, 0.0, 0.0, 0.0, 0.0, 0.0], 0.0)


def test_lookup_states_reports_malformed_store_output() -> None:
    class ScalarStore(BodyStore):
        def query_state(self, body, central_body, epoch):
            return np.float64(1.0)

    failed = lookup_states(ScalarStore(), ["Moon"], ["Earth"], 0.0)
    assert not failed.ok
    assert failed.reason
