from __future__ import annotations

import unittest

import numpy as np
import pytest

from propconfig.core.enums import IntegratedStateType, TranslationalPropagatorType
from propconfig.core.errors import TypeMismatchError, UndefinedKeyError, UnknownTagError, UnsupportedVariantError
from propconfig.core.models import (
    MassPropagatorSettings,
    RotationalStatePropagatorSettings,
    TranslationalStatePropagatorSettings,
)
from propconfig.propagation.propagators import single_arc_from_config, single_arc_to_config

BODIES = ["Apollo", "Gemini", "Mercury"]


def _translational_cfg(n_values: int = 18) -> dict:
    return {
        "integratedStateType": "translational",
        "type": "encke",
        "initialStates": [float(i) for i in range(n_values)],
        "bodiesToPropagate": list(BODIES),
        "centralBodies": ["Earth"] * 3,
        "accelerations": {b: {"Earth": [{"type": "pointMassGravity"}]} for b in BODIES},
    }


class SingleVariantCodecTests(unittest.TestCase):
    def test_translational_decode(self) -> None:
        settings = single_arc_from_config(_translational_cfg())
        self.assertIsInstance(settings, TranslationalStatePropagatorSettings)
        self.assertEqual(settings.propagator, TranslationalPropagatorType.ENCKE)
        self.assertEqual(settings.central_bodies, ("Earth", "Earth", "Earth"))
        self.assertEqual(settings.initial_states.size, 18)

    def test_wrong_vector_length_is_rejected(self) -> None:
        with self.assertRaises(TypeMismatchError) as ctx:
            single_arc_from_config(_translational_cfg(15), ("propagators", 0))
        self.assertEqual(ctx.exception.key_path, "propagators[0].initialStates")

    def test_composite_and_hybrid_blocks_are_rejected(self) -> None:
        for text in ("composite", "hybrid"):
            cfg = _translational_cfg()
            cfg["integratedStateType"] = text
            with self.assertRaises(UnsupportedVariantError):
                single_arc_from_config(cfg)

    def test_custom_state_type_is_rejected(self) -> None:
        cfg = _translational_cfg()
        cfg["integratedStateType"] = "custom"
        with self.assertRaises(UnsupportedVariantError):
            single_arc_from_config(cfg)

    def test_unknown_state_type_is_an_unknown_tag(self) -> None:
        cfg = _translational_cfg()
        cfg["integratedStateType"] = "translation"
        with self.assertRaises(UnknownTagError):
            single_arc_from_config(cfg)

    def test_translational_round_trip(self) -> None:
        settings = single_arc_from_config(_translational_cfg())
        encoded = single_arc_to_config(settings)
        self.assertNotIn("integratedStateType", encoded)
        self.assertEqual(single_arc_from_config(encoded), settings)

    def test_defaults_are_applied_when_omitted(self) -> None:
        cfg = _translational_cfg()
        del cfg["integratedStateType"]
        del cfg["type"]
        del cfg["initialStates"]
        settings = single_arc_from_config(cfg)
        self.assertEqual(settings.state_type, IntegratedStateType.TRANSLATIONAL)
        self.assertEqual(settings.propagator, TranslationalPropagatorType.COWELL)
        self.assertFalse(settings.has_initial_states())
        self.assertNotIn("initialStates", single_arc_to_config(settings))


def test_mass_round_trip() -> None:
    cfg = {
        "integratedStateType": "mass",
        "bodiesToPropagate": ["Apollo"],
        "initialStates": [5000.0],
        "massRateModels": {"Apollo": [{"type": "fromThrust"}]},
    }
    settings = single_arc_from_config(cfg)
    assert isinstance(settings, MassPropagatorSettings)
    assert single_arc_to_config(settings) == cfg


def test_rotational_round_trip() -> None:
    cfg = {
        "integratedStateType": "rotational",
        "bodiesToPropagate": ["Apollo"],
        "initialStates": [1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
        "torques": {"Apollo": {"Earth": [{"type": "secondOrderGravitational"}]}},
    }
    settings = single_arc_from_config(cfg)
    assert isinstance(settings, RotationalStatePropagatorSettings)
    assert settings.expected_state_size == 7
    assert single_arc_to_config(settings) == cfg


def test_translational_requires_central_body_per_body() -> None:
    cfg = _translational_cfg()
    cfg["centralBodies"] = ["Earth"]
    with pytest.raises(TypeMismatchError):
        single_arc_from_config(cfg)
    del cfg["centralBodies"]
    with pytest.raises(UndefinedKeyError):
        single_arc_from_config(cfg)


def test_empty_bodies_to_propagate_is_rejected() -> None:
    with pytest.raises(TypeMismatchError):
        single_arc_from_config({"integratedStateType": "mass", "bodiesToPropagate": [], "massRateModels": {}})


def test_encode_refuses_unknown_settings_types() -> None:
    with pytest.raises(UnsupportedVariantError):
        single_arc_to_config(object())


def test_decoded_state_vector_is_read_only() -> None:
    settings = single_arc_from_config(_translational_cfg())
    with pytest.raises(ValueError):
        settings.initial_states[0] = 1.0
    np.testing.assert_array_equal(settings.initial_states, np.arange(18, dtype=float))
