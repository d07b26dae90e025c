from __future__ import annotations

import unittest

import numpy as np

from propconfig.core.enums import DependentVariableType
from propconfig.core.models import (
    DependentVariableSettings,
    ExportSettings,
    IndependentVariableSettings,
    MultiTypePropagatorSettings,
    TimeTerminationSettings,
    TranslationalStatePropagatorSettings,
)
from propconfig.propagation.export import (
    export_list_from_config,
    export_settings_from_config,
    export_settings_to_config,
)
from propconfig.propagation.variables import (
    dedup_dependent_variables,
    reset_dependent_variables,
    variable_from_config,
    variable_id,
    variable_to_config,
)

ALTITUDE = {"dependentVariableType": "altitude", "body": "Earth", "relativeToBody": "Moon"}
MASS = {"dependentVariableType": "mass", "body": "Moon"}


def _export(*variables) -> ExportSettings:
    return ExportSettings(output_file="out.txt", variables=[variable_from_config(v) for v in variables])


class VariableDeduplicatorTests(unittest.TestCase):
    def test_duplicates_across_exports_collapse_in_first_seen_order(self) -> None:
        specs = [_export(ALTITUDE, MASS), _export({"type": "independent"}, ALTITUDE)]
        ids = [variable_id(v) for v in dedup_dependent_variables(specs)]
        self.assertEqual(ids, ["altitude(Earth,Moon)", "mass(Moon)"])

    def test_non_dependent_variables_are_skipped(self) -> None:
        specs = [_export({"type": "independent"}, {"type": "cpuTime"}, {"type": "state"})]
        self.assertEqual(dedup_dependent_variables(specs), [])

    def test_reset_replaces_dependent_variables_of_aggregate(self) -> None:
        settings = MultiTypePropagatorSettings(
            propagators=[
                TranslationalStatePropagatorSettings(
                    bodies_to_propagate=["Moon"],
                    initial_states=np.zeros(6),
                    central_bodies=["Earth"],
                    acceleration_settings={},
                )
            ],
            termination=TimeTerminationSettings(10.0),
        )
        out = reset_dependent_variables(settings, [_export(MASS, MASS)])
        self.assertIsNone(settings.dependent_variables)
        self.assertEqual(out.dependent_variables, (variable_from_config(MASS),))


def test_variable_id_includes_model_and_component() -> None:
    variable = DependentVariableSettings(
        DependentVariableType.SINGLE_ACCELERATION_NORM, "Apollo", "Earth", model_type="aerodynamic",
        component_index=0,
    )
    assert variable_id(variable) == "accelerationNorm(aerodynamic,Apollo,Earth)[0]"


def test_variable_codec_round_trip() -> None:
    for cfg in (ALTITUDE, MASS, {"type": "independent"}, {"type": "state"}):
        assert variable_to_config(variable_from_config(cfg)) == cfg
    assert variable_from_config({"type": "epoch"}) == IndependentVariableSettings()


def test_export_defaults_are_omitted_on_encode() -> None:
    cfg = {"file": "out.txt", "variables": [ALTITUDE], "onlyFinalStep": True}
    spec = export_settings_from_config(cfg)
    assert spec.epochs_in_first_column is True
    assert spec.numerical_precision == 15
    assert export_settings_to_config(spec) == cfg


def test_export_section_may_be_single_mapping_or_list() -> None:
    cfg = {"file": "out.txt", "variables": [MASS]}
    assert export_list_from_config(cfg) == export_list_from_config([cfg])
