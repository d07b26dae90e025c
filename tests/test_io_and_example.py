from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from propconfig.core.errors import TypeMismatchError
from propconfig.core.io import load_document, write_document
from propconfig.ephemeris import TabulatedBodyStore
from propconfig.propagation import (
    decode_propagation_settings,
    encode_propagation_settings,
    export_list_from_config,
    reset_dependent_variables,
    variable_id,
)

EXAMPLE = Path(__file__).resolve().parents[1] / "configs" / "example.yaml"


def test_yaml_and_json_round_trip(tmp_path: Path) -> None:
    doc = {"finalEpoch": 10.0, "propagators": [{"initialStates": np.arange(3, dtype=float)}]}
    for name in ("doc.yaml", "doc.json"):
        path = tmp_path / "nested" / name
        write_document(path, doc)
        loaded = load_document(path)
        assert loaded == {"finalEpoch": 10.0, "propagators": [{"initialStates": [0.0, 1.0, 2.0]}]}


def test_load_document_requires_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(TypeMismatchError):
        load_document(path)
    with pytest.raises(FileNotFoundError):
        load_document(tmp_path / "missing.json")


def test_example_config_decodes() -> None:
    doc = load_document(EXAMPLE)
    assert isinstance(doc["bodies"]["Earth"]["gravitationalParameter"], float)
    assert isinstance(doc["bodies"]["Apollo"]["initialState"]["semiMajorAxis"], float)
    propagation = doc["propagation"]
    propagation["bodies"] = doc["bodies"]
    store = TabulatedBodyStore.from_config(propagation)

    settings = decode_propagation_settings(propagation, store)
    assert settings.initial_states().size == 7
    assert settings.initial_states()[6] == 5000.0
    assert settings.print_interval == 3600.0

    settings = reset_dependent_variables(settings, export_list_from_config(doc["export"]))
    assert [variable_id(v) for v in settings.dependent_variables] == ["altitude(Apollo,Earth)", "mass(Apollo)"]
    assert encode_propagation_settings(settings)["propagators"][1]["initialStates"] == [5000.0]
