from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union

import numpy as np

from .enums import (
    DependentVariableType,
    IntegratedStateType,
    SINGLE_INTEGRATION_SIZE,
    TranslationalPropagatorType,
    VariableType,
)

# Returned by epoch extraction when a termination condition has no time bound.
NOT_A_TIME_BOUND = float("nan")
# Print interval of an aggregate that prints no periodic diagnostics.
PRINT_INTERVAL_UNSET = float("nan")

ModelList = List[Dict[str, Any]]
BodyModelMap = Dict[str, ModelList]
BodyPairModelMap = Dict[str, Dict[str, ModelList]]


def is_time_bound(epoch: Optional[float]) -> bool:
    return epoch is not None and math.isfinite(epoch)


def _values_equal(a: Any, b: Any) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return np.array_equal(np.asarray(a, dtype=float), np.asarray(b, dtype=float))
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return bool(a == b)


class _FieldwiseEquality:
    """Field-by-field equality that compares vectors element-wise and NaN to NaN."""

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return all(_values_equal(getattr(self, f.name), getattr(other, f.name)) for f in fields(self))

    __hash__ = None  # type: ignore[assignment]


# Variables.


@dataclass(frozen=True)
class IndependentVariableSettings:
    variable_type: ClassVar[VariableType] = VariableType.INDEPENDENT


@dataclass(frozen=True)
class CpuTimeVariableSettings:
    variable_type: ClassVar[VariableType] = VariableType.CPU_TIME


@dataclass(frozen=True)
class StateVariableSettings:
    variable_type: ClassVar[VariableType] = VariableType.STATE


@dataclass(frozen=True)
class DependentVariableSettings:
    dependent_variable_type: DependentVariableType
    body: str
    relative_to_body: str = ""
    model_type: str = ""
    component_index: Optional[int] = None

    variable_type: ClassVar[VariableType] = VariableType.DEPENDENT


VariableSettings = Union[
    IndependentVariableSettings,
    CpuTimeVariableSettings,
    StateVariableSettings,
    DependentVariableSettings,
]


# Termination conditions.


@dataclass(frozen=True)
class TimeTerminationSettings:
    epoch: float


@dataclass(frozen=True)
class DependentVariableTerminationSettings:
    variable: DependentVariableSettings
    limit: float
    use_as_lower_limit: bool
    terminate_exactly_on_final_condition: bool = False


@dataclass(frozen=True)
class HybridTerminationSettings:
    conditions: Tuple["TerminationSettings", ...]
    fulfill_single_condition: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "conditions", tuple(self.conditions))


TerminationSettings = Union[
    TimeTerminationSettings,
    DependentVariableTerminationSettings,
    HybridTerminationSettings,
]


# Export.


@dataclass(frozen=True)
class ExportSettings:
    output_file: str
    variables: Tuple[VariableSettings, ...]
    header: str = ""
    epochs_in_first_column: bool = True
    only_initial_step: bool = False
    only_final_step: bool = False
    numerical_precision: int = 15

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", tuple(self.variables))


# Propagators.


@dataclass(frozen=True, eq=False)
class SingleArcPropagatorSettings(_FieldwiseEquality):
    bodies_to_propagate: Tuple[str, ...]
    initial_states: np.ndarray

    state_type: ClassVar[IntegratedStateType]

    def __post_init__(self) -> None:
        object.__setattr__(self, "bodies_to_propagate", tuple(self.bodies_to_propagate))
        states = np.array(self.initial_states, dtype=float).reshape(-1)
        states.setflags(write=False)
        object.__setattr__(self, "initial_states", states)

    @property
    def single_body_state_size(self) -> int:
        return SINGLE_INTEGRATION_SIZE[self.state_type]

    @property
    def expected_state_size(self) -> int:
        return self.single_body_state_size * len(self.bodies_to_propagate)

    def has_initial_states(self) -> bool:
        return self.initial_states.size > 0


@dataclass(frozen=True, eq=False)
class TranslationalStatePropagatorSettings(SingleArcPropagatorSettings):
    central_bodies: Tuple[str, ...]
    acceleration_settings: BodyPairModelMap
    propagator: TranslationalPropagatorType = TranslationalPropagatorType.COWELL

    state_type: ClassVar[IntegratedStateType] = IntegratedStateType.TRANSLATIONAL

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "central_bodies", tuple(self.central_bodies))


@dataclass(frozen=True, eq=False)
class RotationalStatePropagatorSettings(SingleArcPropagatorSettings):
    torque_settings: BodyPairModelMap

    state_type: ClassVar[IntegratedStateType] = IntegratedStateType.ROTATIONAL


@dataclass(frozen=True, eq=False)
class MassPropagatorSettings(SingleArcPropagatorSettings):
    mass_rate_settings: BodyModelMap

    state_type: ClassVar[IntegratedStateType] = IntegratedStateType.MASS


@dataclass(frozen=True, eq=False)
class MultiTypePropagatorSettings(_FieldwiseEquality):
    propagators: Tuple[SingleArcPropagatorSettings, ...]
    termination: TerminationSettings
    print_interval: float = PRINT_INTERVAL_UNSET
    dependent_variables: Optional[Tuple[DependentVariableSettings, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "propagators", tuple(self.propagators))
        if self.dependent_variables is not None:
            object.__setattr__(self, "dependent_variables", tuple(self.dependent_variables))

    @property
    def has_print_interval(self) -> bool:
        return not math.isnan(self.print_interval)

    def propagators_by_state_type(self) -> Dict[IntegratedStateType, List[SingleArcPropagatorSettings]]:
        grouped: Dict[IntegratedStateType, List[SingleArcPropagatorSettings]] = {}
        for state_type in IntegratedStateType:
            members = [p for p in self.propagators if p.state_type == state_type]
            if members:
                grouped[state_type] = members
        return grouped

    def initial_states(self) -> np.ndarray:
        """Concatenated initial states in propagator order."""
        if not self.propagators:
            return np.zeros(0, dtype=float)
        return np.concatenate([p.initial_states for p in self.propagators])
