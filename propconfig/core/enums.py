from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Any, Dict, FrozenSet, Generic, Mapping, Optional, TypeVar

from .errors import TypeMismatchError, UnknownTagError, UnsupportedTagError

E = TypeVar("E", bound=Enum)


class IntegratedStateType(Enum):
    HYBRID = "hybrid"
    TRANSLATIONAL = "translational"
    ROTATIONAL = "rotational"
    MASS = "mass"
    CUSTOM = "custom"


class TranslationalPropagatorType(Enum):
    COWELL = "cowell"
    ENCKE = "encke"
    GAUSS_KEPLERIAN = "gauss_keplerian"
    GAUSS_MODIFIED_EQUINOCTIAL = "gauss_modified_equinoctial"
    USM_QUATERNIONS = "usm_quaternions"
    USM_MODIFIED_RODRIGUES_PARAMETERS = "usm_modified_rodrigues_parameters"
    USM_EXPONENTIAL_MAP = "usm_exponential_map"


class VariableType(Enum):
    INDEPENDENT = "independent"
    CPU_TIME = "cpu_time"
    STATE = "state"
    DEPENDENT = "dependent"


class DependentVariableType(Enum):
    MACH_NUMBER = "mach_number"
    ALTITUDE = "altitude"
    AIRSPEED = "airspeed"
    LOCAL_DENSITY = "local_density"
    RELATIVE_SPEED = "relative_speed"
    RELATIVE_POSITION = "relative_position"
    RELATIVE_DISTANCE = "relative_distance"
    RELATIVE_VELOCITY = "relative_velocity"
    TOTAL_ACCELERATION_NORM = "total_acceleration_norm"
    SINGLE_ACCELERATION_NORM = "single_acceleration_norm"
    TOTAL_ACCELERATION = "total_acceleration"
    SINGLE_ACCELERATION = "single_acceleration"
    BODY_MASS = "body_mass"
    KEPLERIAN_STATE = "keplerian_state"
    ROTATION_MATRIX_TO_BODY_FIXED_FRAME = "rotation_matrix_to_body_fixed_frame"
    SINGLE_TORQUE_NORM = "single_torque_norm"
    CUSTOM = "custom"


@dataclass(frozen=True)
class EnumTable(Generic[E]):
    """Immutable tag <-> text table.

    ``aliases`` are extra spellings accepted on decode only; ``unsupported`` is
    the default set of tags that decode/encode reject even though they are
    known.
    """

    name: str
    texts: Mapping[E, str]
    aliases: Mapping[str, E] = field(default_factory=dict)
    unsupported: FrozenSet[E] = frozenset()

    def lookup(self) -> Dict[str, E]:
        table = {text: value for value, text in self.texts.items()}
        table.update(self.aliases)
        return table


def _check_supported(
    value: E, table: EnumTable[E], unsupported: Optional[AbstractSet[E]], text: str, path: Any = None
) -> None:
    rejected = table.unsupported if unsupported is None else unsupported
    if value in rejected:
        raise UnsupportedTagError(f"{table.name} '{text}' is not supported", path)


def enum_from_text(
    text: Any, table: EnumTable[E], unsupported: Optional[AbstractSet[E]] = None, path: Any = None
) -> E:
    if not isinstance(text, str):
        raise TypeMismatchError(f"{table.name} must be a string, got {type(text).__name__}", path)
    value = table.lookup().get(text)
    if value is None:
        allowed = ", ".join(table.texts.values())
        raise UnknownTagError(f"unknown {table.name} '{text}' (expected one of: {allowed})", path)
    _check_supported(value, table, unsupported, text, path)
    return value


def text_from_enum(value: E, table: EnumTable[E], unsupported: Optional[AbstractSet[E]] = None) -> str:
    text = table.texts.get(value)
    if text is None:
        raise UnknownTagError(f"{table.name} {value!r} has no text representation")
    _check_supported(value, table, unsupported, text)
    return text


INTEGRATED_STATE_TYPES: EnumTable[IntegratedStateType] = EnumTable(
    name="integrated state type",
    texts={
        IntegratedStateType.HYBRID: "hybrid",
        IntegratedStateType.TRANSLATIONAL: "translational",
        IntegratedStateType.ROTATIONAL: "rotational",
        IntegratedStateType.MASS: "mass",
        IntegratedStateType.CUSTOM: "custom",
    },
    aliases={"composite": IntegratedStateType.HYBRID},
)

# Propagators inside a multi-type propagator can be neither hybrid nor custom.
UNSUPPORTED_INTEGRATED_STATE_TYPES: FrozenSet[IntegratedStateType] = frozenset(
    {IntegratedStateType.HYBRID, IntegratedStateType.CUSTOM}
)

TRANSLATIONAL_PROPAGATOR_TYPES: EnumTable[TranslationalPropagatorType] = EnumTable(
    name="translational propagator type",
    texts={
        TranslationalPropagatorType.COWELL: "cowell",
        TranslationalPropagatorType.ENCKE: "encke",
        TranslationalPropagatorType.GAUSS_KEPLERIAN: "gaussKeplerian",
        TranslationalPropagatorType.GAUSS_MODIFIED_EQUINOCTIAL: "gaussModifiedEquinoctial",
        TranslationalPropagatorType.USM_QUATERNIONS: "unifiedStateModelQuaternions",
        TranslationalPropagatorType.USM_MODIFIED_RODRIGUES_PARAMETERS: "unifiedStateModelModifiedRodriguesParameters",
        TranslationalPropagatorType.USM_EXPONENTIAL_MAP: "unifiedStateModelExponentialMap",
    },
    unsupported=frozenset(
        {
            TranslationalPropagatorType.USM_QUATERNIONS,
            TranslationalPropagatorType.USM_MODIFIED_RODRIGUES_PARAMETERS,
            TranslationalPropagatorType.USM_EXPONENTIAL_MAP,
        }
    ),
)

VARIABLE_TYPES: EnumTable[VariableType] = EnumTable(
    name="variable type",
    texts={
        VariableType.INDEPENDENT: "independent",
        VariableType.CPU_TIME: "cpuTime",
        VariableType.STATE: "state",
        VariableType.DEPENDENT: "dependent",
    },
    aliases={"epoch": VariableType.INDEPENDENT},
)

DEPENDENT_VARIABLE_TYPES: EnumTable[DependentVariableType] = EnumTable(
    name="dependent variable type",
    texts={
        DependentVariableType.MACH_NUMBER: "machNumber",
        DependentVariableType.ALTITUDE: "altitude",
        DependentVariableType.AIRSPEED: "airspeed",
        DependentVariableType.LOCAL_DENSITY: "localDensity",
        DependentVariableType.RELATIVE_SPEED: "relativeSpeed",
        DependentVariableType.RELATIVE_POSITION: "relativePosition",
        DependentVariableType.RELATIVE_DISTANCE: "relativeDistance",
        DependentVariableType.RELATIVE_VELOCITY: "relativeVelocity",
        DependentVariableType.TOTAL_ACCELERATION_NORM: "totalAccelerationNorm",
        DependentVariableType.SINGLE_ACCELERATION_NORM: "accelerationNorm",
        DependentVariableType.TOTAL_ACCELERATION: "totalAcceleration",
        DependentVariableType.SINGLE_ACCELERATION: "acceleration",
        DependentVariableType.BODY_MASS: "mass",
        DependentVariableType.KEPLERIAN_STATE: "keplerElements",
        DependentVariableType.ROTATION_MATRIX_TO_BODY_FIXED_FRAME: "rotationMatrixToBodyFixedFrame",
        DependentVariableType.SINGLE_TORQUE_NORM: "torqueNorm",
        DependentVariableType.CUSTOM: "custom",
    },
    unsupported=frozenset({DependentVariableType.CUSTOM}),
)

# Per-body block size of an initial-state vector.
SINGLE_INTEGRATION_SIZE: Dict[IntegratedStateType, int] = {
    IntegratedStateType.TRANSLATIONAL: 6,
    IntegratedStateType.ROTATIONAL: 7,
    IntegratedStateType.MASS: 1,
}


class StateRepresentation(Enum):
    CARTESIAN = "cartesian"
    KEPLERIAN = "keplerian"


STATE_REPRESENTATIONS: EnumTable[StateRepresentation] = EnumTable(
    name="state representation",
    texts={
        StateRepresentation.CARTESIAN: "cartesian",
        StateRepresentation.KEPLERIAN: "keplerian",
    },
)
