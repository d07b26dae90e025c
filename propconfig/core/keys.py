from __future__ import annotations

# Configuration document keys.

PROPAGATORS = "propagators"
TERMINATION = "termination"
INITIAL_EPOCH = "initialEpoch"
FINAL_EPOCH = "finalEpoch"
OPTIONS = "options"
PRINT_INTERVAL = "printInterval"
BODIES = "bodies"
EXPORT = "export"
PROPAGATION = "propagation"


class Propagator:
    INTEGRATED_STATE_TYPE = "integratedStateType"
    INITIAL_STATES = "initialStates"
    BODIES_TO_PROPAGATE = "bodiesToPropagate"
    CENTRAL_BODIES = "centralBodies"
    TYPE = "type"
    ACCELERATIONS = "accelerations"
    MASS_RATE_MODELS = "massRateModels"
    TORQUES = "torques"


class Body:
    INITIAL_STATE = "initialState"
    MASS = "mass"
    ROTATIONAL_STATE = "rotationalState"
    EPHEMERIS = "ephemeris"
    GRAVITATIONAL_PARAMETER = "gravitationalParameter"


class BodyState:
    TYPE = "type"
    CENTRAL_BODY = "centralBody"
    CENTRAL_BODY_GRAVITATIONAL_PARAMETER = "centralBodyGravitationalParameter"
    CARTESIAN_COMPONENTS = ("x", "y", "z", "vx", "vy", "vz")
    SEMI_MAJOR_AXIS = "semiMajorAxis"
    ECCENTRICITY = "eccentricity"
    INCLINATION = "inclination"
    ARGUMENT_OF_PERIAPSIS = "argumentOfPeriapsis"
    LONGITUDE_OF_ASCENDING_NODE = "longitudeOfAscendingNode"
    TRUE_ANOMALY = "trueAnomaly"


class Ephemeris:
    ORIGIN = "origin"
    EPOCHS = "epochs"
    STATES = "states"


class Termination:
    CONDITIONS = "conditions"
    MEET_ALL = "meetAll"
    VARIABLE = "variable"
    LOWER_LIMIT = "lowerLimit"
    UPPER_LIMIT = "upperLimit"
    TERMINATE_EXACTLY = "terminateExactlyOnFinalCondition"


class Variable:
    TYPE = "type"
    DEPENDENT_VARIABLE_TYPE = "dependentVariableType"
    BODY = "body"
    RELATIVE_TO_BODY = "relativeToBody"
    MODEL_TYPE = "modelType"
    COMPONENT_INDEX = "componentIndex"


class Export:
    FILE = "file"
    VARIABLES = "variables"
    HEADER = "header"
    EPOCHS_IN_FIRST_COLUMN = "epochsInFirstColumn"
    ONLY_INITIAL_STEP = "onlyInitialStep"
    ONLY_FINAL_STEP = "onlyFinalStep"
    NUMERICAL_PRECISION = "numericalPrecision"
