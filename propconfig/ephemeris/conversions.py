from __future__ import annotations

import math
from typing import Sequence

import numpy as np


def _rotation_r3(angle_rad: float) -> np.ndarray:
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], dtype=float)


def _rotation_r1(angle_rad: float) -> np.ndarray:
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]], dtype=float)


def keplerian_to_cartesian(elements: Sequence[float], gravitational_parameter: float) -> np.ndarray:
    """Convert ``[a, e, i, omega, raan, true_anomaly]`` (SI units, radians) to a Cartesian state.

    Hyperbolic orbits use a negative semi-major axis.
    """
    a, e, inc, arg_per, raan, true_anom = (float(x) for x in elements)
    if gravitational_parameter <= 0.0:
        raise ValueError("gravitational parameter must be > 0")
    if e < 0.0:
        raise ValueError("eccentricity must be >= 0")
    if abs(e - 1.0) < 1e-12:
        raise ValueError("parabolic orbits cannot be defined by their semi-major axis")

    p = a * (1.0 - e * e)
    if p <= 0.0:
        raise ValueError("semi-latus rectum must be > 0 (check the sign of the semi-major axis)")
    r_mag = p / (1.0 + e * math.cos(true_anom))
    if r_mag <= 0.0:
        raise ValueError("true anomaly outside the asymptotes of the hyperbola")

    r_pqw = np.array([r_mag * math.cos(true_anom), r_mag * math.sin(true_anom), 0.0], dtype=float)
    v_scale = math.sqrt(gravitational_parameter / p)
    v_pqw = np.array([-v_scale * math.sin(true_anom), v_scale * (e + math.cos(true_anom)), 0.0], dtype=float)

    rot = _rotation_r3(raan) @ _rotation_r1(inc) @ _rotation_r3(arg_per)
    return np.concatenate([rot @ r_pqw, rot @ v_pqw])
