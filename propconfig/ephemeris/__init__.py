from .body_store import BodyStore, EphemerisLookup, TabulatedBodyStore, TabulatedEphemeris, lookup_states
from .conversions import keplerian_to_cartesian

__all__ = [
    "BodyStore",
    "EphemerisLookup",
    "TabulatedBodyStore",
    "TabulatedEphemeris",
    "lookup_states",
    "keplerian_to_cartesian",
]
