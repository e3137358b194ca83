"""
Celestial bodies and the stock Kerbol system catalogue.
"""

import math
from dataclasses import dataclass
from typing import Optional

from . import constants as C
from .orbit import KeplerOrbit


@dataclass(frozen=True, eq=False)
class CelestialBody:
    """
    A gravitating body.

    Args:
        name: Body identity, compared by the encounter search
        mu: Gravitational parameter (m³/s²)
        radius: Mean radius (m)
        orbit: The body's own orbit around its parent, None for the primary
    """
    name: str
    mu: float
    radius: float
    orbit: Optional[KeplerOrbit] = None

    def __post_init__(self):
        if not self.mu > 0:
            raise ValueError(f"{self.name}: gravitational parameter must be positive.")
        if not self.radius >= 0:
            raise ValueError(f"{self.name}: radius must be non-negative.")

    @property
    def is_primary(self):
        return self.orbit is None


def make_kerbol_system(epoch=0.0):
    """
    Build Sun, Kerbin, Mun, Minmus and Duna with their parent orbits.

    Args:
        epoch: UT at which the catalogue mean anomalies hold

    Returns:
        dict: Body name -> CelestialBody
    """
    sun = CelestialBody("Sun", C.KERBOL_MU, C.KERBOL_RADIUS_M)

    def planet_orbit(parent, sma, mean_anomaly, e=0.0, inc=0.0, lan=0.0, arg_pe=0.0):
        return KeplerOrbit(sma, e, inc, lan, arg_pe, mean_anomaly, epoch, parent)

    kerbin = CelestialBody(
        "Kerbin", C.KERBIN_MU, C.KERBIN_RADIUS_M,
        planet_orbit(sun, C.KERBIN_SMA_M, C.KERBIN_MEAN_ANOMALY_DEG))
    duna = CelestialBody(
        "Duna", C.DUNA_MU, C.DUNA_RADIUS_M,
        planet_orbit(sun, C.DUNA_SMA_M, C.DUNA_MEAN_ANOMALY_DEG,
                     e=C.DUNA_ECCENTRICITY, inc=C.DUNA_INCLINATION_DEG, lan=C.DUNA_LAN_DEG))
    mun = CelestialBody(
        "Mun", C.MUN_MU, C.MUN_RADIUS_M,
        planet_orbit(kerbin, C.MUN_SMA_M, C.MUN_MEAN_ANOMALY_DEG))
    minmus = CelestialBody(
        "Minmus", C.MINMUS_MU, C.MINMUS_RADIUS_M,
        planet_orbit(kerbin, C.MINMUS_SMA_M, C.MINMUS_MEAN_ANOMALY_DEG,
                     inc=C.MINMUS_INCLINATION_DEG, lan=C.MINMUS_LAN_DEG,
                     arg_pe=C.MINMUS_ARG_PE_DEG))

    return {body.name: body for body in (sun, kerbin, mun, minmus, duna)}


def circular_orbit(body, altitude, epoch=0.0, inclination=0.0, lan=0.0,
                   phase=0.0, **patch):
    """
    Circular orbit `altitude` metres above `body`.

    `phase` is the argument of latitude at `epoch` in degrees.
    """
    a = body.radius + altitude
    if not math.isfinite(a) or a <= 0:
        raise ValueError(f"Invalid orbit radius {a} m around {body.name}.")
    return KeplerOrbit(a, 0.0, inclination, lan, 0.0, phase, epoch, body, **patch)
