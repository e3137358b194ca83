"""
Two-body Keplerian orbit patch used as the orbit model for node planning.

Only elliptic patches are modelled. Patch transitions are not solved here:
the caller states how a patch ends (`patch_end_transition`) and when
(`end_ut`), the way a patched-conic solver would hand them over.
"""

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np
from scipy.optimize import newton
from scipy.spatial.transform import Rotation

from .constants import NODE_UT_ITERATIONS, ZUP_X, ZUP_Y, ZUP_Z
from .vectors import angle360, normalize, rotate_about_axis, wrap_pi

# sin(i) below this is an equatorial orbit with no defined node line
_EQUATORIAL_SIN_I = 1e-9


class PatchTransition(Enum):
    """How an orbit patch ends."""
    INITIAL = "initial"
    FINAL = "final"
    ENCOUNTER = "encounter"
    ESCAPE = "escape"
    MANEUVER = "maneuver"


def solve_kepler(mean_anomaly, eccentricity, tol=1e-12):
    """
    Solve Kepler's equation M = E - e sin(E) for the eccentric anomaly.

    Args:
        mean_anomaly: Mean anomaly in radians
        eccentricity: Orbit eccentricity (0 <= e < 1)
        tol: Newton tolerance

    Returns:
        float: Eccentric anomaly in radians
    """
    M = wrap_pi(mean_anomaly)
    e = eccentricity
    E0 = math.copysign(math.pi, M) if e > 0.8 else M
    return float(newton(
        lambda E: E - e * math.sin(E) - M,
        E0,
        fprime=lambda E: 1.0 - e * math.cos(E),
        tol=tol,
        maxiter=100,
    ))


def eccentric_to_true(E, e):
    return 2.0 * math.atan2(math.sqrt(1.0 + e) * math.sin(E / 2.0),
                            math.sqrt(1.0 - e) * math.cos(E / 2.0))


def true_to_eccentric(nu, e):
    return 2.0 * math.atan2(math.sqrt(1.0 - e) * math.sin(nu / 2.0),
                            math.sqrt(1.0 + e) * math.cos(nu / 2.0))


@dataclass(frozen=True, eq=False)
class KeplerOrbit:
    """
    Elliptic orbit patch around `reference_body`.

    Units: metres, seconds, degrees. `epoch` is the UT at which the patch
    starts and at which `mean_anomaly_at_epoch` holds. `end_ut` only means
    something when `patch_end_transition` is not FINAL.
    """
    semi_major_axis: float
    eccentricity: float
    inclination: float
    lan: float
    argument_of_periapsis: float
    mean_anomaly_at_epoch: float
    epoch: float
    reference_body: object
    patch_end_transition: PatchTransition = PatchTransition.FINAL
    end_ut: float = math.inf

    def __post_init__(self):
        if not self.semi_major_axis > 0:
            raise ValueError("Semi-major axis must be positive.")
        if not (0.0 <= self.eccentricity < 1.0):
            raise ValueError(f"Only elliptic orbits are supported (0 <= e < 1). Got: {self.eccentricity}")
        if not (0.0 <= self.inclination <= 180.0):
            raise ValueError(f"Inclination must be in range [0, 180] degrees. Got: {self.inclination}")
        for name in ("lan", "argument_of_periapsis", "mean_anomaly_at_epoch", "epoch"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite. Got: {getattr(self, name)}")

    @classmethod
    def from_state_vectors(cls, position, velocity, ut, reference_body, **patch):
        """
        Build the orbit through `position`/`velocity` (relative to the body) at `ut`.

        Args:
            position: Position vector (m)
            velocity: Velocity vector (m/s)
            ut: Universal time of the state, becomes the patch epoch
            reference_body: Body being orbited
            **patch: `patch_end_transition` / `end_ut` passed through

        Returns:
            KeplerOrbit
        """
        mu = reference_body.mu
        r = np.asarray(position, dtype=float)
        v = np.asarray(velocity, dtype=float)
        r_mag = np.linalg.norm(r)
        v_mag = np.linalg.norm(v)

        h = np.cross(r, v)
        h_hat = normalize(h)
        e_vec = ((v_mag**2 - mu / r_mag) * r - np.dot(r, v) * v) / mu
        e = float(np.linalg.norm(e_vec))
        a = 1.0 / (2.0 / r_mag - v_mag**2 / mu)
        inc = math.degrees(math.acos(np.clip(h_hat[2], -1.0, 1.0)))

        node = np.cross(ZUP_Z, h)
        if np.linalg.norm(node) <= _EQUATORIAL_SIN_I * np.linalg.norm(h):
            node_hat = ZUP_X
        else:
            node_hat = node / np.linalg.norm(node)
        lan = angle360(math.degrees(math.atan2(node_hat[1], node_hat[0])))

        # in-plane axis 90 degrees ahead of the node
        ahead = np.cross(h_hat, node_hat)
        arg_lat = math.atan2(np.dot(r, ahead), np.dot(r, node_hat))
        if e < 1e-11:
            e = 0.0
            arg_pe = 0.0
        else:
            arg_pe = math.atan2(np.dot(e_vec, ahead), np.dot(e_vec, node_hat))
        nu = arg_lat - arg_pe

        E = true_to_eccentric(nu, e)
        M = E - e * math.sin(E)
        return cls(a, e, inc, lan, angle360(math.degrees(arg_pe)),
                   angle360(math.degrees(M)), ut, reference_body, **patch)

    @property
    def mu(self):
        return self.reference_body.mu

    @property
    def mean_motion(self):
        """n = sqrt(mu / a^3), rad/s."""
        return math.sqrt(self.mu / self.semi_major_axis**3)

    @property
    def period(self):
        return 2.0 * math.pi / self.mean_motion

    @property
    def semi_latus_rectum(self):
        return self.semi_major_axis * (1.0 - self.eccentricity**2)

    @property
    def _rotation(self):
        # perifocal -> inertial: Rz(LAN) Rx(i) Rz(argPe)
        return Rotation.from_euler(
            "ZXZ", [self.lan, self.inclination, self.argument_of_periapsis], degrees=True)

    @property
    def h(self):
        """Specific angular momentum vector (m²/s)."""
        return math.sqrt(self.mu * self.semi_latus_rectum) * self.orbit_normal()

    def orbit_normal(self):
        return self._rotation.apply(ZUP_Z)

    def periapsis_direction(self):
        return self._rotation.apply(ZUP_X)

    def an_vector(self):
        """
        Unit vector toward the ascending node on the equatorial plane.

        Equatorial orbits have no node line; the X axis rotated by LAN is
        used instead.
        """
        h = self.h
        an = np.cross(ZUP_Z, h)
        if np.linalg.norm(an) <= _EQUATORIAL_SIN_I * np.linalg.norm(h):
            return rotate_about_axis(ZUP_X, ZUP_Z, self.lan)
        return an / np.linalg.norm(an)

    def mean_anomaly_at_ut(self, ut):
        """Mean anomaly in radians (unwrapped)."""
        return math.radians(self.mean_anomaly_at_epoch) + self.mean_motion * (ut - self.epoch)

    def true_anomaly_at_ut(self, ut):
        """True anomaly at `ut`, degrees in [0, 360)."""
        e = self.eccentricity
        E = solve_kepler(self.mean_anomaly_at_ut(ut), e)
        return angle360(math.degrees(eccentric_to_true(E, e)))

    def radius_at_true_anomaly(self, true_anomaly):
        nu = math.radians(true_anomaly)
        return self.semi_latus_rectum / (1.0 + self.eccentricity * math.cos(nu))

    def _perifocal_state(self, ut):
        nu = math.radians(self.true_anomaly_at_ut(ut))
        e = self.eccentricity
        r = self.radius_at_true_anomaly(math.degrees(nu))
        r_pqw = np.array([r * math.cos(nu), r * math.sin(nu), 0.0])
        speed = math.sqrt(self.mu / self.semi_latus_rectum)
        v_pqw = np.array([-speed * math.sin(nu), speed * (e + math.cos(nu)), 0.0])
        return r_pqw, v_pqw

    def position_at_ut(self, ut):
        """Position relative to the reference body at `ut` (m)."""
        r_pqw, _ = self._perifocal_state(ut)
        return self._rotation.apply(r_pqw)

    def velocity_at_ut(self, ut):
        """Orbital velocity relative to the reference body at `ut` (m/s)."""
        _, v_pqw = self._perifocal_state(ut)
        return self._rotation.apply(v_pqw)

    def true_anomaly_of_vector(self, vector):
        """
        True anomaly (degrees, [0, 360)) of the direction `vector`.

        The component out of the orbital plane is ignored.
        """
        p = self.periapsis_direction()
        q = self._rotation.apply(ZUP_Y)
        v = np.asarray(vector, dtype=float)
        return angle360(math.degrees(math.atan2(np.dot(v, q), np.dot(v, p))))

    def ut_for_true_anomaly(self, true_anomaly, iterations=NODE_UT_ITERATIONS, after=None):
        """
        First UT at or after `after` (default: the patch epoch) at which the
        orbit passes `true_anomaly`.

        The closed-form estimate from the mean anomaly is polished with
        `iterations` Newton passes on the true-anomaly residual.

        Args:
            true_anomaly: Target true anomaly in degrees
            iterations: Number of refinement passes
            after: UT the search starts from, None for the patch epoch

        Returns:
            float: Universal time
        """
        e = self.eccentricity
        nu = math.radians(true_anomaly)
        E = true_to_eccentric(nu, e)
        M = E - e * math.sin(E)
        start = self.epoch if after is None else after
        dM = (M - self.mean_anomaly_at_ut(start)) % (2.0 * math.pi)
        ut = start + dM / self.mean_motion

        h_mag = math.sqrt(self.mu * self.semi_latus_rectum)
        for _ in range(iterations):
            current = math.radians(self.true_anomaly_at_ut(ut))
            residual = wrap_pi(nu - current)
            r = self.radius_at_true_anomaly(math.degrees(current))
            ut += residual / (h_mag / r**2)
        return ut
