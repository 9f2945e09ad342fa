"""Breit-Wigner change of variables.

Maps a uniform coordinate ``u`` in [0, 1] onto the invariant mass squared ``s``
of a propagator of mass ``m`` and width ``Γ``::

    y(u) = -atan(m/Γ) + (π/2 + atan(m/Γ)) u
    s(u) = m Γ tan(y) + m²
    ds/du = (π/2 + atan(m/Γ)) m Γ / cos²(y)

Multiplying the integrand by ``ds/du`` flattens the 1/((s - m²)² + m²Γ²) peak,
so integrating the propagator over s in [0, ∞) becomes integrating a constant
over u in [0, 1].
"""

from __future__ import annotations

import logging

import numpy as np
import numpy.typing as npt

from .config import ParameterSet
from .errors import ConfigurationError
from .module import Module
from .pool import InputTag, Pool

logger = logging.getLogger(__name__)

PRECISIONS = ("single", "double")


def breit_wigner_transform(u: npt.ArrayLike, mass: float, width: float) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(s, jacobian)`` for ``u`` (scalar or array), computed in double precision."""
    a = np.arctan(np.divide(mass, width))
    span = np.pi / 2.0 + a
    y = -a + span * np.asarray(u, dtype=np.float64)
    s = mass * width * np.tan(y) + mass * mass
    jacobian = span * mass * width / (np.cos(y) * np.cos(y))
    return s, jacobian


def _bind_precision(value: float, precision: str) -> float:
    if precision == "single":
        return float(np.float32(value))
    return value


class BreitWignerGenerator(Module):
    """Generate ``s`` distributed according to a relativistic Breit-Wigner.

    Parameters: ``mass`` and ``width`` (GeV), ``ps_point`` (input tag of the
    sampler coordinate), optional ``precision`` (``"single"`` by default: only
    the mass and width inputs are rounded to 32-bit floats; every expression
    derived from them is still evaluated in double precision).

    Outputs: ``s`` and ``jacobian``. Adds one integration dimension.
    """

    def __init__(self, pool: Pool, parameters: ParameterSet) -> None:
        super().__init__(pool, parameters)

        precision = parameters.get("precision", str, "single")
        if precision not in PRECISIONS:
            raise ConfigurationError(
                f"Invalid precision for module '{self.name}': {precision!r} (expected one of {', '.join(PRECISIONS)})"
            )
        self.mass = _bind_precision(parameters.get("mass", float), precision)
        self.width = _bind_precision(parameters.get("width", float), precision)

        self._ps_point = parameters.get("ps_point", InputTag).resolve(pool, float)

        self._s = self.produce("s", float)
        self._jacobian = self.produce("jacobian", float)

        logger.debug("%s: mass=%g width=%g precision=%s", self.name, self.mass, self.width, precision)

    def work(self) -> None:
        s, jacobian = breit_wigner_transform(self._ps_point.get(), self.mass, self.width)
        self._s.set(float(s))
        self._jacobian.set(float(jacobian))

    def dimensions(self) -> int:
        return 1
