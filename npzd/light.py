"""
Providers of photosynthetically available radiation (PAR).

The NPZD kinetics only read PAR, they never compute it. A light model owns the
PAR field and is asked to refresh it once per host time step through
:meth:`LightAttenuationModel.update_PAR`, before any rates are evaluated.
"""
import abc
import math

from npzd import logger, runtime_state
from npzd.core.operators import numpy as npx
from npzd.exceptions import ConfigurationError
from npzd.time import hour


def default_surface_PAR(x, y, t):
    """Idealised diurnal cycle with a noon maximum of 100 W/m^2"""
    return 100 * max(0.0, math.cos(t * math.pi / (12 * hour)))


class LightAttenuationModel(metaclass=abc.ABCMeta):
    """Interface of light models used by :class:`npzd.model.NPZDModel`"""

    @abc.abstractmethod
    def update_PAR(self, host):
        """Recompute PAR for the current state of ``host``"""
        pass

    @abc.abstractmethod
    def auxiliary_fields(self):
        """Mapping from auxiliary field name to the field owned by this model"""
        pass

    def summary(self):
        return self.__class__.__qualname__


class PrescribedPAR(LightAttenuationModel):
    """PAR decaying exponentially with depth below a prescribed surface value.

    Parameters:
        grid: Vertical grid, PAR is defined at the cell centres ``grid.zt``.
        surface_PAR: Callable ``f(x, y, t)`` returning surface PAR in W/m^2.
        attenuation_coefficient: Light attenuation of water in 1/m.

    Hosts passed to :meth:`update_PAR` need a ``clock`` with a ``time`` attribute
    (in seconds) and may define ``x`` and ``y`` coordinates.
    """

    def __init__(self, grid, surface_PAR=default_surface_PAR, attenuation_coefficient=0.04):
        if not callable(surface_PAR):
            raise ConfigurationError("surface_PAR must be callable as f(x, y, t)")

        if not attenuation_coefficient >= 0:
            raise ConfigurationError(f"attenuation_coefficient must be non-negative (got {attenuation_coefficient})")

        self.grid = grid
        self.surface_PAR = surface_PAR
        self.attenuation_coefficient = float(attenuation_coefficient)
        self._depth_factor = npx.exp(self.attenuation_coefficient * npx.asarray(grid.zt))
        self.field = npx.zeros(grid.nz, dtype=runtime_state.float_type)

    def update_PAR(self, host):
        x = getattr(host, "x", 0.0)
        y = getattr(host, "y", 0.0)
        surface = self.surface_PAR(x, y, host.clock.time)
        self.field = surface * self._depth_factor
        logger.trace("Updated PAR field (surface value {:.3f} W/m^2)", surface)

    def auxiliary_fields(self):
        return {"PAR": self.field}

    def summary(self):
        return f"{self.__class__.__qualname__} (water attenuation {self.attenuation_coefficient:g} 1/m)"
