"""
The Nutrient-Phytoplankton-Zooplankton-Detritus model of Kuhn et al. (2015).

Tracers
-------
* Nutrients: N (mmol N/m^3)
* Phytoplankton: P (mmol N/m^3)
* Zooplankton: Z (mmol N/m^3)
* Detritus: D (mmol N/m^3)
* Temperature: T (°C), supplied by the host

Auxiliary fields
----------------
* Photosynthetically available radiation: PAR (W/m^2)

Usage by a host, once per time step::

    model.update_state(host)     # phase 1: refresh auxiliary fields (PAR)
    dN = model.rate("N", ...)    # phase 2: evaluate rates, in any order and in parallel

The host is also expected to run a positivity collaborator (see
:mod:`npzd.core.positivity`) after transport and before the next rate evaluation.
"""
from npzd import logger, runtime_state
from npzd.core import kinetics, sinking
from npzd.core.operators import numpy as npx
from npzd.exceptions import ConfigurationError
from npzd.light import PrescribedPAR
from npzd.parameters import ModelParameters
from npzd.settings import DEFAULT_SINKING_SPEEDS, SINKING
from npzd.submodels import NoParticles, NoSediment
from npzd.tracers import REQUIRED_AUXILIARY_FIELDS, REQUIRED_TRACERS, Tracer, as_tracer


def _as_arrays(*values):
    # backend arrays overflow to inf / nan where Python floats would raise
    return tuple(npx.asarray(value, dtype=runtime_state.float_type) for value in values)


class NPZDModel:
    """Nutrient-Phytoplankton-Zooplankton-Detritus biogeochemistry.

    Parameters:
        grid: Vertical grid used to set up sinking velocities and the default light model.
        parameters: :class:`~npzd.parameters.ModelParameters`. Alternatively, individual
            parameters can be passed as keyword arguments.
        light_attenuation_model: Provider of the PAR field, defaults to
            :class:`~npzd.light.PrescribedPAR` with an idealised diurnal cycle.
        sediment_model: Optional sediment submodel.
        particles: Optional particle submodel.
        sinking_speeds: Mapping from tracer to a positive sinking speed in m/s, or to a velocity
            field on the vertical faces (negative is down).
        open_bottom: Smoothly bring sinking velocities to zero at the floor, so that no tracer
            leaves the domain.
        advection_schemes: Mapping from sinking tracer to advection scheme tag.

    Raises:
        ConfigurationError: On any invalid parameter or sinking configuration.

    Example:
        >>> from npzd import NPZDModel, VerticalGrid
        >>> model = NPZDModel(VerticalGrid.uniform(nz=30, depth=300))
        >>> model.rate("P", 0, 0, -5, 0, 7.0, 0.1, 0.01, 0.0, 15.0, 40.0)

    """

    def __init__(
        self,
        grid,
        parameters=None,
        light_attenuation_model=None,
        sediment_model=None,
        particles=None,
        sinking_speeds=None,
        open_bottom=SINKING["open_bottom"].default,
        advection_schemes=None,
        **parameter_overrides,
    ):
        if parameters is None:
            parameters = ModelParameters(**parameter_overrides)
        elif parameter_overrides:
            raise ConfigurationError("Pass either a ModelParameters object or individual parameters, not both")
        elif not isinstance(parameters, ModelParameters):
            raise ConfigurationError(f"parameters must be a ModelParameters instance (got {type(parameters)})")

        if sinking_speeds is None:
            sinking_speeds = DEFAULT_SINKING_SPEEDS

        if light_attenuation_model is None:
            light_attenuation_model = PrescribedPAR(grid)

        self.grid = grid
        self.parameters = parameters
        self.light_attenuation_model = light_attenuation_model
        self.sediment_model = sediment_model if sediment_model is not None else NoSediment()
        self.particles = particles if particles is not None else NoParticles()
        self.open_bottom = bool(open_bottom)
        self.sinking_velocities = sinking.build_sinking_velocities(
            sinking_speeds, grid, open_bottom=self.open_bottom, advection_schemes=advection_schemes
        )

        logger.debug("Created {}", self.summary())

    @property
    def required_tracers(self):
        return tuple(str(tracer) for tracer in REQUIRED_TRACERS)

    @property
    def required_auxiliary_fields(self):
        return REQUIRED_AUXILIARY_FIELDS

    def auxiliary_fields(self):
        return self.light_attenuation_model.auxiliary_fields()

    def rate(self, tracer, x, y, z, t, N, P, Z, D, T, PAR):
        """Rate of change of ``tracer`` in its units per second.

        Temperature is not advanced by this model, so its rate is zero.
        Position and time are accepted for interface uniformity only. Inputs are
        converted to backend arrays, so out of range states give inf or nan instead
        of raising.
        """
        tracer = as_tracer(tracer)
        N, P, Z, D, T, PAR = _as_arrays(N, P, Z, D, T, PAR)

        if tracer is Tracer.T:
            return npx.zeros_like(T)

        return kinetics.TENDENCY_KERNELS[tracer](N, P, Z, D, T, PAR, self.parameters)

    def tendencies(self, x, y, z, t, N, P, Z, D, T, PAR):
        """Rates of change of N, P, Z and D, keyed by :class:`~npzd.tracers.Tracer`"""
        N, P, Z, D, T, PAR = _as_arrays(N, P, Z, D, T, PAR)
        return {
            tracer: kernel(N, P, Z, D, T, PAR, self.parameters)
            for tracer, kernel in kinetics.TENDENCY_KERNELS.items()
        }

    def drift_velocity(self, tracer):
        """Sinking velocity field of ``tracer`` on the vertical faces, or None"""
        entry = self.sinking_velocities.get(as_tracer(tracer))
        if entry is None:
            return None
        return entry.velocity

    def advection_scheme(self, tracer):
        """Advection scheme tag of a sinking ``tracer``, or None"""
        entry = self.sinking_velocities.get(as_tracer(tracer))
        if entry is None:
            return None
        return entry.scheme

    def maximum_sinking_velocity(self):
        return sinking.maximum_sinking_velocity(self.sinking_velocities)

    def update_state(self, host):
        """Refresh auxiliary fields before the rates of a time step are evaluated.

        Hosts that bring their own auxiliary fields (such as box models, which take PAR
        and T from a time dependent forcing) do so through an ``update_auxiliary_fields()``
        method. All other hosts ask the light attenuation model for a new PAR field.
        """
        update_auxiliary_fields = getattr(host, "update_auxiliary_fields", None)

        if update_auxiliary_fields is not None:
            update_auxiliary_fields()
        else:
            self.light_attenuation_model.update_PAR(host)

        self.sediment_model.update_state(host)
        self.particles.update_state(host)

    def summary(self):
        return "Nutrient Phytoplankton Zooplankton Detritus model"

    def __repr__(self):
        return "\n".join(
            [
                self.summary(),
                " Light attenuation model:",
                f"    └── {self.light_attenuation_model.summary()}",
                " Sediment model:",
                f"    └── {self.sediment_model.summary()}",
                " Particles:",
                f"    └── {self.particles.summary()}",
                " Sinking velocities:",
                sinking.show_sinking_velocities(self.sinking_velocities),
            ]
        )
