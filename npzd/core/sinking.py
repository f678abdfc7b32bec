"""
Vertical sinking of particulate tracers.

Sinking speeds are given as positive numbers (m/s, pointing down) and turned
into velocity fields on the vertical cell faces following the usual convention
of the host's advection operator (down is negative).
"""
import types
from collections import namedtuple

import numpy as onp

from npzd import logger, runtime_state
from npzd.core.operators import numpy as npx
from npzd.exceptions import ConfigurationError, InvalidParameterError, UnknownTracerError
from npzd.settings import SINKING
from npzd.tracers import REQUIRED_TRACERS, as_tracer

ADVECTION_SCHEMES = ("centered_second_order", "upwind", "superbee", "weno5")

SinkingEntry = namedtuple("SinkingEntry", ("tracer", "speed", "velocity", "scheme"))
SinkingEntry.__doc__ = """Sinking configuration of a single tracer.

speed is the nominal positive sinking speed (None if a velocity field was given directly),
velocity lives on the ``nz + 1`` vertical faces (bottom first, negative is down) and scheme
is the tag of the advection scheme the host should use for this tracer.
"""


def _freeze(arr):
    if isinstance(arr, onp.ndarray):
        arr.flags.writeable = False
    return arr


def floor_taper(zw, smoothing_distance):
    """Factor going smoothly from 0 at the domain floor to 1 in the interior"""
    # tanh(0) == 0, so the floor face carries exactly zero flux
    height_above_floor = npx.asarray(zw, dtype=runtime_state.float_type) - zw[0]
    return npx.tanh(height_above_floor / smoothing_distance)


def default_smoothing_distance(grid):
    return SINKING["smoothing_cells"].default * float(grid.dzt[0])


def velocity_from_speed(speed, grid, open_bottom, smoothing_distance=None):
    """Build a face velocity field for a constant sinking speed"""
    try:
        speed = float(speed)
    except (TypeError, ValueError):
        raise InvalidParameterError(f"Sinking speed must be a real number (got {speed!r})") from None

    if not onp.isfinite(speed) or speed < 0:
        raise InvalidParameterError(f"Sinking speed must be finite and non-negative (got {speed})")

    velocity = -speed * npx.ones(grid.nz + 1, dtype=runtime_state.float_type)

    if open_bottom:
        if smoothing_distance is None:
            smoothing_distance = default_smoothing_distance(grid)

        if not smoothing_distance > 0:
            raise InvalidParameterError(f"smoothing_distance must be positive (got {smoothing_distance})")

        velocity = velocity * floor_taper(grid.zw, smoothing_distance)

    return velocity


def velocity_from_field(field, grid):
    velocity = npx.array(field, dtype=runtime_state.float_type)

    if velocity.ndim == 0 or velocity.shape[-1] != grid.nz + 1:
        raise InvalidParameterError(
            f"Sinking velocity fields must live on the {grid.nz + 1} vertical faces (got shape {velocity.shape})"
        )

    return velocity


def build_sinking_velocities(
    sinking_speeds,
    grid,
    open_bottom=SINKING["open_bottom"].default,
    advection_schemes=None,
    smoothing_distance=SINKING["smoothing_distance"].default,
    tracers=REQUIRED_TRACERS,
):
    """Set up sinking velocities and advection schemes for all sinking tracers.

    Arguments:
        sinking_speeds: Mapping from tracer (name or :class:`~npzd.tracers.Tracer`) to either a
            constant positive sinking speed in m/s or a velocity field on the vertical faces
            (which must already follow the down-is-negative convention).
        grid: Vertical grid, see :class:`npzd.grid.VerticalGrid`.
        open_bottom: If True, constant speeds are smoothly brought to zero at the floor so that no
            tracer mass can leave the domain. If False, the velocity is uniform down to the floor.
        advection_schemes: Optional mapping from sinking tracer to advection scheme tag, overriding
            the default (centered second order).
        smoothing_distance: Length scale of the floor taper in m.
        tracers: Tracers that are allowed to sink.

    Returns:
        Read-only mapping from :class:`~npzd.tracers.Tracer` to :class:`SinkingEntry`.

    Raises:
        UnknownTracerError: If a tracer is not one of ``tracers``.
        InvalidParameterError: If a speed or field is invalid.
    """
    advection_schemes = dict(advection_schemes or {})
    default_scheme = SINKING["advection_scheme"].default

    entries = {}
    for tag, speed in sinking_speeds.items():
        tracer = as_tracer(tag, allowed=tracers)

        if tracer in entries:
            raise ConfigurationError(f"Sinking speed for tracer {tracer} given more than once")

        if onp.ndim(speed) == 0:
            velocity = velocity_from_speed(speed, grid, open_bottom, smoothing_distance)
            nominal_speed = float(speed)
        else:
            velocity = velocity_from_field(speed, grid)
            nominal_speed = None

        entries[tracer] = SinkingEntry(tracer, nominal_speed, _freeze(velocity), default_scheme)

    for tag, scheme in advection_schemes.items():
        tracer = as_tracer(tag, allowed=tracers)

        if tracer not in entries:
            raise UnknownTracerError(f"Advection scheme given for tracer {tracer}, which does not sink")

        if scheme not in ADVECTION_SCHEMES:
            raise ConfigurationError(f"Unknown advection scheme {scheme!r} (must be one of {ADVECTION_SCHEMES})")

        entries[tracer] = entries[tracer]._replace(scheme=scheme)

    for entry in entries.values():
        logger.debug(
            " Sinking of {}: {} with {} advection (open bottom: {})",
            entry.tracer,
            "prescribed field" if entry.speed is None else f"{entry.speed:.3e} m/s",
            entry.scheme,
            open_bottom,
        )

    return types.MappingProxyType(entries)


def maximum_sinking_velocity(entries):
    """Largest absolute sinking velocity of all entries (0 if nothing sinks)"""
    if not entries:
        return 0.0

    return max(float(npx.max(npx.abs(entry.velocity))) for entry in entries.values())


def show_sinking_velocities(entries):
    lines = []
    for entry in entries.values():
        if entry.speed is None:
            desc = "prescribed field"
        else:
            desc = f"{entry.speed:.4e} m/s"
        lines.append(f"    ├── {entry.tracer}: {desc} ({entry.scheme})")

    if lines:
        lines[-1] = lines[-1].replace("├", "└", 1)
    else:
        lines.append("    └── none")

    return "\n".join(lines)
