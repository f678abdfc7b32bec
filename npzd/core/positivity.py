"""
Tracer positivity collaborators.

The NPZD kinetics are defined for negative concentrations, but these are not
physical. Hosts should run one of these once per time step, after transport
and diffusion and before the next rate evaluation. All of them take a mapping
from tracer name to concentration and only look at the tracers in ``names``
(default: all of them).
"""
from npzd import logger, npzd_kernel, runtime_state
from npzd.core.operators import numpy as npx
from npzd.exceptions import NegativeTracerError


def _select(tracers, names):
    if names is None:
        names = tuple(tracers.keys())

    missing = [name for name in names if name not in tracers]
    if missing:
        raise KeyError(f"Tracers not found: {', '.join(map(str, missing))}")

    return tuple(names)


def zero_negative_tracers(tracers, names=None):
    """Clamp negative concentrations to zero. Returns a new mapping."""
    names = _select(tracers, names)
    out = dict(tracers)

    for name in names:
        out[name] = npx.maximum(tracers[name], 0)

    return out


@npzd_kernel
def _scale_negative(values):
    values = npx.stack(values)
    total = values.sum(axis=0)
    positive = npx.maximum(values, 0)
    positive_total = positive.sum(axis=0)

    has_mass = npx.logical_and(total > 0, positive_total > 0)
    factor = npx.where(has_mass, total / npx.where(has_mass, positive_total, 1), 0)
    return positive * factor, total < 0


def scale_negative_tracers(tracers, names=None):
    """Remove negative concentrations while conserving the (pointwise) sum over ``names``.

    Negative values are set to zero and positive values are scaled down so that their
    sum equals the original total. Where the total itself is negative nothing can be
    conserved, all tracers are zeroed and a warning is logged. Returns a new mapping.
    """
    names = _select(tracers, names)
    out = dict(tracers)

    if not names:
        return out

    values = tuple(npx.asarray(tracers[name], dtype=runtime_state.float_type) for name in names)
    scaled, lost = _scale_negative(values)

    if bool(npx.any(lost)):
        logger.warning(
            "Negative total of {} in {} points, setting to zero", ", ".join(map(str, names)), int(lost.sum())
        )

    for i, name in enumerate(names):
        out[name] = scaled[i]

    return out


def _negative_tracers(tracers, names):
    return [name for name in _select(tracers, names) if bool(npx.any(npx.asarray(tracers[name]) < 0))]


def warn_on_negative(tracers, names=None):
    """Log a warning for each tracer with negative values. Returns the offending names."""
    negative = _negative_tracers(tracers, names)

    for name in negative:
        logger.warning("Tracer {} has negative values (minimum {:.3e})", name, float(npx.min(tracers[name])))

    return negative


def error_on_negative(tracers, names=None):
    """Raise :class:`~npzd.exceptions.NegativeTracerError` if any tracer is negative."""
    negative = _negative_tracers(tracers, names)

    if negative:
        raise NegativeTracerError(f"Negative concentrations in tracer(s): {', '.join(map(str, negative))}")
