import enum

from npzd.exceptions import UnknownTracerError


class Tracer(enum.Enum):
    """Tracers known to the NPZD model. All concentrations are in mmol N/m^3,
    except for temperature (°C) which is supplied by the host."""

    N = "N"
    P = "P"
    Z = "Z"
    D = "D"
    T = "T"

    def __str__(self):
        return self.value


REQUIRED_TRACERS = (Tracer.N, Tracer.P, Tracer.Z, Tracer.D, Tracer.T)
BIOLOGICAL_TRACERS = (Tracer.N, Tracer.P, Tracer.Z, Tracer.D)
REQUIRED_AUXILIARY_FIELDS = ("PAR",)

TRACER_DESCRIPTIONS = {
    Tracer.N: "Nutrients",
    Tracer.P: "Phytoplankton",
    Tracer.Z: "Zooplankton",
    Tracer.D: "Detritus",
    Tracer.T: "Temperature",
}


def as_tracer(tag, allowed=REQUIRED_TRACERS):
    """Convert a tracer name (or Tracer) to a Tracer, checking it is in ``allowed``"""
    if isinstance(tag, Tracer):
        tracer = tag
    else:
        try:
            tracer = Tracer(tag)
        except ValueError:
            raise UnknownTracerError(
                f"Unknown tracer {tag!r} (must be one of {[str(t) for t in allowed]})"
            ) from None

    if tracer not in allowed:
        raise UnknownTracerError(f"Tracer {tracer} is not one of {[str(t) for t in allowed]}")

    return tracer
