"""
Well-mixed box model.

Runs the NPZD kinetics without any transport, forced by PAR and temperature
given as functions of time. This is the same kernel as in a spatial host, only
the data source of the auxiliary fields differs.
"""
from collections import defaultdict, namedtuple

from npzd import logger
from npzd.exceptions import ConfigurationError
from npzd.time import format_time, minute
from npzd.timer import Timer
from npzd.tracers import BIOLOGICAL_TRACERS, as_tracer

TIMESTEPPERS = ("euler", "rk4")

BoxForcing = namedtuple("BoxForcing", ("PAR", "T"))
BoxForcing.__doc__ = "Time dependent forcing of a box model: callables f(t) for PAR (W/m^2) and T (°C)"

Snapshot = namedtuple("Snapshot", ("time", "values"))


def constant(value):
    value = float(value)

    def forcing(t):
        return value

    return forcing


class Clock:
    def __init__(self, time=0.0, iteration=0):
        self.time = time
        self.iteration = iteration

    def __repr__(self):
        return f"{self.__class__.__qualname__}(time={self.time}, iteration={self.iteration})"


class BoxModel:
    """Zero-dimensional host for an :class:`~npzd.model.NPZDModel`.

    Parameters:
        model: The biogeochemical model.
        forcing: :class:`BoxForcing` with callables for PAR and T.
        initial_conditions: Mapping from N, P, Z, D to initial concentrations (default 0).
        dt: Time step in seconds.
        timestepper: ``"euler"`` or ``"rk4"``.
        positivity: Optional callable ``f(tracers) -> tracers`` applied after each step,
            e.g. :func:`npzd.core.positivity.scale_negative_tracers`.

    Each :meth:`time_step` is split in two phases: first the model refreshes the
    auxiliary fields (PAR and T from the forcing), then the rates are evaluated with
    these values held fixed for the whole step.
    """

    def __init__(self, model, forcing, initial_conditions=None, dt=10 * minute, timestepper="rk4", positivity=None):
        if timestepper not in TIMESTEPPERS:
            raise ConfigurationError(f"Unknown timestepper {timestepper!r} (must be one of {TIMESTEPPERS})")

        if not dt > 0:
            raise ConfigurationError(f"dt must be positive (got {dt})")

        if not (callable(forcing.PAR) and callable(forcing.T)):
            raise ConfigurationError("Box model forcing must consist of callables f(t)")

        self.model = model
        self.forcing = forcing
        self.dt = float(dt)
        self.timestepper = timestepper
        self.positivity = positivity
        self.clock = Clock()
        self.timers = defaultdict(Timer)

        self.values = {str(tracer): 0.0 for tracer in BIOLOGICAL_TRACERS}
        self.values.update(T=0.0, PAR=0.0)

        for tag, value in (initial_conditions or {}).items():
            tracer = as_tracer(tag, allowed=BIOLOGICAL_TRACERS)
            self.values[str(tracer)] = float(value)

    def update_auxiliary_fields(self):
        """Set PAR and T from the forcing at the current time"""
        t = self.clock.time
        self.values["PAR"] = float(self.forcing.PAR(t))
        self.values["T"] = float(self.forcing.T(t))

    def _rates(self, concentrations):
        tendencies = self.model.tendencies(
            0.0, 0.0, 0.0, self.clock.time, *concentrations, self.values["T"], self.values["PAR"]
        )
        return [float(tendencies[tracer]) for tracer in BIOLOGICAL_TRACERS]

    def _advance(self, concentrations):
        dt = self.dt

        if self.timestepper == "euler":
            k = self._rates(concentrations)
            return [c + dt * dc for c, dc in zip(concentrations, k)]

        k1 = self._rates(concentrations)
        k2 = self._rates([c + 0.5 * dt * dc for c, dc in zip(concentrations, k1)])
        k3 = self._rates([c + 0.5 * dt * dc for c, dc in zip(concentrations, k2)])
        k4 = self._rates([c + dt * dc for c, dc in zip(concentrations, k3)])
        return [c + dt / 6 * (a + 2 * b + 2 * e + f) for c, a, b, e, f in zip(concentrations, k1, k2, k3, k4)]

    def time_step(self):
        with self.timers["update_state"]:
            self.model.update_state(self)

        with self.timers["kinetics"]:
            names = [str(tracer) for tracer in BIOLOGICAL_TRACERS]
            new_values = dict(zip(names, self._advance([self.values[name] for name in names])))

        if self.positivity is not None:
            new_values = {name: float(value) for name, value in self.positivity(new_values).items()}

        self.values.update(new_values)
        self.clock.time += self.dt
        self.clock.iteration += 1

    def total_nitrogen(self):
        return sum(self.values[str(tracer)] for tracer in BIOLOGICAL_TRACERS)

    def snapshot(self):
        return Snapshot(self.clock.time, dict(self.values))

    def run(self, stop_time, save_interval=None):
        """Integrate until ``stop_time`` (in seconds), returning a list of snapshots.

        Snapshots are taken at the start, every ``save_interval`` seconds (default: every
        step) and at the end.
        """
        if save_interval is None:
            save_interval = self.dt

        time_length, time_unit = format_time(max(stop_time - self.clock.time, 0.0))
        logger.info("Starting box model integration for {:.1f} {}", time_length, time_unit)

        history = [self.snapshot()]
        next_save = self.clock.time + save_interval
        initial_nitrogen = self.total_nitrogen()

        try:
            # half a step of tolerance against round-off in the accumulated time
            while self.clock.time < stop_time - 0.5 * self.dt:
                self.time_step()

                if self.clock.time >= next_save - 0.5 * self.dt:
                    history.append(self.snapshot())
                    next_save += save_interval

        except Exception:
            logger.critical("Stopping integration at iteration {}", self.clock.iteration)
            raise

        if history[-1].time != self.clock.time:
            history.append(self.snapshot())

        logger.success("Integration done after {} iterations", self.clock.iteration)
        logger.debug(
            " Time spent updating state: {:.3f}s, evaluating kinetics: {:.3f}s",
            self.timers["update_state"].total_time,
            self.timers["kinetics"].total_time,
        )
        logger.debug(" Total nitrogen drift: {:.3e} mmol N/m^3", self.total_nitrogen() - initial_nitrogen)
        return history
