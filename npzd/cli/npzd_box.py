import functools

import click

from npzd.backend import BACKENDS
from npzd.logs import LOGLEVELS
from npzd.settings import PARAMETERS
from npzd.tracers import BIOLOGICAL_TRACERS, TRACER_DESCRIPTIONS

TRACER_NAMES = tuple(str(tracer) for tracer in BIOLOGICAL_TRACERS)


class ParameterOverride(click.ParamType):
    name = "parameter"
    current_key = None

    def convert(self, value, param, ctx):
        assert param.nargs == 2

        if self.current_key is None:
            if value not in PARAMETERS:
                self.fail(f"Unknown model parameter {value}")
            self.current_key = value
            return value

        parameter = PARAMETERS[self.current_key]
        self.current_key = None

        try:
            return parameter.type(value)
        except ValueError:
            self.fail(f"Could not convert {value!r} to {parameter.type.__name__}")


def run(days, dt_minutes, initial, override, par, diurnal, temperature, timestepper, backend, loglevel):
    """Integrates the NPZD kinetics in a well-mixed box"""
    from npzd import runtime_settings

    requested = dict(backend=backend, loglevel=loglevel)
    changed = {key: val for key, val in requested.items() if getattr(runtime_settings, key) != val}
    if changed:
        runtime_settings.update(**changed)

    from npzd import logger
    from npzd.box import BoxForcing, BoxModel, constant
    from npzd.core.positivity import scale_negative_tracers
    from npzd.grid import VerticalGrid
    from npzd.light import default_surface_PAR
    from npzd.model import NPZDModel
    from npzd.time import day, minute

    model = NPZDModel(VerticalGrid.uniform(nz=1, depth=1.0), **dict(override))

    if diurnal:

        def PAR(t):
            return par / 100 * default_surface_PAR(0.0, 0.0, t)

    else:
        PAR = constant(par)

    box = BoxModel(
        model,
        BoxForcing(PAR=PAR, T=constant(temperature)),
        initial_conditions=dict(initial),
        dt=dt_minutes * minute,
        timestepper=timestepper,
        positivity=scale_negative_tracers,
    )
    box.run(days * day, save_interval=day)

    for tracer in BIOLOGICAL_TRACERS:
        logger.info(" {} ({}) = {:.6f} mmol N/m^3", TRACER_DESCRIPTIONS[tracer], tracer, box.values[str(tracer)])
    logger.info(" Total nitrogen = {:.6f} mmol N/m^3", box.total_nitrogen())
    return box


@click.command("npzd-box")
@click.option(
    "-d", "--days", default=30.0, type=click.FloatRange(min=0), help="Length of the run in days", show_default=True
)
@click.option(
    "--dt-minutes",
    default=10.0,
    type=click.FloatRange(min=0, min_open=True),
    help="Time step in minutes",
    show_default=True,
)
@click.option(
    "-i",
    "--initial",
    nargs=2,
    multiple=True,
    metavar="TRACER VALUE",
    type=(click.Choice(TRACER_NAMES), float),
    default=(("N", 7.0), ("P", 0.1), ("Z", 0.01), ("D", 0.0)),
    help="Initial concentration in mmol N/m^3, may be specified multiple times",
)
@click.option(
    "-s",
    "--override",
    nargs=2,
    multiple=True,
    metavar="PARAMETER VALUE",
    type=ParameterOverride(),
    default=tuple(),
    help="Override model parameter (SI units), may be specified multiple times",
)
@click.option("--par", default=100.0, type=click.FloatRange(min=0), help="(Peak) PAR in W/m^2", show_default=True)
@click.option("--diurnal/--constant-light", default=True, help="Use a diurnal light cycle", show_default=True)
@click.option("-t", "--temperature", default=15.0, type=float, help="Temperature in °C", show_default=True)
@click.option("--timestepper", default="rk4", type=click.Choice(["euler", "rk4"]), show_default=True)
@click.option(
    "-b",
    "--backend",
    default="numpy",
    type=click.Choice(BACKENDS),
    help="Backend to use for computations",
    show_default=True,
)
@click.option(
    "-v",
    "--loglevel",
    default="info",
    type=click.Choice(LOGLEVELS),
    help="Log level used for output",
    show_default=True,
)
@functools.wraps(run)
def cli(*args, **kwargs):
    run(*args, **kwargs)


if __name__ == "__main__":
    cli()
