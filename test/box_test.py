import pytest

from npzd.exceptions import ConfigurationError, UnknownTracerError
from npzd.time import day, hour


INITIAL = dict(N=7.0, P=0.1, Z=0.01, D=0.0)


@pytest.fixture
def box_model():
    from npzd.grid import VerticalGrid
    from npzd.model import NPZDModel

    return NPZDModel(VerticalGrid.uniform(nz=1, depth=1.0))


def make_box(model, PAR=100.0, T=15.0, **kwargs):
    from npzd.box import BoxForcing, BoxModel, constant

    forcing = BoxForcing(PAR=constant(PAR) if not callable(PAR) else PAR, T=constant(T))
    return BoxModel(model, forcing, initial_conditions=INITIAL, **kwargs)


@pytest.mark.parametrize("timestepper", ["euler", "rk4"])
def test_nitrogen_conservation(box_model, timestepper):
    box = make_box(box_model, timestepper=timestepper, dt=30 * 60)
    initial_nitrogen = box.total_nitrogen()

    history = box.run(5 * day, save_interval=day)

    assert len(history) == 6
    assert history[-1].time == pytest.approx(5 * day)
    assert box.total_nitrogen() == pytest.approx(initial_nitrogen, rel=1e-10)

    for snapshot in history:
        assert sum(snapshot.values[name] for name in "NPZD") == pytest.approx(initial_nitrogen, rel=1e-10)


def test_forcing_applied_before_kinetics(box_model):
    box = make_box(box_model, PAR=lambda t: 10.0 + t / hour, T=4.0)
    box.time_step()

    # forcing is evaluated at the start of the step
    assert box.values["PAR"] == 10.0
    assert box.values["T"] == 4.0
    assert box.clock.iteration == 1

    box.time_step()
    assert box.values["PAR"] == pytest.approx(10.0 + box.dt / hour)


def test_phytoplankton_grows_in_light(box_model):
    box = make_box(box_model, PAR=100.0)
    box.run(1 * day)

    assert box.values["P"] > INITIAL["P"]
    assert box.values["N"] < INITIAL["N"]


def test_phytoplankton_decays_in_darkness(box_model):
    box = make_box(box_model, PAR=0.0)
    box.run(1 * day)

    assert box.values["P"] < INITIAL["P"]
    assert box.values["N"] > INITIAL["N"]


def test_positivity_callback(box_model):
    calls = []

    def positivity(tracers):
        calls.append(set(tracers))
        return tracers

    box = make_box(box_model, positivity=positivity)
    box.time_step()
    box.time_step()

    assert calls == [{"N", "P", "Z", "D"}] * 2


def test_snapshot_is_a_copy(box_model):
    box = make_box(box_model)
    snapshot = box.snapshot()
    box.time_step()

    assert snapshot.time == 0
    assert snapshot.values["N"] == INITIAL["N"]


def test_invalid_configuration(box_model):
    from npzd.box import BoxForcing, BoxModel, constant

    with pytest.raises(ConfigurationError):
        make_box(box_model, timestepper="leapfrog")

    with pytest.raises(ConfigurationError):
        make_box(box_model, dt=0)

    with pytest.raises(ConfigurationError):
        BoxModel(box_model, BoxForcing(PAR=100.0, T=constant(15.0)))

    with pytest.raises(UnknownTracerError):
        BoxModel(box_model, BoxForcing(PAR=constant(100.0), T=constant(15.0)), initial_conditions={"T": 10})


def test_errors_are_propagated(box_model):
    def broken_forcing(t):
        if t > 0:
            raise ValueError("no data")
        return 15.0

    from npzd.box import BoxForcing, BoxModel, constant

    box = BoxModel(box_model, BoxForcing(PAR=constant(100.0), T=broken_forcing))

    with pytest.raises(ValueError, match="no data"):
        box.run(1 * day)

    assert box.clock.iteration == 1
