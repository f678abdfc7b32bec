import numpy as np
import pytest

from npzd.exceptions import ConfigurationError, InvalidParameterError, UnknownTracerError
from npzd.time import day
from npzd.tracers import Tracer


SPEEDS = {"P": 0.2551 / day, "D": 2.7489 / day}


def test_open_bottom_taper(grid):
    from npzd.core.sinking import build_sinking_velocities

    entries = build_sinking_velocities(SPEEDS, grid, open_bottom=True)

    for tracer, speed in SPEEDS.items():
        velocity = np.asarray(entries[Tracer(tracer)].velocity)
        assert velocity.shape == (grid.nz + 1,)
        assert velocity[0] == 0
        # tapered within a few cells of the floor
        assert abs(velocity[4]) > 0.95 * speed
        assert velocity[-1] == pytest.approx(-speed)
        assert np.all(velocity <= 0)
        assert np.all(np.diff(np.abs(velocity)) >= 0)


def test_closed_bottom_is_uniform(grid):
    from npzd.core.sinking import build_sinking_velocities

    entries = build_sinking_velocities(SPEEDS, grid, open_bottom=False)

    for tracer, speed in SPEEDS.items():
        entry = entries[Tracer(tracer)]
        velocity = np.asarray(entry.velocity)
        assert entry.speed == speed
        assert abs(velocity[0]) == pytest.approx(speed)
        np.testing.assert_allclose(velocity, -speed)


def test_unknown_tracer(grid):
    from npzd.core.sinking import build_sinking_velocities

    with pytest.raises(ConfigurationError):
        build_sinking_velocities(dict(SPEEDS, X=1.0 / day), grid)

    with pytest.raises(UnknownTracerError):
        build_sinking_velocities({"Z": 1.0 / day}, grid, tracers=(Tracer.P, Tracer.D))


def test_invalid_speed(grid):
    from npzd.core.sinking import build_sinking_velocities

    with pytest.raises(InvalidParameterError):
        build_sinking_velocities({"P": -1.0}, grid)

    with pytest.raises(InvalidParameterError):
        build_sinking_velocities({"P": float("nan")}, grid)

    with pytest.raises(InvalidParameterError):
        build_sinking_velocities({"P": 1.0}, grid, smoothing_distance=0.0)


def test_duplicate_tracer(grid):
    from npzd.core.sinking import build_sinking_velocities

    with pytest.raises(ConfigurationError):
        build_sinking_velocities({"P": 1.0, Tracer.P: 2.0}, grid)


def test_prescribed_field(grid):
    from npzd.core.sinking import build_sinking_velocities

    field = -np.linspace(0, 1e-4, grid.nz + 1)
    entries = build_sinking_velocities({"D": field}, grid, open_bottom=True)
    entry = entries[Tracer.D]

    assert entry.speed is None
    np.testing.assert_allclose(np.asarray(entry.velocity), field)

    # the caller's array is not aliased
    field[:] = 1.0
    assert np.all(np.asarray(entry.velocity) <= 0)


def test_prescribed_field_wrong_shape(grid):
    from npzd.core.sinking import build_sinking_velocities

    with pytest.raises(InvalidParameterError):
        build_sinking_velocities({"D": np.zeros(grid.nz)}, grid)


def test_advection_schemes(grid):
    from npzd.core.sinking import build_sinking_velocities

    entries = build_sinking_velocities(SPEEDS, grid, advection_schemes={"D": "upwind"})
    assert entries[Tracer.P].scheme == "centered_second_order"
    assert entries[Tracer.D].scheme == "upwind"

    with pytest.raises(ConfigurationError):
        build_sinking_velocities(SPEEDS, grid, advection_schemes={"D": "magic"})

    with pytest.raises(UnknownTracerError):
        build_sinking_velocities(SPEEDS, grid, advection_schemes={"N": "upwind"})


def test_entries_are_read_only(grid):
    from npzd.core.sinking import build_sinking_velocities

    entries = build_sinking_velocities(SPEEDS, grid)

    with pytest.raises(TypeError):
        entries[Tracer.Z] = None

    velocity = entries[Tracer.P].velocity
    if isinstance(velocity, np.ndarray):
        with pytest.raises(ValueError):
            velocity[0] = 1.0


def test_maximum_sinking_velocity(grid):
    from npzd.core.sinking import build_sinking_velocities, maximum_sinking_velocity

    entries = build_sinking_velocities(SPEEDS, grid)
    assert maximum_sinking_velocity(entries) == pytest.approx(2.7489 / day)
    assert maximum_sinking_velocity({}) == 0.0


def test_show_sinking_velocities(grid):
    from npzd.core.sinking import build_sinking_velocities, show_sinking_velocities

    shown = show_sinking_velocities(build_sinking_velocities(SPEEDS, grid))
    assert "├── P" in shown
    assert "└── D" in shown
    assert "none" in show_sinking_velocities({})


def test_velocity_float_type(grid):
    from npzd import runtime_settings
    from npzd.core.sinking import build_sinking_velocities, floor_taper

    entries = build_sinking_velocities(SPEEDS, grid)
    assert np.asarray(entries[Tracer.D].velocity).dtype == np.dtype(runtime_settings.float_type)

    taper = np.asarray(floor_taper(grid.zw, 10.0))
    assert taper[0] == 0
    assert taper[-1] == pytest.approx(1)
