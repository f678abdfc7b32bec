import os
import pytest


def pytest_addoption(parser):
    parser.addoption("--backend", choices=["numpy", "jax"], default="numpy", help="Numerical backend to test")


def pytest_configure(config):
    backend = config.getoption("--backend")
    os.environ["NPZD_BACKEND"] = backend


@pytest.fixture(autouse=True)
def set_random_seed():
    import numpy as np

    np.random.seed(17)


@pytest.fixture
def grid():
    from npzd.grid import VerticalGrid

    return VerticalGrid.uniform(nz=20, depth=100.0)


@pytest.fixture
def model(grid):
    from npzd.model import NPZDModel

    return NPZDModel(grid)


@pytest.fixture
def params():
    from npzd.parameters import ModelParameters

    return ModelParameters()
