import numpy as np
import pytest

from npzd.time import day


@pytest.fixture
def random_state():
    shape = (5, 4, 10)
    return dict(
        N=np.random.uniform(0, 20, shape),
        P=np.random.uniform(0, 5, shape),
        Z=np.random.uniform(0, 5, shape),
        D=np.random.uniform(0, 5, shape),
        T=np.random.uniform(-2, 32, shape),
        PAR=np.random.uniform(0, 500, shape),
    )


def _all_tendencies(state, params):
    from npzd.core import kinetics

    return [np.asarray(kernel(**state, params=params)) for kernel in kinetics.TENDENCY_KERNELS.values()]


def test_mass_conservation(random_state, params):
    dN, dP, dZ, dD = _all_tendencies(random_state, params)
    np.testing.assert_allclose(dN + dP + dZ + dD, 0, atol=1e-14)


def test_mass_conservation_extreme_parameters(random_state, params):
    params = params.replace(assimilation_efficiency=0.0, zoo_base_mortality_rate=10 / day, remineralization_rate=0.0)
    dN, dP, dZ, dD = _all_tendencies(random_state, params)
    np.testing.assert_allclose(dN + dP + dZ + dD, 0, atol=1e-13)


def test_zero_state_is_fixed_point(params):
    from npzd.core import kinetics

    for kernel in kinetics.TENDENCY_KERNELS.values():
        assert float(kernel(0.0, 0.0, 0.0, 0.0, 15.0, 50.0, params)) == 0


def test_nutrient_limitation_bounds():
    from npzd.core.kinetics import nutrient_limitation

    N = np.linspace(0, 100, 200)
    for k in (1e-2, 0.5573, 2.3868, 100.0):
        lim = nutrient_limitation(N, k)
        assert np.all(lim >= 0)
        assert np.all(lim < 1)

        lim = nutrient_limitation(N**2, k**2)
        assert np.all(lim >= 0)
        assert np.all(lim < 1)

    assert nutrient_limitation(0.0, 2.3868) == 0


def test_grazing_response_is_sigmoidal():
    from npzd.core.kinetics import nutrient_limitation

    k = 0.5573
    P = 0.1 * k
    # squared response saturates more slowly at low prey density than Michaelis-Menten
    assert nutrient_limitation(P**2, k**2) < nutrient_limitation(P, k)
    assert nutrient_limitation(k**2, k**2) == pytest.approx(0.5)


def test_light_limitation_bounds(params):
    from npzd.core.kinetics import light_limitation, q10

    alpha = params.initial_photosynthetic_slope
    PAR = np.linspace(1e-3, 2000, 500)

    for T in (-2.0, 10.0, 30.0):
        mu = params.base_maximum_growth * q10(T)
        lim = np.asarray(light_limitation(PAR, T, alpha, mu))
        assert np.all(lim > 0)
        assert np.all(lim < alpha * PAR / mu)
        assert np.all(lim < 1)

    assert float(light_limitation(0.0, 15.0, alpha, params.base_maximum_growth)) == 0


def test_q10_strictly_increasing():
    from npzd.core.kinetics import q10

    T = np.linspace(-2, 35, 100)
    assert np.all(np.diff(np.asarray(q10(T))) > 0)
    assert q10(0.0) == 1
    assert q10(10.0) == pytest.approx(1.88)


def test_growth_increases_with_light(params):
    from npzd.core.kinetics import phytoplankton_growth

    PAR = np.linspace(0, 500, 50)
    growth = np.asarray(phytoplankton_growth(5.0, 0.5, 15.0, PAR, params))
    assert growth[0] == 0
    assert np.all(np.diff(growth) > 0)


def test_growth_golden_value():
    from npzd.core.kinetics import phytoplankton_growth
    from npzd.parameters import ModelParameters

    params = ModelParameters(
        initial_photosynthetic_slope=0.1953 / day,
        base_maximum_growth=0.6989 / day,
        nutrient_half_saturation=2.3868,
    )
    growth = float(phytoplankton_growth(10.0, 1.0, 20.0, 100.0, params))
    assert growth == pytest.approx(2.2898736e-05, rel=1e-6)
    assert growth * day == pytest.approx(1.9784508, rel=1e-6)


def test_zooplankton_routing(params):
    from npzd.core import kinetics

    state = dict(N=1.0, P=2.0, Z=0.5, D=0.0, T=10.0, PAR=0.0)
    grazing = kinetics.zooplankton_grazing(state["P"], state["Z"], params)
    dZ = kinetics.zooplankton_tendency(**state, params=params)
    dD = kinetics.detritus_tendency(**state, params=params)

    beta = params.assimilation_efficiency
    zoo_metabolic = kinetics.zooplankton_metabolic_loss(state["Z"], state["T"], params)
    zoo_mortality = kinetics.zooplankton_mortality_loss(state["Z"], state["T"], params)
    phyto_mortality = kinetics.phytoplankton_mortality_loss(state["P"], state["T"], params)

    assert float(dZ) == pytest.approx(beta * grazing - zoo_metabolic - zoo_mortality)
    assert float(dD) == pytest.approx(phyto_mortality + (1 - beta) * grazing + zoo_mortality)


def test_negative_concentrations_do_not_raise(params):
    from npzd.core import kinetics

    state = dict(N=-1.0, P=-0.2, Z=-0.1, D=-0.5, T=5.0, PAR=20.0)
    rates = [float(kernel(**state, params=params)) for kernel in kinetics.TENDENCY_KERNELS.values()]
    assert all(np.isfinite(rates))
    assert sum(rates) == pytest.approx(0, abs=1e-15)
