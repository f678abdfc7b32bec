"""
Source and sink terms of the Nutrient-Phytoplankton-Zooplankton-Detritus model
of Kuhn et al. (2015).

All tracers are in mmol N/m^3, so every loss term of one tracer appears as an
identical gain term of exactly one other tracer and N + P + Z + D is conserved.
Functions in here are pure and work on scalars as well as arrays.
"""
from npzd.core.operators import numpy as npx
from npzd import npzd_kernel
from npzd.tracers import Tracer

#: temperature scaling base per 10 °C
Q10_BASE = 1.88


def q10(T):
    """Multiplicative temperature scaling of biological rates (T in °C)"""
    return Q10_BASE ** (T / 10)


def nutrient_limitation(X, k):
    """Michaelis-Menten limitation, used for nutrient uptake and (with squared
    arguments) for the sigmoidal grazing response"""
    return X / (k + X)


def light_limitation(PAR, T, alpha, mu):
    """Saturating light limitation.

    ``mu`` is the temperature scaled maximum growth rate. Bounded by ``min(1, alpha * PAR / mu)``
    and smooth at light saturation.
    """
    return alpha * PAR / npx.sqrt(mu**2 + alpha**2 * PAR**2)


def phytoplankton_growth(N, P, T, PAR, params):
    mu = params.base_maximum_growth * q10(T)
    return (
        mu
        * nutrient_limitation(N, params.nutrient_half_saturation)
        * light_limitation(PAR, T, params.initial_photosynthetic_slope, mu)
        * P
    )


def zooplankton_grazing(P, Z, params):
    return params.maximum_grazing_rate * nutrient_limitation(P**2, params.grazing_half_saturation**2) * Z


def phytoplankton_metabolic_loss(P, T, params):
    return params.base_respiration_rate * q10(T) * P


def phytoplankton_mortality_loss(P, T, params):
    return params.phyto_base_mortality_rate * q10(T) * P


def zooplankton_metabolic_loss(Z, T, params):
    return params.base_excretion_rate * q10(T) * Z


def zooplankton_mortality_loss(Z, T, params):
    # quadratic closure
    return params.zoo_base_mortality_rate * q10(T) * Z**2


def remineralization(D, params):
    return params.remineralization_rate * D


@npzd_kernel(static_args=("params",))
def nutrient_tendency(N, P, Z, D, T, PAR, params):
    return (
        phytoplankton_metabolic_loss(P, T, params)
        + zooplankton_metabolic_loss(Z, T, params)
        + remineralization(D, params)
        - phytoplankton_growth(N, P, T, PAR, params)
    )


@npzd_kernel(static_args=("params",))
def phytoplankton_tendency(N, P, Z, D, T, PAR, params):
    return (
        phytoplankton_growth(N, P, T, PAR, params)
        - zooplankton_grazing(P, Z, params)
        - phytoplankton_metabolic_loss(P, T, params)
        - phytoplankton_mortality_loss(P, T, params)
    )


@npzd_kernel(static_args=("params",))
def zooplankton_tendency(N, P, Z, D, T, PAR, params):
    return (
        params.assimilation_efficiency * zooplankton_grazing(P, Z, params)
        - zooplankton_metabolic_loss(Z, T, params)
        - zooplankton_mortality_loss(Z, T, params)
    )


@npzd_kernel(static_args=("params",))
def detritus_tendency(N, P, Z, D, T, PAR, params):
    return (
        phytoplankton_mortality_loss(P, T, params)
        + (1 - params.assimilation_efficiency) * zooplankton_grazing(P, Z, params)
        + zooplankton_mortality_loss(Z, T, params)
        - remineralization(D, params)
    )


TENDENCY_KERNELS = {
    Tracer.N: nutrient_tendency,
    Tracer.P: phytoplankton_tendency,
    Tracer.Z: zooplankton_tendency,
    Tracer.D: detritus_tendency,
}
