from collections import namedtuple

from npzd.time import day

Setting = namedtuple("setting", ("default", "type", "description"))


def optional(type_):
    def wrapped(arg):
        if arg is None:
            return arg

        return type_(arg)

    return wrapped


# Kinetic parameters of the NPZD model (Kuhn et al., 2015). All rates in SI units.
PARAMETERS = {
    # phytoplankton
    "initial_photosynthetic_slope": Setting(0.1953 / day, float, "Initial photosynthetic slope α in 1/(W/m^2)/s"),
    "base_maximum_growth": Setting(0.6989 / day, float, "Base maximum phytoplankton growth rate μ₀ in 1/s"),
    "nutrient_half_saturation": Setting(2.3868, float, "Nutrient half saturation kₙ in mmol N/m^3"),
    "base_respiration_rate": Setting(0.066 / day, float, "Phytoplankton metabolic loss rate lᵖⁿ in 1/s"),
    "phyto_base_mortality_rate": Setting(0.0101 / day, float, "Phytoplankton mortality rate lᵖᵈ in 1/s"),
    # zooplankton
    "maximum_grazing_rate": Setting(2.1522 / day, float, "Maximum grazing rate gₘₐₓ in 1/s"),
    "grazing_half_saturation": Setting(0.5573, float, "Grazing half saturation kₚ in mmol N/m^3"),
    "assimilation_efficiency": Setting(0.9116, float, "Fraction β of grazed material assimilated by zooplankton"),
    "base_excretion_rate": Setting(0.0102 / day, float, "Zooplankton metabolic loss rate lᶻⁿ in 1/s"),
    "zoo_base_mortality_rate": Setting(0.3395 / day, float, "Zooplankton mortality lᶻᵈ in 1/s/(mmol N/m^3)"),
    # detritus
    "remineralization_rate": Setting(0.1213 / day, float, "Detritus remineralization rate rᵈⁿ in 1/s"),
}

# parameters that end up in a denominator
STRICTLY_POSITIVE_PARAMETERS = ("base_maximum_growth", "nutrient_half_saturation", "grazing_half_saturation")

# parameters that are fractions
FRACTION_PARAMETERS = ("assimilation_efficiency",)

# Sinking of particulate tracers, positive speeds in m/s point downwards
DEFAULT_SINKING_SPEEDS = {"P": 0.2551 / day, "D": 2.7489 / day}

SINKING = {
    "open_bottom": Setting(True, bool, "Smoothly bring sinking velocities to zero at the domain floor"),
    "smoothing_distance": Setting(
        None, optional(float), "Length scale in m of the floor taper. Defaults to two bottom cell thicknesses"
    ),
    "smoothing_cells": Setting(2, int, "Number of bottom cells used for the default taper length scale"),
    "advection_scheme": Setting("centered_second_order", str, "Default advection scheme for sinking tracers"),
}
