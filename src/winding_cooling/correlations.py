from __future__ import annotations

import math

import winding_cooling.config as cfg


def hydraulic_diameter(area: float, wetted_perimeter: float) -> float:
    return 4.0 * area / wetted_perimeter


def hydraulic_diameter_of_rect(w: float, h: float) -> float:
    return hydraulic_diameter(w * h, 2.0 * (w + h))


def reynolds_number(density: float, velocity: float, diameter: float, viscosity: float) -> float:
    # Bluebook 2E eq(15.2)
    return density * velocity * diameter / viscosity


def prandtl_number(viscosity: float, specific_heat: float, conductivity: float) -> float:
    return viscosity * specific_heat / conductivity


def friction_coefficient_circular_duct(re: float) -> float:
    return 64.0 / re


def duct_k(a: float, b: float) -> float:
    """
    Bluebook 2E eq(15.4): laminar loss factor of a rectangular a x b duct.
    Argument order does not matter, the ratio is always short/long side.
    """
    short, long_ = (a, b) if a < b else (b, a)
    return 56.91 + 40.31 * (math.exp(-3.5 * short / long_) - 0.0302)


def friction_coefficient_rectangular_duct(w: float, h: float, re: float) -> float:
    # eq(15.3)
    return duct_k(w, h) / re


def pressure_change_using_k_and_d(k: float, d: float, viscosity: float, length: float, velocity: float) -> float:
    """
    eq(15.5) written with K and D directly:
    ΔP = 0.5 μ K L v / D^2
    Linear in v, so calling with velocity=1 gives the duct resistance.
    """
    return 0.5 * viscosity * k * length * velocity / (d * d)


def pressure_change_rectangular_duct(w: float, h: float, viscosity: float, length: float, velocity: float) -> float:
    return pressure_change_using_k_and_d(duct_k(w, h), hydraulic_diameter_of_rect(w, h), viscosity, length, velocity)


def pressure_change_in_coil(
    density: float,
    height: float,
    delta_t: float,
    beta: float = cfg.OIL_EXPANSION,
    g: float = cfg.GRAVITY,
) -> float:
    """eq(15.16): thermosiphon head over a column of given height and temperature excess."""
    return beta * density * g * height * delta_t


def oil_viscosity(temp_c: float) -> float:
    # eq(15.6), Pa*s
    return 6900.0 / (temp_c + 50.0) ** 3


def initial_oil_velocity(
    loss: float,
    inlet_area: float,
    delta_t: float,
    density: float = cfg.OIL_DENSITY,
    specific_heat: float = cfg.SPECIFIC_HEAT_OF_OIL,
) -> float:
    # eq(15.17): velocity needed to carry the loss away with the given rise
    return loss / (density * specific_heat * inlet_area * delta_t)


def convection_coefficient(
    diameter: float,
    length: float,
    bulk_temp: float,
    gradient: float,
    velocity: float,
    density: float = cfg.OIL_DENSITY,
    specific_heat: float = cfg.SPECIFIC_HEAT_OF_OIL,
    k: float = cfg.OIL_CONDUCTIVITY,
) -> float:
    """
    eq(15.23), Sieder-Tate laminar correlation:
    h = 1.86 k/D (Re Pr D/L)^0.33 (μ_bulk/μ_surface)^0.14
    gradient is surface minus bulk temperature. The flow direction does not
    change the film coefficient, only the speed does.
    """
    mu_bulk = oil_viscosity(bulk_temp)
    mu_surface = oil_viscosity(bulk_temp + gradient)

    re = reynolds_number(density, abs(velocity), diameter, mu_bulk)
    pr = prandtl_number(mu_bulk, specific_heat, k)

    return 1.86 * k / diameter * (re * pr * diameter / length) ** 0.33 * (mu_bulk / mu_surface) ** 0.14


def heat_transfer_coefficient(h_conv: float, t_insul: float, k_insul: float = cfg.PAPER_CONDUCTIVITY) -> float:
    # eq(15.22): film in series with the paper cover
    return h_conv / (1.0 + h_conv * t_insul / k_insul)
