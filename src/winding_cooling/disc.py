from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Optional, Tuple

import winding_cooling.config as cfg
from winding_cooling.correlations import (
    convection_coefficient,
    duct_k,
    heat_transfer_coefficient,
    hydraulic_diameter,
)
from winding_cooling.errors import ConfigurationError, ConvergenceError
from winding_cooling.physics import DiscGeom, ModelParams
from winding_cooling.types import DiscSide, InletLocation

logger = logging.getLogger(__name__)


class Disc:
    """
    One conductor disc and its four bounding half-ducts (below, above, inner,
    outer). Geometry is fixed at construction; temperature and the surface
    heat-transfer coefficients are refreshed by update_temperature().
    """

    def __init__(self, geom: DiscGeom, resistance_20: float, eddy_pu: float = 0.0,
                 temperature: float = cfg.DEFAULT_DISC_TEMP):
        if resistance_20 < 0.0:
            raise ConfigurationError(f"Resistance cannot be negative, got {resistance_20}")
        if eddy_pu < 0.0:
            raise ConfigurationError(f"Eddy loss cannot be negative, got {eddy_pu}")

        self.geom = geom
        self.resistance_20 = float(resistance_20)
        self.eddy_pu = float(eddy_pu)

        ID = geom.inner_diameter
        rb = geom.radial_build
        h = geom.height

        # horizontal ducts: mean turn length
        lmt = (ID + rb) * math.pi
        self.lmt = lmt
        self.D_below = hydraulic_diameter(lmt * geom.below_space_factor * geom.below_gap,
                                          (lmt * geom.below_space_factor + geom.below_gap) * 2.0)
        self.D_above = hydraulic_diameter(lmt * geom.above_space_factor * geom.above_gap,
                                          (lmt * geom.above_space_factor + geom.above_gap) * 2.0)
        self.A_below = lmt * geom.below_space_factor * geom.below_gap
        self.A_above = lmt * geom.above_space_factor * geom.above_gap
        self.Ac_below = lmt * rb * geom.below_space_factor
        self.Ac_above = lmt * rb * geom.above_space_factor
        self.k_below = duct_k(geom.below_gap, lmt * geom.below_space_factor / geom.num_columns)
        self.k_above = duct_k(geom.above_gap, lmt * geom.above_space_factor / geom.num_columns)

        # vertical ducts: mean circumference of each duct
        lit = (ID - geom.inner_gap) * math.pi
        lot = (ID + 2.0 * rb + geom.outer_gap) * math.pi
        self.D_inner = hydraulic_diameter(lit * geom.inner_space_factor * geom.inner_gap,
                                          (lit * geom.inner_space_factor + geom.inner_gap) * 2.0)
        self.D_outer = hydraulic_diameter(lot * geom.outer_space_factor * geom.outer_gap,
                                          (lot * geom.outer_space_factor + geom.outer_gap) * 2.0)
        self.A_inner = lit * geom.inner_space_factor * geom.inner_gap
        self.A_outer = lot * geom.outer_space_factor * geom.outer_gap
        self.Ac_inner = ID * math.pi * geom.inner_space_factor * h
        self.Ac_outer = (ID + 2.0 * rb) * math.pi * geom.outer_space_factor * h
        self.k_inner = duct_k(geom.inner_gap, lit * geom.inner_space_factor / geom.inner_sticks)
        self.k_outer = duct_k(geom.outer_gap, lot * geom.outer_space_factor / geom.outer_sticks)

        # node-to-node path lengths
        self.horizontal_length = rb
        self.vertical_length = h + 0.5 * (geom.below_gap + geom.above_gap)

        self.temperature = float(temperature)
        self.h_below = 0.0
        self.h_above = 0.0
        self.h_inner = 0.0
        self.h_outer = 0.0

    def clone(self, eddy_pu: Optional[float] = None, resistance_20: Optional[float] = None,
              temperature: Optional[float] = None, **geom_changes) -> "Disc":
        geom = replace(self.geom, **geom_changes) if geom_changes else self.geom
        return Disc(
            geom=geom,
            resistance_20=self.resistance_20 if resistance_20 is None else resistance_20,
            eddy_pu=self.eddy_pu if eddy_pu is None else eddy_pu,
            temperature=self.temperature if temperature is None else temperature,
        )

    def __repr__(self) -> str:
        return f"Disc(T={self.temperature:.2f}C, R20={self.resistance_20:.4g}, eddy={self.eddy_pu:.3g})"

    # ---------- per-side lookups ----------
    def duct(self, side: DiscSide) -> Tuple[float, float, float]:
        """(k, hydraulic diameter, flow area) of the half-duct on one side."""
        if side == DiscSide.BELOW:
            return self.k_below, self.D_below, self.A_below
        if side == DiscSide.ABOVE:
            return self.k_above, self.D_above, self.A_above
        if side == DiscSide.INNER:
            return self.k_inner, self.D_inner, self.A_inner
        return self.k_outer, self.D_outer, self.A_outer

    def surface(self, side: DiscSide) -> Tuple[float, float]:
        """(heat-transfer coefficient, heat-transfer area) of one face."""
        if side == DiscSide.BELOW:
            return self.h_below, self.Ac_below
        if side == DiscSide.ABOVE:
            return self.h_above, self.Ac_above
        if side == DiscSide.INNER:
            return self.h_inner, self.Ac_inner
        return self.h_outer, self.Ac_outer

    def height_with_gap(self) -> float:
        return self.geom.height + self.geom.below_gap

    # ---------- physics ----------
    def loss(self, amps: float) -> float:
        resistance = (self.resistance_20 * (cfg.COPPER_T_REF + self.temperature)
                      / (cfg.COPPER_T_REF + cfg.RESISTANCE_REF_TEMP) * (1.0 + self.eddy_pu))
        return amps * amps * resistance

    def update_temperature(
        self,
        amps: float,
        inlet_loc: InletLocation,
        t1: float, t2: float, t3: float, t4: float,
        v12: float, v34: float, v13: float, v24: float,
        params: Optional[ModelParams] = None,
    ) -> float:
        """
        Fixed point of the disc energy balance
            loss(T) = sum_side h_side(T) * Ac_side * (T - T_oil_side)
        Node/path subscripts are counted from the section inlet side:
        1 below inlet side, 2 below far side, 3 above inlet side, 4 above far side.
        Iterates until successive estimates differ by no more than the disc tolerance.
        """
        if inlet_loc == InletLocation.BOTH:
            raise ConfigurationError("Non-directed flow is not implemented")
        params = params or ModelParams()
        oil = params.oil
        k_paper = params.insulation.k
        paper = self.geom.paper_thickness

        t_below = (t1 + t2) / 2.0
        t_above = (t3 + t4) / 2.0
        if inlet_loc == InletLocation.INNER:
            t_inner, t_outer = (t1 + t3) / 2.0, (t2 + t4) / 2.0
            v_inner, v_outer = v13, v24
        else:
            t_inner, t_outer = (t2 + t4) / 2.0, (t1 + t3) / 2.0
            v_inner, v_outer = v24, v13

        def film(d: float, length: float, t_oil: float, v: float) -> float:
            speed = max(abs(v), cfg.MIN_OIL_VELOCITY)
            h_conv = convection_coefficient(d, length, t_oil, self.temperature - t_oil, speed,
                                            density=oil.density, specific_heat=oil.specific_heat, k=oil.k)
            return heat_transfer_coefficient(h_conv, paper, k_paper)

        rb = self.geom.radial_build
        h = self.geom.height
        delta = float("inf")
        for it in range(1, params.max_disc_iters + 1):
            old_temp = self.temperature

            self.h_below = film(self.D_below, rb, t_below, v12)
            self.h_above = film(self.D_above, rb, t_above, v34)
            self.h_inner = film(self.D_inner, h, t_inner, v_inner)
            self.h_outer = film(self.D_outer, h, t_outer, v_outer)

            hA_below = self.h_below * self.Ac_below
            hA_above = self.h_above * self.Ac_above
            hA_inner = self.h_inner * self.Ac_inner
            hA_outer = self.h_outer * self.Ac_outer

            self.temperature = (
                (self.loss(amps) + hA_below * t_below + hA_above * t_above
                 + hA_inner * t_inner + hA_outer * t_outer)
                / (hA_below + hA_above + hA_inner + hA_outer)
            )

            delta = abs(self.temperature - old_temp)
            if delta <= params.disc_tol:
                logger.debug("Disc temperature %.3f C after %d iterations", self.temperature, it)
                return self.temperature

        logger.error("Disc temperature did not settle (last change %.4g C)", delta)
        raise ConvergenceError("Disc temperature", delta, params.max_disc_iters)
