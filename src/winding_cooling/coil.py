from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

import winding_cooling.config as cfg
from winding_cooling.correlations import initial_oil_velocity, pressure_change_in_coil
from winding_cooling.errors import ConfigurationError, ConvergenceError
from winding_cooling.physics import ModelParams
from winding_cooling.section import Section
from winding_cooling.types import CoilThermalResult, ConvergenceCriterion, InletLocation

logger = logging.getLogger(__name__)


def exterior_oil_temperature(t_bottom: float, t_top: float, height: float,
                             cooling_offset: float, rad_height: float) -> float:
    """
    Height-averaged oil temperature outside the coil. Ambient oil is t_bottom
    below the radiator inlet (cooling_offset above the coil bottom), rises
    linearly to t_top over the radiator height, and stays at t_top above it.
    The profile is piecewise linear, so the trapezoid rule on its breakpoints
    is exact.
    """
    if height <= 0.0:
        return float(t_bottom)
    knots = np.clip([cooling_offset, cooling_offset + rad_height], 0.0, height)
    z = np.unique(np.concatenate(([0.0, height], knots)))
    profile = np.interp(z, [cooling_offset, cooling_offset + rad_height], [t_bottom, t_top])
    area = np.sum(0.5 * (profile[1:] + profile[:-1]) * np.diff(z))
    return float(area / height)


class Coil:
    """
    Full winding: sections stacked bottom (index 0) to top. p0/v0 are the oil
    pressure and velocity at the bottom inlet, relaxed across outer iterations.

    The duct and stick dimensions describe the winding build. The solver
    works from the space factors stored on each disc; stick_space_factors()
    gives the values the stick layout implies, to check or build discs from.
    """

    def __init__(
        self,
        amps: float,
        coil_id: float,
        sections: Sequence[Section] = (),
        uses_oil_flow_washers: bool = True,
        inner_duct_dimn: float = cfg.DUCT_DIMN,
        num_inner_sticks: int = cfg.NUM_STICKS,
        outer_duct_dimn: float = cfg.DUCT_DIMN,
        num_outer_sticks: int = cfg.NUM_STICKS,
        stick_width: float = cfg.STICK_WIDTH,
        params: Optional[ModelParams] = None,
    ):
        self.amps = float(amps)
        self.coil_id = float(coil_id)
        self.sections: List[Section] = list(sections)
        self.uses_oil_flow_washers = uses_oil_flow_washers
        self.inner_duct_dimn = inner_duct_dimn
        self.num_inner_sticks = num_inner_sticks
        self.outer_duct_dimn = outer_duct_dimn
        self.num_outer_sticks = num_outer_sticks
        self.stick_width = stick_width
        self.params = params or ModelParams()

        self.p0 = 0.0
        self.v0 = 0.0
        self.t_bottom = cfg.DEFAULT_T_BOTTOM
        self.t_top = cfg.DEFAULT_T_TOP

        # bottom pressure minus top pressure realised on the last pass
        self._last_drop: Optional[float] = None

    @staticmethod
    def create_sections(num_sections: int, base_sect: Section, alternate_inlets: bool = True) -> List[Section]:
        """
        Independent copies of base_sect, bottom first. For directed flow the
        inlet side can alternate from section to section.
        """
        result = []
        for k in range(num_sections):
            loc = base_sect.inlet_loc
            if alternate_inlets and k % 2 == 1:
                loc = loc.opposite()
            result.append(base_sect.clone(inlet_loc=loc))
        return result

    def check_configuration(self) -> None:
        if not self.sections:
            logger.error("No sections have been defined")
            raise ConfigurationError("No sections have been defined")
        if not self.uses_oil_flow_washers:
            logger.error("Non-directed flow is not implemented")
            raise ConfigurationError("Non-directed flow is not implemented")
        for section in self.sections:
            section.check_configuration()

    # ---------- winding quantities ----------
    def height(self) -> float:
        return float(sum(s.height() for s in self.sections))

    def loss(self, amps: Optional[float] = None) -> float:
        amps = self.amps if amps is None else amps
        return float(sum(s.total_loss(amps) for s in self.sections))

    def inlet_area(self) -> float:
        self.check_configuration()
        return self.sections[0].inlet_area()

    def qout(self) -> float:
        """Volumetric oil flow out of the top of the coil [m^3/s]."""
        self.check_configuration()
        return self.sections[-1].qout()

    def hot_spot(self) -> float:
        """Temperature of the top disc of the top section."""
        self.check_configuration()
        return self.sections[-1].discs[-1].temperature

    def hottest_disc(self) -> Tuple[int, int, float]:
        """(section index, disc index, temperature) of the hottest disc in the coil."""
        self.check_configuration()
        best = (0, 0, -np.inf)
        for k, section in enumerate(self.sections):
            i, t = section.hottest_disc()
            if t > best[2]:
                best = (k, i, t)
        return best

    def stick_space_factors(self) -> Tuple[float, float]:
        """(inner, outer) open fraction of the vertical ducts left by the sticks."""
        self.check_configuration()
        rb = self.sections[0].discs[0].geom.radial_build
        inner = (self.coil_id - self.inner_duct_dimn) * np.pi
        outer = (self.coil_id + 2.0 * rb + self.outer_duct_dimn) * np.pi
        return (1.0 - self.num_inner_sticks * self.stick_width / inner,
                1.0 - self.num_outer_sticks * self.stick_width / outer)

    def average_oil_temperature(self) -> float:
        temps = np.concatenate([s.node_temps[1:] for s in self.sections])
        return float(temps.mean())

    def initialize_node_temps(self, t_bottom: float, t_top: float) -> None:
        """Linear oil temperature estimate from t_bottom to t_top, split over the sections."""
        step = (t_top - t_bottom) / len(self.sections)
        for k, section in enumerate(self.sections):
            section.initialize_node_temps(t_bottom + k * step, step)

    # ---------- boundary estimate ----------
    def initialize_input_parameters(self, t_bottom: float, t_top: float) -> None:
        """
        Seed p0/v0 from the top-bottom oil temperature difference (Bluebook
        eq 15.16, 15.17). Equal temperatures fall back to a 1 degree difference.
        """
        self.check_configuration()
        delta_t = t_top - t_bottom
        if delta_t == 0.0:
            logger.warning("Top oil must be greater than bottom oil. Setting to a difference of %.1f",
                           cfg.LEGACY_MIN_DT)
            delta_t = cfg.LEGACY_MIN_DT
        else:
            self.t_top = t_top
            self.t_bottom = t_bottom

        oil = self.params.oil
        self.p0 = pressure_change_in_coil(oil.density, self.height(), delta_t, beta=oil.beta)
        self.v0 = initial_oil_velocity(self.loss(), self.inlet_area(), delta_t,
                                       density=oil.density, specific_heat=oil.specific_heat)
        self._last_drop = None

    def update_boundary_conditions(self, cooling_offset: float, rad_height: float) -> None:
        """
        Re-estimate p0/v0. The head comes from the interior oil being warmer
        than the exterior column; the velocity is rescaled by head / realised
        drop (laminar ducts: drop is linear in velocity). Both are relaxed.
        """
        oil = self.params.oil
        relax = self.params.relax
        height = self.height()

        t_ext = exterior_oil_temperature(self.t_bottom, self.t_top, height, cooling_offset, rad_height)
        t_int = self.average_oil_temperature()
        dt_head = max(t_int - t_ext, cfg.MIN_BUOYANCY_DT)
        p_new = pressure_change_in_coil(oil.density, height, dt_head, beta=oil.beta)

        if self._last_drop is None or self._last_drop <= cfg.EPS or self.v0 <= 0.0:
            # seed velocity scales as 1/dt
            dt_rise = max(self.t_top - self.t_bottom, cfg.LEGACY_MIN_DT)
            v_new = initial_oil_velocity(self.loss(), self.inlet_area(), dt_rise,
                                         density=oil.density, specific_heat=oil.specific_heat)
        else:
            v_new = self.v0 * p_new / self._last_drop

        if self._last_drop is None:
            self.p0, self.v0 = p_new, v_new
        else:
            self.p0 = relax.pressure * p_new + (1.0 - relax.pressure) * self.p0
            self.v0 = relax.velocity * v_new + (1.0 - relax.velocity) * self.v0

    def propagate(self) -> float:
        """
        One pass bottom -> top: PV then T solve per section, threading the
        outlet pressure/velocity/temperature into the next section.
        Returns the top oil temperature.
        """
        p, v, t = self.p0, self.v0, self.t_bottom
        prev: Optional[Section] = None
        for section in self.sections:
            if prev is not None:
                v = v * prev.outlet_area() / section.inlet_area()
            flow = section.solve_pressure_velocity(p, v, self.params)
            p, v = flow.p_out, flow.v_out
            t = section.solve_temperatures(t, self.amps, self.params).t_out
            prev = section

        self._last_drop = self.p0 - p
        return float(t)

    # ---------- driver ----------
    def simulate_thermal_with_temps(
        self,
        t_bottom: float,
        t_top: float,
        cooling_offset: float,
        rad_height: float,
        criterion: Optional[ConvergenceCriterion] = None,
    ) -> CoilThermalResult:
        """
        Steady-state oil flow and temperatures of the coil. t_bottom/t_top are
        the ambient oil temperatures at the bottom and top of the tank;
        cooling_offset is the height of the radiator inlet above the coil
        bottom and rad_height the radiator height.
        """
        self.check_configuration()
        if rad_height <= 0.0:
            logger.error("Radiator height must be positive")
            raise ConfigurationError(f"Radiator height must be positive, got {rad_height}")
        criterion = criterion or ConvergenceCriterion.TOP_OIL
        params = self.params

        self.t_bottom = float(t_bottom)
        self.t_top = float(t_top)
        self._last_drop = None
        self.initialize_node_temps(self.t_bottom, self.t_top)

        prev_top: Optional[float] = None
        delta = float("inf")
        for it in range(1, params.max_coil_iters + 1):
            old_p0, old_v0 = self.p0, self.v0
            self.update_boundary_conditions(cooling_offset, rad_height)
            top_oil = self.propagate()
            self.t_top = top_oil

            loss = self.loss()
            logger.info(
                "Iteration %d: loss %.1f W; top oil %.2f C; hot spot %.2f C; p0 %.4g Pa; v0 %.4g m/s",
                it, loss, top_oil, self.hot_spot(), self.p0, self.v0,
            )

            # the first pass runs on the seeded velocity; only compare passes
            # whose velocity was rescaled from a realised drop
            if it == 1:
                continue
            if prev_top is not None:
                delta = abs(top_oil - prev_top)
                done = delta <= params.top_oil_tol
                if criterion == ConvergenceCriterion.TOP_OIL_AND_FLOW:
                    done = (done
                            and abs(self.v0 - old_v0) <= params.flow_rtol * abs(self.v0)
                            and abs(self.p0 - old_p0) <= params.flow_rtol * abs(self.p0))
                if done:
                    return CoilThermalResult(
                        top_oil_temp=top_oil,
                        outflow_rate=self.qout(),
                        hot_spot=self.hot_spot(),
                        loss=loss,
                        p0=self.p0,
                        v0=self.v0,
                        iterations=it,
                    )
            prev_top = top_oil

        logger.error("Coil did not converge (last top oil change %.4g C)", delta)
        raise ConvergenceError("Coil top oil temperature", delta, params.max_coil_iters)
