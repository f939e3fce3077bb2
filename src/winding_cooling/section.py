from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

import winding_cooling.config as cfg
from winding_cooling.disc import Disc
from winding_cooling.errors import ConfigurationError
from winding_cooling.flow_solver import solve_section_flow
from winding_cooling.network import SectionNetwork
from winding_cooling.physics import ModelParams
from winding_cooling.sparse_system import SparseSystem
from winding_cooling.thermal_solver import solve_section_temperatures
from winding_cooling.types import DiscSide, FlowResult, InletLocation, PathKind, ThermalSolveResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Duct:
    k: float        # laminar loss factor
    D: float        # hydraulic diameter [m]
    length: float   # node-to-node path length [m]
    area: float     # flow cross-section [m^2]


class Section:
    """
    Stack of discs between two oil-flow washers. Oil enters at the bottom on
    the inlet side, crosses the horizontal ducts and leaves at the top on the
    far side.

    num_axial_columns and block_width describe the radial spacers. The ducts
    use the space factors stored on the discs; spacer_space_factor() gives
    the value the spacer layout implies.
    """

    def __init__(
        self,
        discs: Sequence[Disc],
        num_axial_columns: int,
        block_width: float,
        inlet_loc: InletLocation = InletLocation.INNER,
    ):
        # each section owns its discs
        self.discs: List[Disc] = [d.clone() for d in discs]
        self.num_axial_columns = int(num_axial_columns)
        self.block_width = float(block_width)
        self.inlet_loc = inlet_loc
        self.network = SectionNetwork(len(self.discs))

        net = self.network
        self.node_temps = np.full(net.num_nodes + 1, cfg.DEFAULT_DISC_TEMP, dtype=np.float64)
        self.node_pressures = np.zeros(net.num_nodes + 1, dtype=np.float64)
        self.path_velocities = np.zeros(net.num_paths + 1, dtype=np.float64)
        self.duct_deltas = np.zeros(max(net.top_path, 0), dtype=np.float64)

        self._pv_system: Optional[SparseSystem] = None
        self._t_system: Optional[SparseSystem] = None

    def clone(self, inlet_loc: Optional[InletLocation] = None) -> "Section":
        out = Section(self.discs, self.num_axial_columns, self.block_width,
                      self.inlet_loc if inlet_loc is None else inlet_loc)
        out.node_temps = self.node_temps.copy()
        return out

    @staticmethod
    def create_disc_array(num_discs: int, base_disc: Disc) -> List[Disc]:
        """Independent copies of base_disc; change eddy losses per disc with Disc.clone()."""
        return [base_disc.clone() for _ in range(num_discs)]

    @property
    def n(self) -> int:
        return len(self.discs)

    def check_configuration(self) -> None:
        if not self.discs:
            logger.error("No discs have been defined")
            raise ConfigurationError("No discs have been defined")
        if self.inlet_loc == InletLocation.BOTH:
            logger.error("Non-directed flow is not implemented")
            raise ConfigurationError("Non-directed flow is not implemented")

    def pv_system(self) -> SparseSystem:
        if self._pv_system is None:
            self._pv_system = SparseSystem(self.network.pv_dimension)
        return self._pv_system

    def t_system(self) -> SparseSystem:
        if self._t_system is None:
            self._t_system = SparseSystem(self.network.t_dimension)
        return self._t_system

    # ---------- arena accessors (node/path 0 = section inlet) ----------
    def temperature_at(self, node: int) -> float:
        return float(self.node_temps[node])

    def pressure_at(self, node: int) -> float:
        return float(self.node_pressures[node])

    def velocity_at(self, path: int) -> float:
        return float(self.path_velocities[path])

    def outlet_temperature(self) -> float:
        return self.temperature_at(self.network.outlet_node)

    def initialize_node_temps(self, t_in: float, delta_t: float) -> None:
        """Linear ramp from t_in at the bottom duct to t_in + delta_t above the top disc."""
        net = self.network
        self.node_temps[0] = t_in
        levels = max(net.n, 1)
        for node in range(1, net.num_nodes + 1):
            self.node_temps[node] = t_in + delta_t * net.level(node) / levels

    # ---------- geometry ----------
    def inlet_side(self) -> DiscSide:
        return DiscSide.INNER if self.inlet_loc == InletLocation.INNER else DiscSide.OUTER

    def far_side(self) -> DiscSide:
        return DiscSide.OUTER if self.inlet_loc == InletLocation.INNER else DiscSide.INNER

    def duct(self, path: int) -> Duct:
        net = self.network
        kind = net.path_kind(path)
        i = net.path_disc(path)
        disc = self.discs[i - 1]

        if kind == PathKind.HORIZONTAL:
            above_top = path == net.top_path
            k, D, area = disc.duct(DiscSide.ABOVE if above_top else DiscSide.BELOW)
            return Duct(k, D, disc.horizontal_length, area)

        if kind in (PathKind.INLET, PathKind.INLET_SIDE):
            side = self.inlet_side()
        else:
            side = self.far_side()
        k, D, area = disc.duct(side)

        if kind == PathKind.INLET:
            length = 0.5 * disc.geom.below_gap
        elif kind == PathKind.OUTLET:
            length = 0.5 * disc.geom.above_gap
        else:
            length = disc.vertical_length
        return Duct(k, D, length, area)

    def heated_surfaces(self, path: int) -> List[Tuple[Disc, DiscSide]]:
        """Disc faces that give heat to the oil in an internal duct."""
        net = self.network
        kind = net.path_kind(path)
        i = (path + 2) // 3
        if kind == PathKind.HORIZONTAL:
            faces = []
            if i <= net.n:
                faces.append((self.discs[i - 1], DiscSide.BELOW))
            if i >= 2:
                faces.append((self.discs[i - 2], DiscSide.ABOVE))
            return faces
        if kind == PathKind.INLET_SIDE:
            return [(self.discs[i - 1], self.inlet_side())]
        if kind == PathKind.FAR_SIDE:
            return [(self.discs[i - 1], self.far_side())]
        return []

    def inlet_area(self) -> float:
        self.check_configuration()
        return self.duct(0).area

    def outlet_area(self) -> float:
        self.check_configuration()
        return self.duct(self.network.outlet_path).area

    def spacer_space_factor(self, disc: Disc) -> float:
        """Open fraction of a horizontal duct left by the radial spacer columns."""
        return 1.0 - self.num_axial_columns * self.block_width / disc.lmt

    def height(self) -> float:
        if not self.discs:
            return 0.0
        return sum(d.height_with_gap() for d in self.discs) + self.discs[-1].geom.above_gap

    def total_loss(self, amps: float) -> float:
        return float(sum(d.loss(amps) for d in self.discs))

    def qout(self) -> float:
        """Volumetric oil flow leaving the top of the section [m^3/s]."""
        return self.velocity_at(self.network.outlet_path) * self.outlet_area()

    def disc_temperatures(self) -> np.ndarray:
        return np.array([d.temperature for d in self.discs], dtype=np.float64)

    def hottest_disc(self) -> Tuple[int, float]:
        """(0-based index, temperature) of the hottest disc."""
        temps = self.disc_temperatures()
        i = int(np.argmax(temps))
        return i, float(temps[i])

    # ---------- solves ----------
    def solve_pressure_velocity(self, p_in: float, v_in: float,
                                params: Optional[ModelParams] = None) -> FlowResult:
        return solve_section_flow(self, p_in, v_in, params or ModelParams())

    def solve_temperatures(self, t_in: float, amps: float,
                           params: Optional[ModelParams] = None) -> ThermalSolveResult:
        return solve_section_temperatures(self, t_in, amps, params or ModelParams())
