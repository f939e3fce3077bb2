from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

import numpy as np


class InletLocation(Enum):
    """
    Side of the section where oil enters at the bottom (oil-flow washers
    block the other side). BOTH is non-directed flow and is not supported.
    """
    INNER = "inner"
    OUTER = "outer"
    BOTH = "both"

    def opposite(self) -> "InletLocation":
        if self is InletLocation.INNER:
            return InletLocation.OUTER
        if self is InletLocation.OUTER:
            return InletLocation.INNER
        return self


class DiscSide(IntEnum):
    BELOW = 0
    ABOVE = 1
    INNER = 2
    OUTER = 3


class PathKind(IntEnum):
    """
    Duct segments of a section, numbered from the inlet side:
    INLET / OUTLET = the section boundary ducts
    HORIZONTAL     = radial duct between two discs (inlet side -> far side)
    INLET_SIDE     = vertical duct on the inlet side of a disc
    FAR_SIDE       = vertical duct on the opposite side
    """
    INLET = 0
    HORIZONTAL = 1
    INLET_SIDE = 2
    FAR_SIDE = 3
    OUTLET = 4


class ConvergenceCriterion(Enum):
    TOP_OIL = "top_oil"
    TOP_OIL_AND_FLOW = "top_oil_and_flow"


@dataclass(frozen=True, slots=True)
class FlowResult:
    """
    Output of a section pressure/velocity solve.
    pressures:  node pressures, index 0 = section inlet [Pa]
    velocities: path velocities, index 0 = inlet duct [m/s]
    p_out, v_out: pressure/velocity handed to the next section
    """
    pressures: np.ndarray
    velocities: np.ndarray
    p_out: float
    v_out: float


@dataclass(frozen=True, slots=True)
class ThermalSolveResult:
    node_temps: np.ndarray
    disc_temps: np.ndarray
    t_out: float
    iterations: int


@dataclass(frozen=True, slots=True)
class CoilThermalResult:
    top_oil_temp: float
    outflow_rate: float   # m^3/s out of the top section
    hot_spot: float
    loss: float
    p0: float
    v0: float
    iterations: int
