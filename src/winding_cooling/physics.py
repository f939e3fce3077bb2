from __future__ import annotations
from dataclasses import dataclass, field

import winding_cooling.config as cfg
from winding_cooling.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class OilProps:
    density: float = cfg.OIL_DENSITY              # [kg/m^3]
    specific_heat: float = cfg.SPECIFIC_HEAT_OF_OIL  # [J/(kg*K)]
    k: float = cfg.OIL_CONDUCTIVITY               # thermal conductivity [W/(m*K)]
    beta: float = cfg.OIL_EXPANSION               # volumetric expansion [1/K]

    @property
    def rho_cp(self) -> float:
        return self.density * self.specific_heat


@dataclass(frozen=True, slots=True)
class InsulationProps:
    k: float = cfg.PAPER_CONDUCTIVITY  # paper cover conductivity [W/(m*K)]


@dataclass(frozen=True, slots=True)
class DiscGeom:
    # conductor block (all lengths in m)
    inner_diameter: float
    radial_build: float
    height: float
    paper_thickness: float
    # oil ducts bounding the disc
    below_gap: float
    above_gap: float
    inner_gap: float
    outer_gap: float
    # per-unit exposed surface / total surface of each duct
    below_space_factor: float = 1.0
    above_space_factor: float = 1.0
    inner_space_factor: float = 1.0
    outer_space_factor: float = 1.0
    # spacer columns across the horizontal ducts, sticks in the vertical ones
    num_columns: int = 1
    inner_sticks: int = 1
    outer_sticks: int = 1

    def __post_init__(self):
        dims = {
            "inner_diameter": self.inner_diameter,
            "radial_build": self.radial_build,
            "height": self.height,
            "below_gap": self.below_gap,
            "above_gap": self.above_gap,
            "inner_gap": self.inner_gap,
            "outer_gap": self.outer_gap,
        }
        for name, value in dims.items():
            if not value > 0.0:
                raise ConfigurationError(f"Disc {name} must be positive, got {value}")
        if self.paper_thickness < 0.0:
            raise ConfigurationError(f"Paper thickness cannot be negative, got {self.paper_thickness}")
        for sf in (self.below_space_factor, self.above_space_factor,
                   self.inner_space_factor, self.outer_space_factor):
            if not 0.0 < sf <= 1.0:
                raise ConfigurationError(f"Space factor must be in (0, 1], got {sf}")
        if min(self.num_columns, self.inner_sticks, self.outer_sticks) < 1:
            raise ConfigurationError("Spacer column and stick counts must be at least 1")


@dataclass(frozen=True, slots=True)
class RelaxationParams:
    pressure: float = cfg.P_RELAX
    velocity: float = cfg.V_RELAX

    def __post_init__(self):
        for name, value in (("pressure", self.pressure), ("velocity", self.velocity)):
            if not 0.0 < value <= 1.0:
                raise ConfigurationError(f"{name} relaxation factor must be in (0, 1], got {value}")


@dataclass(frozen=True, slots=True)
class ModelParams:
    oil: OilProps = field(default_factory=OilProps)
    insulation: InsulationProps = field(default_factory=InsulationProps)
    relax: RelaxationParams = field(default_factory=RelaxationParams)
    disc_tol: float = cfg.DISC_TEMP_TOL
    section_tol: float = cfg.SECTION_TEMP_TOL
    top_oil_tol: float = cfg.TOP_OIL_TOL
    flow_rtol: float = cfg.FLOW_RTOL
    max_disc_iters: int = cfg.MAX_DISC_ITERS
    max_section_iters: int = cfg.MAX_SECTION_ITERS
    max_coil_iters: int = cfg.MAX_COIL_ITERS
