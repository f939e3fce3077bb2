from __future__ import annotations

import math
from typing import Optional, Sequence

from winding_cooling.coil import Coil
from winding_cooling.disc import Disc
from winding_cooling.physics import DiscGeom, ModelParams
from winding_cooling.section import Section
from winding_cooling.types import InletLocation

INCH = 25.4 / 1000.0

# LV winding of the reference design (inches)
REF_ID = 22.676
REF_RADIAL_BUILD = 1.874
REF_DISC_HEIGHT = 0.3746
REF_PAPER = 0.018
REF_HORIZONTAL_GAP = 0.15
REF_VERTICAL_GAP = 0.25
REF_BLOCK_WIDTH = 1.5
REF_COLUMNS = 22
REF_STICKS = 44
REF_R20 = 0.42426 / 98   # ohm per disc
REF_EDDY_PU = 0.02
REF_TOP_EDDY_PU = 0.0865
REF_AMPS = 113.6
REF_DISC_COUNTS = (33, 33, 32)

# radiator placement used with the reference design (m)
REF_COOLING_OFFSET = 0.381
REF_RAD_HEIGHT = 2.3


def space_factor(circumference: float, count: int, width: float) -> float:
    """Open fraction of a duct circumference blocked by `count` spacers of `width`."""
    return 1.0 - count * width / circumference


def make_reference_disc(**overrides) -> Disc:
    """
    Disc of the reference LV winding in SI units. Keyword overrides go to
    DiscGeom fields, or to resistance_20 / eddy_pu / temperature.
    """
    disc_kw = {k: overrides.pop(k) for k in ("resistance_20", "eddy_pu", "temperature") if k in overrides}

    geom_kw = dict(
        inner_diameter=REF_ID * INCH,
        radial_build=REF_RADIAL_BUILD * INCH,
        height=REF_DISC_HEIGHT * INCH,
        paper_thickness=REF_PAPER * INCH,
        below_gap=REF_HORIZONTAL_GAP * INCH,
        above_gap=REF_HORIZONTAL_GAP * INCH,
        inner_gap=REF_VERTICAL_GAP * INCH,
        outer_gap=REF_VERTICAL_GAP * INCH,
        below_space_factor=0.572,
        above_space_factor=0.572,
        inner_space_factor=0.537,
        outer_space_factor=0.603,
        num_columns=REF_COLUMNS,
        inner_sticks=REF_STICKS,
        outer_sticks=REF_STICKS,
    )
    geom_kw.update(overrides)

    return Disc(
        geom=DiscGeom(**geom_kw),
        resistance_20=disc_kw.get("resistance_20", REF_R20),
        eddy_pu=disc_kw.get("eddy_pu", REF_EDDY_PU),
        temperature=disc_kw.get("temperature", 20.0),
    )


def make_reference_coil(
    disc_counts: Sequence[int] = REF_DISC_COUNTS,
    amps: float = REF_AMPS,
    top_eddy_pu: Optional[float] = REF_TOP_EDDY_PU,
    params: Optional[ModelParams] = None,
    base_disc: Optional[Disc] = None,
) -> Coil:
    """
    Reference LV coil: sections bottom to top, inlets alternating starting on
    the inner side. Only the top disc of the top section carries the higher
    end-disc eddy loss.
    """
    base = base_disc or make_reference_disc()
    sections = []
    loc = InletLocation.INNER
    for k, count in enumerate(disc_counts):
        discs = Section.create_disc_array(count, base)
        if top_eddy_pu is not None and k == len(disc_counts) - 1 and discs:
            discs[-1] = discs[-1].clone(eddy_pu=top_eddy_pu)
        sections.append(Section(discs, REF_COLUMNS, REF_BLOCK_WIDTH * INCH, inlet_loc=loc))
        loc = loc.opposite()

    return Coil(
        amps=amps,
        coil_id=base.geom.inner_diameter,
        sections=sections,
        num_inner_sticks=REF_STICKS,
        num_outer_sticks=REF_STICKS,
        params=params,
    )


def reference_space_factors() -> dict:
    """Space factors implied by the reference spacer/stick layout."""
    ID = REF_ID * INCH
    rb = REF_RADIAL_BUILD * INCH
    gap = REF_VERTICAL_GAP * INCH
    stick = 0.75 * INCH
    return {
        "horizontal": space_factor((ID + rb) * math.pi, REF_COLUMNS, REF_BLOCK_WIDTH * INCH),
        "inner": space_factor((ID - gap) * math.pi, REF_STICKS, stick),
        "outer": space_factor((ID + 2.0 * rb + gap) * math.pi, REF_STICKS, stick),
    }
