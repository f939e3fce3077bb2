import pytest

from winding_cooling.design import INCH, REF_BLOCK_WIDTH, REF_COLUMNS, make_reference_disc
from winding_cooling.section import Section
from winding_cooling.types import InletLocation


@pytest.fixture
def ref_disc():
    return make_reference_disc()


@pytest.fixture
def cold_disc():
    # no resistive loss at all
    return make_reference_disc(resistance_20=0.0, eddy_pu=0.0)


@pytest.fixture
def make_section(ref_disc):
    def _make(n: int = 3, inlet_loc: InletLocation = InletLocation.INNER, disc=None) -> Section:
        base = disc or ref_disc
        return Section(Section.create_disc_array(n, base), REF_COLUMNS, REF_BLOCK_WIDTH * INCH, inlet_loc=inlet_loc)
    return _make
