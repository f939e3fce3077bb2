import pytest

from winding_cooling.design import (
    INCH,
    REF_EDDY_PU,
    REF_ID,
    REF_TOP_EDDY_PU,
    make_reference_coil,
    make_reference_disc,
    reference_space_factors,
    space_factor,
)
from winding_cooling.types import InletLocation


def test_space_factor():
    assert space_factor(10.0, 4, 0.5) == pytest.approx(0.8)


def test_reference_space_factors():
    sf = reference_space_factors()
    assert sf["horizontal"] == pytest.approx(0.572, abs=1e-3)
    assert sf["inner"] == pytest.approx(0.532, abs=1e-3)
    assert sf["outer"] == pytest.approx(0.606, abs=1e-3)


def test_reference_disc_is_in_metres():
    d = make_reference_disc()
    assert d.geom.inner_diameter == pytest.approx(REF_ID * INCH)
    assert d.eddy_pu == REF_EDDY_PU
    assert make_reference_disc(eddy_pu=0.0, radial_build=0.05).geom.radial_build == 0.05


def test_reference_coil_layout():
    coil = make_reference_coil((3, 3, 2))
    assert [s.n for s in coil.sections] == [3, 3, 2]
    assert [s.inlet_loc for s in coil.sections] == [InletLocation.INNER, InletLocation.OUTER, InletLocation.INNER]
    assert coil.coil_id == pytest.approx(REF_ID * INCH)


def test_only_the_top_disc_gets_the_end_eddy_loss():
    coil = make_reference_coil((3, 3, 2))
    eddies = [d.eddy_pu for s in coil.sections for d in s.discs]
    assert eddies[-1] == REF_TOP_EDDY_PU
    assert all(e == REF_EDDY_PU for e in eddies[:-1])

    # discs are not shared between sections
    ids = [id(d) for s in coil.sections for d in s.discs]
    assert len(set(ids)) == len(ids)

    flat = make_reference_coil((2, 2), top_eddy_pu=None)
    assert all(d.eddy_pu == REF_EDDY_PU for s in flat.sections for d in s.discs)
