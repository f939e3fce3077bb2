import pytest

from winding_cooling.design import INCH, REF_BLOCK_WIDTH, REF_COLUMNS
from winding_cooling.errors import ConfigurationError
from winding_cooling.section import Section
from winding_cooling.types import DiscSide, InletLocation


def test_height(make_section, ref_disc):
    s = make_section(4)
    g = ref_disc.geom
    assert s.height() == pytest.approx(4 * (g.height + g.below_gap) + g.above_gap)


def test_section_owns_its_discs(make_section, ref_disc):
    s = make_section(3)
    s.discs[0].temperature = 70.0
    assert ref_disc.temperature == 20.0
    assert s.discs[1].temperature == 20.0
    assert len({id(d) for d in s.discs}) == 3


def test_inlet_side_selects_duct_areas(make_section, ref_disc):
    inner = make_section(2, InletLocation.INNER)
    outer = make_section(2, InletLocation.OUTER)
    assert inner.inlet_area() == pytest.approx(ref_disc.A_inner)
    assert inner.outlet_area() == pytest.approx(ref_disc.A_outer)
    assert outer.inlet_area() == pytest.approx(ref_disc.A_outer)
    assert outer.outlet_area() == pytest.approx(ref_disc.A_inner)
    assert outer.inlet_side() == DiscSide.OUTER


def test_duct_lengths(make_section, ref_disc):
    s = make_section(2)
    g = ref_disc.geom
    assert s.duct(0).length == pytest.approx(0.5 * g.below_gap)
    assert s.duct(1).length == pytest.approx(g.radial_build)
    assert s.duct(2).length == pytest.approx(g.height + 0.5 * (g.below_gap + g.above_gap))
    assert s.duct(s.network.top_path).area == pytest.approx(ref_disc.A_above)


def test_heated_surfaces(make_section):
    s = make_section(3)
    net = s.network
    assert len(s.heated_surfaces(net.below_path(1))) == 1
    assert len(s.heated_surfaces(net.below_path(2))) == 2
    assert len(s.heated_surfaces(net.top_path)) == 1
    assert s.heated_surfaces(net.top_path)[0] == (s.discs[-1], DiscSide.ABOVE)
    assert s.heated_surfaces(net.far_side_path(1)) == [(s.discs[0], DiscSide.OUTER)]


def test_initialize_node_temps(make_section):
    s = make_section(3)
    s.initialize_node_temps(20.0, 6.0)
    assert s.temperature_at(1) == 20.0
    assert s.temperature_at(2) == 20.0
    assert s.temperature_at(5) == pytest.approx(24.0)
    assert s.outlet_temperature() == pytest.approx(26.0)


def test_clone_keeps_temperatures(make_section):
    s = make_section(2)
    s.initialize_node_temps(30.0, 2.0)
    c = s.clone(inlet_loc=InletLocation.OUTER)
    assert c.inlet_loc == InletLocation.OUTER
    assert c.outlet_temperature() == pytest.approx(32.0)
    c.node_temps[1] = 99.0
    assert s.temperature_at(1) == 30.0


def test_spacer_space_factor(make_section, ref_disc):
    assert make_section(1).spacer_space_factor(ref_disc) == pytest.approx(0.572, abs=1e-3)
    # the spacer layout matches what the reference disc declares
    assert make_section(1).spacer_space_factor(ref_disc) == pytest.approx(
        ref_disc.geom.below_space_factor, abs=1e-3)


def test_configuration_errors(ref_disc):
    empty = Section([], REF_COLUMNS, REF_BLOCK_WIDTH * INCH)
    with pytest.raises(ConfigurationError):
        empty.check_configuration()
    with pytest.raises(ConfigurationError):
        empty.solve_pressure_velocity(0.0, 0.01)

    both = Section([ref_disc], REF_COLUMNS, REF_BLOCK_WIDTH * INCH, inlet_loc=InletLocation.BOTH)
    with pytest.raises(ConfigurationError):
        both.solve_pressure_velocity(0.0, 0.01)
    with pytest.raises(ConfigurationError):
        both.solve_temperatures(20.0, 100.0)


def test_systems_are_created_once(make_section):
    s = make_section(2)
    assert s.pv_system() is s.pv_system()
    assert s.pv_system().dimension == 14
    assert s.t_system().dimension == 13
