import numpy as np
import pytest

from winding_cooling.errors import SolverError
from winding_cooling.flow_solver import path_resistance
from winding_cooling.sparse_system import SparseSystem
from winding_cooling.types import InletLocation


def test_no_inflow_means_no_flow(make_section):
    s = make_section(1)
    res = s.solve_pressure_velocity(100.0, 0.0)
    assert np.allclose(res.velocities, 0.0)
    assert np.allclose(res.pressures, 100.0)
    assert res.p_out == pytest.approx(100.0)
    assert res.v_out == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize("inlet", [InletLocation.INNER, InletLocation.OUTER])
def test_mass_is_conserved(make_section, inlet):
    s = make_section(4, inlet)
    v_in = 0.03
    res = s.solve_pressure_velocity(50.0, v_in)
    assert res.v_out * s.outlet_area() == pytest.approx(v_in * s.inlet_area(), rel=1e-9)

    # everything crossing from the inlet side to the far side goes through the horizontal ducts
    net = s.network
    crossing = sum(s.duct(net.below_path(i)).area * s.velocity_at(net.below_path(i))
                   for i in range(1, net.n + 2))
    assert crossing == pytest.approx(v_in * s.inlet_area(), rel=1e-9)


def test_pressure_falls_along_the_flow(make_section):
    s = make_section(3)
    p_in = 40.0
    res = s.solve_pressure_velocity(p_in, 0.05)
    assert res.pressures[0] == p_in
    assert s.pressure_at(1) == pytest.approx(p_in - path_resistance(s, 0) * 0.05)
    assert res.p_out < s.pressure_at(s.network.outlet_node) < p_in
    assert res.velocities[0] == 0.05


def test_drop_is_independent_of_inlet_pressure(make_section):
    a = make_section(3).solve_pressure_velocity(0.0, 0.05)
    b = make_section(3).solve_pressure_velocity(25.0, 0.05)
    assert 0.0 - a.p_out == pytest.approx(25.0 - b.p_out)
    assert a.v_out == pytest.approx(b.v_out)


def test_identical_sections_chain(make_section):
    first = make_section(3)
    second = make_section(3)
    p_in, v_in = 30.0, 0.04
    r1 = first.solve_pressure_velocity(p_in, v_in)
    v2 = r1.v_out * first.outlet_area() / second.inlet_area()
    r2 = second.solve_pressure_velocity(r1.p_out, v2)
    assert r2.v_out == pytest.approx(r1.v_out)
    assert r1.p_out - r2.p_out == pytest.approx(p_in - r1.p_out)


def test_results_are_copies(make_section):
    s = make_section(2)
    res = s.solve_pressure_velocity(10.0, 0.02)
    res.velocities[1] = 123.0
    assert s.velocity_at(1) != 123.0


def test_failed_solve_raises(make_section, monkeypatch):
    s = make_section(2)
    monkeypatch.setattr(SparseSystem, "solve", lambda self, rhs: np.empty(0))
    with pytest.raises(SolverError, match="PV calculation failed"):
        s.solve_pressure_velocity(10.0, 0.02)
    assert np.all(s.path_velocities == 0.0)
