from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from winding_cooling.correlations import oil_viscosity, pressure_change_using_k_and_d
from winding_cooling.errors import SolverError
from winding_cooling.physics import ModelParams
from winding_cooling.sparse_system import SparseSystem
from winding_cooling.types import FlowResult

if TYPE_CHECKING:
    from winding_cooling.section import Section

logger = logging.getLogger(__name__)


def path_oil_temperature(section: "Section", path: int) -> float:
    """Mean oil temperature of a duct from its end nodes (node 0 = section inlet)."""
    start, end = section.network.path_nodes(path)
    a = 0 if start is None else start
    if end is None:
        return section.temperature_at(a)
    return 0.5 * (section.temperature_at(a) + section.temperature_at(end))


def path_resistance(section: "Section", path: int) -> float:
    """
    Pressure drop per unit velocity of one duct:
    ΔP = 0.5 μ(T) K L v / D^2  evaluated at v = 1
    with the viscosity frozen at the current oil temperature estimate.
    """
    duct = section.duct(path)
    mu = oil_viscosity(path_oil_temperature(section, path))
    return pressure_change_using_k_and_d(duct.k, duct.D, mu, duct.length, 1.0)


def assemble_pv_system(section: "Section", p_in: float, v_in: float, system: SparseSystem) -> np.ndarray:
    """
    Unknowns: node pressures 1..2n+2, path velocities 1..3n+2.
      row 0                    P_1 = p_in - R_0 v_in
      row velocity_index(p)    P_start - P_end - R_p v_p = 0       (p = 1..3n+1)
      row pressure_index(k)    sum A v (in) - sum A v (out) = 0     (k = 2..2n+2)
      last row                 continuity of node 1, fed by the inlet duct
    """
    net = section.network
    system.clear()
    b = np.zeros(net.pv_dimension, dtype=np.float64)

    def pid(node: int) -> int:
        return net.pressure_index(node)

    def vid(path: int) -> int:
        return net.velocity_index(path)

    # inlet boundary
    r0 = pid(net.inlet_node)
    system.set(r0, pid(net.inlet_node), 1.0)
    b[r0] = p_in - path_resistance(section, 0) * v_in

    # duct pressure drops (linear in velocity once viscosity is frozen)
    for p in range(1, net.top_path + 1):
        a, e = net.path_nodes(p)
        r = vid(p)
        system.set(r, pid(a), 1.0)
        system.set(r, pid(e), -1.0)
        system.set(r, vid(p), -path_resistance(section, p))

    # mass continuity
    for node in range(1, net.num_nodes + 1):
        r = vid(net.outlet_path) if node == net.inlet_node else pid(node)
        for p in net.incoming_paths(node):
            if p == 0:
                b[r] -= section.duct(0).area * v_in
            else:
                system.add(r, vid(p), section.duct(p).area)
        for p in net.outgoing_paths(node):
            system.add(r, vid(p), -section.duct(p).area)

    return b


def solve_section_flow(section: "Section", p_in: float, v_in: float, params: ModelParams) -> FlowResult:
    section.check_configuration()
    net = section.network

    system = section.pv_system()
    b = assemble_pv_system(section, p_in, v_in, system)
    logger.debug("PV system: dimension %d, %d entries", system.dimension, system.nnz)

    x = system.solve(b)
    if x.size == 0:
        logger.error("PV calculation failed")
        raise SolverError("PV calculation failed")

    n_p = net.num_nodes
    section.node_pressures[0] = p_in
    section.node_pressures[1:] = x[:n_p]
    section.path_velocities[0] = v_in
    section.path_velocities[1:] = x[n_p:]

    v_out = section.velocity_at(net.outlet_path)
    p_out = section.pressure_at(net.outlet_node) - path_resistance(section, net.outlet_path) * v_out

    return FlowResult(
        pressures=section.node_pressures.copy(),
        velocities=section.path_velocities.copy(),
        p_out=float(p_out),
        v_out=float(v_out),
    )
