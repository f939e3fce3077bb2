from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Tuple

import numpy as np

import winding_cooling.config as cfg
from winding_cooling.errors import ConvergenceError, SolverError
from winding_cooling.physics import ModelParams
from winding_cooling.sparse_system import SparseSystem
from winding_cooling.types import ThermalSolveResult

if TYPE_CHECKING:
    from winding_cooling.section import Section

logger = logging.getLogger(__name__)


def update_disc_temperatures(section: "Section", amps: float, params: ModelParams) -> None:
    """Fixed-point update of every disc from the current node temperatures and duct velocities."""
    net = section.network
    for i, disc in enumerate(section.discs, start=1):
        t1, t2, t3, t4 = (section.temperature_at(k) for k in net.disc_nodes(i))
        below, above, inlet_side, far_side = net.disc_paths(i)
        disc.update_temperature(
            amps, section.inlet_loc,
            t1, t2, t3, t4,
            section.velocity_at(below), section.velocity_at(above),
            section.velocity_at(inlet_side), section.velocity_at(far_side),
            params=params,
        )


def upstream_downstream(section: "Section", path: int) -> Tuple[int, int]:
    """End nodes of an internal duct ordered by the sign of its current velocity."""
    a, b = section.network.path_nodes(path)
    if section.velocity_at(path) >= 0.0:
        return a, b
    return b, a


def assemble_temperature_system(section: "Section", t_in: float, system: SparseSystem,
                                params: ModelParams) -> np.ndarray:
    """
    Unknowns: oil temperature of nodes 1..2n+2 and temperature rise ΔT_p of
    ducts 1..3n+1 (rise from the upstream end, so no higher-order terms are needed).

    duct rows:   ρc A|v| ΔT_p + Σ hAc (T_up + ΔT_p/2) = Σ hAc T_disc
    node rows:   T_k Σw - Σ w (T_up + ΔT_p) = 0,  w = ρc A|v| of the ducts flowing into k
    node 1:      T_1 = t_in
    """
    net = section.network
    rho_cp = params.oil.rho_cp
    system.clear()
    b = np.zeros(net.t_dimension, dtype=np.float64)

    def tid(node: int) -> int:
        return net.temperature_index(node)

    def did(path: int) -> int:
        return net.delta_index(path)

    # ---------------- duct energy balances ----------------
    weights = {}
    for p in range(1, net.top_path + 1):
        r = did(p)
        up, _ = upstream_downstream(section, p)
        w = rho_cp * section.duct(p).area * abs(section.velocity_at(p))
        weights[p] = w

        hA = 0.0
        hAT = 0.0
        for disc, side in section.heated_surfaces(p):
            h, Ac = disc.surface(side)
            hA += h * Ac
            hAT += h * Ac * disc.temperature

        coeff = w + 0.5 * hA
        if coeff <= cfg.EPS:
            # stagnant, unheated duct
            system.set(r, did(p), 1.0)
            continue
        system.set(r, did(p), coeff)
        system.add(r, tid(up), hA)
        b[r] = hAT

    # ---------------- node mixing ----------------
    r = tid(net.inlet_node)
    system.set(r, r, 1.0)
    b[r] = t_in

    for node in range(2, net.num_nodes + 1):
        r = tid(node)
        feeds = []
        for p in net.incoming_paths(node) + net.outgoing_paths(node):
            if p == net.outlet_path:
                continue
            up, down = upstream_downstream(section, p)
            if down == node and weights[p] > cfg.EPS:
                feeds.append((p, up))

        if not feeds:
            # nothing flows in: take the temperature of the nominal upstream node
            _, up = net.nominal_feed(node)
            system.set(r, r, 1.0)
            system.add(r, tid(up), -1.0)
            continue

        total = sum(weights[p] for p, _ in feeds)
        system.add(r, r, total)
        for p, up in feeds:
            system.add(r, tid(up), -weights[p])
            system.add(r, did(p), -weights[p])

    return b


def solve_section_temperatures(section: "Section", t_in: float, amps: float,
                               params: ModelParams) -> ThermalSolveResult:
    section.check_configuration()
    net = section.network
    n_t = net.num_nodes
    system = section.t_system()

    section.node_temps[0] = t_in
    old_out = section.outlet_temperature()
    delta = float("inf")

    for it in range(1, params.max_section_iters + 1):
        update_disc_temperatures(section, amps, params)

        b = assemble_temperature_system(section, t_in, system, params)
        x = system.solve(b)
        if x.size == 0:
            logger.error("Temperature calculation failed")
            raise SolverError("Temperature calculation failed")

        section.node_temps[1:] = x[:n_t]
        section.duct_deltas[:] = x[n_t:]

        t_out = section.outlet_temperature()
        delta = abs(t_out - old_out)
        logger.debug("Section pass %d: outlet %.3f C (change %.3g)", it, t_out, delta)
        if delta <= params.section_tol:
            return ThermalSolveResult(
                node_temps=section.node_temps.copy(),
                disc_temps=section.disc_temperatures(),
                t_out=float(t_out),
                iterations=it,
            )
        old_out = t_out

    logger.error("Section temperatures did not settle (last change %.4g C)", delta)
    raise ConvergenceError("Section temperature", delta, params.max_section_iters)
