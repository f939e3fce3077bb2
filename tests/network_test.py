import pytest

from winding_cooling.network import SectionNetwork
from winding_cooling.types import PathKind


def test_sizes_and_offsets():
    net = SectionNetwork(4)
    assert net.num_nodes == 10
    assert net.num_paths == 14
    assert net.pv_dimension == 24
    assert net.t_dimension == 23
    assert net.p_offset == -1
    assert net.v_offset == 9

    assert net.pressure_index(1) == 0
    assert net.pressure_index(net.outlet_node) == 9
    assert net.velocity_index(1) == 10
    assert net.velocity_index(net.outlet_path) == net.pv_dimension - 1
    assert net.delta_index(net.top_path) == net.t_dimension - 1


def test_index_ranges_are_enforced():
    net = SectionNetwork(2)
    with pytest.raises(IndexError):
        net.pressure_index(0)
    with pytest.raises(IndexError):
        net.velocity_index(0)
    with pytest.raises(IndexError):
        net.delta_index(net.outlet_path)


def test_single_disc_topology():
    net = SectionNetwork(1)
    assert net.path_nodes(0) == (None, 1)
    assert net.path_nodes(1) == (1, 2)   # below disc
    assert net.path_nodes(2) == (1, 3)   # inlet side
    assert net.path_nodes(3) == (2, 4)   # far side
    assert net.path_nodes(4) == (3, 4)   # above disc
    assert net.path_nodes(5) == (4, None)
    assert [net.path_kind(p) for p in range(6)] == [
        PathKind.INLET, PathKind.HORIZONTAL, PathKind.INLET_SIDE,
        PathKind.FAR_SIDE, PathKind.HORIZONTAL, PathKind.OUTLET,
    ]


def test_disc_nodes_and_paths():
    net = SectionNetwork(3)
    assert net.disc_nodes(2) == (3, 4, 5, 6)
    assert net.disc_paths(2) == (4, 7, 5, 6)
    assert net.disc_paths(3)[1] == net.top_path
    assert net.path_disc(net.top_path) == 3
    assert net.path_disc(0) == 1


def test_every_internal_path_connects_two_nodes_once():
    net = SectionNetwork(5)
    seen = []
    for node in range(1, net.num_nodes + 1):
        seen += [p for p in net.outgoing_paths(node) if p != net.outlet_path]
    assert sorted(seen) == list(range(1, net.top_path + 1))
    assert net.incoming_paths(1) == [0]
    assert net.outlet_path in net.outgoing_paths(net.outlet_node)


def test_nominal_feed():
    net = SectionNetwork(2)
    assert net.nominal_feed(2) == (1, 1)
    assert net.nominal_feed(3) == (2, 1)
    assert net.nominal_feed(6) == (net.top_path, 5)
    with pytest.raises(ValueError):
        net.nominal_feed(1)


def test_levels():
    net = SectionNetwork(2)
    assert [net.level(k) for k in range(1, 7)] == [0, 0, 1, 1, 2, 2]
