from __future__ import annotations

from typing import List, Optional, Tuple

from winding_cooling.types import PathKind


class SectionNetwork:
    """
    Node/path numbering of a section with n discs, counted from the inlet side.

    nodes 1..2n+2:  2i-1 = below disc i, inlet side; 2i = below disc i, far side
                    (2n+1, 2n+2 sit above the top disc)
    paths 0..3n+2:  0      = inlet duct into node 1
                    3i-2   = horizontal duct below disc i (inlet side -> far side)
                    3i-1   = inlet-side vertical duct of disc i
                    3i     = far-side vertical duct of disc i
                    3n+1   = horizontal duct above the top disc
                    3n+2   = outlet duct out of node 2n+2 (path 0 of the next section)

    Linear-system storage:
      PV system (5n+4): pressure_index(node) = node - 1, velocity_index(path) = path + 2n + 1
      T  system (5n+3): temperature_index(node) = node - 1, delta_index(path) = path + 2n + 1
    """

    def __init__(self, num_discs: int):
        if num_discs < 0:
            raise ValueError(f"Disc count cannot be negative, got {num_discs}")
        self.n = int(num_discs)

        self.p_offset = -1
        self.v_offset = 2 * self.n + 1

        self._incoming: List[List[int]] = [[] for _ in range(self.num_nodes + 1)]
        self._outgoing: List[List[int]] = [[] for _ in range(self.num_nodes + 1)]
        for p in range(1, self.top_path + 1):
            a, b = self.path_nodes(p)
            self._outgoing[a].append(p)
            self._incoming[b].append(p)
        self._outgoing[self.outlet_node].append(self.outlet_path)
        self._incoming[self.inlet_node].append(0)

    # ---------- sizes ----------
    @property
    def num_nodes(self) -> int:
        return 2 * self.n + 2

    @property
    def num_paths(self) -> int:
        # excluding the inlet duct, which is a boundary value
        return 3 * self.n + 2

    @property
    def pv_dimension(self) -> int:
        return 5 * self.n + 4

    @property
    def t_dimension(self) -> int:
        return 5 * self.n + 3

    @property
    def inlet_node(self) -> int:
        return 1

    @property
    def outlet_node(self) -> int:
        return 2 * self.n + 2

    @property
    def top_path(self) -> int:
        return 3 * self.n + 1

    @property
    def outlet_path(self) -> int:
        return 3 * self.n + 2

    # ---------- storage indices ----------
    def _check_node(self, node: int) -> None:
        if not 1 <= node <= self.num_nodes:
            raise IndexError(f"Node {node} outside 1..{self.num_nodes}")

    def _check_path(self, path: int, last: int) -> None:
        if not 1 <= path <= last:
            raise IndexError(f"Path {path} outside 1..{last}")

    def pressure_index(self, node: int) -> int:
        self._check_node(node)
        return node + self.p_offset

    def velocity_index(self, path: int) -> int:
        self._check_path(path, self.outlet_path)
        return path + self.v_offset

    def temperature_index(self, node: int) -> int:
        self._check_node(node)
        return node - 1

    def delta_index(self, path: int) -> int:
        self._check_path(path, self.top_path)
        return path + self.v_offset

    # ---------- topology ----------
    def below_path(self, disc: int) -> int:
        # disc n+1 gives the duct above the top disc
        return 3 * disc - 2

    def inlet_side_path(self, disc: int) -> int:
        return 3 * disc - 1

    def far_side_path(self, disc: int) -> int:
        return 3 * disc

    def disc_nodes(self, disc: int) -> Tuple[int, int, int, int]:
        """(below inlet side, below far side, above inlet side, above far side)"""
        if not 1 <= disc <= self.n:
            raise IndexError(f"Disc {disc} outside 1..{self.n}")
        return 2 * disc - 1, 2 * disc, 2 * disc + 1, 2 * disc + 2

    def disc_paths(self, disc: int) -> Tuple[int, int, int, int]:
        """(below, above, inlet side, far side)"""
        if not 1 <= disc <= self.n:
            raise IndexError(f"Disc {disc} outside 1..{self.n}")
        return self.below_path(disc), self.below_path(disc + 1), self.inlet_side_path(disc), self.far_side_path(disc)

    def path_kind(self, path: int) -> PathKind:
        if path == 0:
            return PathKind.INLET
        if path == self.outlet_path:
            return PathKind.OUTLET
        self._check_path(path, self.top_path)
        r = path % 3
        if r == 1:
            return PathKind.HORIZONTAL
        if r == 2:
            return PathKind.INLET_SIDE
        return PathKind.FAR_SIDE

    def path_disc(self, path: int) -> int:
        """1-based disc whose geometry defines the duct."""
        if path == 0:
            return 1
        if path == self.outlet_path:
            return self.n
        self._check_path(path, self.top_path)
        return min((path + 2) // 3, self.n)

    def path_nodes(self, path: int) -> Tuple[Optional[int], Optional[int]]:
        """(start, end) in the positive flow direction; None marks outside the section."""
        if path == 0:
            return None, self.inlet_node
        if path == self.outlet_path:
            return self.outlet_node, None
        kind = self.path_kind(path)
        i = (path + 2) // 3
        if kind == PathKind.HORIZONTAL:
            return 2 * i - 1, 2 * i
        if kind == PathKind.INLET_SIDE:
            return 2 * i - 1, 2 * i + 1
        return 2 * i, 2 * i + 2

    def incoming_paths(self, node: int) -> List[int]:
        self._check_node(node)
        return list(self._incoming[node])

    def outgoing_paths(self, node: int) -> List[int]:
        self._check_node(node)
        return list(self._outgoing[node])

    def nominal_feed(self, node: int) -> Tuple[int, int]:
        """(path, upstream node) feeding a node under fully directed flow."""
        self._check_node(node)
        if node == self.inlet_node:
            raise ValueError("The inlet node is fed from outside the section")
        if node % 2 == 0:
            p = self.below_path(node // 2)
        else:
            p = self.inlet_side_path((node - 1) // 2)
        return p, self.path_nodes(p)[0]

    def level(self, node: int) -> int:
        """Duct level of a node, 0 at the bottom, n at the top."""
        self._check_node(node)
        return (node - 1) // 2
