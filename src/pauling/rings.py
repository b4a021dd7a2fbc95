"""Ring perception: Smallest Set of Smallest Rings (SSSR).

Candidate cycles come from removing each bond in turn and closing it with
the shortest remaining path between its ends. Candidates are sorted by size
and admitted greedily while they stay linearly independent over GF(2),
until the basis holds ``bonds - atoms + components`` rings.

Cage graphs can leave the edge-derived candidates short of a full basis;
Horton cycles are then added as a second candidate pool.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

import networkx as nx
import numpy as np

from .context import PerceptionContext
from .exceptions import RingPerceptionFailed
from .model import Ring

logger = logging.getLogger(__name__)


# =============================================================================
# GF(2) basis
# =============================================================================


class CycleBasis:
    """Incremental row-echelon basis of boolean vectors over GF(2).

    Each stored vector has a distinct pivot (its lowest set bit); vectors are
    kept sorted by pivot so a single ascending sweep fully reduces a query.
    """

    def __init__(self, width: int):
        self.width = width
        self._rows: List[Tuple[int, np.ndarray]] = []

    def __len__(self) -> int:
        return len(self._rows)

    def reduce(self, vector: np.ndarray) -> np.ndarray:
        residual = vector.copy()
        for pivot, row in self._rows:
            if residual[pivot]:
                residual ^= row
        return residual

    def add(self, vector: np.ndarray) -> bool:
        """Insert ``vector`` if independent of the basis. Returns True if added."""
        residual = self.reduce(vector)
        if not residual.any():
            return False
        pivot = int(np.flatnonzero(residual)[0])
        self._rows.append((pivot, residual))
        self._rows.sort(key=lambda row: row[0])
        return True


def cyclomatic_number(G: nx.Graph) -> int:
    """``|E| - |V| + C`` for an undirected graph."""
    if G.number_of_nodes() == 0:
        return 0
    return G.number_of_edges() - G.number_of_nodes() + nx.number_connected_components(G)


# =============================================================================
# Candidate generation
# =============================================================================


def _path_bonds(G: nx.Graph, path: List[int]) -> List[int]:
    return [G.edges[a, b]["index"] for a, b in zip(path, path[1:])]


def _make_ring(atoms: List[int], bonds: Iterable[int], width: int) -> Ring:
    bond_tuple = tuple(sorted(bonds))
    vector = np.zeros(width, dtype=bool)
    vector[list(bond_tuple)] = True
    return Ring(atoms=tuple(atoms), bonds=bond_tuple, vector=vector)


def _shortest_path_without(G: nx.Graph, u: int, v: int, bond_idx: int) -> Optional[List[int]]:
    view = nx.subgraph_view(G, filter_edge=lambda a, b: G.edges[a, b]["index"] != bond_idx)
    try:
        return nx.shortest_path(view, u, v)
    except nx.NetworkXNoPath:
        return None


def edge_cycle_candidates(ctx: PerceptionContext) -> List[Ring]:
    """One candidate per non-bridge bond: the bond plus its shortest bypass.

    Sorted by size, ties broken by the index of the bond that was removed.
    Cycles found twice are kept once.
    """
    G = ctx.graph
    width = ctx.num_bonds
    keyed: List[Tuple[int, int, Ring]] = []
    seen = set()

    for bond in ctx.bonds:
        path = _shortest_path_without(G, bond.begin, bond.end, bond.index)
        if path is None:
            continue  # bridge
        bond_set = frozenset(_path_bonds(G, path)) | {bond.index}
        if bond_set in seen:
            continue
        seen.add(bond_set)
        keyed.append((len(bond_set), bond.index, _make_ring(path, bond_set, width)))

    keyed.sort(key=lambda item: (item[0], item[1]))
    return [ring for _, _, ring in keyed]


def horton_candidates(ctx: PerceptionContext) -> List[Ring]:
    """Horton cycles: for every vertex ``r`` and bond ``(x, y)``, the cycle
    ``r -> x - y -> r`` built from shortest paths that meet only at ``r``."""
    G = ctx.graph
    width = ctx.num_bonds
    keyed: List[Tuple[int, int, int, Ring]] = []
    seen = set()

    for root in range(ctx.num_atoms):
        paths: Dict[int, List[int]] = nx.single_source_shortest_path(G, root)
        for bond in ctx.bonds:
            if root in (bond.begin, bond.end):
                continue
            px, py = paths.get(bond.begin), paths.get(bond.end)
            if px is None or py is None:
                continue
            if set(px) & set(py) != {root}:
                continue
            bond_set = frozenset(_path_bonds(G, px)) | frozenset(_path_bonds(G, py)) | {bond.index}
            if bond_set in seen:
                continue
            seen.add(bond_set)
            atoms = px + py[:0:-1]
            keyed.append((len(bond_set), root, bond.index, _make_ring(atoms, bond_set, width)))

    keyed.sort(key=lambda item: (item[0], item[1], item[2]))
    return [ring for _, _, _, ring in keyed]


# =============================================================================
# SSSR
# =============================================================================


def _select(candidates: List[Ring], basis: CycleBasis, target: int, selected: List[Ring]) -> None:
    for ring in candidates:
        if len(selected) >= target:
            return
        if basis.add(ring.vector):
            selected.append(ring)


def find_sssr(ctx: PerceptionContext) -> List[Ring]:
    """Compute the SSSR of ``ctx`` and flag ring atoms and bonds.

    Returns exactly ``cyclomatic_number`` rings, ordered smallest first.
    """
    target = cyclomatic_number(ctx.graph)
    if target <= 0:
        ctx.rings = []
        return ctx.rings

    basis = CycleBasis(ctx.num_bonds)
    selected: List[Ring] = []
    _select(edge_cycle_candidates(ctx), basis, target, selected)

    if len(selected) < target:
        logger.debug("Edge cycles span %d/%d rings, adding Horton candidates", len(selected), target)
        _select(horton_candidates(ctx), basis, target, selected)

    if len(selected) != target:
        raise RingPerceptionFailed(f"found {len(selected)} independent rings, expected {target}")

    for ring in selected:
        for idx in ring.atoms:
            ctx.atoms[idx].is_in_ring = True
        for idx in ring.bonds:
            ctx.bonds[idx].is_in_ring = True

    ctx.rings = selected
    logger.debug("SSSR: %d rings, sizes %s", len(selected), [len(r) for r in selected])
    return selected
