"""Graph ingestion: builds the working representation for one pipeline run.

The caller's graph is read exactly once. Everything downstream works on the
:class:`PerceptionContext` built here, which is never shared between runs.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Tuple

import networkx as nx

from .data_loader import DATA, MolecularData
from .exceptions import DuplicateBond, InconsistentGraph
from .graph import MoleculeGraph
from .model import BondOrder, PerceivedAtom, PerceivedBond, Ring

logger = logging.getLogger(__name__)


@dataclass
class PerceptionContext:
    """Mutable perception state owned by a single pipeline invocation.

    ``graph`` mirrors the adjacency as an index-keyed ``networkx.Graph``
    (edge attribute ``index`` holds the bond index) for the traversal
    helpers used by the ring and grouping stages.
    """

    atoms: List[PerceivedAtom]
    bonds: List[PerceivedBond]
    adjacency: List[List[Tuple[int, int]]]
    atom_index: Dict[Hashable, int]
    bond_index: Dict[Hashable, int]
    graph: nx.Graph
    data: MolecularData = DATA
    rings: List[Ring] = field(default_factory=list)
    aromatic_component: Dict[int, int] = field(default_factory=dict)

    @property
    def num_atoms(self) -> int:
        return len(self.atoms)

    @property
    def num_bonds(self) -> int:
        return len(self.bonds)

    def neighbors(self, atom_idx: int) -> List[int]:
        return [nbr for nbr, _ in self.adjacency[atom_idx]]

    def bond_between(self, i: int, j: int) -> Optional[PerceivedBond]:
        for nbr, bond_idx in self.adjacency[i]:
            if nbr == j:
                return self.bonds[bond_idx]
        return None


def build_context(source: MoleculeGraph, data: MolecularData = DATA) -> PerceptionContext:
    """Validate ``source`` and build a fresh :class:`PerceptionContext`.

    Raises
    ------
    DuplicateBond
        Two bonds join the same unordered atom pair.
    InconsistentGraph
        A bond names an unknown atom, or ids/elements are malformed.
    """
    atom_index: Dict[Hashable, int] = {}
    raw_atoms = []
    for atom_view in source.atoms():
        if atom_view.id in atom_index:
            raise InconsistentGraph(f"duplicate atom id {atom_view.id!r}", atom_id=atom_view.id)
        symbol = data.normalize_symbol(atom_view.element)
        if symbol is None:
            raise InconsistentGraph(
                f"atom {atom_view.id!r} has unknown element {atom_view.element!r}",
                atom_id=atom_view.id,
            )
        atom_index[atom_view.id] = len(raw_atoms)
        raw_atoms.append((atom_view.id, symbol, int(atom_view.formal_charge)))

    adjacency: List[List[Tuple[int, int]]] = [[] for _ in raw_atoms]
    bonds: List[PerceivedBond] = []
    bond_index: Dict[Hashable, int] = {}
    seen_pairs = set()

    for bond_view in source.bonds():
        begin_id, end_id = bond_view.begin, bond_view.end

        pair = frozenset((begin_id, end_id))
        if pair in seen_pairs:
            raise DuplicateBond(begin_id, end_id, bond_id=bond_view.id)
        seen_pairs.add(pair)

        for atom_id in (begin_id, end_id):
            if atom_id not in atom_index:
                raise InconsistentGraph(
                    f"bond {bond_view.id!r} references non-existent atom {atom_id!r}",
                    atom_id=atom_id,
                    bond_id=bond_view.id,
                )
        if begin_id == end_id:
            raise InconsistentGraph(
                f"bond {bond_view.id!r} joins atom {begin_id!r} to itself",
                atom_id=begin_id,
                bond_id=bond_view.id,
            )
        if bond_view.id in bond_index:
            raise InconsistentGraph(f"duplicate bond id {bond_view.id!r}", bond_id=bond_view.id)

        try:
            order = BondOrder.coerce(bond_view.order)
        except ValueError as e:
            raise InconsistentGraph(str(e), bond_id=bond_view.id) from e

        i, j = atom_index[begin_id], atom_index[end_id]
        idx = len(bonds)
        bonds.append(PerceivedBond(index=idx, id=bond_view.id, begin=i, end=j, order=order))
        bond_index[bond_view.id] = idx
        adjacency[i].append((j, idx))
        adjacency[j].append((i, idx))

    atoms = [
        PerceivedAtom(index=idx, id=atom_id, element=symbol, formal_charge=charge, degree=len(adjacency[idx]))
        for idx, (atom_id, symbol, charge) in enumerate(raw_atoms)
    ]

    G = nx.Graph()
    G.add_nodes_from(range(len(atoms)))
    for bond in bonds:
        G.add_edge(bond.begin, bond.end, index=bond.index)

    logger.debug("Ingested %d atoms, %d bonds", len(atoms), len(bonds))

    return PerceptionContext(
        atoms=atoms,
        bonds=bonds,
        adjacency=adjacency,
        atom_index=atom_index,
        bond_index=bond_index,
        graph=G,
        data=data,
    )
