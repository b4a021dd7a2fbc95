"""Read-only input capability consumed by the perception pipeline.

Any object exposing ``atoms()``, ``bonds()`` and ``neighbors()`` with the
views below can be perceived. Two implementations are provided here:
:class:`Molecule`, a small in-memory builder, and :class:`NetworkXGraph`,
which wraps an existing ``networkx`` graph.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Iterator, Protocol, Union, runtime_checkable

import networkx as nx

from .model import BondOrder


@runtime_checkable
class AtomView(Protocol):
    id: Hashable
    element: Union[str, int]
    formal_charge: int


@runtime_checkable
class BondView(Protocol):
    id: Hashable
    begin: Hashable
    end: Hashable
    order: Any


@runtime_checkable
class MoleculeGraph(Protocol):
    def atoms(self) -> Iterable[AtomView]: ...

    def bonds(self) -> Iterable[BondView]: ...

    def neighbors(self, atom_id: Hashable) -> Iterable[Hashable]: ...


@dataclass(frozen=True)
class AtomRecord:
    id: Hashable
    element: Union[str, int]
    formal_charge: int = 0


@dataclass(frozen=True)
class BondRecord:
    id: Hashable
    begin: Hashable
    end: Hashable
    order: Any = BondOrder.SINGLE


class MoleculeBuildError(ValueError):
    """Invalid edit of a :class:`Molecule`."""


class Molecule:
    """Minimal molecule container with sequential integer ids.

    >>> mol = Molecule()
    >>> c, o = mol.add_atom("C"), mol.add_atom("O")
    >>> mol.add_bond(c, o, BondOrder.DOUBLE)
    0
    """

    def __init__(self):
        self._atoms: list[AtomRecord] = []
        self._bonds: list[BondRecord] = []
        self._adjacency: dict[int, list[tuple[int, int]]] = {}
        self._pairs: set[frozenset] = set()

    def __len__(self) -> int:
        return len(self._atoms)

    def add_atom(self, element: Union[str, int], formal_charge: int = 0) -> int:
        atom_id = len(self._atoms)
        self._atoms.append(AtomRecord(atom_id, element, int(formal_charge)))
        self._adjacency[atom_id] = []
        return atom_id

    def add_bond(self, begin: int, end: int, order: Any = BondOrder.SINGLE) -> int:
        if begin == end:
            raise MoleculeBuildError(f"Cannot bond atom {begin} to itself")
        for atom_id in (begin, end):
            if atom_id not in self._adjacency:
                raise MoleculeBuildError(f"Atom {atom_id} does not exist (have {len(self._atoms)} atoms)")
        pair = frozenset((begin, end))
        if pair in self._pairs:
            raise MoleculeBuildError(f"Atoms {begin} and {end} are already bonded")

        bond_id = len(self._bonds)
        self._bonds.append(BondRecord(bond_id, begin, end, BondOrder.coerce(order)))
        self._pairs.add(pair)
        self._adjacency[begin].append((end, bond_id))
        self._adjacency[end].append((begin, bond_id))
        return bond_id

    def add_hydrogens(self, atom_id: int, count: int) -> list[int]:
        """Attach ``count`` explicit hydrogens to ``atom_id``."""
        hydrogens = []
        for _ in range(count):
            h = self.add_atom("H")
            self.add_bond(atom_id, h)
            hydrogens.append(h)
        return hydrogens

    def atom(self, atom_id: int) -> AtomRecord:
        return self._atoms[atom_id]

    def bond(self, bond_id: int) -> BondRecord:
        return self._bonds[bond_id]

    def bonds_of_atom(self, atom_id: int) -> list[int]:
        return [bond_id for _, bond_id in self._adjacency[atom_id]]

    def atoms(self) -> Iterator[AtomRecord]:
        return iter(self._atoms)

    def bonds(self) -> Iterator[BondRecord]:
        return iter(self._bonds)

    def neighbors(self, atom_id: Hashable) -> list[int]:
        return [nbr for nbr, _ in self._adjacency[atom_id]]


class NetworkXGraph:
    """Expose a ``networkx`` molecular graph as perception input.

    Nodes carry the element under ``element_key`` (default ``"symbol"``) and
    optionally a formal charge; edges carry the bond order under
    ``order_key`` as a number (1.0/1.5/2.0/3.0), a name, or a
    :class:`BondOrder`. Missing orders default to single.

    Bond ids are ``(u, v)`` edge tuples, or ``(u, v, key)`` for multigraphs.
    """

    def __init__(
        self,
        G: nx.Graph,
        element_key: str = "symbol",
        charge_key: str = "formal_charge",
        order_key: str = "bond_order",
    ):
        self.G = G
        self.element_key = element_key
        self.charge_key = charge_key
        self.order_key = order_key

    def atoms(self) -> Iterator[AtomRecord]:
        for node, data in self.G.nodes(data=True):
            yield AtomRecord(node, data.get(self.element_key), int(data.get(self.charge_key, 0)))

    def bonds(self) -> Iterator[BondRecord]:
        if self.G.is_multigraph():
            for u, v, key, data in self.G.edges(keys=True, data=True):
                yield BondRecord((u, v, key), u, v, data.get(self.order_key, BondOrder.SINGLE))
        else:
            for u, v, data in self.G.edges(data=True):
                yield BondRecord((u, v), u, v, data.get(self.order_key, BondOrder.SINGLE))

    def neighbors(self, atom_id: Hashable) -> list:
        return list(self.G.neighbors(atom_id))
