"""Kekulé assignment for aromatic subgraphs.

Each connected component of aromatic bonds is solved independently by a
depth-first search over its bonds with an explicit stack, so very large
fused systems cannot exhaust the interpreter's recursion limit.
"""

import logging
from collections import deque
from typing import Dict, List, Optional

import networkx as nx

from .context import PerceptionContext
from .exceptions import KekulizationFailed
from .model import BondOrder
from .parameters import KekulizationConfig

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = KekulizationConfig()

# Double is always tried before Single
_CHOICES = (BondOrder.DOUBLE, BondOrder.SINGLE)


def aromatic_components(ctx: PerceptionContext) -> List[List[int]]:
    """Connected components of the aromatic-bond subgraph as bond indices.

    Components are ordered by their lowest bond index; bonds within a
    component are sorted.
    """
    A = nx.Graph()
    for bond in ctx.bonds:
        if bond.is_aromatic:
            A.add_edge(bond.begin, bond.end, index=bond.index)

    components = []
    for atoms in nx.connected_components(A):
        sub = A.subgraph(atoms)
        components.append(sorted(idx for _, _, idx in sub.edges(data="index")))
    components.sort(key=lambda c: c[0])
    return components


def needs_pi_bond(ctx: PerceptionContext, atom_idx: int, component: frozenset) -> bool:
    """Whether an atom must receive one double bond inside ``component``.

    Compares the atom's octet valence with the valence it would have if all
    of its component bonds were single.
    """
    atom = ctx.atoms[atom_idx]
    target = ctx.data.octet_valence(atom.element, atom.formal_charge)
    if target is None:
        return False
    base = 0
    for _, bond_idx in ctx.adjacency[atom_idx]:
        if bond_idx in component:
            base += 1
        else:
            base += ctx.bonds[bond_idx].effective_order.multiplicity
    return target - base >= 1


class ComponentSearch:
    """Backtracking search for one aromatic component.

    Parameters
    ----------
    ctx : PerceptionContext
        Context holding the component's bonds.
    bonds : list of int
        Bond indices of the component.
    max_attempts : int
        Number of tried bond-order choices allowed before giving up.
    """

    def __init__(self, ctx: PerceptionContext, bonds: List[int], max_attempts: int):
        self.ctx = ctx
        self.bonds = bonds
        self.max_attempts = max_attempts
        self.attempts = 0

        members = frozenset(bonds)
        self.order = self._bfs_order(members)

        self.atoms = sorted({i for b in bonds for i in (ctx.bonds[b].begin, ctx.bonds[b].end)})
        self.needs: Dict[int, bool] = {i: needs_pi_bond(ctx, i, members) for i in self.atoms}
        self.doubles: Dict[int, int] = {i: 0 for i in self.atoms}
        self.undecided: Dict[int, int] = {i: 0 for i in self.atoms}
        for b in bonds:
            self.undecided[ctx.bonds[b].begin] += 1
            self.undecided[ctx.bonds[b].end] += 1

        self.assigned: List[Optional[BondOrder]] = [None] * len(self.order)

    def _bfs_order(self, members: frozenset) -> List[int]:
        start = min(members)
        order = [start]
        seen = {start}
        queue = deque([start])
        while queue:
            bond = self.ctx.bonds[queue.popleft()]
            for atom_idx in (bond.begin, bond.end):
                for _, nbr_bond in sorted(self.ctx.adjacency[atom_idx], key=lambda item: item[1]):
                    if nbr_bond in members and nbr_bond not in seen:
                        seen.add(nbr_bond)
                        order.append(nbr_bond)
                        queue.append(nbr_bond)
        return order

    # -------------------------------------------------------------------------
    # Choice bookkeeping
    # -------------------------------------------------------------------------

    def _ends(self, depth: int):
        bond = self.ctx.bonds[self.order[depth]]
        return bond.begin, bond.end

    def _try(self, depth: int, choice: BondOrder) -> bool:
        """Apply ``choice`` at ``depth`` if it keeps the pattern valid."""
        a, b = self._ends(depth)
        if choice is BondOrder.DOUBLE:
            if not (self.needs[a] and self.needs[b]):
                return False
            if self.doubles[a] or self.doubles[b]:
                return False
        else:
            for i in (a, b):
                if self.needs[i] and not self.doubles[i] and self.undecided[i] == 1:
                    return False

        self.assigned[depth] = choice
        for i in (a, b):
            self.undecided[i] -= 1
            if choice is BondOrder.DOUBLE:
                self.doubles[i] += 1
        return True

    def _undo(self, depth: int):
        a, b = self._ends(depth)
        choice = self.assigned[depth]
        for i in (a, b):
            self.undecided[i] += 1
            if choice is BondOrder.DOUBLE:
                self.doubles[i] -= 1
        self.assigned[depth] = None

    def _fail(self, hit_ceiling: bool) -> KekulizationFailed:
        bond_ids = [self.ctx.bonds[b].id for b in self.bonds]
        return KekulizationFailed(bond_ids, self.attempts, hit_ceiling)

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def run(self) -> Dict[int, BondOrder]:
        """Return bond index -> assigned order, or raise KekulizationFailed."""
        n = len(self.order)
        # stack[d] is the index of the next choice to try at depth d
        stack = [0]
        while stack:
            depth = len(stack) - 1
            if depth == n:
                return {self.order[d]: self.assigned[d] for d in range(n)}

            if self.assigned[depth] is not None:
                self._undo(depth)

            cursor = stack[-1]
            if cursor == len(_CHOICES):
                stack.pop()
                continue
            stack[-1] += 1

            self.attempts += 1
            if self.attempts > self.max_attempts:
                raise self._fail(hit_ceiling=True)

            if self._try(depth, _CHOICES[cursor]):
                stack.append(0)

        raise self._fail(hit_ceiling=False)


def kekulize(ctx: PerceptionContext, config: KekulizationConfig = _DEFAULT_CONFIG) -> List[List[int]]:
    """Assign Kekulé orders to every aromatic bond of ``ctx``.

    Labels each aromatic-component atom in ``ctx.aromatic_component`` and
    writes ``kekule_order`` on the component's bonds.

    Returns
    -------
    list of list of int
        The aromatic components, as bond indices.

    Raises
    ------
    KekulizationFailed
        A component has no valid pattern, or its search hit the ceiling.
    """
    components = aromatic_components(ctx)
    ctx.aromatic_component = {}

    for comp_idx, bonds in enumerate(components):
        search = ComponentSearch(ctx, bonds, config.max_attempts)
        for atom_idx in search.atoms:
            ctx.aromatic_component[atom_idx] = comp_idx

        assignment = search.run()
        for bond_idx, order in assignment.items():
            ctx.bonds[bond_idx].kekule_order = order

        logger.debug(
            "Aromatic component %d: %d bonds, %d doubles, %d attempts",
            comp_idx,
            len(bonds),
            sum(1 for order in assignment.values() if order is BondOrder.DOUBLE),
            search.attempts,
        )

    return components
