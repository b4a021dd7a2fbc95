"""Aromaticity perception.

Two phases:

1. Explicit: bonds supplied with the aromatic order are aromatic, and so are
   their endpoints.
2. Topological: SSSR rings sharing a bond form fused systems, and each fused
   system is tested against Hückel's rule (4n+2 π electrons).
"""

import logging
from typing import List, Set

import networkx as nx

from .context import PerceptionContext
from .model import BondOrder

logger = logging.getLogger(__name__)


def is_huckel(pi_electrons: int) -> bool:
    """True for 2, 6, 10, 14, ..."""
    return pi_electrons >= 2 and pi_electrons % 4 == 2


def fused_ring_systems(ctx: PerceptionContext) -> List[List[int]]:
    """Group ring indices into fused systems (rings sharing at least one bond).

    Systems are ordered by their lowest ring index; ring indices are sorted
    within each system.
    """
    R = nx.Graph()
    R.add_nodes_from(range(len(ctx.rings)))
    owner = {}
    for r_idx, ring in enumerate(ctx.rings):
        for bond_idx in ring.bonds:
            if bond_idx in owner:
                R.add_edge(owner[bond_idx], r_idx)
            else:
                owner[bond_idx] = r_idx

    systems = [sorted(component) for component in nx.connected_components(R)]
    systems.sort(key=lambda s: s[0])
    return systems


def _system_members(ctx: PerceptionContext, ring_indices: List[int]):
    atoms: Set[int] = set()
    bonds: Set[int] = set()
    for r_idx in ring_indices:
        atoms.update(ctx.rings[r_idx].atoms)
        bonds.update(ctx.rings[r_idx].bonds)
    return atoms, bonds


def is_sp2_capable(ctx: PerceptionContext, atom_idx: int) -> bool:
    atom = ctx.atoms[atom_idx]
    return atom.degree <= 3 and atom.element in ctx.data.conjugatable_atoms


def pi_contribution(ctx: PerceptionContext, atom_idx: int, system_bonds: Set[int]) -> int:
    """π electrons one atom donates to a fused ring system.

    Only double/triple bonds inside the system count; exocyclic multiple
    bonds take the p orbital out of the ring.
    """
    atom = ctx.atoms[atom_idx]
    for _, bond_idx in ctx.adjacency[atom_idx]:
        if bond_idx in system_bonds and ctx.bonds[bond_idx].order.is_multiple:
            return 1

    sym, charge, degree = atom.element, atom.formal_charge, atom.degree
    if sym in ("O", "S") and degree == 2 and charge == 0:
        return 2
    if sym == "N" and degree == 3:
        return 0 if charge == 1 else 2
    if sym == "C" and degree == 3 and charge == -1:
        return 2
    return 0


def count_pi_electrons(ctx: PerceptionContext, atoms: Set[int], bonds: Set[int]) -> int:
    return sum(pi_contribution(ctx, idx, bonds) for idx in atoms)


def perceive_aromaticity(ctx: PerceptionContext) -> List[List[int]]:
    """Flag aromatic atoms and bonds in place.

    Returns
    -------
    list of list of int
        Ring indices of each fused system judged aromatic by Hückel's rule.
    """
    for bond in ctx.bonds:
        if bond.order is BondOrder.AROMATIC:
            bond.is_aromatic = True
            ctx.atoms[bond.begin].is_aromatic = True
            ctx.atoms[bond.end].is_aromatic = True

    aromatic_systems = []
    for ring_indices in fused_ring_systems(ctx):
        atoms, bonds = _system_members(ctx, ring_indices)

        if not all(is_sp2_capable(ctx, idx) for idx in atoms):
            logger.debug("Fused system %s: not sp2-capable", ring_indices)
            continue

        pi_electrons = count_pi_electrons(ctx, atoms, bonds)
        if not is_huckel(pi_electrons):
            logger.debug("Fused system %s: π=%d, not aromatic", ring_indices, pi_electrons)
            continue

        logger.debug("Fused system %s: π=%d, aromatic", ring_indices, pi_electrons)
        for idx in atoms:
            ctx.atoms[idx].is_aromatic = True
        for idx in bonds:
            ctx.bonds[idx].is_aromatic = True
        aromatic_systems.append(ring_indices)

    return aromatic_systems
