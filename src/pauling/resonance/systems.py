"""Resonance system assembly: grow conjugated bond sets from π bonds."""

from __future__ import annotations

import logging
from collections import deque

import networkx as nx

from ..context import PerceptionContext
from ..model import PerceivedBond, ResonanceSystem

logger = logging.getLogger(__name__)


def seed_bonds(ctx: PerceptionContext) -> list[int]:
    """Bonds whose effective order is double or triple (Kekulé doubles included)."""
    return [bond.index for bond in ctx.bonds if bond.effective_order.is_multiple]


def _is_aryl_link(ctx: PerceptionContext, bond: PerceivedBond) -> bool:
    """Non-aromatic bond joining two different aromatic components."""
    if bond.is_aromatic:
        return False
    comp_a = ctx.aromatic_component.get(bond.begin)
    comp_b = ctx.aromatic_component.get(bond.end)
    return comp_a is not None and comp_b is not None and comp_a != comp_b


def expand_conjugation(ctx: PerceptionContext, split_aryl_links: bool = True) -> set[int]:
    """Breadth-first growth of the conjugated bond set.

    From each frontier bond, every candidate endpoint offers its other bonds;
    a bond is taken when the far atom is a candidate too.
    """
    seeds = seed_bonds(ctx)
    conjugated = set(seeds)
    frontier = deque(seeds)

    while frontier:
        bond = ctx.bonds[frontier.popleft()]
        for atom_idx in (bond.begin, bond.end):
            if not ctx.atoms[atom_idx].is_candidate:
                continue
            for nbr_idx, nbr_bond_idx in ctx.adjacency[atom_idx]:
                if nbr_bond_idx in conjugated or not ctx.atoms[nbr_idx].is_candidate:
                    continue
                if split_aryl_links and _is_aryl_link(ctx, ctx.bonds[nbr_bond_idx]):
                    continue
                conjugated.add(nbr_bond_idx)
                frontier.append(nbr_bond_idx)

    return conjugated


def group_systems(ctx: PerceptionContext, conjugated: set[int]) -> list[ResonanceSystem]:
    """Split conjugated bonds into connected systems, ordered by lowest atom index."""
    C = nx.Graph()
    for bond_idx in sorted(conjugated):
        bond = ctx.bonds[bond_idx]
        C.add_edge(bond.begin, bond.end, index=bond_idx)

    groups = []
    for atoms in nx.connected_components(C):
        atom_list = sorted(atoms)
        bond_list = sorted(idx for _, _, idx in C.subgraph(atoms).edges(data="index"))
        groups.append((atom_list, bond_list))
    groups.sort(key=lambda g: g[0][0])

    return [
        ResonanceSystem(
            atoms=tuple(ctx.atoms[i].id for i in atom_list),
            bonds=tuple(ctx.bonds[b].id for b in bond_list),
        )
        for atom_list, bond_list in groups
    ]


def assemble_systems(ctx: PerceptionContext, split_aryl_links: bool = True) -> list[ResonanceSystem]:
    conjugated = expand_conjugation(ctx, split_aryl_links=split_aryl_links)
    systems = group_systems(ctx, conjugated)
    logger.debug("Resonance systems: %d (%d conjugated bonds)", len(systems), len(conjugated))
    return systems
