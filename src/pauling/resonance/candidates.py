"""Conjugation roles: which atoms may take part in a resonance system."""

from __future__ import annotations

import logging

from ..context import PerceptionContext
from ..model import ConjugationRole, Hybridization

logger = logging.getLogger(__name__)

_PLANAR = (Hybridization.SP, Hybridization.SP2)


def _is_spectator_oxygen(ctx: PerceptionContext, atom_idx: int) -> bool:
    """Neutral oxygen bonded to more than one atom (ether, ester, hydroxyl)."""
    atom = ctx.atoms[atom_idx]
    return atom.element == "O" and atom.formal_charge == 0 and atom.degree > 1


def is_hypervalent_bridge(ctx: PerceptionContext, atom_idx: int) -> bool:
    """Expanded-octet centre (P, S, Cl, Br, I) joining a π partner and a σ partner.

    The π partner is a conjugation-eligible neighbour reached through a
    double or triple bond. The σ partner is reached through any other bond
    and has lone pairs, a negative charge, or a conjugation-eligible element.
    """
    atom = ctx.atoms[atom_idx]
    if atom.element not in ctx.data.hypervalent_atoms or atom.total_valence <= 4:
        return False

    conjugatable = ctx.data.conjugatable_atoms
    has_pi = has_sigma = False
    for nbr_idx, bond_idx in ctx.adjacency[atom_idx]:
        nbr = ctx.atoms[nbr_idx]
        if ctx.bonds[bond_idx].effective_order.is_multiple:
            has_pi = has_pi or nbr.element in conjugatable
        elif nbr.lone_pairs > 0 or nbr.formal_charge < 0 or nbr.element in conjugatable:
            has_sigma = True
    return has_pi and has_sigma


def is_pi_carrier(ctx: PerceptionContext, atom_idx: int) -> bool:
    atom = ctx.atoms[atom_idx]
    if not (atom.is_aromatic or atom.hybridization in _PLANAR):
        return False
    if _is_spectator_oxygen(ctx, atom_idx):
        return not any(
            ConjugationRole.HYPERVALENT_BRIDGE in ctx.atoms[nbr].roles for nbr in ctx.neighbors(atom_idx)
        )
    return True


def is_lone_pair_donor(ctx: PerceptionContext, atom_idx: int, roles: list[ConjugationRole]) -> bool:
    """Lone-pair atom next to a role-bearing neighbour.

    ``roles`` is the role snapshot taken before any donor was assigned. A
    neighbour whose only role is HYPERVALENT_BRIDGE accepts anionic donors
    only.
    """
    atom = ctx.atoms[atom_idx]
    if atom.lone_pairs < 1 or _is_spectator_oxygen(ctx, atom_idx):
        return False
    for nbr_idx in ctx.neighbors(atom_idx):
        nbr_roles = roles[nbr_idx]
        if nbr_roles == ConjugationRole.NONE:
            continue
        if nbr_roles == ConjugationRole.HYPERVALENT_BRIDGE:
            if atom.formal_charge < 0:
                return True
            continue
        return True
    return False


def is_charge_mediator(ctx: PerceptionContext, atom_idx: int) -> bool:
    atom = ctx.atoms[atom_idx]
    return atom.element == "C" and atom.degree == 3 and atom.formal_charge in (1, -1)


def assign_conjugation_roles(ctx: PerceptionContext) -> list[int]:
    """Recompute every atom's roles and candidate flag from scratch.

    Returns
    -------
    list[int]
        Indices of candidate atoms, ascending.
    """
    for atom in ctx.atoms:
        atom.roles = ConjugationRole.NONE
        atom.is_candidate = False

    bridges = [atom.index for atom in ctx.atoms if is_hypervalent_bridge(ctx, atom.index)]
    for idx in bridges:
        ctx.atoms[idx].roles |= ConjugationRole.HYPERVALENT_BRIDGE

    for atom in ctx.atoms:
        if is_pi_carrier(ctx, atom.index):
            atom.roles |= ConjugationRole.PI_CARRIER

    snapshot = [atom.roles for atom in ctx.atoms]
    for atom in ctx.atoms:
        if is_lone_pair_donor(ctx, atom.index, snapshot):
            atom.roles |= ConjugationRole.LONE_PAIR_DONOR

    for atom in ctx.atoms:
        if is_charge_mediator(ctx, atom.index):
            atom.roles |= ConjugationRole.CHARGE_MEDIATOR

    candidates = []
    for atom in ctx.atoms:
        atom.is_candidate = atom.roles != ConjugationRole.NONE
        if atom.is_candidate:
            candidates.append(atom.index)

    logger.debug("Conjugation candidates: %d of %d atoms (%d bridges)", len(candidates), ctx.num_atoms, len(bridges))
    return candidates
