"""Per-atom electronic state: valence, lone pairs and hybridization."""

import logging
from typing import Dict

from .context import PerceptionContext
from .model import Hybridization

logger = logging.getLogger(__name__)

_PLANAR = (Hybridization.SP, Hybridization.SP2)


def total_valence(ctx: PerceptionContext, atom_idx: int) -> int:
    """Sum of effective bond multiplicities around an atom."""
    return sum(ctx.bonds[b].effective_order.multiplicity for _, b in ctx.adjacency[atom_idx])


def assign_electrons(ctx: PerceptionContext, atom_idx: int):
    """Set total valence, lone pairs and radical electrons for one atom.

    Non-bonding electrons are ``valence_electrons - charge - valence``.
    Elements without a tabulated valence-electron count get no lone pairs.
    A negative count is clamped to zero and flagged as a valence anomaly;
    an odd count leaves one radical electron.
    """
    atom = ctx.atoms[atom_idx]
    atom.total_valence = total_valence(ctx, atom_idx)
    atom.lone_pairs = 0
    atom.radical_electrons = 0
    atom.valence_anomaly = False

    ve = ctx.data.valence_electrons(atom.element)
    if ve is None:
        return

    nonbonding = ve - atom.formal_charge - atom.total_valence
    if nonbonding < 0:
        atom.valence_anomaly = True
        logger.warning(
            "Atom %r (%s, charge %+d) exceeds its valence electrons by %d",
            atom.id,
            atom.element,
            atom.formal_charge,
            -nonbonding,
        )
        return

    atom.lone_pairs = nonbonding // 2
    atom.radical_electrons = nonbonding % 2


def perceive_atom_state(ctx: PerceptionContext):
    """Fill valence, lone pairs and hybridization for every atom in place."""
    for atom in ctx.atoms:
        assign_electrons(ctx, atom.index)
        atom.hybridization = Hybridization.from_steric_number(atom.degree + atom.lone_pairs)

    for atom in ctx.atoms:
        if atom.is_aromatic:
            atom.hybridization = Hybridization.SP2

    # Lone pairs next to a π system conjugate; judged on a fixed snapshot
    snapshot: Dict[int, Hybridization] = {atom.index: atom.hybridization for atom in ctx.atoms}
    promoted = 0
    for atom in ctx.atoms:
        if snapshot[atom.index] is not Hybridization.SP3 or atom.lone_pairs < 1:
            continue
        if any(snapshot[nbr] in _PLANAR for nbr in ctx.neighbors(atom.index)):
            atom.hybridization = Hybridization.SP2
            promoted += 1

    logger.debug("Atom state assigned for %d atoms (%d promoted to sp2)", ctx.num_atoms, promoted)
