"""Tests for aromaticity perception (explicit markers and Hückel's rule)."""

import pytest

from molecules import (
    benzene,
    biphenyl,
    cyclohexane,
    cyclopentadienyl_anion,
    furan,
    naphthalene,
    pyridine,
    pyrrole,
    thiophene,
    tropylium,
)
from pauling.aromaticity import (
    count_pi_electrons,
    fused_ring_systems,
    is_huckel,
    perceive_aromaticity,
    pi_contribution,
)
from pauling.context import build_context
from pauling.graph import Molecule
from pauling.model import BondOrder
from pauling.rings import find_sssr


def _perceived(mol):
    ctx = build_context(mol)
    find_sssr(ctx)
    systems = perceive_aromaticity(ctx)
    return ctx, systems


@pytest.mark.parametrize("count, expected", [(0, False), (2, True), (4, False), (6, True), (8, False), (10, True)])
def test_is_huckel(count, expected):
    assert is_huckel(count) is expected


@pytest.mark.parametrize(
    "builder, n_ring_atoms",
    [
        (benzene, 6),
        (furan, 5),
        (thiophene, 5),
        (pyrrole, 5),
        (pyridine, 6),
        (cyclopentadienyl_anion, 5),
        (tropylium, 7),
    ],
)
def test_six_pi_rings_are_aromatic(builder, n_ring_atoms):
    ctx, systems = _perceived(builder())
    assert len(systems) == 1
    ring_atoms = [a for a in ctx.atoms if a.is_in_ring]
    assert len(ring_atoms) == n_ring_atoms
    assert all(a.is_aromatic for a in ring_atoms)
    assert not any(a.is_aromatic for a in ctx.atoms if a.element == "H")

    atoms = set(ctx.rings[0].atoms)
    bonds = set(ctx.rings[0].bonds)
    assert count_pi_electrons(ctx, atoms, bonds) == 6


def test_furan_pi_count_from_oxygen_lone_pair():
    ctx, _ = _perceived(furan())
    ring = ctx.rings[0]
    # oxygen is atom 0
    assert pi_contribution(ctx, 0, set(ring.bonds)) == 2
    assert all(pi_contribution(ctx, i, set(ring.bonds)) == 1 for i in range(1, 5))


@pytest.mark.parametrize("charge, expected", [(0, 2), (-1, 2), (1, 0)])
def test_three_connected_nitrogen_pi_count(charge, expected):
    """Only the cationic ring nitrogen has no lone pair to give."""
    mol = Molecule()
    n = mol.add_atom("N", charge)
    c = [mol.add_atom("C") for _ in range(4)]
    ring = [n] + c
    orders = [BondOrder.SINGLE, BondOrder.DOUBLE, BondOrder.SINGLE, BondOrder.DOUBLE, BondOrder.SINGLE]
    for k, order in enumerate(orders):
        mol.add_bond(ring[k], ring[(k + 1) % 5], order)
    for a in ring:
        mol.add_hydrogens(a, 1)
    ctx, _ = _perceived(mol)
    assert pi_contribution(ctx, 0, set(ctx.rings[0].bonds)) == expected


def test_saturated_ring_not_aromatic():
    ctx, systems = _perceived(cyclohexane())
    assert systems == []
    assert not any(a.is_aromatic for a in ctx.atoms)


def test_cyclobutadiene_is_antiaromatic():
    mol = Molecule()
    c = [mol.add_atom("C") for _ in range(4)]
    for k, order in enumerate([BondOrder.DOUBLE, BondOrder.SINGLE] * 2):
        mol.add_bond(c[k], c[(k + 1) % 4], order)
    for a in c:
        mol.add_hydrogens(a, 1)
    ctx, systems = _perceived(mol)
    assert systems == []
    assert not any(b.is_aromatic for b in ctx.bonds)


def test_exocyclic_double_bond_does_not_count():
    """p-Benzoquinone: both C=O bonds leave the ring, which keeps 4 π electrons."""
    mol = Molecule()
    c = [mol.add_atom("C") for _ in range(6)]
    orders = [BondOrder.SINGLE, BondOrder.DOUBLE, BondOrder.SINGLE, BondOrder.SINGLE, BondOrder.DOUBLE, BondOrder.SINGLE]
    for k, order in enumerate(orders):
        mol.add_bond(c[k], c[(k + 1) % 6], order)
    for a in (0, 3):
        mol.add_bond(c[a], mol.add_atom("O"), BondOrder.DOUBLE)
    for a in (1, 2, 4, 5):
        mol.add_hydrogens(c[a], 1)
    ctx, systems = _perceived(mol)
    ring = ctx.rings[0]
    assert count_pi_electrons(ctx, set(ring.atoms), set(ring.bonds)) == 4
    assert systems == []


def test_sp3_atom_blocks_aromaticity():
    """Cyclopentadiene: the CH2 has degree 4."""
    mol = Molecule()
    c = [mol.add_atom("C") for _ in range(5)]
    orders = [BondOrder.SINGLE, BondOrder.DOUBLE, BondOrder.SINGLE, BondOrder.DOUBLE, BondOrder.SINGLE]
    for k, order in enumerate(orders):
        mol.add_bond(c[k], c[(k + 1) % 5], order)
    mol.add_hydrogens(c[0], 2)
    for a in c[1:]:
        mol.add_hydrogens(a, 1)
    ctx, systems = _perceived(mol)
    assert systems == []


def test_explicit_aromatic_marker():
    """Aromatic-order bonds are flagged even though no double bonds are present."""
    ctx, _ = _perceived(benzene(aromatic=True))
    assert all(ctx.bonds[i].is_aromatic for i in range(6))
    assert all(ctx.atoms[i].is_aromatic for i in range(6))
    assert not any(ctx.bonds[i].is_aromatic for i in range(6, 12))


def test_fused_systems_grouped_by_shared_bond():
    ctx, _ = _perceived(naphthalene())
    assert fused_ring_systems(ctx) == [[0, 1]]


def test_biphenyl_rings_are_separate_systems():
    ctx, systems = _perceived(biphenyl())
    assert fused_ring_systems(ctx) == [[0], [1]]
    assert len(systems) == 2
    assert not ctx.bonds[12].is_aromatic
