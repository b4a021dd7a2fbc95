"""Tests for conjugation role assignment."""

from molecules import (
    acetamide,
    allyl_cation,
    benzene,
    butane,
    dimethyl_sulfone,
    glycine_zwitterion,
    methyl_acetate,
    perchlorate,
    perchloric_acid,
    phenyl_mesylate,
)
from pauling.aromaticity import perceive_aromaticity
from pauling.atom_state import perceive_atom_state
from pauling.context import build_context
from pauling.kekulize import kekulize
from pauling.model import ConjugationRole
from pauling.resonance.candidates import assign_conjugation_roles, is_hypervalent_bridge
from pauling.rings import find_sssr

PI = ConjugationRole.PI_CARRIER
DONOR = ConjugationRole.LONE_PAIR_DONOR
MEDIATOR = ConjugationRole.CHARGE_MEDIATOR
BRIDGE = ConjugationRole.HYPERVALENT_BRIDGE


def _roles(mol):
    ctx = build_context(mol)
    find_sssr(ctx)
    perceive_aromaticity(ctx)
    kekulize(ctx)
    perceive_atom_state(ctx)
    candidates = assign_conjugation_roles(ctx)
    return ctx, candidates


def test_saturated_has_no_candidates():
    ctx, candidates = _roles(butane())
    assert candidates == []
    assert all(a.roles == ConjugationRole.NONE for a in ctx.atoms)


def test_aromatic_carbons_are_pi_carriers():
    ctx, candidates = _roles(benzene())
    assert candidates == list(range(6))
    assert all(ctx.atoms[i].roles == PI for i in range(6))


def test_amide_nitrogen_donates():
    ctx, candidates = _roles(acetamide())
    assert candidates == [1, 2, 3]
    assert DONOR in ctx.atoms[3].roles
    assert PI in ctx.atoms[3].roles
    assert ctx.atoms[0].roles == ConjugationRole.NONE


def test_carboxylate_candidates():
    ctx, candidates = _roles(glycine_zwitterion())
    assert candidates == [2, 3, 4]
    assert ctx.atoms[3].roles == PI | DONOR


def test_ester_oxygen_carries_pi_but_never_donates():
    ctx, candidates = _roles(methyl_acetate())
    assert candidates == [1, 2, 3]
    assert ctx.atoms[3].roles == PI
    assert ctx.atoms[4].roles == ConjugationRole.NONE


def test_carbocation_mediates_charge():
    ctx, _ = _roles(allyl_cation())
    assert ctx.atoms[2].roles == PI | MEDIATOR


def test_perchlorate_bridge_and_anionic_donor():
    ctx, candidates = _roles(perchlorate())
    assert candidates == [0, 1, 2, 3, 4]
    assert ctx.atoms[0].roles == BRIDGE
    assert all(ctx.atoms[i].roles == PI for i in (1, 2, 3))
    # only bridge neighbour, accepted because the oxygen is anionic
    assert ctx.atoms[4].roles == DONOR


def test_perchloric_acid_hydroxyl_excluded():
    ctx, candidates = _roles(perchloric_acid())
    assert candidates == [0, 1, 2, 3]
    assert ctx.atoms[4].roles == ConjugationRole.NONE


def test_sulfone_bridge():
    ctx, _ = _roles(dimethyl_sulfone())
    assert is_hypervalent_bridge(ctx, 1)
    assert ctx.atoms[1].roles == BRIDGE
    assert ctx.atoms[0].roles == ConjugationRole.NONE


def test_roles_recomputed_each_call():
    ctx, first = _roles(acetamide())
    ctx.atoms[0].roles = PI
    ctx.atoms[0].is_candidate = True
    assert assign_conjugation_roles(ctx) == first
    assert not ctx.atoms[0].is_candidate


def test_role_labels():
    assert (PI | DONOR).labels() == ("PI_CARRIER", "LONE_PAIR_DONOR")
    assert ConjugationRole.NONE.labels() == ()


def test_planar_oxygen_next_to_bridge_is_not_a_carrier():
    ctx, candidates = _roles(phenyl_mesylate())
    o6 = ctx.atoms[6]
    assert o6.hybridization.value == "sp2"
    assert ctx.atoms[7].roles == BRIDGE
    assert o6.roles == ConjugationRole.NONE
    assert 6 not in candidates
