"""Tests for the RDKit molecule adapter."""

import pytest

rdkit = pytest.importorskip("rdkit")

from rdkit import Chem  # noqa: E402

from pauling import RDKitMolecule, find_resonance_systems, perceive  # noqa: E402
from pauling.model import Hybridization  # noqa: E402


def test_hydrogens_made_explicit():
    mol = RDKitMolecule.from_smiles("C")
    assert len(list(mol.atoms())) == 5
    assert len(list(mol.bonds())) == 4


def test_aromatic_smiles():
    (system,) = find_resonance_systems(RDKitMolecule.from_smiles("c1ccccc1"))
    assert system.atoms == (0, 1, 2, 3, 4, 5)


def test_kekule_smiles_biphenyl():
    systems = find_resonance_systems(RDKitMolecule.from_smiles("C1=CC=CC=C1C1=CC=CC=C1"))
    assert len(systems) == 2


def test_charges_read():
    result = perceive(RDKitMolecule.from_smiles("[NH3+]CC(=O)[O-]"))
    assert result.atom(0).formal_charge == 1
    assert result.atom(4).formal_charge == -1
    (system,) = result.systems
    assert system.atoms == (2, 3, 4)


def test_wraps_existing_mol_without_adding_hydrogens():
    mol = Chem.AddHs(Chem.MolFromSmiles("C=C"))
    wrapped = RDKitMolecule(mol, add_hs=False)
    assert sorted(wrapped.neighbors(0)) == [1, 2, 3]
    result = perceive(wrapped)
    assert result.atom(0).hybridization is Hybridization.SP2


def test_bad_smiles():
    with pytest.raises(ValueError, match="could not parse"):
        RDKitMolecule.from_smiles("C1CC")
