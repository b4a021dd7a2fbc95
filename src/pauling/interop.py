"""Adapters for third-party molecule objects (require extra dependencies)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from .graph import AtomRecord, BondRecord

if TYPE_CHECKING:
    from rdkit import Chem

logger = logging.getLogger(__name__)


class RDKitMolecule:
    """Expose an RDKit ``Mol`` as perception input.

    Parameters
    ----------
    mol : Chem.Mol
        Molecule to wrap. Atom and bond ids are RDKit indices.
    add_hs : bool
        Make implicit hydrogens explicit first. Degrees, and therefore
        lone pairs and hybridization, are only meaningful with all
        hydrogens present as atoms.

    Notes
    -----
    Requires ``rdkit``. Bond types other than single, double, triple and
    aromatic are passed through by name and rejected at ingestion.
    """

    def __init__(self, mol: Chem.Mol, add_hs: bool = True):
        if add_hs:
            from rdkit import Chem  # lazy import

            mol = Chem.AddHs(mol)
        self.mol = mol

    @classmethod
    def from_smiles(cls, smiles: str) -> RDKitMolecule:
        from rdkit import Chem

        mol = Chem.MolFromSmiles(smiles)
        if mol is None:
            raise ValueError(f"RDKit could not parse SMILES {smiles!r}")
        logger.debug("Parsed %s: %d heavy atoms", smiles, mol.GetNumAtoms())
        return cls(mol, add_hs=True)

    def atoms(self) -> Iterator[AtomRecord]:
        for atom in self.mol.GetAtoms():
            yield AtomRecord(atom.GetIdx(), atom.GetSymbol(), atom.GetFormalCharge())

    def bonds(self) -> Iterator[BondRecord]:
        for bond in self.mol.GetBonds():
            yield BondRecord(bond.GetIdx(), bond.GetBeginAtomIdx(), bond.GetEndAtomIdx(), str(bond.GetBondType()))

    def neighbors(self, atom_id: int) -> list[int]:
        return [nbr.GetIdx() for nbr in self.mol.GetAtomWithIdx(atom_id).GetNeighbors()]
