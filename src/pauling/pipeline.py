"""Perception pipeline orchestration.

Runs the six stages in order on a fresh :class:`PerceptionContext`:

1. ingestion and validation
2. ring perception (SSSR)
3. aromaticity
4. Kekulization
5. atom state
6. resonance candidates and systems

A run either returns a complete :class:`PerceptionResult` or raises; no
partial output is produced.
"""

import logging
from dataclasses import dataclass
from typing import Hashable, List, Optional, Tuple

from .aromaticity import perceive_aromaticity
from .atom_state import perceive_atom_state
from .context import PerceptionContext, build_context
from .data_loader import DATA, MolecularData
from .graph import MoleculeGraph
from .kekulize import kekulize
from .model import PerceivedAtom, PerceivedBond, ResonanceSystem
from .parameters import PerceptionConfig
from .resonance import assemble_systems, assign_conjugation_roles
from .rings import find_sssr

logger = logging.getLogger(__name__)


@dataclass
class PerceptionResult:
    """Resonance systems plus the enriched per-atom and per-bond metadata."""

    systems: List[ResonanceSystem]
    context: PerceptionContext

    def atom(self, atom_id: Hashable) -> PerceivedAtom:
        return self.context.atoms[self.context.atom_index[atom_id]]

    def bond(self, bond_id: Hashable) -> PerceivedBond:
        return self.context.bonds[self.context.bond_index[bond_id]]

    @property
    def atoms(self) -> List[PerceivedAtom]:
        return self.context.atoms

    @property
    def bonds(self) -> List[PerceivedBond]:
        return self.context.bonds

    @property
    def rings(self) -> List[Tuple[Hashable, ...]]:
        """SSSR rings as tuples of atom ids, in cycle order."""
        atoms = self.context.atoms
        return [tuple(atoms[i].id for i in ring.atoms) for ring in self.context.rings]

    def system_of(self, atom_id: Hashable) -> Optional[ResonanceSystem]:
        """The resonance system containing ``atom_id``, if any."""
        for system in self.systems:
            if atom_id in system.atoms:
                return system
        return None


class ResonancePerceiver:
    """Runs the perception stages and keeps a readable trace of each run.

    Parameters
    ----------
    config : PerceptionConfig, optional
        Search bounds and system-assembly options.
    data : MolecularData
        Element tables used for valence-electron lookups.
    """

    def __init__(self, config: Optional[PerceptionConfig] = None, data: MolecularData = DATA):
        self.config = config or PerceptionConfig()
        self.data = data
        self.log_buffer: List[str] = []

    def _log(self, msg: str, level: int = 0):
        """Log message with indentation."""
        indent = "  " * level
        line = f"{indent}{msg}"
        logger.debug(line)
        self.log_buffer.append(line)

    def get_log(self) -> List[str]:
        """Return accumulated log messages."""
        return self.log_buffer

    def _section(self, title: str):
        self._log("\n" + "=" * 80, 0)
        self._log(title, 0)
        self._log("=" * 80, 0)

    def run(self, graph: MoleculeGraph) -> PerceptionResult:
        """Perceive rings, aromaticity, atom state and resonance systems.

        Raises
        ------
        PerceptionError
            Any stage failure; the run produces no output.
        """
        self.log_buffer = []

        self._section("INGESTION")
        ctx = build_context(graph, data=self.data)
        self._log(f"{ctx.num_atoms} atoms, {ctx.num_bonds} bonds", 1)

        self._section("RING PERCEPTION (SSSR)")
        rings = find_sssr(ctx)
        self._log(f"{len(rings)} rings", 1)
        for r_idx, ring in enumerate(rings):
            members = " ".join(f"{ctx.atoms[i].element}{i}" for i in ring.atoms)
            self._log(f"Ring {r_idx} ({len(ring)}-membered): {members}", 2)

        self._section("AROMATICITY")
        fused = perceive_aromaticity(ctx)
        self._log(f"{len(fused)} fused systems pass Hückel's rule", 1)
        n_aromatic = sum(1 for atom in ctx.atoms if atom.is_aromatic)
        self._log(f"{n_aromatic} aromatic atoms", 1)

        self._section("KEKULIZATION")
        components = kekulize(ctx, self.config.kekulization)
        if not components:
            self._log("No aromatic bonds, skipping", 1)
        for comp_idx, bonds in enumerate(components):
            self._log(f"Component {comp_idx}: {len(bonds)} bonds", 1)

        self._section("ATOM STATE")
        perceive_atom_state(ctx)
        anomalies = [atom for atom in ctx.atoms if atom.valence_anomaly]
        for atom in anomalies:
            self._log(f"Valence anomaly on {atom.element}{atom.index} (id {atom.id!r})", 1)

        self._section("RESONANCE")
        candidates = assign_conjugation_roles(ctx)
        self._log(f"{len(candidates)} candidate atoms", 1)
        systems = assemble_systems(ctx, split_aryl_links=self.config.split_aryl_links)
        for s_idx, system in enumerate(systems):
            self._log(f"System {s_idx}: {len(system.atoms)} atoms, {len(system.bonds)} bonds", 2)

        return PerceptionResult(systems=systems, context=ctx)


def perceive(graph: MoleculeGraph, config: Optional[PerceptionConfig] = None) -> PerceptionResult:
    """Run the full pipeline and return systems with enriched metadata."""
    return ResonancePerceiver(config).run(graph)


def find_resonance_systems(graph: MoleculeGraph, config: Optional[PerceptionConfig] = None) -> List[ResonanceSystem]:
    """Resonance systems of ``graph``, ordered by their lowest atom index."""
    return perceive(graph, config).systems
