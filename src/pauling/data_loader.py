"""Reference element data used by the perception stages.

Loaded once from the JSON files shipped in ``pauling.data`` and exposed
through the :data:`DATA` singleton.
"""

import json
import logging
from importlib import resources
from typing import Dict, FrozenSet, Optional, Union

logger = logging.getLogger(__name__)


def _load_json(name: str) -> dict:
    data_path = resources.files("pauling.data")
    with (data_path / name).open("r") as fh:
        data = json.load(fh)
    return {key: value for key, value in data.items() if not key.startswith("_")}


class MolecularData:
    """Element tables: symbols, atomic numbers, valence electrons, element sets."""

    _instance: Optional["MolecularData"] = None

    def __init__(self):
        elements = _load_json("elements.json")
        conjugation = _load_json("conjugation.json")

        self.s2n: Dict[str, int] = {sym: entry["z"] for sym, entry in elements.items()}
        self.n2s: Dict[int, str] = {z: sym for sym, z in self.s2n.items()}
        self.electrons: Dict[str, int] = {
            sym: entry["valence_electrons"]
            for sym, entry in elements.items()
            if entry["valence_electrons"] is not None
        }
        self.conjugatable_atoms: FrozenSet[str] = frozenset(conjugation["conjugation_elements"])
        self.hypervalent_atoms: FrozenSet[str] = frozenset(conjugation["hypervalent_bridge_elements"])

        # Upper-cased lookup so "CL", "cl" and "Cl" all resolve
        self._folded: Dict[str, str] = {sym.upper(): sym for sym in self.s2n}

        logger.debug("Loaded %d elements", len(self.s2n))

    @classmethod
    def get_instance(cls) -> "MolecularData":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def normalize_symbol(self, element: Union[str, int]) -> Optional[str]:
        """Return the canonical symbol for a symbol or atomic number, or None."""
        if isinstance(element, bool):
            return None
        if isinstance(element, int):
            return self.n2s.get(element)
        text = str(element).strip()
        if text.isdigit():
            return self.n2s.get(int(text))
        return self._folded.get(text.upper())

    def valence_electrons(self, symbol: str) -> Optional[int]:
        return self.electrons.get(symbol)

    def octet_valence(self, symbol: str, formal_charge: int = 0) -> Optional[int]:
        """Number of bonds an atom forms to complete its octet.

        The charge shifts the atom onto its isoelectronic neighbour,
        so N+ bonds like C (4) and C- like N (3).
        """
        ve = self.electrons.get(symbol)
        if ve is None:
            return None
        if symbol == "H":
            return max(0, 1 - abs(formal_charge))
        effective = ve - formal_charge
        if effective <= 4:
            return max(0, effective)
        return max(0, 8 - effective)


DATA = MolecularData.get_instance()
