"""Core types shared by every perception stage."""

import enum
from dataclasses import dataclass, field
from typing import Any, Hashable, Optional, Tuple

import numpy as np


class BondOrder(enum.Enum):
    """Nominal bond order as supplied by the input graph."""

    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    AROMATIC = "aromatic"

    @property
    def multiplicity(self) -> int:
        # An unresolved aromatic bond counts as single until kekulized
        return _MULTIPLICITY[self]

    @property
    def is_multiple(self) -> bool:
        return self in (BondOrder.DOUBLE, BondOrder.TRIPLE)

    @property
    def value_float(self) -> float:
        """Numeric order in the 1.0/1.5/2.0/3.0 convention."""
        return _NUMERIC[self]

    @classmethod
    def coerce(cls, value: Any) -> "BondOrder":
        """Accept a BondOrder, a name ("double", "AROMATIC") or a numeric order."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown bond order: {value!r}") from None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            for order, numeric in _NUMERIC.items():
                if abs(float(value) - numeric) < 0.01:
                    return order
        raise ValueError(f"Unknown bond order: {value!r}")


_MULTIPLICITY = {
    BondOrder.SINGLE: 1,
    BondOrder.DOUBLE: 2,
    BondOrder.TRIPLE: 3,
    BondOrder.AROMATIC: 1,
}

_NUMERIC = {
    BondOrder.SINGLE: 1.0,
    BondOrder.AROMATIC: 1.5,
    BondOrder.DOUBLE: 2.0,
    BondOrder.TRIPLE: 3.0,
}


class Hybridization(enum.Enum):
    SP = "sp"
    SP2 = "sp2"
    SP3 = "sp3"
    SP3D = "sp3d"
    SP3D2 = "sp3d2"
    UNKNOWN = "unknown"

    @classmethod
    def from_steric_number(cls, steric_number: int) -> "Hybridization":
        return _STERIC.get(steric_number, cls.UNKNOWN)


_STERIC = {
    2: Hybridization.SP,
    3: Hybridization.SP2,
    4: Hybridization.SP3,
    5: Hybridization.SP3D,
    6: Hybridization.SP3D2,
}


class ConjugationRole(enum.IntFlag):
    """How an atom takes part in delocalization."""

    NONE = 0
    PI_CARRIER = 1
    LONE_PAIR_DONOR = 2
    CHARGE_MEDIATOR = 4
    HYPERVALENT_BRIDGE = 8

    def labels(self) -> Tuple[str, ...]:
        return tuple(role.name for role in _ROLES if role in self)


_ROLES = (
    ConjugationRole.PI_CARRIER,
    ConjugationRole.LONE_PAIR_DONOR,
    ConjugationRole.CHARGE_MEDIATOR,
    ConjugationRole.HYPERVALENT_BRIDGE,
)


@dataclass
class PerceivedAtom:
    """Per-atom working record, filled in stage by stage."""

    index: int
    id: Hashable
    element: str
    formal_charge: int
    degree: int
    total_valence: int = 0
    lone_pairs: int = 0
    radical_electrons: int = 0
    valence_anomaly: bool = False
    hybridization: Hybridization = Hybridization.UNKNOWN
    is_in_ring: bool = False
    is_aromatic: bool = False
    roles: ConjugationRole = ConjugationRole.NONE
    is_candidate: bool = False


@dataclass
class PerceivedBond:
    """Per-bond working record. ``begin``/``end`` are dense atom indices."""

    index: int
    id: Hashable
    begin: int
    end: int
    order: BondOrder
    kekule_order: Optional[BondOrder] = None
    is_in_ring: bool = False
    is_aromatic: bool = False

    @property
    def effective_order(self) -> BondOrder:
        return self.kekule_order if self.kekule_order is not None else self.order

    def other(self, atom_index: int) -> int:
        return self.end if atom_index == self.begin else self.begin


@dataclass(frozen=True)
class Ring:
    """A cycle of the SSSR.

    ``atoms`` walk the cycle in order; ``bonds`` are sorted bond indices;
    ``vector`` is the GF(2) membership vector over all bonds.
    """

    atoms: Tuple[int, ...]
    bonds: Tuple[int, ...]
    vector: np.ndarray = field(compare=False, repr=False)

    def __len__(self) -> int:
        return len(self.bonds)


@dataclass(frozen=True)
class ResonanceSystem:
    """One connected group of conjugated bonds, reported by external ids."""

    atoms: Tuple[Hashable, ...]
    bonds: Tuple[Hashable, ...]

    def __len__(self) -> int:
        return len(self.bonds)
