"""Errors raised by the perception pipeline."""

from __future__ import annotations

from typing import Hashable, Sequence


class PerceptionError(Exception):
    """Base class for every failure of a perception run."""


class InconsistentGraph(PerceptionError):
    """The input graph is internally inconsistent.

    Raised for a bond that names an unknown atom, and for the other
    ingestion checks (duplicate identifiers, self loops, unknown elements).
    """

    def __init__(self, message: str, atom_id: Hashable | None = None, bond_id: Hashable | None = None):
        self.atom_id = atom_id
        self.bond_id = bond_id
        super().__init__(message)


class DuplicateBond(PerceptionError):
    """Two bonds connect the same unordered pair of atoms."""

    def __init__(self, begin: Hashable, end: Hashable, bond_id: Hashable | None = None):
        self.begin = begin
        self.end = end
        self.bond_id = bond_id
        super().__init__(f"duplicate bond between atoms {begin!r} and {end!r} (bond {bond_id!r})")


class KekulizationFailed(PerceptionError):
    """No valid Kekulé pattern was found for an aromatic component."""

    def __init__(self, bond_ids: Sequence[Hashable], attempts: int, hit_ceiling: bool):
        self.bond_ids = tuple(bond_ids)
        self.attempts = attempts
        self.hit_ceiling = hit_ceiling
        reason = "attempt ceiling reached" if hit_ceiling else "search exhausted"
        super().__init__(
            f"kekulization failed for aromatic component with bonds {list(self.bond_ids)!r} "
            f"after {attempts} attempts ({reason})"
        )


class RingPerceptionFailed(PerceptionError):
    """The cycle basis could not be completed."""
