"""Resonance candidate roles and resonance system assembly."""

from .candidates import assign_conjugation_roles
from .systems import assemble_systems, expand_conjugation, group_systems

__all__ = [
    "assemble_systems",
    "assign_conjugation_roles",
    "expand_conjugation",
    "group_systems",
]
