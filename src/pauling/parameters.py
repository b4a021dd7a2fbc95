"""Type-safe configuration dataclasses for the perception pipeline."""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class KekulizationConfig:
    """Bounds on the Kekulé backtracking search."""

    max_attempts: int = 1000
    """Max bond-order choices tried per aromatic component before giving up."""

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {self.max_attempts}")


@dataclass(frozen=True)
class PerceptionConfig:
    """Configuration for one pipeline run."""

    kekulization: KekulizationConfig = field(default_factory=KekulizationConfig)

    split_aryl_links: bool = True
    """Keep a single bond between two separate aromatic components out of
    the conjugated set (biphenyl gives two systems, not one)."""

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> "PerceptionConfig":
        """Build from a flat parameter dict such as ``DEFAULT_PARAMS``."""
        return cls(
            kekulization=KekulizationConfig(max_attempts=int(params["max_attempts"])),
            split_aryl_links=bool(params["split_aryl_links"]),
        )


DEFAULT_PARAMS: Dict[str, Any] = {
    "max_attempts": KekulizationConfig.max_attempts,
    "split_aryl_links": PerceptionConfig.split_aryl_links,
}
