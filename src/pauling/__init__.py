from importlib.metadata import version
__version__ = version("pauling")

# Eagerly load data
from .data_loader import DATA

# Configuration
from .parameters import DEFAULT_PARAMS, KekulizationConfig, PerceptionConfig

# Core types and errors
from .model import BondOrder, ConjugationRole, Hybridization, ResonanceSystem
from .exceptions import (
    DuplicateBond,
    InconsistentGraph,
    KekulizationFailed,
    PerceptionError,
    RingPerceptionFailed,
)

# Input graphs
from .graph import Molecule, MoleculeBuildError, MoleculeGraph, NetworkXGraph
from .interop import RDKitMolecule

# Main interfaces
from .pipeline import PerceptionResult, ResonancePerceiver, find_resonance_systems, perceive

# Utilities
from .utils import perception_report, result_to_dict, result_to_graph

__all__ = [
    # Main interfaces
    'ResonancePerceiver',
    'PerceptionResult',
    'perceive',
    'find_resonance_systems',

    # Input graphs
    'Molecule',
    'MoleculeBuildError',
    'MoleculeGraph',
    'NetworkXGraph',
    'RDKitMolecule',

    # Types
    'BondOrder',
    'ConjugationRole',
    'Hybridization',
    'ResonanceSystem',

    # Errors
    'PerceptionError',
    'InconsistentGraph',
    'DuplicateBond',
    'KekulizationFailed',
    'RingPerceptionFailed',

    # Utilities
    'perception_report',
    'result_to_dict',
    'result_to_graph',

    # Configuration
    'DEFAULT_PARAMS',
    'KekulizationConfig',
    'PerceptionConfig',

    # Data access
    'DATA',                 # Access as DATA.electrons, DATA.conjugatable_atoms, etc.
]
