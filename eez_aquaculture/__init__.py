"""Aquaculture suitability for the West Coast EEZs from SST and bathymetry."""

from .errors import (
    AlignmentError,
    AreaMismatchError,
    ConfigurationError,
    InputLoadError,
    JoinError,
    SuitabilityError,
)
from .pipeline import (
    OYSTER,
    SpeciesProfile,
    SuitabilityInputs,
    compute_for_species,
    compute_suitability,
)

__version__ = "0.1.0"

__all__ = [
    "AlignmentError",
    "AreaMismatchError",
    "ConfigurationError",
    "InputLoadError",
    "JoinError",
    "SuitabilityError",
    "OYSTER",
    "SpeciesProfile",
    "SuitabilityInputs",
    "compute_for_species",
    "compute_suitability",
]
