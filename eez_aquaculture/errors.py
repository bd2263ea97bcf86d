"""Exceptions raised by the suitability pipeline. All of them end a run."""


class SuitabilityError(Exception):
    """Base class for every pipeline failure."""


class InputLoadError(SuitabilityError):
    """An input file is missing, unreadable or lacks a required attribute."""


class AlignmentError(SuitabilityError):
    """Grids cannot be brought onto a common transform, shape and CRS."""


class ConfigurationError(SuitabilityError):
    """A parameter is invalid, e.g. a range whose minimum exceeds its maximum."""


class JoinError(SuitabilityError):
    """Region keys differ between raster-derived and polygon-derived data."""


class AreaMismatchError(SuitabilityError):
    """Suitable area exceeds a region's total area."""
