"""
Suitability classification
==========================
Range predicates turn an environmental grid into a {1, NaN} mask; masks are
combined by multiplication, so a cell survives only if every variable is
suitable there.
"""

from dataclasses import dataclass
from functools import reduce

import numpy as np

from .errors import ConfigurationError
from .grid import Grid, require_same_grid


@dataclass(frozen=True)
class SuitabilityRange:
    """Inclusive ``[low, high]`` window for one environmental variable."""
    low: float
    high: float
    variable: str = "value"

    def __post_init__(self):
        if not (np.isfinite(self.low) and np.isfinite(self.high)):
            raise ConfigurationError(
                f"{self.variable} range must be finite, got [{self.low}, {self.high}]"
            )
        if self.low > self.high:
            raise ConfigurationError(
                f"{self.variable} minimum {self.low} exceeds maximum {self.high}"
            )

    def __str__(self):
        return f"{self.low:g} to {self.high:g}"


def classify(grid: Grid, low: float, high: float) -> Grid:
    """1 where ``low <= value <= high``, NaN everywhere else."""
    SuitabilityRange(low, high)
    with np.errstate(invalid="ignore"):
        inside = (grid.data >= low) & (grid.data <= high)
    mask = np.where(inside, np.float32(1.0), np.float32(np.nan))
    return grid.with_data(mask, nodata=np.nan)


def classify_range(grid: Grid, rng: SuitabilityRange) -> Grid:
    return classify(grid, rng.low, rng.high)


def combine(masks) -> Grid:
    masks = list(masks)
    if not masks:
        raise ConfigurationError("combine() needs at least one mask")
    require_same_grid(*masks)
    product = reduce(np.multiply, (m.data for m in masks))
    return masks[0].with_data(product.astype(np.float32), nodata=np.nan)


def suitable_cell_count(mask: Grid) -> int:
    return int(np.count_nonzero(mask.data == 1))
