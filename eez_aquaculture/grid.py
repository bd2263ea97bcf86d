"""
Raster grid model
=================
A 2D array together with the affine transform and CRS that place it on the
map. Float grids mark no-data with NaN; integer grids carry an explicit
no-data value.
"""

from dataclasses import dataclass, field

import numpy as np
from rasterio.crs import CRS
from rasterio.transform import Affine, array_bounds

from .errors import AlignmentError


@dataclass(frozen=True, eq=False)
class Grid:
    data: np.ndarray
    transform: Affine
    crs: CRS
    nodata: float = field(default=np.nan)

    @property
    def shape(self):
        return self.data.shape

    @property
    def bounds(self):
        """(left, bottom, right, top) in CRS units."""
        height, width = self.data.shape
        west, south, east, north = array_bounds(height, width, self.transform)
        return west, south, east, north

    def valid_mask(self) -> np.ndarray:
        if self.nodata is None:
            return np.ones(self.data.shape, dtype=bool)
        if np.isnan(self.nodata):
            return ~np.isnan(self.data)
        return self.data != self.nodata

    def with_data(self, data, nodata=None) -> "Grid":
        """New grid on the same transform and CRS."""
        return Grid(np.asarray(data), self.transform, self.crs,
                    self.nodata if nodata is None else nodata)

    def same_grid(self, other: "Grid") -> bool:
        return (self.data.shape == other.data.shape
                and self.transform.almost_equals(other.transform)
                and self.crs == other.crs)


def require_same_grid(*grids):
    """Raise AlignmentError unless every grid shares the first one's geometry."""
    first = grids[0]
    for other in grids[1:]:
        if not first.same_grid(other):
            raise AlignmentError(
                f"Grids are not aligned: shape {first.shape} / {other.shape}, "
                f"CRS {first.crs} / {other.crs}, "
                f"transform {tuple(first.transform)[:6]} / {tuple(other.transform)[:6]}"
            )
