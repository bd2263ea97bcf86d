"""
Raster alignment
================
Averages the annual SST grids, converts them to Celsius and brings the
bathymetry onto the same grid (crop, then nearest-neighbour resample).
"""

import numpy as np
from rasterio.enums import Resampling
from rasterio.warp import reproject
from rasterio.windows import Window
from rasterio.windows import transform as window_transform

from . import config
from .errors import AlignmentError
from .grid import Grid, require_same_grid


def mean_grid(grids) -> Grid:
    """Cellwise arithmetic mean. A NaN in any input stays NaN in the result."""
    grids = list(grids)
    if not grids:
        raise AlignmentError("At least one temperature grid is required")
    require_same_grid(*grids)
    stack = np.stack([g.data.astype(np.float64) for g in grids])
    return grids[0].with_data(stack.mean(axis=0).astype(np.float32))


def kelvin_to_celsius(grid: Grid) -> Grid:
    return grid.with_data(grid.data - np.float32(config.KELVIN_OFFSET))


def crop_to_extent(grid: Grid, bounds) -> Grid:
    """Crop ``grid`` to ``bounds``, keeping every cell the extent touches."""
    left, bottom, right, top = bounds
    t = grid.transform
    if t.b != 0 or t.d != 0:
        raise AlignmentError("Rotated rasters are not supported")

    inv = ~t
    col_a, row_a = inv @ (left, top)
    col_b, row_b = inv @ (right, bottom)
    height, width = grid.shape

    # small tolerance so extents that line up with cell edges don't gain a cell
    eps = 1e-6
    col_off = max(int(np.floor(min(col_a, col_b) + eps)), 0)
    row_off = max(int(np.floor(min(row_a, row_b) + eps)), 0)
    col_end = min(int(np.ceil(max(col_a, col_b) - eps)), width)
    row_end = min(int(np.ceil(max(row_a, row_b) - eps)), height)

    if col_end <= col_off or row_end <= row_off:
        raise AlignmentError(
            f"Crop extent {tuple(bounds)} does not overlap raster bounds {grid.bounds}"
        )

    window = Window(col_off, row_off, col_end - col_off, row_end - row_off)
    data = grid.data[row_off:row_end, col_off:col_end]
    return Grid(data.copy(), window_transform(window, t), grid.crs, grid.nodata)


def resample_nearest(grid: Grid, reference: Grid) -> Grid:
    """Resample ``grid`` onto ``reference``'s transform and shape."""
    if grid.crs != reference.crs:
        raise AlignmentError(
            f"CRS mismatch: {grid.crs} vs {reference.crs} (reproject inputs first)"
        )
    destination = np.full(reference.shape, np.nan, dtype=np.float32)
    reproject(
        source=grid.data.astype(np.float32),
        destination=destination,
        src_transform=grid.transform,
        src_crs=grid.crs,
        src_nodata=np.nan,
        dst_transform=reference.transform,
        dst_crs=reference.crs,
        dst_nodata=np.nan,
        resampling=Resampling.nearest,
    )
    return reference.with_data(destination, nodata=np.nan)


def align(temp_grids, depth_grid):
    """Return (mean SST in Celsius, depth on the same grid)."""
    mean_sst = kelvin_to_celsius(mean_grid(temp_grids))

    if depth_grid.crs != mean_sst.crs:
        raise AlignmentError(
            f"Bathymetry CRS {depth_grid.crs} differs from SST CRS {mean_sst.crs}"
        )
    cropped = crop_to_extent(depth_grid, mean_sst.bounds)
    depth = resample_nearest(cropped, mean_sst)

    require_same_grid(mean_sst, depth)
    return mean_sst, depth
