"""
Input loaders
=============
Reads the SST and bathymetry rasters into Grids and the EEZ / coastline
polygon layers into geopandas frames.
"""

from pathlib import Path

import geopandas as gpd
import numpy as np
import rasterio
from rasterio.errors import RasterioIOError
from shapely.geometry import box

from . import config
from .errors import InputLoadError
from .grid import Grid
from .zones import regions_from_frame


def read_grid(path, band=1) -> Grid:
    """Read one band as float32, with the file's nodata turned into NaN."""
    path = Path(path)
    if not path.exists():
        raise InputLoadError(f"Raster not found: {path}")
    try:
        with rasterio.open(path) as src:
            arr = src.read(band, masked=True).astype(np.float32)
            transform = src.transform
            crs = src.crs
    except (RasterioIOError, IndexError) as exc:
        raise InputLoadError(f"Cannot read raster {path}: {exc}") from exc

    data = arr.filled(np.nan)
    return Grid(data, transform, crs)


def load_sst_grids(paths):
    paths = list(paths)
    if not paths:
        raise InputLoadError("At least one SST raster is required")
    return [read_grid(p) for p in paths]


def load_bathymetry(path) -> Grid:
    return read_grid(path)


def read_vector(path) -> gpd.GeoDataFrame:
    path = Path(path)
    if not path.exists():
        raise InputLoadError(f"Vector layer not found: {path}")
    try:
        return gpd.read_file(path)
    except Exception as exc:
        raise InputLoadError(f"Cannot read vector layer {path}: {exc}") from exc


def load_regions(path, key_col=config.REGION_KEY_COL,
                 name_col=config.REGION_NAME_COL,
                 area_col=config.REGION_AREA_COL, crs=None):
    """Load the EEZ polygons as Regions, optionally reprojected to ``crs``.

    Reprojecting vectors is safe (unlike the rasters, which must already share
    a CRS), so the EEZ layer is brought onto the raster CRS here.
    """
    frame = read_vector(path)
    if crs is not None and frame.crs is not None and frame.crs != crs:
        frame = frame.to_crs(crs)
    return regions_from_frame(frame, key_col=key_col, name_col=name_col,
                              area_col=area_col)


def load_basemap(path, bounds=None, crs=None) -> gpd.GeoDataFrame:
    """Coastal outline for display, clipped to ``bounds`` when given."""
    land = read_vector(path)
    if crs is not None and land.crs is not None and land.crs != crs:
        land = land.to_crs(crs)
    if bounds is not None:
        clip_box = gpd.GeoDataFrame(geometry=[box(*bounds)], crs=land.crs)
        land = gpd.clip(land, clip_box)
    return land
