"""
EEZ regions and zone rasterization
==================================
"""

from dataclasses import dataclass

import numpy as np
from rasterio.features import rasterize
from shapely.geometry import mapping

from .errors import InputLoadError
from .grid import Grid, require_same_grid

REGION_NODATA = 0


@dataclass(frozen=True)
class Region:
    key: str
    name: str
    total_area_km2: float
    geometry: object
    region_id: int


def regions_from_frame(frame, key_col="rgn_key", name_col="rgn",
                       area_col="area_km2"):
    """Build Regions from a GeoDataFrame, ordered by key, ids starting at 1."""
    missing = [c for c in (key_col, name_col, area_col) if c not in frame.columns]
    if missing:
        raise InputLoadError(f"EEZ layer is missing attribute(s): {', '.join(missing)}")

    keys = frame[key_col].astype(str)
    if keys.duplicated().any():
        dupes = sorted(set(keys[keys.duplicated()]))
        raise InputLoadError(f"Duplicate region keys: {', '.join(dupes)}")

    frame = frame.assign(**{key_col: keys}).sort_values(key_col)
    regions = []
    for region_id, (_, row) in enumerate(frame.iterrows(), start=1):
        regions.append(Region(
            key=row[key_col],
            name=str(row[name_col]),
            total_area_km2=float(row[area_col]),
            geometry=row.geometry,
            region_id=region_id,
        ))
    return regions


def rasterize_regions(regions, reference: Grid) -> Grid:
    """Burn region ids onto ``reference``'s grid; 0 marks cells outside all regions.

    Any cell touched by a polygon belongs to it. Polygons are burned in order,
    so the later region wins where two overlap.
    """
    shapes = [(mapping(r.geometry), r.region_id) for r in regions
              if r.geometry is not None and not r.geometry.is_empty]
    if shapes:
        ids = rasterize(
            shapes,
            out_shape=reference.shape,
            transform=reference.transform,
            fill=REGION_NODATA,
            all_touched=True,
            dtype=np.int32,
        )
    else:
        ids = np.full(reference.shape, REGION_NODATA, dtype=np.int32)
    return Grid(ids, reference.transform, reference.crs, nodata=REGION_NODATA)


def mask_by_region(suitability: Grid, region_raster: Grid) -> Grid:
    """Drop suitable cells that fall outside every region."""
    require_same_grid(suitability, region_raster)
    inside = region_raster.valid_mask()
    masked = np.where(inside, suitability.data, np.float32(np.nan))
    return suitability.with_data(masked.astype(np.float32), nodata=np.nan)
