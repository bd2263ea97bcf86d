"""
Area aggregation
================
Per-cell area (geodesic for lon/lat grids) and suitable area per EEZ region.
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd
from pyproj import Geod

from . import config
from .errors import AreaMismatchError, ConfigurationError, JoinError
from .grid import Grid, require_same_grid

_GEOD = Geod(ellps="WGS84")


@dataclass(frozen=True)
class RegionSuitabilityReport:
    key: str
    name: str
    suitable_area_km2: float
    total_area_km2: float

    @property
    def percent_suitable(self) -> float:
        return self.suitable_area_km2 / self.total_area_km2 * 100


def _unit_factor(unit):
    try:
        return config.AREA_UNIT_FACTORS[unit]
    except KeyError:
        raise ConfigurationError(
            f"Unknown area unit {unit!r}; use one of {sorted(config.AREA_UNIT_FACTORS)}"
        ) from None


def cell_area(grid: Grid, unit="km") -> Grid:
    """Area of every cell in ``unit`` squared (``"m"``, ``"km"`` or ``"ha"``).

    For geographic CRSs each row is a lon/lat quadrilateral measured on the
    WGS84 ellipsoid, so the area shrinks towards the poles. Projected CRSs get
    a constant cell size scaled by the CRS linear unit.
    """
    factor = _unit_factor(unit)
    t = grid.transform
    height, width = grid.shape

    if grid.crs is not None and grid.crs.is_geographic:
        if t.b != 0 or t.d != 0:
            raise ConfigurationError("Rotated geographic rasters are not supported")
        x0, x1 = t.c, t.c + t.a
        row_area = np.empty(height, dtype=np.float64)
        for row in range(height):
            y_top = t.f + row * t.e
            y_bot = y_top + t.e
            area_m2, _ = _GEOD.polygon_area_perimeter(
                [x0, x1, x1, x0], [y_top, y_top, y_bot, y_bot]
            )
            row_area[row] = abs(area_m2)
        areas = np.repeat(row_area[:, np.newaxis], width, axis=1)
    else:
        metres = 1.0
        if grid.crs is not None:
            metres = grid.crs.linear_units_factor[1]
        cell_m2 = abs(t.a * t.e - t.b * t.d) * metres ** 2
        areas = np.full((height, width), cell_m2, dtype=np.float64)

    return grid.with_data(areas * factor, nodata=np.nan)


def total_suitable_area(mask: Grid, areas: Grid) -> float:
    """Area of every defined cell of ``mask``."""
    require_same_grid(mask, areas)
    return float(areas.data[mask.valid_mask()].sum())


def aggregate(mask: Grid, region_raster: Grid, areas: Grid, regions):
    """Suitable area per region, keyed by region key, in ``regions`` order.

    Region totals come from the polygon attributes, not from the raster.
    """
    require_same_grid(mask, region_raster, areas)

    defined = mask.valid_mask() & region_raster.valid_mask()
    frame = pd.DataFrame({
        "region_id": region_raster.data[defined],
        "area": areas.data[defined],
    })
    sums = frame.groupby("region_id")["area"].sum()

    by_id = {r.region_id: r for r in regions}
    unknown = sorted(set(sums.index) - set(by_id))
    if unknown:
        raise JoinError(f"Raster region ids with no matching region: {unknown}")

    reports = {}
    for region in regions:
        if not region.total_area_km2 > 0:
            raise ConfigurationError(
                f"Region {region.key} has non-positive total area {region.total_area_km2}"
            )
        suitable = float(sums.get(region.region_id, 0.0))
        if suitable > region.total_area_km2:
            raise AreaMismatchError(
                f"Region {region.key}: suitable area {suitable:,.1f} km2 exceeds "
                f"total area {region.total_area_km2:,.1f} km2"
            )
        reports[region.key] = RegionSuitabilityReport(
            key=region.key,
            name=region.name,
            suitable_area_km2=suitable,
            total_area_km2=region.total_area_km2,
        )
    return reports


def reports_to_frame(reports) -> pd.DataFrame:
    rows = [{
        "rgn_key": r.key,
        "rgn": r.name,
        "suitable_area_km2": r.suitable_area_km2,
        "area_km2": r.total_area_km2,
        "percent_suitable": r.percent_suitable,
    } for r in reports.values()]
    return pd.DataFrame(rows, columns=["rgn_key", "rgn", "suitable_area_km2",
                                       "area_km2", "percent_suitable"])
