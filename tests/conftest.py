import matplotlib

matplotlib.use("Agg")

import geopandas as gpd
import numpy as np
import pytest
import rasterio
from rasterio.crs import CRS
from rasterio.transform import from_origin
from shapely.geometry import box

from eez_aquaculture import config
from eez_aquaculture.grid import Grid

WGS84 = CRS.from_epsg(4326)

# Mean SST (deg C) and depth (m) on the 4x4 synthetic grid
SST_C = np.array([
    [10, 15, 15, 35],
    [15, 15, 15, 15],
    [15, 15, 15, 15],
    [15, 15, 15, 15],
], dtype=np.float32)

DEPTH_M = np.array([
    [-20, -20, -20, -20],
    [-20, -100, -20, -20],
    [-20, -20, -20, 5],
    [-20, -20, -20, -20],
], dtype=np.float32)


def make_grid(data, west=-125.0, north=40.0, res=1.0, crs=WGS84, nodata=np.nan):
    data = np.asarray(data, dtype=np.float32 if np.isnan(nodata) else np.int32)
    return Grid(data, from_origin(west, north, res, res), crs, nodata)


def write_tif(path, data, west, north, res, crs="EPSG:4326", nodata=-9999.0):
    data = np.asarray(data, dtype=np.float32)
    with rasterio.open(
        path, "w", driver="GTiff",
        height=data.shape[0], width=data.shape[1], count=1, dtype="float32",
        crs=crs, transform=from_origin(west, north, res, res), nodata=nodata,
    ) as dst:
        dst.write(data, 1)
    return path


def write_dataset(data_dir):
    """SST stack, padded bathymetry, two EEZ regions and a land polygon."""
    data_dir.mkdir(parents=True, exist_ok=True)

    # 4x4 one-degree grid spanning -126..-122 E, 38..42 N
    offsets = np.linspace(-2, 2, len(config.SST_PATHS))
    for sst_path, off in zip(config.SST_PATHS, offsets):
        write_tif(data_dir / sst_path.name, SST_C + 273.15 + off, -126.0, 42.0, 1.0)

    # half-degree bathymetry with a one-cell border outside the SST extent
    fine = np.kron(DEPTH_M, np.ones((2, 2), dtype=np.float32))
    padded = np.pad(fine, 1, constant_values=-3000.0)
    write_tif(data_dir / config.DEPTH_PATH.name, padded, -126.5, 42.5, 0.5)

    regions = gpd.GeoDataFrame(
        {"rgn_key": ["B", "A"],
         "rgn": ["East Block", "West Block"],
         "area_km2": [100000.0, 100000.0]},
        geometry=[box(-123.9, 38.1, -122.1, 41.9), box(-125.9, 38.1, -124.1, 41.9)],
        crs="EPSG:4326",
    )
    regions.to_file(data_dir / config.REGIONS_PATH.name)

    land_path = data_dir / config.LAND_PATH.relative_to(config.BASE_DIR)
    land_path.parent.mkdir(parents=True, exist_ok=True)
    gpd.GeoDataFrame({"featurecla": ["Land"]},
                     geometry=[box(-122.0, 37.0, -119.0, 43.0)],
                     crs="EPSG:4326").to_file(land_path)
    return data_dir


@pytest.fixture
def data_dir(tmp_path):
    return write_dataset(tmp_path / "data")
