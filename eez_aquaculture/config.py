"""
Configuration - West Coast EEZ Aquaculture Suitability
=======================================================
Input locations, species presets and map styling shared by the pipeline
and the command-line runner.
"""

import os
from pathlib import Path

# ============================================================================
# CONFIGURATION
# ============================================================================
BASE_DIR = Path(os.environ.get("EEZ_AQUA_DATA_DIR", "data"))

# Annual mean sea-surface temperature rasters (Kelvin), one per year
SST_YEARS = (2008, 2009, 2010, 2011, 2012)
SST_PATHS = [BASE_DIR / f"average_annual_sst_{year}.tif" for year in SST_YEARS]

DEPTH_PATH   = BASE_DIR / "depth.tif"
REGIONS_PATH = BASE_DIR / "wc_regions_clean.shp"
LAND_PATH    = BASE_DIR / "ne_10m_land" / "ne_10m_land.shp"

OUTPUT_DIR = BASE_DIR / "outputs"

# EEZ attribute columns
REGION_KEY_COL  = "rgn_key"
REGION_NAME_COL = "rgn"
REGION_AREA_COL = "area_km2"

KELVIN_OFFSET = 273.15

# Square-metre multipliers for the supported area units
AREA_UNIT_FACTORS = {
    "m":  1.0,
    "ha": 1e-4,
    "km": 1e-6,
}

# --- Species presets ---
# Depth bounds use the bathymetry sign convention (negative below sea level)
SPECIES_PRESETS = {
    "oyster": {
        "species_name": "Oysters",
        "temp_min": 11.0,   # deg C
        "temp_max": 30.0,   # deg C
        "depth_min": -70.0, # m
        "depth_max": 0.0,   # m
    },
}

# Map extent padding, as a fraction of the larger side of the EEZ bounds
MAP_PAD_FRACTION = 0.05

# ============================================================================
# MAP PALETTE
# ============================================================================
OCEAN_COLOR     = "#AED9E0"
LAND_COLOR      = "#F5F0E8"
LAND_EDGE_COLOR = "#B0A890"
EEZ_EDGE_COLOR  = "#1E5AA8"
TITLE_COLOR     = "#1A1A2E"

AREA_COLORS    = ["#F7FCF5", "#C7E9C0", "#74C476", "#238B45", "#004529"]
PERCENT_COLORS = ["#F7FBFF", "#C6DBEF", "#6BAED6", "#2171B5", "#08306B"]

MAP_DPI = 300
