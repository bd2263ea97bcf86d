"""
Suitability pipeline
====================
load -> align -> classify -> rasterize -> aggregate -> render, for any
species given a temperature window and a depth window.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import numpy as np

from . import config
from .align import align
from .area import aggregate, cell_area
from .classify import SuitabilityRange, classify_range, combine, suitable_cell_count
from .grid import Grid
from .loader import load_basemap, load_bathymetry, load_regions, load_sst_grids
from .report import format_report, padded_bounds, regions_to_frame, render_maps
from .zones import mask_by_region, rasterize_regions


@dataclass
class SuitabilityInputs:
    sst_paths: list = field(default_factory=lambda: list(config.SST_PATHS))
    depth_path: object = config.DEPTH_PATH
    regions_path: object = config.REGIONS_PATH
    land_path: Optional[object] = config.LAND_PATH
    key_col: str = config.REGION_KEY_COL
    name_col: str = config.REGION_NAME_COL
    area_col: str = config.REGION_AREA_COL

    @classmethod
    def from_dir(cls, data_dir):
        data_dir = Path(data_dir)
        return cls(
            sst_paths=[data_dir / p.name for p in config.SST_PATHS],
            depth_path=data_dir / config.DEPTH_PATH.name,
            regions_path=data_dir / config.REGIONS_PATH.name,
            land_path=data_dir / config.LAND_PATH.relative_to(config.BASE_DIR),
        )


@dataclass(frozen=True)
class SpeciesProfile:
    species_name: str
    temp_min: float
    temp_max: float
    depth_min: float
    depth_max: float

    @property
    def temp_range(self):
        return SuitabilityRange(self.temp_min, self.temp_max, "temperature")

    @property
    def depth_range(self):
        return SuitabilityRange(self.depth_min, self.depth_max, "depth")

    @classmethod
    def preset(cls, name):
        return cls(**config.SPECIES_PRESETS[name])


OYSTER = SpeciesProfile.preset("oyster")


@dataclass(frozen=True)
class EnvironmentLayers:
    """Aligned inputs shared by every scoring step of one run."""
    sst: Grid
    depth: Grid
    cell_area: Grid
    regions: list
    region_raster: Grid
    n_years: int = 0
    basemap: object = None


@dataclass(frozen=True)
class SuitabilityRun:
    species_name: str
    temp_range: SuitabilityRange
    depth_range: SuitabilityRange
    layers: EnvironmentLayers
    temp_mask: Grid
    depth_mask: Grid
    suitability: Grid
    reports: dict

    @property
    def report_text(self):
        return format_report(self.reports, self.species_name)


def _say(verbose, msg):
    if verbose:
        print(msg)


def prepare_layers(inputs: SuitabilityInputs = None, verbose=True,
                   with_basemap=True) -> EnvironmentLayers:
    inputs = inputs or SuitabilityInputs()

    _say(verbose, "\n[1/6] Loading rasters...")
    sst_grids = load_sst_grids(inputs.sst_paths)
    depth = load_bathymetry(inputs.depth_path)
    _say(verbose, f"  {len(sst_grids)} SST raster(s), grid {sst_grids[0].shape[1]}x{sst_grids[0].shape[0]}")
    _say(verbose, f"  Bathymetry grid {depth.shape[1]}x{depth.shape[0]}")

    _say(verbose, "\n[2/6] Aligning SST and bathymetry...")
    sst, depth = align(sst_grids, depth)
    if np.isfinite(sst.data).any():
        _say(verbose, f"  Mean SST range: {np.nanmin(sst.data):.1f} to {np.nanmax(sst.data):.1f} deg C")

    regions = load_regions(inputs.regions_path, key_col=inputs.key_col,
                           name_col=inputs.name_col, area_col=inputs.area_col,
                           crs=sst.crs)
    _say(verbose, f"  {len(regions)} EEZ region(s) loaded")

    basemap = None
    if with_basemap and inputs.land_path is not None:
        basemap = load_basemap(inputs.land_path, crs=sst.crs,
                               bounds=padded_bounds(sst.bounds))

    return EnvironmentLayers(
        sst=sst,
        depth=depth,
        cell_area=cell_area(sst, unit="km"),
        regions=regions,
        region_raster=rasterize_regions(regions, sst),
        n_years=len(sst_grids),
        basemap=basemap,
    )


def score_layers(layers: EnvironmentLayers, temp_range: SuitabilityRange,
                 depth_range: SuitabilityRange, species_name="species",
                 verbose=True) -> SuitabilityRun:
    _say(verbose, f"\n[3/6] Classifying SST {temp_range} deg C, depth {depth_range} m...")
    temp_mask = classify_range(layers.sst, temp_range)
    depth_mask = classify_range(layers.depth, depth_range)
    suitable = combine([temp_mask, depth_mask])
    _say(verbose, f"  Suitable cells: {suitable_cell_count(suitable):,}")

    _say(verbose, "\n[4/6] Masking by EEZ regions...")
    suitable = mask_by_region(suitable, layers.region_raster)
    _say(verbose, f"  Suitable cells inside EEZs: {suitable_cell_count(suitable):,}")

    _say(verbose, "\n[5/6] Aggregating suitable area per region...")
    reports = aggregate(suitable, layers.region_raster, layers.cell_area, layers.regions)

    return SuitabilityRun(
        species_name=species_name,
        temp_range=temp_range,
        depth_range=depth_range,
        layers=layers,
        temp_mask=temp_mask,
        depth_mask=depth_mask,
        suitability=suitable,
        reports=reports,
    )


def render_run(run: SuitabilityRun, verbose=True):
    _say(verbose, "\n[6/6] Rendering maps...")
    frame = regions_to_frame(run.layers.regions, crs=run.layers.sst.crs)
    return render_maps(frame, run.reports, run.species_name, run.layers.basemap)


def compute_suitability(temp_min, temp_max, depth_min, depth_max, species_name,
                        inputs: SuitabilityInputs = None, verbose=True):
    """Score one species across the West Coast EEZs.

    Depth bounds follow the bathymetry sign convention (negative below sea
    level), so oysters living 0-70 m deep take ``depth_min=-70, depth_max=0``.
    Returns ``(report_text, area_figure, percent_figure)``.
    """
    temp_range = SuitabilityRange(temp_min, temp_max, "temperature")
    depth_range = SuitabilityRange(depth_min, depth_max, "depth")

    layers = prepare_layers(inputs, verbose=verbose)
    run = score_layers(layers, temp_range, depth_range, species_name, verbose=verbose)
    area_fig, pct_fig = render_run(run, verbose=verbose)
    return run.report_text, area_fig, pct_fig


def compute_for_species(profile: SpeciesProfile, inputs: SuitabilityInputs = None,
                        verbose=True):
    return compute_suitability(profile.temp_min, profile.temp_max,
                               profile.depth_min, profile.depth_max,
                               profile.species_name, inputs=inputs, verbose=verbose)
