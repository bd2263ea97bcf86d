"""
Report and map rendering
========================
Text report per EEZ region plus two choropleths (suitable km2, % suitable)
drawn over the coastline basemap.
"""

from pathlib import Path

import geopandas as gpd
import matplotlib.pyplot as plt
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.lines import Line2D
import matplotlib.patches as mpatches

from . import config
from .area import reports_to_frame
from .errors import JoinError

MAP_COLUMNS = {
    "suitable_area_km2": ("Suitable area (km2)", config.AREA_COLORS),
    "percent_suitable":  ("Suitable area (% of EEZ)", config.PERCENT_COLORS),
}


# ============================================================================
# TEXT REPORT
# ============================================================================
def format_report_line(report, species_name):
    return (f"Suitable area for {species_name} in {report.name}: "
            f"{report.suitable_area_km2:,.0f} km2 "
            f"({report.percent_suitable:.2f}% of the region)")


def format_report(reports, species_name):
    """One line per region, in the order of ``reports``."""
    return "\n".join(format_report_line(r, species_name) for r in reports.values())


def format_summary(reports, species_name, temp_range, depth_range, n_years=None):
    total_suitable = sum(r.suitable_area_km2 for r in reports.values())
    total_area = sum(r.total_area_km2 for r in reports.values())
    pct_total = (total_suitable / total_area * 100) if total_area > 0 else 0

    lines = [
        f"{species_name.upper()} SUITABILITY - West Coast EEZs",
        "-" * 60,
        "",
        "1. MODEL PARAMETERS",
        f"   - Sea surface temp:   {temp_range} deg C"
        + (f" (mean of {n_years} years)" if n_years else ""),
        f"   - Depth:              {depth_range} m (negative below sea level)",
        "   - Combination:        all criteria must hold (mask product)",
        "",
        "2. OVERALL RESULTS",
        f"   - EEZ area:           {total_area:,.0f} km2",
        f"   - Suitable area:      {total_suitable:,.0f} km2 ({pct_total:.2f}%)",
        "",
        "3. REGIONAL BREAKDOWN",
        f"   {'Region':<28} {'Suitable km2':>14} {'% of EEZ':>10}",
        f"   {'-' * 28} {'-' * 14} {'-' * 10}",
    ]
    for r in reports.values():
        lines.append(f"   {r.name[:28]:<28} {r.suitable_area_km2:>14,.0f} "
                     f"{r.percent_suitable:>9.2f}%")
    return "\n".join(lines)


# ============================================================================
# GEOMETRY JOIN
# ============================================================================
def regions_to_frame(regions, crs=None) -> gpd.GeoDataFrame:
    return gpd.GeoDataFrame(
        {"rgn_key": [r.key for r in regions], "rgn": [r.name for r in regions]},
        geometry=[r.geometry for r in regions],
        crs=crs,
    )


def join_reports(regions_frame, reports, key_col="rgn_key") -> gpd.GeoDataFrame:
    """Attach report columns to the region polygons; every key must match."""
    table = reports_to_frame(reports).drop(columns=["rgn"])
    geo_keys = set(regions_frame[key_col])
    report_keys = set(table["rgn_key"])

    if geo_keys != report_keys:
        only_report = sorted(report_keys - geo_keys)
        only_geo = sorted(geo_keys - report_keys)
        raise JoinError(
            f"Region keys do not match: in report only {only_report}, "
            f"in geometry only {only_geo}"
        )

    if key_col != "rgn_key":
        table = table.rename(columns={"rgn_key": key_col})
    return regions_frame.merge(table, on=key_col, how="left", validate="one_to_one")


# ============================================================================
# MAPS
# ============================================================================
def padded_bounds(bounds, fraction=config.MAP_PAD_FRACTION):
    """Grow (minx, miny, maxx, maxy) by ``fraction`` of its larger side, in CRS units."""
    minx, miny, maxx, maxy = bounds
    pad = max(maxx - minx, maxy - miny) * fraction
    return minx - pad, miny - pad, maxx + pad, maxy + pad


def axis_labels(crs):
    if crs is not None and crs.is_geographic:
        return "Longitude", "Latitude"
    return "Easting", "Northing"


def plot_suitability_map(joined, column, species_name, basemap=None):
    label, colors = MAP_COLUMNS[column]
    cmap = LinearSegmentedColormap.from_list(column, colors, N=256)

    fig, ax = plt.subplots(1, 1, figsize=(10, 12), facecolor="white")
    ax.set_facecolor(config.OCEAN_COLOR)

    minx, miny, maxx, maxy = padded_bounds(joined.total_bounds)
    ax.set_xlim(minx, maxx)
    ax.set_ylim(miny, maxy)

    joined.plot(ax=ax, column=column, cmap=cmap, legend=True,
                edgecolor=config.EEZ_EDGE_COLOR, linewidth=0.8, zorder=2,
                legend_kwds={"label": label, "shrink": 0.55, "pad": 0.02})

    if basemap is not None and len(basemap) > 0:
        basemap.plot(ax=ax, color=config.LAND_COLOR,
                     edgecolor=config.LAND_EDGE_COLOR, linewidth=0.4, zorder=3)

    for _, row in joined.iterrows():
        pt = row.geometry.representative_point()
        value = row[column]
        text = f"{value:,.0f}" if column == "suitable_area_km2" else f"{value:.2f}%"
        ax.annotate(f"{row['rgn']}\n{text}", xy=(pt.x, pt.y), ha="center",
                    fontsize=8, color=config.TITLE_COLOR, zorder=5)

    ax.set_title(f"{species_name}: {label}",
                 fontsize=17, fontweight="bold", pad=16, color=config.TITLE_COLOR)
    xlabel, ylabel = axis_labels(joined.crs)
    ax.set_xlabel(xlabel, fontsize=11, labelpad=8)
    ax.set_ylabel(ylabel, fontsize=11, labelpad=8)
    ax.tick_params(labelsize=9)
    ax.grid(True, linestyle=":", alpha=0.3, color="#666666")

    legend_elements = [
        Line2D([0], [0], color=config.EEZ_EDGE_COLOR, linewidth=0.8,
               label="EEZ boundary"),
        mpatches.Patch(facecolor=config.LAND_COLOR,
                       edgecolor=config.LAND_EDGE_COLOR, label="Land"),
    ]
    ax.legend(handles=legend_elements, loc="lower left", fontsize=9,
              framealpha=0.92, edgecolor="#CCCCCC", fancybox=True)

    ax.annotate(
        "SST: NOAA annual means | Bathymetry: GEBCO | EEZ: West Coast regions | "
        "Land: Natural Earth 10m",
        xy=(0.5, -0.06), xycoords="axes fraction", ha="center", fontsize=7.5,
        color="#666666", style="italic"
    )
    fig.tight_layout()
    return fig


def render_maps(regions_frame, reports, species_name, basemap=None):
    """Return (suitable-area figure, percent-suitable figure)."""
    joined = join_reports(regions_frame, reports)
    area_fig = plot_suitability_map(joined, "suitable_area_km2", species_name, basemap)
    pct_fig = plot_suitability_map(joined, "percent_suitable", species_name, basemap)
    return area_fig, pct_fig


def save_figure(fig, path, dpi=config.MAP_DPI):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight", facecolor="white")
    return path
