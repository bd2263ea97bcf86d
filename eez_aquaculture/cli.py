"""
West Coast EEZ Aquaculture Suitability - command-line runner
=============================================================
Runs the suitability pipeline for one species (oysters by default), prints
the per-region report and optionally saves the two maps and a CSV table.
"""

import argparse
import sys
from pathlib import Path

import matplotlib.pyplot as plt

from . import config
from .area import reports_to_frame
from .classify import SuitabilityRange
from .errors import SuitabilityError
from .pipeline import SuitabilityInputs, prepare_layers, render_run, score_layers
from .report import format_summary, save_figure


def build_parser():
    preset = config.SPECIES_PRESETS["oyster"]
    p = argparse.ArgumentParser(
        prog="eez-aquaculture",
        description="Suitable aquaculture area per West Coast EEZ from SST and depth.",
    )
    p.add_argument("--species", default=preset["species_name"],
                   help="species name used in the report and map titles")
    p.add_argument("--temp-min", type=float, default=preset["temp_min"],
                   help="minimum mean SST in deg C (inclusive)")
    p.add_argument("--temp-max", type=float, default=preset["temp_max"],
                   help="maximum mean SST in deg C (inclusive)")
    p.add_argument("--depth-min", type=float, default=preset["depth_min"],
                   help="lower depth bound in m, negative below sea level")
    p.add_argument("--depth-max", type=float, default=preset["depth_max"],
                   help="upper depth bound in m, negative below sea level")
    p.add_argument("--data-dir", type=Path, default=None,
                   help=f"directory holding the input files (default {config.BASE_DIR})")
    p.add_argument("--output-dir", type=Path, default=None,
                   help="save the maps and a CSV table here")
    p.add_argument("--no-maps", action="store_true", help="skip map rendering")
    p.add_argument("--quiet", action="store_true", help="only print the report")
    return p


def _slug(name):
    return "_".join(name.lower().split())


def main(argv=None):
    args = build_parser().parse_args(argv)
    verbose = not args.quiet

    try:
        temp_range = SuitabilityRange(args.temp_min, args.temp_max, "temperature")
        depth_range = SuitabilityRange(args.depth_min, args.depth_max, "depth")
        inputs = (SuitabilityInputs.from_dir(args.data_dir)
                  if args.data_dir else SuitabilityInputs())

        if verbose:
            print("=" * 70)
            print(f"{args.species.upper()} SUITABILITY - West Coast EEZs")
            print("=" * 70)

        layers = prepare_layers(inputs, verbose=verbose, with_basemap=not args.no_maps)
        run = score_layers(layers, temp_range, depth_range, args.species, verbose=verbose)

        figures = None
        if not args.no_maps:
            figures = render_run(run, verbose=verbose)
    except SuitabilityError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if verbose:
        print("\n" + "=" * 70)
        print("FULL SUMMARY REPORT")
        print("=" * 70)
        print(format_summary(run.reports, args.species, temp_range, depth_range,
                             n_years=layers.n_years))
        print()
    print(run.report_text)

    try:
        if args.output_dir is not None:
            stem = _slug(args.species)
            csv_path = args.output_dir / f"{stem}_suitability.csv"
            args.output_dir.mkdir(parents=True, exist_ok=True)
            reports_to_frame(run.reports).to_csv(csv_path, index=False)
            print(f"\nTable saved: {csv_path}")
            if figures is not None:
                for fig, suffix in zip(figures, ("area", "percent")):
                    png = save_figure(fig, args.output_dir / f"{stem}_suitable_{suffix}.png")
                    print(f"Map saved: {png}")
    finally:
        if figures is not None:
            for fig in figures:
                plt.close(fig)
    return 0


if __name__ == "__main__":
    sys.exit(main())
