from __future__ import annotations

import argparse
import sys

from .api import list_catalog_assets, load_catalog
from .catalog import standard_catalog
from .demo import demo_layers
from .interactive import interactive_packing_viewer
from .plotting import plot_packing, print_packing
from .search import solve
from .state import validate_packing
from .yaml_io import write_catalog_yaml


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Pack 17 bricks into a 5x5x5 cube by best-first search."
    )
    parser.add_argument(
        "--catalog",
        type=str,
        default=None,
        help=(
            "YAML brick catalog file, or the name of a bundled catalog "
            "(default: built-in 6 big, 6 flat, 5 unit bricks)"
        ),
    )
    parser.add_argument(
        "--list-catalogs",
        action="store_true",
        help="List the bundled catalogs and exit",
    )
    parser.add_argument(
        "--write-template",
        action="store_true",
        help="Write the built-in catalog as YAML to --catalog and exit",
    )
    parser.add_argument(
        "--boundary-pruning",
        action="store_true",
        help=(
            "Only place bricks that touch the already packed region "
            "(faster, but can miss every packing of a catalog)"
        ),
    )
    parser.add_argument(
        "--progress-every",
        type=int,
        default=10_000,
        help="Print a progress line every N expanded states",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--plot",
        action="store_true",
        help="Show the solution as an interactive Plotly 3D figure",
    )
    parser.add_argument(
        "--layers",
        action="store_true",
        help="Show the solution as per-layer heatmaps",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Open a viewer to step through the placements",
    )
    args = parser.parse_args(argv)

    if args.list_catalogs:
        for name in list_catalog_assets():
            print(name)
        return 0

    if args.write_template:
        if not args.catalog:
            parser.error("--write-template requires --catalog PATH")
        write_catalog_yaml(args.catalog, standard_catalog(), overwrite=True)
        print(f"Wrote template catalog to {args.catalog}")
        return 0

    try:
        catalog = load_catalog(args.catalog)
    except FileNotFoundError as exc:
        parser.error(str(exc))

    result = solve(
        catalog,
        require_boundary_touch=args.boundary_pruning,
        progress_every=args.progress_every,
        verbose=not args.quiet,
    )
    print(
        f"{result.status.value}: {result.stats.iterations:,} states expanded, "
        f"{result.stats.dedup_hits:,} duplicates skipped, "
        f"{result.stats.elapsed:.1f} s"
    )
    if not result.solved:
        return 1

    validate_packing(result.placements, catalog)
    print_packing(result.placements)

    if args.plot:
        plot_packing(result.placements).show()
    if args.layers:
        demo_layers(result.placements)
    if args.interactive:
        interactive_packing_viewer(result.placements)
    return 0


if __name__ == "__main__":
    sys.exit(main())
