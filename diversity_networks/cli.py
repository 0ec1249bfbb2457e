"""
Network Builder CLI

Builds the code co-occurrence network for one parameter bundle and prints
or exports it.

Pipeline:
    1. Load        -> records from the per-publication CSV
    2. Select      -> per-category year / |RS| / top-N filtering
    3. Aggregate   -> nodes, edges, citation quantiles, network effect
    4. Rank        -> clusters and top code pairs

Usage:
    dcn-build --input data/data_perNetwork.csv
    dcn-build --years 2012 2015 --top-n 20 --tau 0.75 --json
    dcn-build --config params.yaml --output out/network.graphml --format graphml
"""
import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from diversity_networks import __version__
from diversity_networks.analysis.itemsets import DEFAULT_CLUSTER_LIMIT, DEFAULT_PAIR_LIMIT
from diversity_networks.config import Settings
from diversity_networks.core import (
    CITATION_WINDOWS,
    Category,
    ExplorerParameters,
    RecordLoader,
    TAU_SLIDER_RANGE,
    load_code_descriptions,
)
from diversity_networks.core.exporter import export_csv, export_graphml, export_json
from diversity_networks.pipeline import NetworkResult, NetworkService

EXPORT_FORMATS = ("json", "graphml", "csv")


# ---------------------------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------------------------

def build_parser(settings: Optional[Settings] = None) -> argparse.ArgumentParser:
    """Build the argument parser; defaults for paths come from the environment."""
    settings = settings or Settings.from_env()
    parser = argparse.ArgumentParser(
        prog="dcn-build",
        description="Build co-occurrence networks of classification codes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s                                    Default parameters
  %(prog)s --years 2012 2015 --top-n 20       Narrower selection
  %(prog)s --components theoretical cross    Two categories only
  %(prog)s --tau 0.9 --window 3years          Upper-decile 3-year citations
  %(prog)s -o out/network.graphml --format graphml
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # --- Inputs ---
    inputs = parser.add_argument_group("Inputs")
    inputs.add_argument("--input", "-i", default=settings.data_path, help="Record CSV (default: %(default)s)")
    inputs.add_argument("--catalog", default=settings.catalog_path, help="Code catalog XML (default: %(default)s)")
    inputs.add_argument("--config", "-c", default=settings.params_path, metavar="YAML",
                        help="YAML file with explorer parameters; flags override it")

    # --- Parameters (None means: keep the config/default value) ---
    params = parser.add_argument_group("Parameters")
    params.add_argument("--years", nargs=2, type=int, metavar=("MIN", "MAX"), help="Inclusive year range")
    for category in Category:
        params.add_argument(
            f"--min-rs-{category.value}", type=float, metavar="X",
            help=f"Minimum |RS| for {category.display_name.lower()} records",
        )
    params.add_argument("--top-n", type=int, help="Records kept per category")
    params.add_argument("--components", nargs="+", choices=[c.value for c in Category],
                        help="Active categories, in aggregation order")
    params.add_argument("--window", choices=list(CITATION_WINDOWS), help="Citation window")
    params.add_argument("--tau", type=float,
                        help=f"Citation quantile; values outside [{TAU_SLIDER_RANGE[0]:.2f}, {TAU_SLIDER_RANGE[1]:.2f}] "
                             "are clamped with a warning")
    params.add_argument("--parallel", action="store_true", help="Aggregate categories on a thread pool")

    # --- Output ---
    output = parser.add_argument_group("Output")
    output.add_argument("--clusters", type=int, default=DEFAULT_CLUSTER_LIMIT, help="Clusters to list (default: %(default)s)")
    output.add_argument("--pairs", type=int, default=DEFAULT_PAIR_LIMIT, help="Code pairs to list (default: %(default)s)")
    output.add_argument("--output", "-o", metavar="PATH", help="Export the network (a directory for csv)")
    output.add_argument("--format", "-f", choices=EXPORT_FORMATS, default="json", help="Export format (default: %(default)s)")
    output.add_argument("--json", action="store_true", help="Print results as JSON to stdout")
    output.add_argument("--quiet", "-q", action="store_true", help="Suppress console display")
    output.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


# ---------------------------------------------------------------------------
# Parameter Resolution
# ---------------------------------------------------------------------------

def resolve_parameters(args: argparse.Namespace) -> ExplorerParameters:
    """Start from the YAML file (or defaults) and apply the flags that were given."""
    base = ExplorerParameters.from_yaml(args.config) if args.config else ExplorerParameters()
    data = base.to_dict()

    if args.years:
        data["yearRange"] = list(args.years)
    for category in Category:
        value = getattr(args, f"min_rs_{category.value}")
        if value is not None:
            data[f"minRS_{category.value}"] = value
    if args.top_n is not None:
        data["topN"] = args.top_n
    if args.components:
        data["componentTypes"] = args.components
    if args.window:
        data["citationWindow"] = args.window
    if args.tau is not None:
        data["quantileTau"] = args.tau

    params = ExplorerParameters.from_dict(data)
    # Keep corrections made while reading the config file
    params.warnings[:0] = [w for w in base.all_warnings if w not in params.all_warnings]
    return params


# ---------------------------------------------------------------------------
# Output Helpers
# ---------------------------------------------------------------------------

def format_report(result: NetworkResult, descriptions: Dict[str, str], clusters: int, pairs: int) -> str:
    lines: List[str] = ["", "=" * 60, "Co-occurrence Network", "=" * 60, result.summary()]

    ranked = result.clusters(clusters)
    lines.append("")
    lines.append(f"Top {len(ranked)} clusters by mean citation:")
    for cluster in ranked:
        lines.append(
            f"  {cluster.id:<30} {cluster.category.display_name:<15} "
            f"n={cluster.count:<4} avg={cluster.avg_citations:.1f}"
        )

    top = result.top_combinations(pairs)
    lines.append("")
    lines.append(f"Top {len(top)} code pairs by mean citation:")
    for edge in top:
        names = " / ".join(descriptions.get(code, code) for code in (edge.source, edge.target))
        lines.append(f"  {edge.source} + {edge.target:<8} avg={edge.avg_citations:.1f}  beta={edge.avg_beta:+.2f}  {names}")
    return "\n".join(lines)


def export_result(result: NetworkResult, path: str, fmt: str, descriptions: Dict[str, str]) -> str:
    if fmt == "graphml":
        return str(export_graphml(result, path, descriptions))
    if fmt == "csv":
        return str(export_csv(result, path)["nodes"].parent)
    return str(export_json(result, path, descriptions))


# ---------------------------------------------------------------------------
# Entry Point
# ---------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    settings = Settings.from_env()
    args = build_parser(settings).parse_args(argv)

    # Logging setup
    log_level = (
        logging.DEBUG if args.verbose
        else logging.WARNING if args.quiet
        else getattr(logging, settings.log_level, logging.INFO)
    )
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        loader = RecordLoader()
        records = loader.load_csv(args.input)
        params = resolve_parameters(args)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if args.verbose:
            logging.exception("Loading failed")
        return 1

    if not loader.report.is_clean and not args.quiet:
        print(loader.report.summary(), file=sys.stderr)
    for warning in params.all_warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    descriptions = load_code_descriptions(args.catalog) if args.catalog else {}
    result = NetworkService(records, parallel=args.parallel).build(params)

    if args.output:
        written = export_result(result, args.output, args.format, descriptions)
        if not args.quiet:
            print(f"\nNetwork exported to: {written}")

    if args.json:
        print(json.dumps(result.to_dict(descriptions, args.clusters, args.pairs), indent=2, default=str))
    elif not args.quiet:
        print(format_report(result, descriptions, args.clusters, args.pairs))

    return 0


if __name__ == "__main__":
    sys.exit(main())
