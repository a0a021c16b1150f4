#!/usr/bin/env python3
"""
Harmonic Pickups - command line front end
==========================================

Computes bridge and neck pickup positions from harmonic weights.

Usage:
    harmonic-pickups [--length MM] [--search-limit MM] [--weights W2 .. W7]

Examples:
    harmonic-pickups                                   # 650 mm, default weights
    harmonic-pickups --length 648 --weight 2=0 --weight 5=2.0
    harmonic-pickups --length 864 --json               # Bass scale, JSON output
    harmonic-pickups --plot placement.png              # Also write the heat map
"""

import sys
import json
import argparse
import logging

from .core.string_config import (
    HARMONICS, DEFAULT_HARMONIC_WEIGHTS, DEFAULT_STRING_LENGTH_MM,
    LENGTH_RANGE_MM, WEIGHT_RANGE,
    AnalysisSettings, InvalidConfigurationError, StringConfig,
)
from .core.placement import PlacementResult, compute_positions
from .core.logging_config import setup_logging, set_logging_level

logger = logging.getLogger(__name__)


def _harmonic_weight(text: str):
    """Parse H=W, e.g. '5=1.2'."""
    try:
        harmonic, weight = text.split('=', 1)
        return int(harmonic), float(weight)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected HARMONIC=WEIGHT, got {text!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='harmonic-pickups',
        description='Estimate pickup positions from string harmonic anti-nodes',
    )
    parser.add_argument(
        '--length', '-l', type=float, default=DEFAULT_STRING_LENGTH_MM,
        help=f'String length in mm (typical {LENGTH_RANGE_MM[0]:.0f}-{LENGTH_RANGE_MM[1]:.0f})',
    )
    parser.add_argument(
        '--search-limit', '-s', type=float, default=None,
        help='Search pickups in [0, LIMIT] mm from the bridge (default: half the length)',
    )
    parser.add_argument(
        '--weights', '-w', type=float, nargs=len(HARMONICS), metavar='W',
        default=None,
        help=f'Weights of harmonics 2-7 (typical {WEIGHT_RANGE[0]:.0f}-{WEIGHT_RANGE[1]:.0f})',
    )
    parser.add_argument(
        '--weight', type=_harmonic_weight, action='append', default=[],
        metavar='H=W', help='Override a single harmonic weight, e.g. 5=1.2',
    )
    parser.add_argument(
        '--resolution', type=int, default=AnalysisSettings.search_resolution,
        help='Search samples per string length',
    )
    parser.add_argument(
        '--min-separation', type=float, default=AnalysisSettings.min_separation_ratio,
        help='Minimum pickup separation as a fraction of length',
    )
    parser.add_argument('--json', action='store_true', help='Print results as JSON')
    parser.add_argument('--curves', action='store_true', help='Include sampled curves in JSON')
    parser.add_argument('--plot', metavar='PATH', help='Write the heat-map figure to PATH')

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('--debug', action='store_true', help='Debug logging')
    verbosity.add_argument('--quiet', '-q', action='store_true', help='Warnings only')
    return parser


def config_from_args(args: argparse.Namespace) -> StringConfig:
    weights = dict(zip(HARMONICS, args.weights or DEFAULT_HARMONIC_WEIGHTS))
    for harmonic, weight in args.weight:
        if harmonic not in weights:
            raise InvalidConfigurationError(
                f"Unknown harmonic {harmonic}. Valid: {list(HARMONICS)}"
            )
        weights[harmonic] = weight
    return StringConfig.create(length=args.length, weights=weights, search_limit=args.search_limit)


def format_result(result: PlacementResult) -> str:
    lines = []
    for label, pickup in (('Bridge', result.bridge), ('Neck', result.neck)):
        lines.append(
            f"{label + ' Pickup:':<15}{pickup.position_mm:.2f} mm from bridge "
            f"({pickup.percentage:.1f}%)"
        )
    if not result.selection.separated:
        lines.append("(no second peak far enough from the first; positions may coincide)")
    return "\n".join(lines)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        setup_logging(debug=True)
    elif args.quiet:
        set_logging_level(logging.WARNING)

    try:
        config = config_from_args(args)
        settings = AnalysisSettings(
            search_resolution=args.resolution,
            min_separation_ratio=args.min_separation,
        )
    except InvalidConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 2

    result = compute_positions(config, settings)

    if args.json:
        print(json.dumps(result.to_dict(include_curves=args.curves), indent=2))
    else:
        print(format_result(result))

    if args.plot:
        from .render import save_placement_figure
        path = save_placement_figure(result, args.plot)
        if not args.json:
            print(f"Figure saved to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
