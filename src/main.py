import argparse
import logging
import sys

from quantizer.io_utils import imread_rgb, save_png_rgb
from quantizer.params import PipelineParams
from quantizer.pipeline import run_pipeline
from quantizer.preset_management import (
    get_available_presets,
    load_preset,
    params_from_dict,
    save_preset,
)
from quantizer.processing.clustering import REPRESENTATIVES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build the minimum spanning tree over an image's colors "
        "and optionally reduce its palette."
    )
    parser.add_argument("input", help="Path to input image")
    parser.add_argument(
        "output", nargs="?", help="Path to save the quantized PNG (optional)"
    )
    parser.add_argument(
        "--k",
        type=int,
        default=None,
        help="Number of color clusters to keep; 0 = report the MST only",
    )
    parser.add_argument(
        "--representative",
        choices=REPRESENTATIVES,
        default=None,
        help="How each cluster's color is chosen",
    )
    parser.add_argument("--preset", help="Load parameters from a saved preset")
    parser.add_argument("--save-preset", help="Save the effective parameters")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="-v info, -vv debug"
    )
    return parser


def resolve_params(args: argparse.Namespace) -> PipelineParams:
    params = PipelineParams()
    if args.preset:
        loaded = load_preset(args.preset)
        if loaded is None:
            available = ", ".join(get_available_presets()) or "none"
            raise FileNotFoundError(
                f"preset '{args.preset}' not found (available: {available})"
            )
        params = params_from_dict(loaded)
    if args.k is not None:
        params.quantize.k = args.k
    if args.representative is not None:
        params.quantize.representative = args.representative
    if args.verbose == 1:
        params.logging.level = "INFO"
    elif args.verbose > 1:
        params.logging.level = "DEBUG"
    return params


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        params = resolve_params(args)
    except (FileNotFoundError, TypeError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    logging.basicConfig(
        level=params.logging.level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if params.quantize.k < 0:
        print(f"ERROR: --k must be non-negative, got {params.quantize.k}")
        return 1
    if params.quantize.representative not in REPRESENTATIVES:
        print(f"ERROR: unknown representative '{params.quantize.representative}'")
        return 1

    try:
        rgb = imread_rgb(args.input)
    except FileNotFoundError:
        print(f"ERROR: Could not read input image '{args.input}'")
        return 1

    res = run_pipeline(rgb, params)
    print(f"Distinct colors: {len(res.colors)}")
    print(f"MST edges: {len(res.mst.edges)}")
    print(f"MST total weight: {res.total_weight:.6f}")

    if args.output:
        save_png_rgb(args.output, res.quantized)
        print(f"Reduced palette to {len(res.palette)} colours and wrote {args.output}")

    if args.save_preset:
        path = save_preset(args.save_preset, params)
        print(f"Saved preset to '{path}'")
    return 0


if __name__ == "__main__":
    sys.exit(main())
