"""Command line interface for holefill."""
import argparse
import logging
import sys
from pathlib import Path

from holefill.audit import audit_fill
from holefill.filler import HoleFiller
from holefill.masking import apply_mask
from holefill.raster_io import load_mask, load_rgb, save_filled
from holefill.types import DEFAULT_ITERATIONS, FillConfig, HoleFillingError
from holefill.weights import WEIGHT_FUNCTIONS, get_weight_function

DEFAULT_OUTPUT = 'filledImage.png'


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog='holefill',
        description='Fill the masked hole of an image with a weighted mean of its surroundings',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Exact fill, 8-connectivity
  holefill photo.png mask.png 3 0.01 8 1

  # Iterative fill, 4-connectivity, stage images saved
  holefill photo.png mask.png 2 0.01 4 2 -o out.png --save-stages stages/
        """,
    )

    parser.add_argument('image', type=str, help='Input image path')
    parser.add_argument('mask', type=str, help='Mask image path (dark pixels mark the hole)')
    parser.add_argument('z', type=int, help='Weight function power (integer >= 1)')
    parser.add_argument('epsilon', type=float, help='Weight function offset (positive float)')
    parser.add_argument('connectivity', type=int, choices=[4, 8], help='Pixel connectivity (4 or 8)')
    parser.add_argument(
        'algorithm',
        type=int,
        choices=[1, 2],
        help='Algorithm: 1 = exact, 2 = iterative approximation'
    )

    parser.add_argument(
        '-o', '--output',
        type=str,
        default=DEFAULT_OUTPUT,
        help=f'Output image path (default: {DEFAULT_OUTPUT})'
    )

    parser.add_argument(
        '--iterations',
        type=int,
        default=DEFAULT_ITERATIONS,
        help=f'Sweeps of the iterative algorithm (default: {DEFAULT_ITERATIONS})'
    )

    parser.add_argument(
        '--weight',
        choices=sorted(WEIGHT_FUNCTIONS),
        default='euclidean',
        help='Weight function (default: euclidean)'
    )

    parser.add_argument(
        '--all-holes',
        action='store_true',
        help='Fill every hole instead of only the first one'
    )

    parser.add_argument(
        '--save-stages',
        type=str,
        default=None,
        help='Directory to save intermediate stage images (first hole only)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase log verbosity (-v info, -vv debug)'
    )

    return parser


def _configure_logging(verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')


def _save_stages(stages_dir: Path, masked, result):
    from holefill.debug_visualization import (
        save_stage_image,
        visualize_comparison,
        visualize_depth_map,
        visualize_segmentation,
    )

    stages_dir.mkdir(parents=True, exist_ok=True)
    save_stage_image(masked, stages_dir / 'stage_01_masked.png')
    visualize_segmentation(masked, result.segmentation, stages_dir / 'stage_02_segmentation.png')
    if result.layer_map is not None:
        visualize_depth_map(result.layer_map, stages_dir / 'stage_03_depth.png')
    save_stage_image(result.image, stages_dir / 'stage_04_filled.png')
    visualize_comparison(masked, result.image, stages_dir / 'stage_05_comparison.png')
    print(f"Stage images saved to: {stages_dir}")


def main(args=None):
    """Main entry point."""
    parser = create_parser()
    try:
        parsed_args = parser.parse_args(args)
    except SystemExit as e:
        # argparse exits with 2 on bad arguments
        return 0 if e.code == 0 else 1

    _configure_logging(parsed_args.verbose)

    try:
        config = FillConfig(
            z=parsed_args.z,
            epsilon=parsed_args.epsilon,
            connectivity=parsed_args.connectivity,
            algorithm=parsed_args.algorithm,
            iterations=parsed_args.iterations
        )
        config.validate()
        weight = get_weight_function(parsed_args.weight)

        image = load_rgb(parsed_args.image)
        mask = load_mask(parsed_args.mask)
        masked = apply_mask(image, mask)

        filler = HoleFiller(config, weight)
        if parsed_args.all_holes:
            filled = filler.fill_all(masked)
        else:
            result = filler.fill_with_details(masked)
            audit_fill(masked, result)
            filled = result.image
            if parsed_args.save_stages:
                _save_stages(Path(parsed_args.save_stages), masked, result)

        output_path = save_filled(filled, parsed_args.output)

    except (HoleFillingError, ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Filled image saved to: {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
