#!/usr/bin/env python3
"""
Preprocess tag images listed in a pathfile.

Usage:
    add_border -o OUT pathfile.txt                     # border only
    add_border -o OUT --use-hist-eq true pathfile.txt  # border + CLAHE
    add_border -o OUT --binary-image true pathfile.txt # border + binary threshold
    add_border -o OUT --border false --use-threshold true pathfile.txt

pathfile.txt contains one image path per line. Results are written to OUT as
<stem>_wb<ext> and their paths to OUT/images.txt (or --output-pathfile).
"""

import argparse
import logging
import sys

import config
from batch import run_batch
from images import ImageDescriptor
from logging_utils import configure_logging, add_logging_args
from preprocessing import PreprocessConfig

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0"}


def str_to_bool(value: str) -> bool:
    """Parse a boolean option value such as "true" or "0"."""
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean value, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="add_border",
        usage="add_border [options] pathfile.txt",
        description="Add a border to tag images and optionally enhance them. "
                    "pathfile.txt contains paths to images.",
    )
    add_logging_args(parser)
    parser.add_argument(
        "pathfile",
        nargs="?",
        help="File with image paths, one per line",
    )
    parser.add_argument(
        "-o", "--output-dir",
        help="Write images to this directory",
    )
    parser.add_argument(
        "--output-pathfile",
        help="Write the output pathfile here (default: <output_dir>/images.txt)",
    )
    parser.add_argument(
        "--border",
        type=str_to_bool,
        default=config.BORDER_ENABLED,
        metavar="BOOL",
        help="Add a border around the image (default: %(default)s)",
    )
    parser.add_argument(
        "--use-hist-eq",
        type=str_to_bool,
        default=config.CLAHE_ENABLED,
        metavar="BOOL",
        help="Apply local histogram equalization (CLAHE) (default: %(default)s)",
    )
    parser.add_argument(
        "--use-threshold",
        type=str_to_bool,
        default=config.THRESHOLD_ENABLED,
        metavar="BOOL",
        help="Apply adaptive thresholding (default: %(default)s)",
    )
    parser.add_argument(
        "--binary-image",
        type=str_to_bool,
        default=config.BINARY_IMAGE,
        metavar="BOOL",
        help="Save the binary image from thresholding; implies --use-threshold "
             "(default: %(default)s)",
    )
    parser.add_argument(
        "--clahe-clip-limit",
        type=float,
        default=config.CLAHE_CLIP_LIMIT,
        help="CLAHE contrast limit (default: %(default)s)",
    )
    parser.add_argument(
        "--tag-width",
        type=int,
        default=config.TAG_WIDTH,
        help="Tag width in pixels; sets border width and CLAHE grid (default: %(default)s)",
    )
    parser.add_argument(
        "--tag-height",
        type=int,
        default=config.TAG_HEIGHT,
        help="Tag height in pixels; sets border height and CLAHE grid (default: %(default)s)",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> PreprocessConfig:
    """Build the normalized preprocessing config for parsed arguments."""
    return PreprocessConfig(
        border=args.border,
        use_hist_eq=args.use_hist_eq,
        use_threshold=args.use_threshold,
        binary_image=args.binary_image,
        tag_width=args.tag_width,
        tag_height=args.tag_height,
        clahe_clip_limit=args.clahe_clip_limit,
    ).normalized()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = configure_logging(args.log_level, args.verbose, args.quiet)

    # Missing inputs are a no-op, not a failure: usage goes to stdout, exit 0.
    if not args.pathfile or not args.output_dir:
        print("No pathfile or output_dir are given")
        parser.print_help(sys.stdout)
        return 0

    try:
        preprocess_config = config_from_args(args)
        preprocess_config.validate()
        descs = ImageDescriptor.from_pathfile(args.pathfile)
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Preprocessing %s images into %s", len(descs), args.output_dir)
    try:
        result = run_batch(
            descs,
            args.output_dir,
            manifest_path=args.output_pathfile,
            config=preprocess_config,
            show_progress=level <= logging.INFO,
        )
    except OSError as exc:
        logger.error("%s", exc)
        return 1
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
