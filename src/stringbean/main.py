"""Main entry point for stringbean."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import PlannerSettings, SettingsLoader
from .core import ThreadPlanner
from .errors import StringBeanError
from .imaging import load_mask, render_preview
from .layout import ANCHOR_SHAPES, layout_anchors
from .svg import write_svg

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Stringbean - thread art planner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input_file", help="Input image (any format Pillow reads)")
    parser.add_argument("output_file", help="Output SVG path")
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="YAML settings file; command line options override its values",
    )
    parser.add_argument(
        "-c", "--chords",
        dest="num_chords",
        type=int,
        help="Number of lines to plan (default: 500)",
    )
    parser.add_argument(
        "-o", "--opacity",
        dest="line_opacity",
        type=float,
        help="Opacity of a single line, in [0, 1) (default: 0.2)",
    )
    parser.add_argument(
        "-a", "--anchors",
        dest="num_anchors",
        type=int,
        help="Number of anchors around the frame (default: 288)",
    )
    parser.add_argument(
        "-g", "--gap",
        dest="anchor_gap",
        type=int,
        help="Anchors skipped on each side of the current one (default: 0)",
    )
    parser.add_argument(
        "-r", "--radius",
        type=float,
        help="Circle radius in image pixels (default: fit the image)",
    )
    parser.add_argument(
        "-p", "--penalty",
        type=float,
        help="Lightness penalty for over-darkened pixels (default: 5.0)",
    )
    parser.add_argument(
        "-W", "--width",
        dest="output_width",
        type=int,
        help="Output drawing width (default: 850)",
    )
    parser.add_argument(
        "-H", "--height",
        dest="output_height",
        type=int,
        help="Output drawing height (default: 850)",
    )
    parser.add_argument(
        "--shape",
        choices=sorted(ANCHOR_SHAPES),
        help="Frame shape the anchors are placed on (default: circle)",
    )
    parser.add_argument(
        "--start",
        dest="start_anchor",
        type=int,
        help="Anchor index the thread starts at (default: 0)",
    )
    parser.add_argument(
        "--target-loss",
        type=float,
        help="Plan until the remaining loss drops below this value instead of a fixed count",
    )
    parser.add_argument(
        "--preview",
        metavar="PATH",
        help="Also render a PNG preview of the thread",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    return parser.parse_args(argv)


def _load_settings(args: argparse.Namespace) -> PlannerSettings:
    settings = SettingsLoader().load(args.config) if args.config else PlannerSettings()
    return settings.merged(
        num_chords=args.num_chords,
        line_opacity=args.line_opacity,
        num_anchors=args.num_anchors,
        anchor_gap=args.anchor_gap,
        radius=args.radius,
        penalty=args.penalty,
        output_width=args.output_width,
        output_height=args.output_height,
        shape=args.shape,
        start_anchor=args.start_anchor,
        target_loss=args.target_loss,
    )


def run(args: argparse.Namespace) -> list[int]:
    """Plan the thread for the input image and write the outputs.

    Returns:
        The planned anchor moves
    """
    settings = _load_settings(args)

    mask = load_mask(args.input_file)
    height, width = mask.shape

    # Anchors span pixel centers 0..width-1 so every line crosses the mask
    frame_width, frame_height = width - 1, height - 1
    anchors = layout_anchors(settings.shape, settings.num_anchors, frame_width, frame_height, settings.radius)

    planner = ThreadPlanner(
        line_weight=settings.line_opacity,
        anchors=anchors,
        anchor_gap_count=settings.anchor_gap,
        lightness_penalty=settings.penalty,
        image_mask=mask,
    )
    moves = planner.get_moves(settings.start_anchor, settings.strategy())

    # Re-lay the same anchors at the output size, keeping the radius proportion
    out_width, out_height = settings.output_width, settings.output_height
    out_radius = None
    if settings.radius is not None:
        out_radius = settings.radius * min(out_width, out_height) / max(min(frame_width, frame_height), 1)
    out_anchors = layout_anchors(settings.shape, settings.num_anchors, out_width, out_height, out_radius)

    write_svg(args.output_file, moves, out_anchors, out_width, out_height, settings.line_opacity)

    if args.preview:
        preview_path = Path(args.preview)
        preview_path.parent.mkdir(parents=True, exist_ok=True)
        render_preview(moves, out_anchors, out_width, out_height, settings.line_opacity).save(preview_path)
        logger.info("Saved preview to %s", preview_path)

    return moves


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the stringbean command line tool."""
    args = parse_args(argv)
    _configure_logging(args.log_level)

    try:
        run(args)
    except (StringBeanError, FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
