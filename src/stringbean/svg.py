"""SVG export of planned thread moves."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from .layout.anchors import Point

logger = logging.getLogger(__name__)

LINE_STYLE = "stroke:rgb(0,0,0); stroke-width:1"


def svg_document(
    moves: Sequence[int],
    anchors: Sequence[Point],
    width: float,
    height: float,
    line_opacity: float,
) -> str:
    """Build an SVG drawing with one line per consecutive pair of moves.

    Args:
        moves: Anchor indices visited by the thread
        anchors: Anchor positions in output coordinates
        width: Drawing width
        height: Drawing height
        line_opacity: Opacity attribute of every line

    Returns:
        The SVG document as a string
    """
    lines = [f'<svg width="{width}" height="{height}" xmlns="http://www.w3.org/2000/svg">']

    for src, dst in zip(moves, moves[1:]):
        (x1, y1), (x2, y2) = anchors[src], anchors[dst]
        lines.append(
            f'<line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" '
            f'opacity="{line_opacity}" style="{LINE_STYLE}" />'
        )

    lines.append("</svg>")
    return "\n".join(lines)


def write_svg(
    path: str | Path,
    moves: Sequence[int],
    anchors: Sequence[Point],
    width: float,
    height: float,
    line_opacity: float,
) -> Path:
    """Write the SVG drawing of a thread to a file.

    Parent directories are created as needed.

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(svg_document(moves, anchors, width, height, line_opacity), encoding="utf-8")
    logger.info("Wrote %d lines to %s", max(len(moves) - 1, 0), path)
    return path
