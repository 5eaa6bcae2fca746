"""Greedy thread planner.

The planner keeps an inverted grayscale mask of the target image, where each
value is the darkness still missing at that pixel. Starting from an anchor it
repeatedly picks the reachable anchor whose line covers the most missing
darkness, then subtracts that line from the mask.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from numbers import Integral, Real
from typing import Callable, Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from ..errors import InvalidArgument, PlanningError
from ..layout.anchors import Point
from .raytrace import PixelIntensity, grid_raytrace
from .strategies import CountTracker, PlanningStrategy

logger = logging.getLogger(__name__)

PIXEL_MAX = 255.0


def _is_integer(value: object) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def _is_real(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


LineAlgorithm = Callable[[float, float, float, float], Iterable[PixelIntensity]]


@dataclass
class ThreadPlanner:
    """Plans the order of anchors a thread visits to recreate an image.

    Attributes:
        line_weight: Opacity of a single line, in [0, 1)
        anchors: Anchor coordinates forming a convex polygon
        anchor_gap_count: Number of neighbouring anchors skipped on each side
            of the current anchor when searching for the next one
        lightness_penalty: Weight of pixels a line would darken past their target
        image_mask: Grayscale image, shape (height, width), 0 = black, 255 = white
        line_algorithm: Returns the ((x, y), intensity) cells of a line
    """

    line_weight: float
    anchors: Sequence[Point]
    anchor_gap_count: int
    lightness_penalty: float
    image_mask: NDArray[np.uint8] = field(repr=False)
    line_algorithm: LineAlgorithm = grid_raytrace

    image_mask_inverted: NDArray[np.float64] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate settings and build the inverted image mask."""
        if not _is_real(self.line_weight) or not 0.0 <= self.line_weight < 1.0:
            raise InvalidArgument(
                f"line weight needs to be in the range [0, 1), got {self.line_weight}"
            )
        if not _is_real(self.lightness_penalty) or not math.isfinite(self.lightness_penalty):
            raise InvalidArgument(f"lightness penalty must be a finite number, got {self.lightness_penalty!r}")
        if not _is_integer(self.anchor_gap_count):
            raise InvalidArgument(f"anchor gap count must be an integer, got {self.anchor_gap_count!r}")
        if self.anchor_gap_count < 0:
            raise InvalidArgument(f"anchor gap count must be non-negative, got {self.anchor_gap_count}")

        mask = np.asarray(self.image_mask)
        if mask.ndim != 2:
            raise InvalidArgument(f"image mask must be 2D (height, width), got shape {mask.shape}")

        self.anchors = [(float(x), float(y)) for x, y in self.anchors]
        self.image_mask_inverted = PIXEL_MAX - mask.astype(np.float64)

    @property
    def image_width(self) -> int:
        return self.image_mask_inverted.shape[1]

    @property
    def image_height(self) -> int:
        return self.image_mask_inverted.shape[0]

    @property
    def weight(self) -> float:
        """Line weight scaled to the 0-255 pixel range."""
        return PIXEL_MAX * self.line_weight

    def get_moves(self, start_anchor: int, strategy: PlanningStrategy) -> list[int]:
        """Get the sequence of anchor moves recreating the image as thread art.

        Args:
            start_anchor: Index of the anchor the thread starts at
            strategy: Decides when to stop adding lines

        Returns:
            Anchor indices, starting with start_anchor

        Raises:
            InvalidArgument: If start_anchor is not a valid anchor index
            PlanningError: If no next anchor can be reached
        """
        if not _is_integer(start_anchor):
            raise InvalidArgument(f"start anchor must be an integer, got {start_anchor!r}")
        if not 0 <= start_anchor < len(self.anchors):
            raise InvalidArgument(
                f"start anchor {start_anchor} out of range for {len(self.anchors)} anchors"
            )

        anchor = start_anchor
        moves = [start_anchor]

        while not strategy.completed(self, moves):
            next_anchor = self.next_anchor(anchor)
            if next_anchor is None:
                raise PlanningError(
                    f"failed to obtain next anchor from {anchor} "
                    f"({len(self.anchors)} anchors, gap {self.anchor_gap_count})"
                )
            logger.debug("%d -> %d", anchor, next_anchor)

            self.apply_line(self.anchors[anchor], self.anchors[next_anchor])

            anchor = next_anchor
            moves.append(anchor)

        logger.info("Planned %d lines, remaining loss %.1f", len(moves) - 1, self.loss())
        return moves

    def next_anchor(self, current: int) -> int | None:
        """Find the anchor with the lowest line penalty reachable from current."""
        anchor_count = len(self.anchors)
        # All anchors, minus the gap on both sides, minus the current anchor
        search_size = anchor_count - 2 * self.anchor_gap_count - 1

        best = None
        best_penalty = None
        for i in range(max(search_size, 0)):
            candidate = (current + i + self.anchor_gap_count + 1) % anchor_count
            penalty = self.penalty(self.anchors[current], self.anchors[candidate])
            if best_penalty is None or penalty < best_penalty:
                best = candidate
                best_penalty = penalty
        return best

    def apply_line(self, src: Point, dst: Point) -> None:
        """Persist a line into the inverted image mask."""
        xs, ys, intensities = self._line_arrays(src, dst)
        np.subtract.at(self.image_mask_inverted, (ys, xs), intensities * self.weight)

    def penalty(self, src: Point, dst: Point) -> float:
        """Average penalty of the pixels a line would touch.

        Pixels that stay dark count their remaining darkness, pixels that the
        line would push past white count their overshoot times the lightness
        penalty. Lines entirely outside the image return -inf.
        """
        xs, ys, intensities = self._line_arrays(src, dst)
        if xs.size == 0:
            return float("-inf")

        remaining = self.image_mask_inverted[ys, xs] - intensities * self.weight
        remaining = np.where(remaining < 0.0, -self.lightness_penalty * remaining, remaining)
        return float(remaining.mean())

    def trace_line(self, src: Point, dst: Point) -> list[PixelIntensity]:
        """Trace a line with the line algorithm, keeping cells inside the image."""
        width, height = self.image_width, self.image_height
        return [
            ((x, y), intensity)
            for (x, y), intensity in self.line_algorithm(src[0], src[1], dst[0], dst[1])
            if 0 <= x < width and 0 <= y < height
        ]

    def loss(self) -> float:
        """Total absolute darkness still missing from the image."""
        return float(np.abs(self.image_mask_inverted).sum())

    def _line_arrays(
        self, src: Point, dst: Point
    ) -> tuple[NDArray[np.intp], NDArray[np.intp], NDArray[np.float64]]:
        line = self.trace_line(src, dst)
        xs = np.array([x for (x, _), _ in line], dtype=np.intp)
        ys = np.array([y for (_, y), _ in line], dtype=np.intp)
        intensities = np.array([intensity for _, intensity in line], dtype=np.float64)
        return xs, ys, intensities


def plan_moves(
    line_count: int,
    line_opacity: float,
    anchor_list: Sequence[float] | Sequence[Point],
    anchor_gap_count: int,
    penalty: float,
    width: int,
    height: int,
    image_buffer: bytes | Sequence[int] | NDArray[np.uint8],
    start_anchor: int = 0,
) -> list[int]:
    """Plan a fixed number of lines from flat buffers.

    Convenience entry point for callers holding raw data, such as a browser
    canvas: anchors may be a flat [x0, y0, x1, y1, ...] list or a list of
    pairs, and the image is a row-major grayscale buffer of width * height
    bytes.

    Returns:
        Anchor indices, starting with start_anchor
    """
    flat = np.asarray(anchor_list, dtype=np.float64).reshape(-1)
    if flat.size % 2:
        raise InvalidArgument(f"anchor list needs an even number of coordinates, got {flat.size}")
    anchors = [(float(x), float(y)) for x, y in flat.reshape(-1, 2)]

    if isinstance(image_buffer, (bytes, bytearray)):
        buffer = np.frombuffer(image_buffer, dtype=np.uint8)
    else:
        buffer = np.asarray(image_buffer, dtype=np.uint8).reshape(-1)
    if buffer.size != width * height:
        raise InvalidArgument(
            f"image buffer has {buffer.size} pixels, expected {width} x {height} = {width * height}"
        )

    planner = ThreadPlanner(
        line_weight=line_opacity,
        anchors=anchors,
        anchor_gap_count=anchor_gap_count,
        lightness_penalty=penalty,
        image_mask=buffer.reshape(height, width),
    )
    return planner.get_moves(start_anchor, CountTracker(line_count))
