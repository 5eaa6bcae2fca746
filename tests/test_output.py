"""Tests for image loading, SVG export and raster previews."""

import numpy as np
import pytest
from PIL import Image, ImageDraw

from stringbean.errors import InvalidArgument
from stringbean.imaging import load_mask, mask_from_image, render_preview
from stringbean.svg import svg_document, write_svg

ANCHORS = [(0.0, 0.0), (99.0, 0.0), (99.0, 99.0), (0.0, 99.0)]


def test_mask_from_rgb_image():
    image = Image.new("RGB", (4, 3), (255, 255, 255))
    image.putpixel((1, 2), (0, 0, 0))

    mask = mask_from_image(image)

    assert mask.shape == (3, 4)
    assert mask.dtype == np.uint8
    assert mask[2, 1] == 0
    assert mask[0, 0] == 255


def test_load_mask(tmp_path):
    path = tmp_path / "input.png"
    Image.new("L", (8, 5), 128).save(path)

    mask = load_mask(path)

    assert mask.shape == (5, 8)
    assert (mask == 128).all()


def test_load_mask_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_mask(tmp_path / "missing.png")


def test_svg_document():
    document = svg_document([0, 2, 1], ANCHORS, 100, 100, 0.2)
    lines = document.splitlines()

    assert lines[0] == '<svg width="100" height="100" xmlns="http://www.w3.org/2000/svg">'
    assert lines[-1] == "</svg>"
    assert len(lines) == 4
    assert 'x1="0.0" y1="0.0" x2="99.0" y2="99.0"' in lines[1]
    assert 'x1="99.0" y1="99.0" x2="99.0" y2="0.0"' in lines[2]
    assert all('opacity="0.2"' in line for line in lines[1:-1])


def test_svg_document_no_lines():
    assert svg_document([0], ANCHORS, 10, 10, 0.5).count("<line") == 0


def test_write_svg_creates_directories(tmp_path):
    path = write_svg(tmp_path / "out" / "art.svg", [0, 1, 2, 3], ANCHORS, 100, 100, 0.2)

    assert path.exists()
    assert path.read_text(encoding="utf-8").count("<line") == 3


def test_render_preview():
    image = render_preview([0, 2], ANCHORS, 100, 100, 1.0)
    pixels = np.array(image)

    assert image.mode == "L"
    assert image.size == (100, 100)
    assert pixels[50, 50] == 0
    assert pixels[10, 90] == 255


def test_render_preview_accumulates():
    """Overlapping translucent lines get darker."""
    single = np.array(render_preview([0, 2], ANCHORS, 100, 100, 0.5))
    double = np.array(render_preview([0, 2, 0], ANCHORS, 100, 100, 0.5))

    assert double[50, 50] < single[50, 50] < 255


def test_render_preview_opacity_range():
    with pytest.raises(InvalidArgument):
        render_preview([0, 1], ANCHORS, 10, 10, 1.5)


def test_render_preview_line_leaving_canvas():
    """Only the visible part of a line that runs off the canvas is drawn."""
    anchors = [(-20.0, 50.0), (130.0, 50.0)]
    pixels = np.array(render_preview([0, 1], anchors, 100, 100, 1.0))

    assert (pixels[50] == 0).all()
    assert (pixels[49] == 255).all()
    assert (pixels[51] == 255).all()


def test_render_preview_many_lines_match_layering():
    """Lines composited over their own box stack the same as full-canvas layers."""
    moves = [0, 2, 1, 3, 0, 2, 0]
    image = render_preview(moves, ANCHORS, 100, 100, 0.25)

    reference = Image.new("RGBA", (100, 100), (255, 255, 255, 255))
    for src, dst in zip(moves, moves[1:]):
        layer = Image.new("RGBA", (100, 100), (0, 0, 0, 0))
        ImageDraw.Draw(layer).line([ANCHORS[src], ANCHORS[dst]], fill=(0, 0, 0, 64), width=1)
        reference.alpha_composite(layer)

    np.testing.assert_array_equal(np.array(image), np.array(reference.convert("L")))
