"""Image input and raster preview output."""

from .loader import load_mask, mask_from_image
from .preview import render_preview

__all__ = ["load_mask", "mask_from_image", "render_preview"]
