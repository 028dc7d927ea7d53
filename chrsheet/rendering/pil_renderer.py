"""
NES CHR Sheet - PIL Renderer

PIL-based rendering for generating PNG previews of extracted sprite sheets.
Used by the extract tool alongside the BMP output.
"""

import numpy as np

try:
    from PIL import Image
except ImportError:
    raise ImportError("Pillow library required. Install with: pip install Pillow")

from ..core.chr_tile import PixelGrid


def render_grid_to_image(grid: PixelGrid, scale: int = 1) -> Image.Image:
    """
    Render a decoded sprite sheet to a PIL Image.

    Args:
        grid: Bottom-up PixelGrid from the tile decoder
        scale: Pixel scale factor (default: 1)

    Returns:
        PIL RGB Image, top row first
    """
    if scale < 1:
        raise ValueError(f"Scale must be at least 1, got {scale}")

    # Unpack 0x00RRGGBB into separate channels
    packed = grid.visual_rows()
    rgb = np.empty((grid.height, grid.width, 3), dtype=np.uint8)
    rgb[..., 0] = (packed >> 16) & 0xFF
    rgb[..., 1] = (packed >> 8) & 0xFF
    rgb[..., 2] = packed & 0xFF

    img = Image.fromarray(rgb)
    if scale > 1:
        img = img.resize((grid.width * scale, grid.height * scale), Image.Resampling.NEAREST)
    return img


def save_preview(grid: PixelGrid, output_path: str, scale: int = 1) -> Image.Image:
    """Render grid and save it as PNG, returning the saved image."""
    img = render_grid_to_image(grid, scale)
    img.save(output_path, format="PNG")
    return img
