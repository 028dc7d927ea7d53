"""Unit tests for chrsheet.rendering.pil_renderer."""

import pytest

from chrsheet.core.chr_tile import PixelGrid, decode
from chrsheet.core.palettes import LIGHT_GRAY
from chrsheet.rendering.pil_renderer import render_grid_to_image, save_preview


class TestRenderGridToImage:
    def test_size_and_mode(self, chr_bank):
        img = render_grid_to_image(decode(chr_bank))
        assert img.mode == "RGB"
        assert img.size == (128, 128)

    def test_top_row_first(self):
        grid = PixelGrid(8, 16)
        grid.pixels[15, 2] = LIGHT_GRAY  # top visual row
        grid.pixels[0, 5] = 0x123456  # bottom visual row

        img = render_grid_to_image(grid)
        assert img.getpixel((2, 0)) == (0xAA, 0xAA, 0xAA)
        assert img.getpixel((5, 15)) == (0x12, 0x34, 0x56)
        assert img.getpixel((0, 0)) == (0, 0, 0)

    def test_scale(self):
        grid = PixelGrid(8, 8)
        grid.pixels[7, 0] = LIGHT_GRAY

        img = render_grid_to_image(grid, scale=3)
        assert img.size == (24, 24)
        assert img.getpixel((2, 2)) == (0xAA, 0xAA, 0xAA)
        assert img.getpixel((3, 3)) == (0, 0, 0)

    def test_invalid_scale(self):
        with pytest.raises(ValueError, match="at least 1"):
            render_grid_to_image(PixelGrid(8, 8), scale=0)


def test_save_preview(tmp_path, chr_bank):
    path = tmp_path / "preview.png"
    img = save_preview(decode(chr_bank), str(path), scale=2)

    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
    assert img.size == (256, 256)
