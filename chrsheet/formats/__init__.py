"""Output file formats."""

from .bmp_writer import BitmapWriteError, build_bitmap, write_bitmap

__all__ = ["BitmapWriteError", "build_bitmap", "write_bitmap"]
