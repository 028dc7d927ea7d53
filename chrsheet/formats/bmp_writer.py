"""
NES CHR Sheet - BMP Writer

Serializes a decoded PixelGrid as an uncompressed 32-bit BMP file.
The grid is already in bottom-up storage order, so pixel rows are written
exactly as they are held.
"""

import os
import stat
import struct
import tempfile
from pathlib import Path

from ..core.chr_tile import PixelGrid

# File header: type, size, reserved1, reserved2, pixel data offset
FILE_HEADER_FORMAT = "<HIHHI"
# Info header: size, width, height, planes, bpp, compression, image size,
# x/y pixels per meter, colors used, important colors
INFO_HEADER_FORMAT = "<IiiHHIIiiII"

BMP_TYPE = 0x4D42  # "BM"
FILE_HEADER_SIZE = struct.calcsize(FILE_HEADER_FORMAT)  # 14
INFO_HEADER_SIZE = struct.calcsize(INFO_HEADER_FORMAT)  # 40
PIXEL_DATA_OFFSET = FILE_HEADER_SIZE + INFO_HEADER_SIZE  # 54
BITS_PER_PIXEL = 32
BYTES_PER_PIXEL = BITS_PER_PIXEL // 8
BI_RGB = 0  # No compression


class BitmapWriteError(OSError):
    """Raised when the BMP file cannot be created or fully written."""

    pass


def file_size(width: int, height: int) -> int:
    """Total BMP file size for a 32-bit image of width x height."""
    return PIXEL_DATA_OFFSET + width * height * BYTES_PER_PIXEL


def build_headers(width: int, height: int) -> bytes:
    """
    Pack the 14-byte file header and the 40-byte info header.

    Args:
        width: Image width in pixels
        height: Image height in pixels (positive, bottom-up rows)

    Returns:
        54 bytes of header data
    """
    file_header = struct.pack(
        FILE_HEADER_FORMAT,
        BMP_TYPE,
        file_size(width, height),
        0,
        0,
        PIXEL_DATA_OFFSET,
    )
    info_header = struct.pack(
        INFO_HEADER_FORMAT,
        INFO_HEADER_SIZE,
        width,
        height,
        1,  # planes
        BITS_PER_PIXEL,
        BI_RGB,
        0,  # image size, may be 0 for BI_RGB
        0,
        0,
        0,
        0,
    )
    return file_header + info_header


def build_bitmap(grid: PixelGrid) -> bytes:
    """Encode grid as a complete BMP file in memory."""
    return build_headers(grid.width, grid.height) + grid.to_bytes()


def _target_mode(path: Path) -> int:
    """Permission bits for path: kept when it exists, else 0o666 minus umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_bitmap(path: str | Path, grid: PixelGrid) -> None:
    """
    Write grid to path as a 32-bit BMP.

    The file is written to a temporary file in the destination directory
    and renamed into place, so path is either left untouched or holds the
    complete image. An existing file keeps its permissions; a new one
    gets the default mode for the current umask.

    Args:
        path: Output BMP file (created/overwritten)
        grid: Decoded sprite sheet

    Raises:
        BitmapWriteError: If the file cannot be created or written
    """
    path = Path(path)
    data = build_bitmap(grid)

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "wb") as f:
            written = f.write(data)
            if written != len(data):
                raise OSError(f"Short write: {written} of {len(data)} bytes")
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise BitmapWriteError(f"Failed to write {path}: {e}") from e
