"""
NES CHR Sheet - CHR Tile Decoding

NES CHR format tile decoding and sprite sheet assembly.

Each tile is 16 bytes: 8 bytes for plane 0 (low bit) followed by 8 bytes
for plane 1 (high bit). One byte holds one pixel row, most significant bit
on the left. A CHR bank (8KB) holds two pattern tables of 256 tiles, and a
sprite sheet is one pattern table laid out as a 16x16 tile square.
"""

import math
from typing import List

import numpy as np

from .palettes import PALETTE_LUT
from .rom_utils import CHR_BANK_SIZE, chr_bank_count

# CHR format constants
TILE_SIZE = 8  # 8x8 pixels per tile
BYTES_PER_TILE = 16  # 16 bytes per tile (8 bytes per bitplane)
TILE_PAIR_SIZE = 2 * BYTES_PER_TILE  # One slot in each of the two pattern tables


class ChrFormatError(ValueError):
    """Raised when CHR data cannot be laid out as a sprite sheet."""

    pass


class InvalidBankCountError(ChrFormatError):
    """Raised when the tile data holds zero banks or more than one."""

    def __init__(self, bank_count: int):
        self.bank_count = bank_count
        if bank_count == 0:
            message = "No CHR data present (board uses CHR-RAM?)"
        else:
            message = f"Expected exactly 1 CHR bank, got {bank_count}"
        super().__init__(message)


class MisalignedBufferSizeError(ChrFormatError):
    """Raised when the tile data length is not a whole number of units."""

    def __init__(self, size: int, alignment: int):
        self.size = size
        self.alignment = alignment
        super().__init__(
            f"CHR data size {size} is not a positive multiple of {alignment} bytes"
        )


class NonSquareTileArrangementError(ChrFormatError):
    """Raised when a pattern table's tile count has no integer square side."""

    def __init__(self, tile_count: int):
        self.tile_count = tile_count
        super().__init__(
            f"{tile_count} tiles cannot be arranged as two square pattern tables"
        )


class PixelGrid:
    """
    Decoded sprite sheet as packed 0x00RRGGBB colors.

    Rows are stored bottom-up: row 0 is the bottom row of the picture,
    which is the order the BMP pixel array expects.
    """

    def __init__(self, width: int, height: int, pixels: np.ndarray | None = None):
        """
        Allocate a grid, or wrap an existing (height, width) array.

        Args:
            width: Width in pixels (positive multiple of 8)
            height: Height in pixels (positive multiple of 8)
            pixels: Optional uint32 array of shape (height, width)

        Raises:
            ValueError: If the dimensions are not positive multiples of 8
                or do not match the supplied array
        """
        if width <= 0 or height <= 0 or width % TILE_SIZE or height % TILE_SIZE:
            raise ValueError(
                f"Grid dimensions must be positive multiples of {TILE_SIZE}, "
                f"got {width}x{height}"
            )
        if pixels is None:
            pixels = np.zeros((height, width), dtype=np.uint32)
        elif pixels.shape != (height, width):
            raise ValueError(
                f"Pixel array shape {pixels.shape} does not match {width}x{height}"
            )

        self.width = width
        self.height = height
        self.pixels = pixels

    def __getitem__(self, pos: tuple[int, int]) -> int:
        """Color at (x, y) in storage order."""
        x, y = pos
        return int(self.pixels[y, x])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return (self.width, self.height) == (other.width, other.height) and bool(
            np.array_equal(self.pixels, other.pixels)
        )

    def __repr__(self) -> str:
        return f"PixelGrid({self.width}x{self.height})"

    def to_bytes(self) -> bytes:
        """Pixel array as little-endian 32-bit values, storage order."""
        return self.pixels.astype("<u4").tobytes()

    @classmethod
    def from_bytes(cls, data: bytes, width: int, height: int) -> "PixelGrid":
        """Rebuild a grid from a storage-order little-endian pixel array."""
        pixels = np.frombuffer(data, dtype="<u4", count=width * height)
        return cls(width, height, pixels.reshape(height, width).astype(np.uint32))

    def visual_rows(self) -> np.ndarray:
        """Pixels ordered top row first, as the picture is viewed."""
        return self.pixels[::-1]


def decode_tile(tile_data: bytes, tile_idx: int = 0) -> List[List[int]]:
    """
    Decode a single 8x8 NES CHR tile into 2-bit pixel values.

    NES tiles use two bitplanes to encode 4-color (2-bit) pixel data.
    Each tile is 16 bytes: 8 bytes for plane 0 (low bit), 8 bytes for plane 1 (high bit).

    Args:
        tile_data: Either a full CHR bank or a single 16-byte tile
        tile_idx: Tile index if tile_data is a full CHR bank (default: 0)

    Returns:
        8x8 array of pixel values (0-3), where each value is a palette index

    Raises:
        IndexError: If tile_idx does not address a whole tile in tile_data
    """
    # Calculate offset based on tile index
    offset = tile_idx * BYTES_PER_TILE

    if tile_idx < 0 or offset + BYTES_PER_TILE > len(tile_data):
        raise IndexError(f"Tile {tile_idx} out of range for {len(tile_data)} bytes")

    # Extract the two bitplanes
    plane0 = tile_data[offset : offset + 8]  # Low bit plane
    plane1 = tile_data[offset + 8 : offset + 16]  # High bit plane

    # Decode pixel by pixel
    pixels = []
    for row in range(8):
        row_pixels = []
        for col in range(8):
            # Extract bit from each plane (MSB first, left to right)
            bit_mask = 0x80 >> col
            low_bit = 1 if (plane0[row] & bit_mask) else 0
            high_bit = 1 if (plane1[row] & bit_mask) else 0

            # Add the two planes together to get the 2-bit value (0-3)
            pixel = low_bit + 2 * high_bit
            row_pixels.append(pixel)
        pixels.append(row_pixels)

    return pixels


def sheet_side(size: int) -> int:
    """
    Side length, in tiles, of the square sheet for size bytes of tile data.

    The data holds two pattern tables; each is a square of tiles.

    Args:
        size: Tile data length in bytes

    Returns:
        Tiles per side of one pattern table

    Raises:
        MisalignedBufferSizeError: If size is zero or not a multiple of 32
        NonSquareTileArrangementError: If half the tile count is not a square
    """
    if size <= 0 or size % TILE_PAIR_SIZE:
        raise MisalignedBufferSizeError(size, TILE_PAIR_SIZE)

    tile_count = size // BYTES_PER_TILE
    side = math.isqrt(tile_count // 2)
    if side * side * 2 != tile_count:
        raise NonSquareTileArrangementError(tile_count)
    return side


def decode_sheet(data: bytes, pattern_table: int = 0) -> PixelGrid:
    """
    Decode one pattern table of tile data into a bottom-up pixel grid.

    Tiles are read in row-major order. Tile columns are written mirrored
    (the last tile of a source row lands in the leftmost output column),
    pixel rows are written bottom-up.

    Args:
        data: Tile data, two square pattern tables back to back
        pattern_table: Which half of data to render (0 or 1)

    Returns:
        Fully populated PixelGrid of (8 * side) x (8 * side) pixels

    Raises:
        ChrFormatError: If data cannot be arranged as a square sheet
        ValueError: If pattern_table is not 0 or 1
    """
    side = sheet_side(len(data))
    if pattern_table not in (0, 1):
        raise ValueError(f"Pattern table must be 0 or 1, got {pattern_table}")

    first_tile = pattern_table * side * side
    width = height = side * TILE_SIZE
    grid = PixelGrid(width, height)

    for tile_y in range(side):
        # BMP is bottom up, so tile row 0 fills the top of the buffer
        y_end = height - tile_y * TILE_SIZE
        for tile_x in range(side):
            tile_idx = first_tile + tile_y * side + tile_x
            intensities = np.array(decode_tile(data, tile_idx), dtype=np.uint8)

            x = (side - 1 - tile_x) * TILE_SIZE
            grid.pixels[y_end - TILE_SIZE : y_end, x : x + TILE_SIZE] = PALETTE_LUT[
                intensities[::-1]
            ]

    return grid


def validate_tile_bank(tile_bank: bytes) -> int:
    """
    Check that tile_bank holds exactly one CHR bank.

    Returns:
        Bank count (always 1)

    Raises:
        InvalidBankCountError: If there are zero banks or more than one
        MisalignedBufferSizeError: If the length is not a multiple of 32 or 8192
    """
    size = len(tile_bank)
    if size == 0:
        raise InvalidBankCountError(0)
    if size % TILE_PAIR_SIZE:
        raise MisalignedBufferSizeError(size, TILE_PAIR_SIZE)
    if size % CHR_BANK_SIZE:
        raise MisalignedBufferSizeError(size, CHR_BANK_SIZE)

    bank_count = chr_bank_count(size)
    if bank_count != 1:
        raise InvalidBankCountError(bank_count)
    return bank_count


def decode(tile_bank: bytes, pattern_table: int = 0) -> PixelGrid:
    """
    Decode a single 8KB CHR bank into a 128x128 sprite sheet.

    Args:
        tile_bank: Exactly one CHR bank of tile data
        pattern_table: Which pattern table to render (0 or 1)

    Returns:
        Bottom-up PixelGrid ready for write_bitmap()

    Raises:
        ChrFormatError: If tile_bank is not exactly one bank
    """
    validate_tile_bank(tile_bank)
    return decode_sheet(bytes(tile_bank), pattern_table)


class TilesetData:
    """
    Loads raw NES CHR tile data from binary files.

    Used for CHR dumps that are not wrapped in an iNES container
    (e.g. a pattern table saved from an emulator).
    """

    def __init__(self, chr_path: str):
        """
        Load CHR data from file.

        Args:
            chr_path: Path to CHR binary file
        """
        with open(chr_path, "rb") as f:
            self.data = f.read()

        self.num_tiles = len(self.data) // BYTES_PER_TILE
