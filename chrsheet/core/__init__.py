"""
Core NES functionality.

This package contains iNES ROM reading, CHR tile decoding,
and the fixed grayscale palette.
"""

from .chr_tile import (
    ChrFormatError,
    InvalidBankCountError,
    MisalignedBufferSizeError,
    NonSquareTileArrangementError,
    PixelGrid,
    TilesetData,
    decode,
    decode_sheet,
)
from .rom_reader import RomReader

__all__ = [
    "ChrFormatError",
    "InvalidBankCountError",
    "MisalignedBufferSizeError",
    "NonSquareTileArrangementError",
    "PixelGrid",
    "TilesetData",
    "decode",
    "decode_sheet",
    "RomReader",
]
