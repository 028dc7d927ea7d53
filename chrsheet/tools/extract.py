#!/usr/bin/env python3
"""
NES CHR Sheet - Sprite Sheet Extractor

Extracts the CHR-ROM tile graphics from an iNES ROM and saves them as a
32-bit BMP sprite sheet (optionally with a PNG preview).
"""

import argparse
import sys
from pathlib import Path

from chrsheet.core.chr_tile import (
    TILE_SIZE,
    PixelGrid,
    TilesetData,
    decode,
)
from chrsheet.core.rom_reader import RomReader
from chrsheet.formats.bmp_writer import write_bitmap
from chrsheet.rendering.pil_renderer import save_preview

DEFAULT_ROM = "zelda.nes"
DEFAULT_OUTPUT = "chr.bmp"


def extract_chr(
    chr_data: bytes,
    output_path: str,
    pattern_table: int = 0,
) -> PixelGrid:
    """
    Decode one CHR bank and write it to a BMP file.

    Args:
        chr_data: Exactly one 8KB CHR bank
        output_path: BMP file to create/overwrite
        pattern_table: Which pattern table to render (0 or 1)

    Returns:
        The decoded PixelGrid

    Raises:
        ChrFormatError: If chr_data is not a single CHR bank
        BitmapWriteError: If the BMP cannot be written
    """
    grid = decode(chr_data, pattern_table)
    print(
        f"Extracted {grid.width // TILE_SIZE} x {grid.height // TILE_SIZE} sprite sheet"
    )

    write_bitmap(output_path, grid)
    print(f"Saved: {output_path} ({grid.width}x{grid.height})")
    return grid


def load_chr(input_path: str, raw: bool) -> bytes:
    """Read CHR data from an iNES ROM, or a raw CHR dump when raw is set."""
    if raw:
        tileset = TilesetData(input_path)
        print(f"CHR dump loaded: {tileset.num_tiles} tiles")
        return tileset.data

    rom = RomReader(input_path)
    if rom.uses_chr_ram:
        print("Warning: ROM has no CHR-ROM (uses CHR-RAM)")
    return rom.read_chr()


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Extract NES CHR-ROM graphics as a BMP sprite sheet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Extract the first pattern table:
    chr-extract zelda.nes
    chr-extract zelda.nes -o zelda.bmp

  Extract the second pattern table with a 4x PNG preview:
    chr-extract zelda.nes -t 1 --png zelda.png --scale 4

  Extract from a raw 8KB CHR dump:
    chr-extract --raw chr-rom.bin -o sheet.bmp
""",
    )
    parser.add_argument(
        "rom_file",
        nargs="?",
        default=DEFAULT_ROM,
        help=f"iNES ROM file (default: {DEFAULT_ROM})",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT,
        help=f"Output BMP file (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "-t",
        "--pattern-table",
        type=int,
        choices=[0, 1],
        default=0,
        help="Pattern table to render (0-1, default: 0)",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Treat input as a raw CHR dump instead of an iNES ROM",
    )
    parser.add_argument("--png", help="Also save a PNG preview to this path")
    parser.add_argument(
        "--scale",
        type=int,
        default=1,
        help="Pixel scale factor for the PNG preview (default: 1)",
    )

    args = parser.parse_args(argv)

    if args.scale < 1:
        parser.error("--scale must be at least 1")

    rom_path = Path(args.rom_file)
    if not rom_path.exists():
        print(f"Error: ROM file not found: {rom_path}")
        sys.exit(1)

    try:
        chr_data = load_chr(str(rom_path), args.raw)
        grid = extract_chr(chr_data, args.output, args.pattern_table)
        if args.png:
            img = save_preview(grid, args.png, args.scale)
            print(f"Saved: {args.png} ({img.width}x{img.height})")
    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    return 0


if __name__ == "__main__":
    sys.exit(main())
