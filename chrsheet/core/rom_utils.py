"""
NES CHR Sheet - iNES ROM constants.

This module provides:
- iNES container layout constants (signature, header size, trainer size)
- PRG/CHR bank sizes
- The trainer flag mask and the mapper id helper

Used by RomReader, the tile decoder and the extract tool.
"""

# ============================================================================
# iNES Container Layout
# ============================================================================
INES_MAGIC = b"NES\x1a"
INES_HEADER_SIZE = 0x10
TRAINER_SIZE = 0x200  # 512 bytes, stored before PRG data when present

# ============================================================================
# Bank Sizes
# ============================================================================
PRG_BANK_SIZE = 0x4000  # 16KB units
CHR_BANK_SIZE = 0x2000  # 8KB units (0 banks means the board uses CHR-RAM)

# ============================================================================
# Header Flags
# ============================================================================
FLAG6_TRAINER = 0x04


def mapper_id(flags6: int, flags7: int) -> int:
    """
    Combine the mapper nibbles from header bytes 6 and 7.

    Args:
        flags6: Header byte 6 (lower mapper nibble in bits 4-7)
        flags7: Header byte 7 (upper mapper nibble in bits 4-7)

    Returns:
        Mapper number (0-255)
    """
    return (flags7 & 0xF0) | (flags6 >> 4)


def chr_bank_count(chr_size: int) -> int:
    """Number of whole 8KB CHR banks in a buffer of chr_size bytes."""
    return chr_size // CHR_BANK_SIZE
