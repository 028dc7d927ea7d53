"""Shared pytest fixtures for CHR extraction tests."""

import pytest

from chrsheet.core.rom_utils import (
    CHR_BANK_SIZE,
    FLAG6_TRAINER,
    INES_MAGIC,
    PRG_BANK_SIZE,
    TRAINER_SIZE,
)


def _make_tile(low: int, high: int) -> bytes:
    """Build a 16-byte tile with every row of each plane set to one byte."""
    return bytes([low] * 8 + [high] * 8)


def _make_rom(
    chr_data: bytes,
    prg_banks: int = 1,
    chr_banks: int | None = None,
    flags6: int = 0,
    flags7: int = 0,
) -> bytes:
    """Build an iNES image around chr_data with filler PRG ROM."""
    if chr_banks is None:
        chr_banks = len(chr_data) // CHR_BANK_SIZE
    header = INES_MAGIC + bytes([prg_banks, chr_banks, flags6, flags7]) + bytes(8)
    trainer = bytes([0xEE] * TRAINER_SIZE) if flags6 & FLAG6_TRAINER else b""
    prg = bytes([0xEA] * (prg_banks * PRG_BANK_SIZE))
    return header + trainer + prg + chr_data


@pytest.fixture
def make_tile():
    """Factory for uniform 16-byte tiles."""
    return _make_tile


@pytest.fixture
def make_rom():
    """Factory for in-memory iNES images."""
    return _make_rom


@pytest.fixture
def chr_bank():
    """One 8KB CHR bank with a distinct plane pattern per tile."""
    return b"".join(_make_tile(i & 0xFF, (i >> 1) & 0xFF) for i in range(512))


@pytest.fixture
def rom_file(tmp_path, chr_bank):
    """Single-bank iNES ROM on disk."""
    path = tmp_path / "test.nes"
    path.write_bytes(_make_rom(chr_bank))
    return path
