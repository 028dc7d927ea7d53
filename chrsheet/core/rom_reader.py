"""
NES CHR Sheet - ROM Reader

ROM file reading for iNES cartridge images.
Parses the 16-byte header, skips the optional trainer and slices the
PRG-ROM and CHR-ROM regions out of the file.
"""

from .rom_utils import (
    CHR_BANK_SIZE,
    FLAG6_TRAINER,
    INES_HEADER_SIZE,
    INES_MAGIC,
    PRG_BANK_SIZE,
    TRAINER_SIZE,
    mapper_id,
)


class RomReader:
    """
    Reads and parses iNES ROM files.

    Only the container is interpreted here. Tile decoding is handled
    separately by chrsheet.core.chr_tile.
    """

    def __init__(self, rom_path: str, verbose: bool = True):
        """
        Load a NES ROM file.

        Args:
            rom_path: Path to iNES ROM file
            verbose: Print a summary line once the header is parsed

        Raises:
            ValueError: If file is not a valid iNES ROM or is truncated
        """
        with open(rom_path, "rb") as f:
            self.data = f.read()

        # Verify iNES header
        if len(self.data) < INES_HEADER_SIZE or self.data[:4] != INES_MAGIC:
            raise ValueError("Not a valid iNES ROM file")

        self.prg_banks = self.data[4]
        self.chr_banks = self.data[5]
        self.flags6 = self.data[6]
        self.flags7 = self.data[7]
        self.mapper_id = mapper_id(self.flags6, self.flags7)
        self.has_trainer = bool(self.flags6 & FLAG6_TRAINER)

        self.prg_size = self.prg_banks * PRG_BANK_SIZE
        self.chr_size = self.chr_banks * CHR_BANK_SIZE
        self.prg_start = INES_HEADER_SIZE + (TRAINER_SIZE if self.has_trainer else 0)
        self.chr_start = self.prg_start + self.prg_size

        expected = self.chr_start + self.chr_size
        if len(self.data) < expected:
            raise ValueError(
                f"Truncated ROM: expected at least {expected} bytes, got {len(self.data)}"
            )

        if verbose:
            print(
                f"ROM loaded: {self.prg_banks} PRG banks ({self.prg_size // 1024}KB), "
                f"mapper {self.mapper_id}"
            )
            print(f"CHR has {self.chr_banks} banks")

    @property
    def uses_chr_ram(self) -> bool:
        """True when the board has no CHR-ROM (graphics live in CHR-RAM)."""
        return self.chr_banks == 0

    def read_chr(self) -> bytes:
        """
        Read the complete CHR-ROM region.

        Returns:
            chr_banks * 8192 bytes (empty for CHR-RAM boards)
        """
        return self.data[self.chr_start : self.chr_start + self.chr_size]
