"""
NES CHR Sheet - Color Palette

Fixed grayscale palette used for sprite sheet extraction.
Colors are packed as 0x00RRGGBB so they can be stored directly in a
32-bit BMP pixel slot.
"""

from typing import List

import numpy as np

MAGENTA = 0xFF00FF  # Marks color 0 (transparent on hardware)
LIGHT_GRAY = 0xAAAAAA
DARK_GRAY = 0x464646
BLACK = 0x000000

# Indexed by 2-bit pixel intensity (0-3)
GRAYSCALE_PALETTE: List[int] = [MAGENTA, LIGHT_GRAY, DARK_GRAY, BLACK]

# Lookup table for translating whole tiles of intensities at once
PALETTE_LUT = np.array(GRAYSCALE_PALETTE, dtype=np.uint32)
