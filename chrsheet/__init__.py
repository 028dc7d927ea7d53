"""NES CHR-ROM sprite sheet extraction."""
