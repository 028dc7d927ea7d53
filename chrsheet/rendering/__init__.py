"""PIL-based preview rendering."""
