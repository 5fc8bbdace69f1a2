"""Storage adapters for Toado."""
