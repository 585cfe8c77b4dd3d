"""Reading and writing precomputed intensity data."""

from fastspec.io.frequencies import load_frequencies, save_frequencies

__all__ = ["load_frequencies", "save_frequencies"]
