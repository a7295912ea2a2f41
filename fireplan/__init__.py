"""Year-by-year retirement projection engine with a small Flask API."""

__version__ = "0.1.0"
