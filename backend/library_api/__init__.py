"""Library API — HTTP routing layer over a library-management database."""

__version__ = "1.0.0"
