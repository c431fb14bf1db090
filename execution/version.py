"""Package version; kept import-free so packaging tools can read it."""

__version__ = "0.1.0"

__all__ = ["__version__"]
