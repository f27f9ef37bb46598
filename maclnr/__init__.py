"""List files by size, clean directories and inspect memory, processes and storage."""

__version__ = "0.1.0"
__all__ = ["__version__"]