"""LocaProx equipment rental management."""

from locaprox.version import __version__

__all__ = ["__version__"]
