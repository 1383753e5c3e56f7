"""zcc command line interface."""

from zcc import __version__

__all__ = ["__version__"]
