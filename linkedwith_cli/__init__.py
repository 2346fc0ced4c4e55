"""LinkedWith command line interface."""
from linkedwith import __version__

__all__ = ["__version__"]
