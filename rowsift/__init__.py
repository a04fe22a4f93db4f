"""rowsift - structured extraction for tracker listing tables."""

from rowsift.__version__ import __version__

__all__ = ["__version__"]
