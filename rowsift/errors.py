"""Exception types raised inside the extraction engine."""

from typing import Any, Dict, Optional


class RowsiftError(Exception):
    """Base class for rowsift failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class MalformedRowError(RowsiftError):
    """Raised when a leaf row lacks the anchor needed to identify it."""
