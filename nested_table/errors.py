"""
errors.py - Error taxonomy for the nested table engine
"""
from typing import Any, Optional


class NestedTableError(Exception):
    """Base class for all nested table errors"""


class SourceError(NestedTableError):
    """Raised by a record source when a fetch cannot produce records"""

    def __init__(self, message: str, scope_id: Any = None):
        super().__init__(message)
        self.scope_id = scope_id


class NetworkError(SourceError):
    """Transport failure, timeout or non-success response from the source"""


class DecodeError(SourceError):
    """The source answered but the payload could not be turned into records"""


class InitialLoadError(NestedTableError):
    """The root record set could not be loaded. Fatal for the session."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ExpansionFetchError(NestedTableError):
    """A child fetch triggered by expanding one row failed"""

    def __init__(self, key, cause: BaseException):
        super().__init__(f"Error fetching nested data for row {key.id!r} at level {key.level}: {cause}")
        self.key = key
        self.cause = cause


class ControllerStateError(NestedTableError):
    """An operation was requested in a load state that does not allow it"""
