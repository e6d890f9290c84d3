"""Errors raised while comparing AWS cost periods."""

from enum import Enum


class ErrorKind(Enum):
    INVALID_DATE = "InvalidDate"
    FETCH_FAILURE = "FetchFailure"
    PARSE_FAILURE = "ParseFailure"
    SESSION_FAILURE = "SessionFailure"


class CostCompareError(Exception):
    kind = None


class InvalidDateError(CostCompareError, ValueError):
    """Malformed --start/--end value or an unusable period. Always fatal."""
    kind = ErrorKind.INVALID_DATE


class FetchError(CostCompareError):
    """Cost Explorer call failed. Fatal only in strict mode."""
    kind = ErrorKind.FETCH_FAILURE


class ParseError(CostCompareError, ValueError):
    """Cost amount returned by the API is not a number. Fatal only in strict mode."""
    kind = ErrorKind.PARSE_FAILURE


class SessionError(CostCompareError):
    """No usable AWS session (credentials, profile or region). Always fatal."""
    kind = ErrorKind.SESSION_FAILURE
