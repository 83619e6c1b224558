# aad_numerics/exceptions.py
"""Exception types raised by aad_numerics."""

from .logger import aad_numerics_logger


class AADNumericsError(Exception):
    """Base class of all errors raised by aad_numerics."""


class InvalidArgument(AADNumericsError, ValueError):
    """Raised when a caller passes a value of the wrong shape or range."""


class PreconditionNotSatisfied(AADNumericsError, ValueError):
    """Raised when an internal precondition (programmer error) is violated."""


def log_and_raise(error_type, message: str):
    """Log ``message`` at ERROR level, then raise ``error_type(message)``."""
    aad_numerics_logger.error(message)
    raise error_type(message)
