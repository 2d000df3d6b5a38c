"""Common utilities and shared functionality."""

from .exceptions import (
    CertificateFetchError,
    ConfigurationError,
    FipsTunnelError,
    MissingRequiredFieldError,
    ProcessLaunchError,
    TunnelIOError,
    UnsupportedPlatformError,
)
from .logging import get_logger
from .utils import MAX_PORT, MIN_PORT, validate_directive_value, validate_port

__all__ = [
    # Exceptions
    "FipsTunnelError",
    "UnsupportedPlatformError",
    "MissingRequiredFieldError",
    "TunnelIOError",
    "CertificateFetchError",
    "ProcessLaunchError",
    "ConfigurationError",
    # Logging
    "get_logger",
    # Utils
    "validate_port",
    "validate_directive_value",
    "MIN_PORT",
    "MAX_PORT",
]
