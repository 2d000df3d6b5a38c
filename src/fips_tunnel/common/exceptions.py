"""Custom exceptions for FIPS tunnel bootstrap."""

from pathlib import Path


class FipsTunnelError(Exception):
    """Base exception for all FIPS tunnel errors."""
    pass


class UnsupportedPlatformError(FipsTunnelError):
    """Raised when the tunnel binary is not installed on this platform."""

    def __init__(self, binary_path: Path | str):
        self.binary_path = str(binary_path)
        super().__init__(
            f"FIPS mode is not supported on this install: "
            f"stunnel binary not found at {self.binary_path}"
        )


class MissingRequiredFieldError(FipsTunnelError):
    """Raised when a configuration field required by FIPS mode is absent."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"FIPS mode requires '{field}' to be configured")


class TunnelIOError(FipsTunnelError):
    """Raised when a tunnel file cannot be created or written."""

    def __init__(self, operation: str, path: Path | str, cause: OSError):
        self.operation = operation
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Failed to {operation} {self.path}: {cause}")


class CertificateFetchError(FipsTunnelError):
    """Raised when the server certificate cannot be retrieved."""

    def __init__(self, server: str, port: str, reason: str):
        self.server = server
        self.port = port
        super().__init__(
            f"Failed to fetch certificate from {server}:{port}: {reason}"
        )


class ProcessLaunchError(FipsTunnelError):
    """Raised when the tunnel process or a service command fails to start."""

    def __init__(self, command: list[str], reason: str):
        self.command = list(command)
        super().__init__(f"Failed to run {' '.join(self.command)}: {reason}")


class ConfigurationError(FipsTunnelError):
    """Raised when a tunnel configuration value is invalid."""
    pass
