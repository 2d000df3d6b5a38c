"""FIPS tunnel bootstrap - runs git traffic through a FIPS-validated stunnel."""

from .activation import (
    ActivationState,
    FipsActivator,
    setup_and_start_stunnel_if_fips_mode,
)
from .common.exceptions import (
    CertificateFetchError,
    ConfigurationError,
    FipsTunnelError,
    MissingRequiredFieldError,
    ProcessLaunchError,
    TunnelIOError,
    UnsupportedPlatformError,
)
from .common.logging import get_logger
from .config import RuntimeConfig, merge_fips_options_and_config
from .paths import Platform, TunnelPaths
from .stunnel import (
    CertificateFetcher,
    OpenSSLCertificateFetcher,
    PosixTunnelLauncher,
    StunnelConfig,
    TunnelLauncher,
    WindowsServiceLauncher,
    generate_stunnel_config,
    launcher_for_platform,
    write_stunnel_cert_file,
)

__version__ = "0.1.0"


__all__ = [
    # Activation
    "setup_and_start_stunnel_if_fips_mode",
    "FipsActivator",
    "ActivationState",
    # Configuration
    "RuntimeConfig",
    "merge_fips_options_and_config",
    "Platform",
    "TunnelPaths",
    # stunnel
    "StunnelConfig",
    "generate_stunnel_config",
    "CertificateFetcher",
    "OpenSSLCertificateFetcher",
    "write_stunnel_cert_file",
    "TunnelLauncher",
    "PosixTunnelLauncher",
    "WindowsServiceLauncher",
    "launcher_for_platform",
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
]
