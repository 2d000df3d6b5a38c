"""stunnel configuration, certificate and process handling."""

from .certificate import (
    DEFAULT_API_PORT,
    CertificateFetcher,
    OpenSSLCertificateFetcher,
    write_stunnel_cert_file,
)
from .config import GIT_PROXY_PORT, StunnelConfig, generate_stunnel_config
from .process import (
    PosixTunnelLauncher,
    TunnelLauncher,
    WindowsServiceLauncher,
    launcher_for_platform,
)

__all__ = [
    "StunnelConfig",
    "generate_stunnel_config",
    "GIT_PROXY_PORT",
    "CertificateFetcher",
    "OpenSSLCertificateFetcher",
    "write_stunnel_cert_file",
    "DEFAULT_API_PORT",
    "TunnelLauncher",
    "PosixTunnelLauncher",
    "WindowsServiceLauncher",
    "launcher_for_platform",
]
