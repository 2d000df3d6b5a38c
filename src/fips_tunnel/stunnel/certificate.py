"""Automate server certificate retrieval and caching for stunnel.

stunnel verifies the Automate server against a local CA file
(``verify = 3`` pins the peer certificate). The certificate is pulled
from the server with ``openssl s_client`` and cached verbatim at the
path the generated config names in its ``CAfile`` directive.
"""

import re
import subprocess
from pathlib import Path
from typing import Protocol

from ..common.exceptions import CertificateFetchError, TunnelIOError
from ..common.logging import get_logger
from ..paths import TunnelPaths

logger = get_logger(__name__)

DEFAULT_API_PORT = "443"

PEM_CERT_PATTERN = re.compile(
    r"-----BEGIN CERTIFICATE-----.+?-----END CERTIFICATE-----", re.DOTALL
)


class CertificateFetcher(Protocol):
    """Protocol for retrieving a server's PEM certificate chain."""

    def fetch(self, server: str, port: str) -> str:
        """Return PEM text for the certificates presented by server:port."""
        ...


class OpenSSLCertificateFetcher:
    """Fetches the presented certificate chain using ``openssl s_client``."""

    def __init__(self, openssl_path: str = "openssl", timeout: float = 30.0):
        self.openssl_path = openssl_path
        self.timeout = timeout

    def build_command(self, server: str, port: str) -> list[str]:
        """Build the s_client command line for server:port."""
        return [
            self.openssl_path,
            "s_client",
            "-connect",
            f"{server}:{port}",
            "-servername",
            server,
            "-showcerts",
        ]

    def fetch(self, server: str, port: str) -> str:
        """Fetch the server certificate chain.

        Args:
            server: Automate server host
            port: Automate API port

        Returns:
            PEM certificate blocks joined by newlines, newline terminated

        Raises:
            CertificateFetchError: If openssl fails or returns no certificate
        """
        cmd = self.build_command(server, port)
        logger.debug("Fetching server certificate", server=server, port=port)

        try:
            result = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise CertificateFetchError(
                server, port, f"{self.openssl_path} not found"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise CertificateFetchError(
                server, port, f"timed out after {self.timeout}s"
            ) from e
        except OSError as e:
            raise CertificateFetchError(server, port, str(e)) from e

        if result.returncode != 0:
            raise CertificateFetchError(
                server,
                port,
                f"openssl exited with status {result.returncode}: "
                f"{result.stderr.strip()}",
            )

        certificates = PEM_CERT_PATTERN.findall(result.stdout)
        if not certificates:
            raise CertificateFetchError(server, port, "no certificate presented")

        logger.debug("Server certificate fetched", count=len(certificates))
        return "\n".join(certificates) + "\n"


def write_stunnel_cert_file(
    server: str,
    port: str,
    paths: TunnelPaths,
    fetcher: CertificateFetcher,
) -> Path:
    """Fetch the server certificate and cache it for stunnel.

    The fetched text is written as-is, replacing any previous file.

    Args:
        server: Automate server host
        port: Automate API port
        paths: Resolved tunnel file locations
        fetcher: Certificate source

    Returns:
        Path of the written certificate file

    Raises:
        CertificateFetchError: Propagated unchanged from the fetcher, or
            raised when the fetched text is empty
        TunnelIOError: If the file cannot be written
    """
    cert_text = fetcher.fetch(server, port)
    if not cert_text.strip():
        raise CertificateFetchError(server, port, "empty certificate")

    cert_file = paths.cert_file

    try:
        cert_file.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise TunnelIOError("create directory", cert_file.parent, e) from e

    try:
        with open(cert_file, "w", encoding="utf-8", newline="") as f:
            f.write(cert_text)
    except OSError as e:
        raise TunnelIOError("write certificate", cert_file, e) from e

    logger.info("Server certificate written", path=str(cert_file), server=server)
    return cert_file
