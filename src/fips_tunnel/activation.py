"""FIPS mode activation: validate, configure and launch stunnel."""

from enum import Enum

from .common.exceptions import MissingRequiredFieldError, UnsupportedPlatformError
from .common.logging import get_logger
from .config import RuntimeConfig
from .paths import TunnelPaths
from .stunnel.certificate import (
    DEFAULT_API_PORT,
    CertificateFetcher,
    OpenSSLCertificateFetcher,
    write_stunnel_cert_file,
)
from .stunnel.config import generate_stunnel_config
from .stunnel.process import ChildProcesses, TunnelLauncher, launcher_for_platform

logger = get_logger(__name__)


class ActivationState(str, Enum):
    """Progress of a single activation attempt."""

    NOT_STARTED = "not_started"
    CONFIG_WRITTEN = "config_written"
    CERT_WRITTEN = "cert_written"
    LAUNCHED = "launched"


class FipsActivator:
    """Runs the FIPS tunnel bootstrap sequence once.

    Steps run strictly in order and the first failure propagates to the
    caller. Files written by earlier steps are left in place.
    """

    def __init__(
        self,
        paths: TunnelPaths | None = None,
        fetcher: CertificateFetcher | None = None,
        launcher: TunnelLauncher | None = None,
    ):
        """Initialize FipsActivator.

        Args:
            paths: Tunnel file locations (default: resolved for this platform)
            fetcher: Certificate source (default: openssl s_client)
            launcher: Launch strategy (default: chosen from ``paths.platform``)
        """
        self.paths = paths or TunnelPaths.for_platform()
        self.fetcher = fetcher or OpenSSLCertificateFetcher()
        self.launcher = launcher or launcher_for_platform(self.paths.platform)
        self.state = ActivationState.NOT_STARTED

    def activate(self, config: RuntimeConfig, child_processes: ChildProcesses) -> None:
        """Start stunnel if FIPS mode is enabled in ``config``.

        Args:
            config: Runtime configuration
            child_processes: Caller-owned list that receives the spawned
                stunnel process on POSIX

        Raises:
            UnsupportedPlatformError: If the stunnel binary is not installed
            MissingRequiredFieldError: If server or fips_git_port is missing
            ConfigurationError: If server or fips_git_port is malformed
            TunnelIOError: If a file cannot be written
            CertificateFetchError: If the server certificate cannot be fetched
            ProcessLaunchError: If stunnel cannot be started
        """
        if not config.fips:
            logger.debug("FIPS mode disabled, not starting stunnel")
            return

        if not self.paths.binary_exists():
            logger.error("Stunnel binary not found", binary=str(self.paths.binary))
            raise UnsupportedPlatformError(self.paths.binary)

        server = _require(config, "server")
        fips_git_port = _require(config, "fips_git_port")
        api_port = config.api_port or DEFAULT_API_PORT

        logger.info(
            "Activating FIPS mode",
            server=server,
            fips_git_port=fips_git_port,
            api_port=api_port,
            platform=self.paths.platform.value,
        )

        generate_stunnel_config(server, fips_git_port, self.paths)
        self.state = ActivationState.CONFIG_WRITTEN

        write_stunnel_cert_file(server, api_port, self.paths, self.fetcher)
        self.state = ActivationState.CERT_WRITTEN

        self.launcher.launch(self.paths, child_processes)
        self.state = ActivationState.LAUNCHED

        logger.info("FIPS mode active", state=self.state.value)


def _require(config: RuntimeConfig, field: str) -> str:
    value = getattr(config, field)
    if not value:
        logger.error("Required FIPS setting missing", field=field)
        raise MissingRequiredFieldError(field)
    return value


def setup_and_start_stunnel_if_fips_mode(
    config: RuntimeConfig,
    child_processes: ChildProcesses,
    *,
    paths: TunnelPaths | None = None,
    fetcher: CertificateFetcher | None = None,
    launcher: TunnelLauncher | None = None,
) -> ActivationState:
    """Start stunnel when the runtime configuration enables FIPS mode.

    Returns:
        Final activation state (``NOT_STARTED`` when FIPS mode is off)
    """
    activator = FipsActivator(paths=paths, fetcher=fetcher, launcher=launcher)
    activator.activate(config, child_processes)
    return activator.state
