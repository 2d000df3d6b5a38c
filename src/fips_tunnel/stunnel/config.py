"""stunnel configuration generation for FIPS mode."""

from pathlib import Path

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from ..common.exceptions import ConfigurationError, TunnelIOError
from ..common.logging import get_logger
from ..common.utils import validate_directive_value, validate_port
from ..paths import Platform, TunnelPaths

logger = get_logger(__name__)

# Port the Automate git proxy listens on behind stunnel
GIT_PROXY_PORT = 8989


class StunnelConfig(BaseModel):
    """Pydantic model for the client-side stunnel configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    server: str = Field(..., description="Automate server host")
    fips_git_port: str = Field(..., description="Local accept port")
    log_file: Path = Field(..., description="stunnel output file")
    cert_file: Path = Field(..., description="Trusted CA file")
    platform: Platform = Field(default=Platform.POSIX)

    @field_validator("server", "fips_git_port")
    @classmethod
    def validate_single_line(cls, v: str, info: ValidationInfo) -> str:
        """Reject values that would break the one-directive-per-line format."""
        return validate_directive_value(v, info.field_name or "value")

    @field_validator("fips_git_port")
    @classmethod
    def validate_accept_port(cls, v: str) -> str:
        return validate_port(v, "FIPS git port")

    @classmethod
    def from_paths(
        cls, server: str, fips_git_port: str, paths: TunnelPaths
    ) -> "StunnelConfig":
        """Build a config using the log and certificate locations in ``paths``.

        Raises:
            ConfigurationError: If server or port is empty, multi-line
                or the port is out of range
        """
        try:
            return cls(
                server=server,
                fips_git_port=fips_git_port,
                log_file=paths.log_file,
                cert_file=paths.cert_file,
                platform=paths.platform,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid stunnel configuration: {e}") from e

    def directives(self) -> list[str]:
        """Return the configuration lines in file order."""
        lines = [
            "fips = yes",
            "client = yes",
            f"output = {self.log_file}",
        ]

        # The Windows service manages foreground behaviour itself
        if self.platform is not Platform.WINDOWS:
            lines.append("foreground = quiet")

        lines.extend(
            [
                "[git]",
                f"accept = {self.fips_git_port}",
                f"connect = {self.server}:{GIT_PROXY_PORT}",
                f"checkHost = {self.server}",
                "verifyChain = yes",
                "verify = 3",
                f"CAfile = {self.cert_file}",
            ]
        )
        return lines

    def render(self) -> str:
        """Render the configuration text with platform line endings."""
        newline = self.platform.newline
        return "".join(line + newline for line in self.directives())


def _create_parent(path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise TunnelIOError("create directory", path.parent, e) from e


def generate_stunnel_config(
    server: str, fips_git_port: str, paths: TunnelPaths
) -> Path:
    """Write the stunnel configuration file, replacing any previous one.

    Args:
        server: Automate server host
        fips_git_port: Local port stunnel accepts git connections on
        paths: Resolved tunnel file locations

    Returns:
        Path of the written configuration file

    Raises:
        ConfigurationError: If server or port is invalid
        TunnelIOError: If a directory or the file cannot be written
    """
    config = StunnelConfig.from_paths(server, fips_git_port, paths)

    _create_parent(paths.config_file)
    _create_parent(paths.log_file)

    # newline="" keeps the rendered line endings byte-exact on every host
    try:
        with open(paths.config_file, "w", encoding="utf-8", newline="") as f:
            f.write(config.render())
    except OSError as e:
        raise TunnelIOError("write config", paths.config_file, e) from e

    logger.info(
        "Stunnel config written",
        path=str(paths.config_file),
        server=config.server,
        fips_git_port=config.fips_git_port,
        platform=config.platform.value,
    )
    return paths.config_file
