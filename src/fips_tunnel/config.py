"""Runtime configuration consumed by the FIPS tunnel bootstrap."""

from pydantic import BaseModel, ConfigDict, Field

from .common.logging import get_logger

logger = get_logger(__name__)


class RuntimeConfig(BaseModel):
    """Subset of the application configuration that FIPS mode reads.

    The application owns loading and persisting this object. Only
    ``set_fips_git_port`` produces a changed copy; every other field is
    read-only from the tunnel's point of view.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True, validate_assignment=True, extra="ignore"
    )

    fips: bool | None = Field(default=None, description="Enable FIPS mode")
    server: str | None = Field(default=None, description="Automate server host")
    fips_git_port: str | None = Field(
        default=None, description="Local port stunnel accepts git traffic on"
    )
    api_port: str | None = Field(default=None, description="Automate API port")

    def set_fips_git_port(self, fips_git_port: str) -> "RuntimeConfig":
        """Return a copy of this config with the FIPS git port filled in."""
        return self.model_copy(update={"fips_git_port": fips_git_port})


def merge_fips_options_and_config(
    fips: bool, fips_git_port: str, config: RuntimeConfig
) -> RuntimeConfig:
    """Merge command line FIPS options into the runtime configuration.

    An explicit ``fips`` value already present in ``config`` wins over the
    option. The git port is always taken from the option.

    Args:
        fips: FIPS flag from the command line
        fips_git_port: FIPS git port from the command line
        config: Existing runtime configuration (left untouched)

    Returns:
        Updated runtime configuration
    """
    if config.fips is None:
        config = config.model_copy(update={"fips": fips})

    merged = config.set_fips_git_port(fips_git_port)
    logger.debug(
        "FIPS options merged",
        fips=merged.fips,
        fips_git_port=merged.fips_git_port,
    )
    return merged
