"""Filesystem locations of the stunnel binary and the files it uses."""

import platform
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

WINDOWS_STUNNEL_BINARY = r"C:\opscode\chefdk\embedded\bin\stunnel.exe"
WINDOWS_STUNNEL_CONFIG = r"C:\opscode\chefdk\embedded\stunnel.conf"
POSIX_STUNNEL_BINARY = "/opt/chefdk/embedded/bin/stunnel"

# Relative to the user's home directory
STATE_DIR = ".chefdk"
CONFIG_RELPATH = ("etc", "stunnel.conf")
LOG_RELPATH = ("log", "stunnel.log")
CERT_RELPATH = ("etc", "automate-nginx-cert.pem")


class Platform(str, Enum):
    """Platforms with distinct stunnel handling."""

    WINDOWS = "windows"
    POSIX = "posix"

    @classmethod
    def current(cls) -> "Platform":
        """Detect the platform this interpreter runs on."""
        if platform.system().lower() == "windows":
            return cls.WINDOWS
        return cls.POSIX

    @property
    def newline(self) -> str:
        """Line terminator for generated config files."""
        return "\r\n" if self is Platform.WINDOWS else "\n"


class TunnelPaths(BaseModel):
    """Resolved locations for one platform."""

    model_config = ConfigDict(frozen=True)

    platform: Platform = Field(description="Platform the paths were resolved for")
    binary: Path = Field(description="stunnel executable")
    config_file: Path = Field(description="Generated stunnel configuration")
    log_file: Path = Field(description="stunnel log output")
    cert_file: Path = Field(description="Cached Automate server certificate")

    @classmethod
    def for_platform(
        cls, target: Platform | None = None, home: Path | None = None
    ) -> "TunnelPaths":
        """Resolve the standard ChefDK locations.

        Args:
            target: Platform to resolve for (default: current platform)
            home: Home directory (default: the current user's home)

        Returns:
            Resolved paths
        """
        target = target or Platform.current()
        state_dir = (home or Path.home()) / STATE_DIR

        if target is Platform.WINDOWS:
            binary = Path(WINDOWS_STUNNEL_BINARY)
            config_file = Path(WINDOWS_STUNNEL_CONFIG)
        else:
            binary = Path(POSIX_STUNNEL_BINARY)
            config_file = state_dir.joinpath(*CONFIG_RELPATH)

        return cls(
            platform=target,
            binary=binary,
            config_file=config_file,
            log_file=state_dir.joinpath(*LOG_RELPATH),
            cert_file=state_dir.joinpath(*CERT_RELPATH),
        )

    def binary_exists(self) -> bool:
        """Check whether the stunnel binary is installed."""
        return self.binary.exists()
