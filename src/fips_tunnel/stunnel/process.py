"""Launch strategies for the stunnel process."""

import subprocess
from abc import ABC, abstractmethod
from collections.abc import MutableSequence

from ..common.exceptions import ProcessLaunchError
from ..common.logging import get_logger
from ..paths import Platform, TunnelPaths

logger = get_logger(__name__)

ChildProcesses = MutableSequence["subprocess.Popen[bytes]"]

WINDOWS_SERVICE_STEPS: tuple[tuple[str, ...], ...] = (
    ("-install", "-quiet"),
    ("-start", "-quiet"),
    ("-reload", "-quiet"),
)


class TunnelLauncher(ABC):
    """Starts stunnel with an already written configuration."""

    @abstractmethod
    def launch(self, paths: TunnelPaths, child_processes: ChildProcesses) -> None:
        """Start stunnel.

        Args:
            paths: Resolved tunnel file locations
            child_processes: Caller-owned collection; spawned handles are
                appended and never removed or inspected here

        Raises:
            ProcessLaunchError: If stunnel cannot be started
        """


class PosixTunnelLauncher(TunnelLauncher):
    """Runs stunnel as a child process of the caller."""

    def build_command(self, paths: TunnelPaths) -> list[str]:
        """Build the stunnel command line."""
        return [str(paths.binary), str(paths.config_file)]

    def launch(self, paths: TunnelPaths, child_processes: ChildProcesses) -> None:
        cmd = self.build_command(paths)
        logger.info("Starting stunnel process", command=cmd)
        try:
            process = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            logger.error("Failed to start stunnel process", error=str(e))
            raise ProcessLaunchError(cmd, str(e)) from e

        child_processes.append(process)
        logger.info("Stunnel process started", pid=process.pid)


class WindowsServiceLauncher(TunnelLauncher):
    """Installs, starts and reloads stunnel as a Windows service.

    The service manager owns the tunnel afterwards, so no handle is
    registered. Each step blocks until stunnel exits.

    A step succeeds when its command could be executed, whatever its exit
    status. A step that cannot be executed stops the sequence. A non-zero
    exit status is only logged, since ``-install`` fails on machines where
    the service already exists.
    """

    def build_commands(self, paths: TunnelPaths) -> list[list[str]]:
        """Build the install, start and reload command lines in order."""
        return [[str(paths.binary), *step] for step in WINDOWS_SERVICE_STEPS]

    def launch(self, paths: TunnelPaths, child_processes: ChildProcesses) -> None:
        for cmd in self.build_commands(paths):
            logger.info("Running stunnel service command", command=cmd)
            try:
                result = subprocess.run(
                    cmd, capture_output=True, text=True, check=False
                )
            except OSError as e:
                logger.error("Failed to run stunnel service command", error=str(e))
                raise ProcessLaunchError(cmd, str(e)) from e

            if result.returncode != 0:
                logger.warning(
                    "Stunnel service command exited with non-zero status",
                    command=cmd,
                    returncode=result.returncode,
                    stderr=result.stderr.strip(),
                )

        logger.info("Stunnel service started", binary=str(paths.binary))


def launcher_for_platform(target: Platform) -> TunnelLauncher:
    """Select the launch strategy for a platform."""
    if target is Platform.WINDOWS:
        return WindowsServiceLauncher()
    return PosixTunnelLauncher()
