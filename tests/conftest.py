"""Shared pytest fixtures for FIPS tunnel tests."""

from unittest.mock import Mock

import pytest

from fips_tunnel.paths import Platform, TunnelPaths

FAKE_PEM = (
    "-----BEGIN CERTIFICATE-----\n"
    "MIIBszCCAVmgAwIBAgIUQ2hlZkF1dG9tYXRlVGVzdENlcnQwCgYIKoZIzj0EAwIw\n"
    "-----END CERTIFICATE-----\n"
)


@pytest.fixture
def make_paths(tmp_path):
    """Factory for TunnelPaths rooted in a temporary directory.

    Returns:
        Callable taking ``platform`` and ``with_binary``
    """

    def _make(platform=Platform.POSIX, with_binary=True):
        bin_dir = "bin" if with_binary else "missing-bin"
        binary = tmp_path / bin_dir / "stunnel"
        if with_binary:
            binary.parent.mkdir(parents=True, exist_ok=True)
            binary.touch(mode=0o755)

        state_dir = tmp_path / "home" / ".chefdk"
        return TunnelPaths(
            platform=platform,
            binary=binary,
            config_file=state_dir / "etc" / "stunnel.conf",
            log_file=state_dir / "log" / "stunnel.log",
            cert_file=state_dir / "etc" / "automate-nginx-cert.pem",
        )

    return _make


@pytest.fixture
def posix_paths(make_paths):
    """TunnelPaths for POSIX with an installed stunnel binary."""
    return make_paths()


@pytest.fixture
def windows_paths(make_paths):
    """TunnelPaths for Windows with an installed stunnel binary."""
    return make_paths(platform=Platform.WINDOWS)


@pytest.fixture
def missing_binary_paths(make_paths):
    """TunnelPaths whose stunnel binary does not exist."""
    return make_paths(with_binary=False)


@pytest.fixture
def fake_pem():
    """PEM document served by ``mock_fetcher``."""
    return FAKE_PEM


@pytest.fixture
def mock_fetcher(fake_pem):
    """Certificate fetcher returning a fixed PEM document.

    Returns:
        Mock: Fetcher whose ``fetch`` returns the fake PEM
    """
    fetcher = Mock()
    fetcher.fetch.return_value = fake_pem
    return fetcher


@pytest.fixture
def mock_launcher():
    """Launcher that records calls without starting anything."""
    return Mock()


@pytest.fixture
def mock_process():
    """Create a mock process object for testing.

    Returns:
        Mock: Mock process with common attributes
    """
    process = Mock()
    process.pid = 12345
    process.poll.return_value = None
    return process
