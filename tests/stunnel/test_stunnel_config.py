"""Tests for stunnel configuration generation."""

from unittest.mock import patch

import pytest

from fips_tunnel.common.exceptions import ConfigurationError, TunnelIOError
from fips_tunnel.paths import Platform
from fips_tunnel.stunnel.config import (
    GIT_PROXY_PORT,
    StunnelConfig,
    generate_stunnel_config,
)


def expected_posix(paths):
    return (
        "fips = yes\n"
        "client = yes\n"
        f"output = {paths.log_file}\n"
        "foreground = quiet\n"
        "[git]\n"
        "accept = 36534\n"
        "connect = automate.test:8989\n"
        "checkHost = automate.test\n"
        "verifyChain = yes\n"
        "verify = 3\n"
        f"CAfile = {paths.cert_file}\n"
    )


def expected_windows(paths):
    return (
        "fips = yes\r\n"
        "client = yes\r\n"
        f"output = {paths.log_file}\r\n"
        "[git]\r\n"
        "accept = 36534\r\n"
        "connect = automate.test:8989\r\n"
        "checkHost = automate.test\r\n"
        "verifyChain = yes\r\n"
        "verify = 3\r\n"
        f"CAfile = {paths.cert_file}\r\n"
    )


class TestStunnelConfig:
    """Test StunnelConfig rendering."""

    def test_git_proxy_port_is_fixed(self):
        """Upstream git proxy port is 8989"""
        assert GIT_PROXY_PORT == 8989

    def test_render_posix(self, posix_paths):
        """POSIX config runs in the foreground and uses LF"""
        config = StunnelConfig.from_paths("automate.test", "36534", posix_paths)
        assert config.render() == expected_posix(posix_paths)

    def test_render_windows(self, windows_paths):
        """Windows config omits foreground and uses CRLF"""
        config = StunnelConfig.from_paths("automate.test", "36534", windows_paths)
        assert config.render() == expected_windows(windows_paths)

    def test_directives_order(self, posix_paths):
        """Directives keep their fixed order"""
        config = StunnelConfig.from_paths("automate.test", "36534", posix_paths)
        keys = [line.split(" = ")[0] for line in config.directives()]
        assert keys == [
            "fips",
            "client",
            "output",
            "foreground",
            "[git]",
            "accept",
            "connect",
            "checkHost",
            "verifyChain",
            "verify",
            "CAfile",
        ]

    @pytest.mark.parametrize("server", ["", "   ", "evil.test\nverify = 0"])
    def test_rejects_invalid_server(self, posix_paths, server):
        """Empty or multi-line server values are rejected"""
        with pytest.raises(ConfigurationError):
            StunnelConfig.from_paths(server, "36534", posix_paths)

    def test_rejects_multiline_port(self, posix_paths):
        """Port values spanning lines are rejected"""
        with pytest.raises(ConfigurationError):
            StunnelConfig.from_paths("automate.test", "36534\r\nfips = no", posix_paths)

    @pytest.mark.parametrize("port", ["0", "65536", "git"])
    def test_rejects_invalid_port(self, posix_paths, port):
        """Accept port must be a valid TCP port"""
        with pytest.raises(ConfigurationError, match="FIPS git port"):
            StunnelConfig.from_paths("automate.test", port, posix_paths)


class TestGenerateStunnelConfig:
    """Test writing the stunnel configuration file."""

    def test_writes_posix_config(self, posix_paths):
        """Generated file matches the canonical POSIX directive sequence"""
        path = generate_stunnel_config("automate.test", "36534", posix_paths)

        assert path == posix_paths.config_file
        assert path.read_bytes() == expected_posix(posix_paths).encode()

    def test_writes_windows_config_with_crlf(self, windows_paths):
        """Generated file keeps CRLF line endings byte-exact"""
        path = generate_stunnel_config("automate.test", "36534", windows_paths)

        assert path.read_bytes() == expected_windows(windows_paths).encode()
        assert windows_paths.platform is Platform.WINDOWS

    def test_creates_parent_directories(self, posix_paths):
        """Config and log directories are created when absent"""
        assert not posix_paths.config_file.parent.exists()
        assert not posix_paths.log_file.parent.exists()

        generate_stunnel_config("automate.test", "36534", posix_paths)

        assert posix_paths.config_file.parent.is_dir()
        assert posix_paths.log_file.parent.is_dir()

    def test_regeneration_is_idempotent(self, posix_paths):
        """Same inputs produce the same bytes every time"""
        generate_stunnel_config("automate.test", "36534", posix_paths)
        first = posix_paths.config_file.read_bytes()

        generate_stunnel_config("automate.test", "36534", posix_paths)

        assert posix_paths.config_file.read_bytes() == first

    def test_overwrites_previous_config(self, posix_paths):
        """Regenerating replaces the whole file"""
        posix_paths.config_file.parent.mkdir(parents=True)
        posix_paths.config_file.write_text("stale\n" * 100)

        generate_stunnel_config("automate.test", "36534", posix_paths)

        assert "stale" not in posix_paths.config_file.read_text()

    def test_mkdir_failure_raises_tunnel_io_error(self, posix_paths):
        """Directory creation failures carry operation and path"""
        with patch("pathlib.Path.mkdir", side_effect=PermissionError("denied")):
            with pytest.raises(TunnelIOError) as exc_info:
                generate_stunnel_config("automate.test", "36534", posix_paths)

        assert exc_info.value.operation == "create directory"
        assert exc_info.value.path == str(posix_paths.config_file.parent)
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_write_failure_raises_tunnel_io_error(self, posix_paths):
        """Config write failures carry operation and path"""
        with patch(
            "fips_tunnel.stunnel.config.open",
            create=True,
            side_effect=PermissionError(13, "Permission denied"),
        ):
            with pytest.raises(TunnelIOError) as exc_info:
                generate_stunnel_config("automate.test", "36534", posix_paths)

        assert exc_info.value.operation == "write config"
        assert exc_info.value.path == str(posix_paths.config_file)
        assert isinstance(exc_info.value.__cause__, PermissionError)
        assert not posix_paths.config_file.exists()
