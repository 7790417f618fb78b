"""Tests for configuration file loading."""

import pytest

from podunit.config import ConfigManager
from podunit.errors import ConfigError


@pytest.fixture
def config_file(tmp_path):
    """A valid configuration file."""
    path = tmp_path / "config.yaml"
    path.write_text("""
executable: /usr/local/bin/podman
backend: api
socket_url: unix:///run/user/1000/podman/podman.sock
log_level: info
defaults:
  container_prefix: ctr
  restart_policy: always
""")
    return path


@pytest.mark.asyncio
class TestConfigManager:
    """Test ConfigManager loading."""

    async def test_load(self, config_file):
        """Test a config file is parsed and validated."""
        manager = ConfigManager(config_file)
        config = await manager.load()

        assert manager.config is config
        assert config.executable == "/usr/local/bin/podman"
        assert config.backend == "api"
        assert config.log_level == "INFO"
        assert config.defaults.container_prefix == "ctr"
        assert config.defaults.pod_prefix == "pod"
        assert config.defaults.restart_policy == "always"

    async def test_missing_explicit_path(self, tmp_path):
        """Test an explicit path must exist."""
        with pytest.raises(ConfigError):
            await ConfigManager(tmp_path / "missing.yaml").load()

    async def test_missing_default_path(self, tmp_path, monkeypatch):
        """Test defaults are used when the default file is absent."""
        monkeypatch.setenv("HOME", str(tmp_path))

        config = await ConfigManager().load()

        assert config.backend == "cli"

    async def test_empty_file(self, tmp_path):
        """Test an empty file yields the defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")

        config = await ConfigManager(path).load()

        assert config.executable == "/usr/bin/podman"

    async def test_invalid_values(self, tmp_path):
        """Test validation errors become ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text("backend: docker\n")

        with pytest.raises(ConfigError) as exc_info:
            await ConfigManager(path).load()

        assert "backend" in str(exc_info.value)

    async def test_invalid_yaml(self, tmp_path):
        """Test malformed YAML becomes ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text("backend: [unclosed\n")

        with pytest.raises(ConfigError):
            await ConfigManager(path).load()

    async def test_non_mapping(self, tmp_path):
        """Test a top-level list is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            await ConfigManager(path).load()
