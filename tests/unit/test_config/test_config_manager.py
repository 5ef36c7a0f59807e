"""
Unit tests for loading configuration defaults from TOML files.
"""

from pathlib import Path

import pytest
import toml

from dumonitor.config import (
    CONFIG_ENV_VAR,
    get_config,
    is_config_loaded,
    set_config_path,
    validate_monitor_config,
)
from dumonitor.models.config import DEFAULT_RATE_MS, MonitorConfig
from dumonitor.validation import ConfigError


@pytest.fixture
def write_config(tmp_path):
    def _write(content):
        path = tmp_path / "dumonitor.toml"
        if isinstance(content, str):
            path.write_text(content)
        else:
            with open(path, "w") as f:
                toml.dump(content, f)
        return path
    return _write


@pytest.mark.unit
class TestValidateMonitorConfig:

    def test_defaults(self):
        config = validate_monitor_config({})
        assert config == MonitorConfig()
        assert config.rate_ms == DEFAULT_RATE_MS
        assert config.output is None

    def test_all_keys(self):
        config = validate_monitor_config(
            {
                "rate_ms": 250,
                "path": "/var/tmp",
                "output": "usage.tsv",
                "log_level": "info",
                "shell": "bash",
                "du_command": "/usr/bin/du",
            }
        )
        assert config.rate_ms == 250
        assert config.path == Path("/var/tmp")
        assert config.output == Path("usage.tsv")
        assert config.log_level == "INFO"
        assert config.shell == "bash"
        assert config.du_command == "/usr/bin/du"

    @pytest.mark.parametrize(
        "data",
        [
            {"rate_ms": -5},
            {"rate_ms": "fast"},
            {"log_level": "CHATTY"},
            {"path": ""},
            {"shell": 3},
        ],
    )
    def test_invalid_values(self, data):
        with pytest.raises(ConfigError):
            validate_monitor_config(data)

    def test_unknown_keys_are_ignored(self, caplog):
        config = validate_monitor_config({"rate_ms": 5, "colour": "blue"})
        assert config.rate_ms == 5
        assert "monitor.colour" in caplog.text


@pytest.mark.unit
class TestConfigManager:

    def test_no_file_gives_defaults(self):
        assert get_config() == MonitorConfig()

    def test_loads_and_caches_file(self, write_config):
        path = write_config({"monitor": {"rate_ms": 20, "path": "/srv"}})
        set_config_path(path)

        config = get_config()

        assert config.rate_ms == 20
        assert config.path == Path("/srv")
        assert is_config_loaded()
        assert get_config() is config

    def test_environment_variable(self, write_config, monkeypatch):
        path = write_config({"monitor": {"rate_ms": 33}})
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert get_config().rate_ms == 33

    def test_missing_file(self, tmp_path):
        set_config_path(tmp_path / "absent.toml")
        with pytest.raises(ConfigError, match="not found"):
            get_config()

    def test_malformed_toml(self, write_config):
        set_config_path(write_config("[monitor\nrate_ms = "))
        with pytest.raises(ConfigError, match="Could not parse"):
            get_config()

    def test_monitor_must_be_table(self, write_config):
        set_config_path(write_config('monitor = "fast"\n'))
        with pytest.raises(ConfigError, match="must be a table"):
            get_config()
