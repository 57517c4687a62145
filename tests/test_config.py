"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest

from salonslots.config import AppConfig, DefaultsConfig
from salonslots.domain.exceptions import ConfigError


def _write(tmp_path: Path, text: str) -> Path:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(text, encoding="utf-8")
    return config_path


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        config = AppConfig()

        assert config.timezone == "America/Sao_Paulo"
        assert config.defaults.slot_interval_minutes == 30
        assert config.defaults.service_duration_minutes == 30
        assert config.log_level == "WARNING"

    def test_load_from_yaml(self, tmp_path):
        config_path = _write(
            tmp_path,
            "data_file: data/salon.json\n"
            "timezone: Europe/Lisbon\n"
            "log_level: debug\n"
            "defaults:\n"
            "  slot_interval_minutes: 15\n",
        )

        config = AppConfig.load_from_yaml(config_path)

        assert config.timezone == "Europe/Lisbon"
        assert config.log_level == "DEBUG"
        assert config.defaults.slot_interval_minutes == 15
        assert config.resolve_data_file(config_path) == tmp_path / "data" / "salon.json"

    def test_empty_file_uses_defaults(self, tmp_path):
        config = AppConfig.load_from_yaml(_write(tmp_path, ""))

        assert config.defaults == DefaultsConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "nope.yaml")

    @pytest.mark.parametrize(
        "text",
        [
            "timezone: Mars/Olympus_Mons\n",
            "log_level: LOUD\n",
            "defaults:\n  slot_interval_minutes: 0\n",
            "defaults:\n  service_duration_minutes: -5\n",
            "- just\n- a list\n",
            "timezone: [unclosed\n",
        ],
    )
    def test_invalid_config(self, tmp_path, text):
        with pytest.raises(ConfigError):
            AppConfig.load_from_yaml(_write(tmp_path, text))

    def test_absolute_data_file_is_kept(self, tmp_path):
        config = AppConfig(data_file=tmp_path / "salon.json")

        assert config.resolve_data_file(Path("/elsewhere/config.yaml")) == tmp_path / "salon.json"
