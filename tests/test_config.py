"""Tests for TOML configuration loading."""
from pathlib import Path

import pytest

from necrosis.config import CarvingConfig, Config, DefaultsConfig, default_config, load_config, parse_config

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "default_config.toml"


def write_config(tmp_path, text):
    path = tmp_path / "config.toml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:
    """Reading and validating config files."""

    def test_shipped_file_matches_built_in_defaults(self):
        assert load_config(DEFAULT_CONFIG_PATH) == default_config()

    def test_empty_document_gives_defaults(self):
        assert parse_config({}) == Config()

    def test_partial_override(self, tmp_path):
        config = load_config(write_config(tmp_path, "[defaults]\nsize = 20\nseed = 9\n"))
        assert config.defaults == DefaultsConfig(size=20, seed=9)
        assert config.carving == CarvingConfig()

    def test_weights_replace_defaults(self, tmp_path):
        config = load_config(write_config(tmp_path, "[evaluation.weights]\ndensity = 2\n"))
        assert dict(config.evaluation.weights) == {"density": 2.0}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.toml")

    @pytest.mark.parametrize(
        "text, message",
        [
            ("[carving]\nroom_min = 5\nroom_max = 2\n", "room_min must not exceed"),
            ("[carving]\nroom_min_height = 3\nroom_max_height = 2\n", "room_min_height"),
            ("[carving]\nturn_chance = 1.5\n", "between 0 and 1"),
            ("[carving]\nplacement_attempts = 0\n", "placement_attempts"),
            ("[limits]\nmax_size = 0\n", "max_size"),
            ("[defaults]\nsize = \"big\"\n", "defaults.size must be an integer"),
            ("[defaults]\nseed = 1.5\n", "defaults.seed"),
            ("[logging]\nlevel = \"verbose\"\n", "logging.level"),
            ("defaults = 3\n", "[defaults] must be a table"),
        ],
    )
    def test_invalid_values(self, tmp_path, text, message):
        with pytest.raises(ValueError) as excinfo:
            load_config(write_config(tmp_path, text))
        assert message in str(excinfo.value)

    def test_logging_level_is_normalized(self, tmp_path):
        config = load_config(write_config(tmp_path, "[logging]\nlevel = \"debug\"\n"))
        assert config.logging.level == "DEBUG"
