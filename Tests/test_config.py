# test_config.py
# Tests for TOML configuration loading and RainSettings construction
#
import toml
import pytest

from digital_rain.Rain import RainConfigError, RainSettings
from digital_rain.config import (
    CONFIG_PATH_ENV_VAR,
    DEFAULT_CONFIG,
    deep_merge_dicts,
    ensure_config_exists,
    get_effect_name,
    get_logging_settings,
    get_setting,
    load_config,
    load_settings,
    resolve_config_path,
)


@pytest.fixture
def write_config(temp_file):
    def _write(content: str):
        return temp_file(name="config", suffix=".toml", content=content)
    return _write


class TestDeepMerge:

    def test_nested_tables_are_merged(self):
        base = {"rain": {"cell_size": 14, "frame_delay": 30}, "logging": {"level": "INFO"}}
        merged = deep_merge_dicts(base, {"rain": {"frame_delay": 50}})
        assert merged == {"rain": {"cell_size": 14, "frame_delay": 50}, "logging": {"level": "INFO"}}

    def test_base_is_not_modified(self):
        base = {"rain": {"cell_size": 14}}
        deep_merge_dicts(base, {"rain": {"cell_size": 7}})
        assert base["rain"]["cell_size"] == 14


class TestLoadSettings:

    def test_missing_file_gives_defaults(self, isolated_temp_dir):
        settings = load_settings(isolated_temp_dir / "absent.toml")
        assert settings == RainSettings()

    def test_file_values_override_defaults(self, write_config):
        path = write_config(
            "[rain]\n"
            "frame_delay = 50\n"
            "max_tail_length = 20\n"
            "overlap_allowed = true\n"
            "max_raindrops = 300\n"
        )
        settings = load_settings(path)
        assert settings.frame_delay == 50
        assert settings.max_tail_length == 20
        assert settings.overlap_allowed is True
        assert settings.pool_size == 300
        assert settings.cell_size == 14

    def test_unconvertible_value_falls_back_to_default(self, write_config):
        path = write_config('[rain]\nscreen_width = "wide"\n')
        assert load_settings(path).screen_width == 1400

    def test_boolean_is_not_an_integer(self, write_config):
        path = write_config("[rain]\ncell_size = true\n")
        assert load_settings(path).cell_size == 14

    def test_fractional_value_falls_back_to_default(self, write_config):
        path = write_config("[rain]\ncell_size = 14.9\nframe_delay = 40.0\n")
        settings = load_settings(path)
        assert settings.cell_size == 14
        assert settings.frame_delay == 40

    def test_fractional_value_is_not_truncated(self, write_config):
        path = write_config("[rain]\nmax_tail_length = 20.5\n")
        assert load_settings(path).max_tail_length == 62

    def test_impossible_parameters_are_rejected(self, write_config):
        path = write_config("[rain]\nmax_tail_length = 0\n")
        with pytest.raises(RainConfigError):
            load_settings(path)

    def test_too_many_exclusive_drops_are_rejected(self, write_config):
        path = write_config(
            "[rain]\n"
            "force_lane_sizing = false\n"
            "max_raindrops = 500\n"
        )
        with pytest.raises(RainConfigError, match="lanes"):
            load_settings(path)

    def test_glyph_block_outside_unicode_is_rejected(self, write_config):
        path = write_config("[rain]\nglyph_first_code_point = 1114112\n")
        with pytest.raises(RainConfigError):
            load_settings(path)

    def test_corrupt_file_gives_defaults(self, write_config):
        path = write_config("[rain\nframe_delay = ")
        assert load_settings(path) == RainSettings()

    def test_overrides_take_precedence(self, write_config):
        path = write_config("[rain]\nseed = 1\n")
        assert load_settings(path, seed=99).seed == 99
        assert load_settings(path, seed=None).seed == 1

    def test_unknown_keys_are_ignored(self, write_config):
        path = write_config("[rain]\nsparkle = true\n")
        assert load_settings(path) == RainSettings()


class TestLoadConfig:

    def test_cached_until_forced(self, write_config):
        path = write_config("[rain]\nframe_delay = 40\n")
        first = load_config(path)
        assert load_config(path) is first

        path.write_text("[rain]\nframe_delay = 60\n")
        assert load_config(path)["rain"]["frame_delay"] == 40
        assert load_config(path, force_reload=True)["rain"]["frame_delay"] == 60

    def test_get_setting(self, write_config):
        path = write_config('[rain]\neffect = "matrix_rain"\n')
        assert get_setting("rain", "effect", path=path) == "matrix_rain"
        assert get_setting("nope", "effect", "fallback", path=path) == "fallback"
        assert get_effect_name(path) == "matrix_rain"

    def test_env_var_selects_file(self, monkeypatch, write_config):
        path = write_config("[rain]\nframe_delay = 45\n")
        monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(path))
        assert resolve_config_path() == path
        assert load_settings().frame_delay == 45

    def test_explicit_path_beats_env_var(self, monkeypatch, isolated_temp_dir):
        monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(isolated_temp_dir / "env.toml"))
        explicit = isolated_temp_dir / "explicit.toml"
        assert resolve_config_path(explicit) == explicit


class TestEnsureConfigExists:

    def test_writes_defaults(self, isolated_temp_dir):
        path = isolated_temp_dir / "nested" / "config.toml"
        assert ensure_config_exists(path) == path

        written = toml.load(path)
        assert written["rain"]["cell_size"] == DEFAULT_CONFIG["rain"]["cell_size"]
        assert "seed" not in written["rain"]
        assert "length_color_ratio" not in written["rain"]
        assert load_settings(path) == RainSettings()

    def test_does_not_overwrite(self, write_config):
        path = write_config("[rain]\nframe_delay = 99\n")
        ensure_config_exists(path)
        assert "frame_delay = 99" in path.read_text()


class TestLoggingSettings:

    def test_defaults(self, isolated_temp_dir):
        logging_settings = get_logging_settings(isolated_temp_dir / "absent.toml")
        assert logging_settings["level"] == "INFO"
        assert logging_settings["log_file"] is None

    def test_level_from_file_is_uppercased(self, write_config):
        path = write_config('[logging]\nlevel = "debug"\n')
        assert get_logging_settings(path)["level"] == "DEBUG"

    def test_environment_overrides_level(self, monkeypatch, write_config):
        path = write_config('[logging]\nlevel = "debug"\n')
        monkeypatch.setenv("DIGITAL_RAIN_LOG_LEVEL", "warning")
        assert get_logging_settings(path)["level"] == "WARNING"

    def test_unknown_level_falls_back_to_default(self, write_config):
        path = write_config('[logging]\nlevel = "chatty"\n')
        assert get_logging_settings(path)["level"] == "INFO"

    def test_unknown_environment_level_falls_back_to_default(self, monkeypatch, isolated_temp_dir):
        monkeypatch.setenv("DIGITAL_RAIN_LOG_LEVEL", "bogus")
        assert get_logging_settings(isolated_temp_dir / "absent.toml")["level"] == "INFO"
