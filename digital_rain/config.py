# digital_rain/config.py
# Description: Configuration management for the digital_rain application.
#
# Imports
import copy
import os
import sys
import threading
if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union
#
# Third-Party Imports
import toml
from loguru import logger
#
# Local Imports
from digital_rain.Rain.settings import RainSettings
from digital_rain.Utils.logging_config import is_valid_log_level
#
#######################################################################################################################
#
# Functions:

# --- Path to the configuration file ---
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "digital_rain" / "config.toml"
CONFIG_PATH_ENV_VAR = "DIGITAL_RAIN_CONFIG"
LOG_LEVEL_ENV_VAR = "DIGITAL_RAIN_LOG_LEVEL"

# --- Default configuration (used when the TOML file omits a key) ---
# A value of None means "derive it", so those keys are not written to the file.
DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    "rain": {
        "effect": "matrix_rain",
        "screen_width": 1400,
        "screen_height": 700,
        "cell_size": 14,
        "frame_delay": 30,
        "max_tail_length": 62,
        "overlap_allowed": False,
        "max_raindrops": 200,
        "force_lane_sizing": True,
        "length_color_ratio": None,
        "glyph_first_code_point": 0x30A0,
        "glyph_alphabet_size": 96,
        "fit_to_terminal": True,
        "seed": None,
    },
    "logging": {
        "level": "INFO",
        "log_file": None,
        "rotation": "10 MB",
        "retention": "7 days",
    },
}

_RAIN_TYPES = {
    "screen_width": int,
    "screen_height": int,
    "cell_size": int,
    "frame_delay": int,
    "max_tail_length": int,
    "overlap_allowed": bool,
    "max_raindrops": int,
    "force_lane_sizing": bool,
    "length_color_ratio": int,
    "glyph_first_code_point": int,
    "glyph_alphabet_size": int,
    "fit_to_terminal": bool,
    "seed": int,
}


def deep_merge_dicts(base: Dict, update: Dict) -> Dict:
    """Recursively merges update_dict into base_dict."""
    merged = copy.deepcopy(base)
    for key, value in update.items():
        if isinstance(value, dict) and key in merged and isinstance(merged[key], dict):
            merged[key] = deep_merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def _get_typed_value(data_dict: Dict, key: str, default: Any, target_type: type = str) -> Any:
    """Helper to get value from dict and cast to type, with logging for type errors."""
    value = data_dict.get(key, default)
    if value is default and default is not None:  # if value is the default, it's already typed
        return value
    if value is None:  # If key is missing and default is None
        return None

    try:
        if target_type == bool:
            if isinstance(value, bool):
                return value
            return str(value).lower() in ['true', '1', 't', 'y', 'yes']
        if target_type == Path:
            return Path(value) if value else default
        if target_type == int and isinstance(value, bool):
            raise TypeError("booleans are not accepted as integers")
        if target_type == int and isinstance(value, float) and not value.is_integer():
            raise ValueError("fractional values are not accepted as integers")
        return target_type(value)
    except (ValueError, TypeError) as e:
        logger.warning(f"Config key '{key}' has value '{value}' which could not be converted to {target_type}. Using default: '{default}'. Error: {e}")
        return default


def resolve_config_path(path: Optional[Union[str, Path]] = None) -> Path:
    """Explicit path first, then the environment variable, then the default location."""
    if path:
        return Path(path).expanduser()
    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def _writable_defaults() -> Dict[str, Dict[str, Any]]:
    # TOML has no null, so derived values are left out of the written file
    return {
        section: {key: value for key, value in values.items() if value is not None}
        for section, values in DEFAULT_CONFIG.items()
    }


def ensure_config_exists(path: Optional[Union[str, Path]] = None) -> Path:
    """Write the default configuration to ``path`` unless a file is already there."""
    config_path = resolve_config_path(path)
    if config_path.exists():
        logger.debug(f"Config file already exists at {config_path}")
        return config_path

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        f.write("# digital_rain configuration\n")
        f.write("# Sizes are in pixels, frame_delay in milliseconds.\n\n")
        toml.dump(_writable_defaults(), f)
    logger.info(f"Created default config file at {config_path}")
    return config_path


# Global cache to avoid re-reading the file
_CONFIG_CACHE: Optional[Dict[str, Any]] = None
_CONFIG_CACHE_PATH: Optional[Path] = None
_CONFIG_CACHE_LOCK = threading.Lock()


def load_config(path: Optional[Union[str, Path]] = None, force_reload: bool = False) -> Dict[str, Any]:
    """
    Load the raw configuration dictionary.

    Programmatic defaults are used as a base and the TOML file, when present,
    is merged on top. A missing or unreadable file is not an error; the
    defaults apply.

    Args:
        path: Config file to read. Defaults to DIGITAL_RAIN_CONFIG or
            ~/.config/digital_rain/config.toml.
        force_reload: If True, bypasses the cache and reloads from disk.
    """
    global _CONFIG_CACHE, _CONFIG_CACHE_PATH
    config_path = resolve_config_path(path)

    with _CONFIG_CACHE_LOCK:
        if _CONFIG_CACHE is not None and not force_reload and _CONFIG_CACHE_PATH == config_path:
            logger.debug("load_config: Returning cached configuration (cache hit)")
            return _CONFIG_CACHE

        loaded_config = copy.deepcopy(DEFAULT_CONFIG)
        if not config_path.exists():
            logger.info(f"Config file not found at {config_path}. Using built-in defaults.")
        else:
            logger.info(f"Attempting to load config from: {config_path}")
            try:
                with open(config_path, "rb") as f:
                    user_config_from_file = tomllib.load(f)
                loaded_config = deep_merge_dicts(loaded_config, user_config_from_file)
                logger.info(f"Successfully loaded and merged config from {config_path}")
            except tomllib.TOMLDecodeError as e:
                logger.error(f"Error decoding TOML config file {config_path}: {e}. Using built-in defaults.")
            except OSError as e:
                logger.error(f"Could not read config file {config_path}: {e}. Using built-in defaults.")

        _CONFIG_CACHE = loaded_config
        _CONFIG_CACHE_PATH = config_path
        return loaded_config


def get_setting(section: str, key: str, default: Any = None, path: Optional[Union[str, Path]] = None) -> Any:
    """Helper to get a specific setting from the loaded configuration."""
    config = load_config(path)
    section_data = config.get(section)
    if isinstance(section_data, dict):
        return section_data.get(key, default)
    return default


def get_effect_name(path: Optional[Union[str, Path]] = None) -> str:
    return str(get_setting("rain", "effect", DEFAULT_CONFIG["rain"]["effect"], path=path))


def load_settings(path: Optional[Union[str, Path]] = None, force_reload: bool = False,
                  **overrides: Any) -> RainSettings:
    """
    Build the RainSettings for this run from the [rain] table.

    Keyword overrides (for example a ``seed`` given on the command line) take
    precedence over the file. The result is validated, so an impossible
    combination is rejected here at startup.

    Raises:
        RainConfigError: If the configured parameters cannot be honoured.
    """
    rain_section = load_config(path, force_reload=force_reload).get("rain", {})
    if not isinstance(rain_section, dict):
        logger.warning("Config section [rain] is not a table; using defaults")
        rain_section = {}

    defaults = DEFAULT_CONFIG["rain"]
    values = {
        key: _get_typed_value(rain_section, key, defaults[key], target_type)
        for key, target_type in _RAIN_TYPES.items()
    }
    values.update({key: value for key, value in overrides.items() if value is not None})

    unknown = set(rain_section) - set(defaults)
    if unknown:
        logger.warning(f"Ignoring unknown [rain] keys: {sorted(unknown)}")

    return RainSettings(**values).validate()


def get_logging_settings(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """The [logging] table merged with defaults; the environment overrides the level."""
    logging_section = load_config(path).get("logging", {})
    if not isinstance(logging_section, dict):
        logging_section = {}
    merged = deep_merge_dicts(DEFAULT_CONFIG["logging"], logging_section)
    env_level = os.environ.get(LOG_LEVEL_ENV_VAR)
    if env_level:
        merged["level"] = env_level
    level = str(merged["level"]).upper()
    if not is_valid_log_level(level):
        default_level = DEFAULT_CONFIG["logging"]["level"]
        logger.warning(f"Config key 'level' has unknown log level '{level}'. Using default: '{default_level}'.")
        level = default_level
    merged["level"] = level
    return merged


def clear_config_cache() -> None:
    global _CONFIG_CACHE, _CONFIG_CACHE_PATH
    with _CONFIG_CACHE_LOCK:
        _CONFIG_CACHE = None
        _CONFIG_CACHE_PATH = None

#
# End of config.py
#######################################################################################################################
