"""
Configuration file handling for xkpasswd.

The configuration file is a flat JSON object. Its values fill in whatever
was not given on the command line; built-in defaults and presets fill in
the rest.
"""

import os
import json
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

from xkpasswd.core.settings import Language, Preset, WordTransform
from xkpasswd.utils.exceptions import ConfigError
from xkpasswd.utils.logger import debug

CONFIG_FILE_NAME = "xkpasswd.json"

NUMBER_KEYS = [
    "words_count",
    "word_min",
    "word_max",
    "digits_before",
    "digits_after",
    "symbols_before",
    "symbols_after",
    "adaptive_length",
]
STRING_KEYS = ["separators", "digits", "symbols", "log_file"]

T = TypeVar("T")


def parse_padding(value: str) -> str:
    """Validate a padding strategy name"""
    name = value.strip().lower()
    if name not in ("fixed", "adaptive"):
        raise ValueError(f"invalid variant: {value}")
    return name


def parse_verbosity(value: str) -> str:
    name = value.strip().lower()
    if name not in ("debug", "info", "warning", "error", "critical"):
        raise ValueError(f"invalid variant: {value}")
    return name


ENUM_KEYS: Dict[str, Callable[[str], Any]] = {
    "padding": parse_padding,
    "preset": Preset.from_name,
    "lang": Language.from_code,
    "verbosity": parse_verbosity,
}


def config_search_paths() -> List[str]:
    """Candidate config file locations, most specific first"""
    paths = []
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(os.path.join(xdg_config, CONFIG_FILE_NAME))
    paths.append(os.path.join(os.path.expanduser("~"), ".config", CONFIG_FILE_NAME))
    paths.append(os.path.join(os.path.expanduser("~"), "." + CONFIG_FILE_NAME))
    return paths


def find_config_path() -> Optional[str]:
    """Path of the first existing default config file, if any"""
    for path in config_search_paths():
        if os.path.exists(path):
            return path
    return None


class Config:
    """Configuration manager for xkpasswd"""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize with an optional explicit path to a config file

        An explicit path must exist. Without one, the default locations are
        searched and a missing file is not an error.
        """
        self.config: Dict[str, Any] = {}

        if config_path:
            if not os.path.exists(config_path):
                raise ConfigError(f"Config file not found: {config_path}")
            self.config_path = config_path
            debug(f"found config file at custom path {config_path}")
            self.load()
        else:
            found = find_config_path()
            self.config_path = found or config_search_paths()[-1]
            if found:
                debug(f"found config file at default path {found}")
                self.load()
            else:
                debug("config file at default path not found, ignoring")

    def load(self) -> None:
        """Load configuration from file"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                user_config = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Error loading config file: {e}")

        if not isinstance(user_config, dict):
            raise ConfigError("Error loading config file: expected a JSON object")
        self.config.update(user_config)

    def save(self) -> None:
        """Save current configuration to file"""
        try:
            config_dir = os.path.dirname(self.config_path)
            if config_dir:
                os.makedirs(config_dir, exist_ok=True)

            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.config, f, indent=2)
        except OSError as e:
            raise ConfigError(f"Error saving config file: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a raw configuration value"""
        return self.config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value"""
        self.config[key] = value

    def update(self, config_dict: Dict[str, Any]) -> None:
        """Update multiple configuration values"""
        self.config.update(config_dict)

    def as_dict(self) -> Dict[str, Any]:
        """Return the configuration as a dictionary"""
        return self.config.copy()

    def __getitem__(self, key: str) -> Any:
        return self.config[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.config[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self.config

    def get_number(self, key: str) -> Optional[int]:
        """Non-negative integer value of ``key``; anything else is ignored"""
        value = self.config.get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        if value < 0:
            debug(f"ignoring negative value {value} for '{key}'")
            return None
        return value

    def get_str(self, key: str) -> Optional[str]:
        """String value of ``key``; other types are ignored"""
        value = self.config.get(key)
        return value if isinstance(value, str) else None

    def get_enum(self, key: str, parse: Callable[[str], T]) -> Optional[T]:
        """Parsed enum value of ``key``

        Raises:
            ConfigError: If the value is a string naming no known variant
        """
        value = self.get_str(key)
        if value is None:
            return None
        try:
            return parse(value)
        except ValueError as e:
            raise ConfigError(str(e), field=key)

    def get_transforms(self) -> Optional[WordTransform]:
        """Word transforms listed under ``transforms``

        Raises:
            ConfigError: If the list holds a non-string or an unknown name
        """
        value = self.config.get("transforms")
        if not isinstance(value, list):
            return None

        names = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigError(
                    f"Invalid data type, expect string but got '{json.dumps(item)}'",
                    field="transforms",
                )
            names.append(item)

        try:
            return WordTransform.from_names(names)
        except ValueError as e:
            raise ConfigError(str(e), field="transforms")

    def lookup(self, key: str) -> Any:
        """Typed value of a recognised key, or None when absent or ignored"""
        if key in NUMBER_KEYS:
            return self.get_number(key)
        if key in STRING_KEYS:
            return self.get_str(key)
        if key in ENUM_KEYS:
            return self.get_enum(key, ENUM_KEYS[key])
        if key == "transforms":
            return self.get_transforms()
        return None

    def merge(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Fill the unset entries of ``values`` from the config file

        Args:
            values: Option values from the command line; None means unset

        Returns:
            A new dictionary where command-line values win over file values
        """
        merged = dict(values)
        for key in NUMBER_KEYS + STRING_KEYS + list(ENUM_KEYS) + ["transforms"]:
            if merged.get(key) is not None:
                debug(f"loading '{key}' from command arguments")
                continue

            value = self.lookup(key)
            if value is None:
                debug(f"loading default value for '{key}'")
            else:
                debug(f"loading '{key}' from config file")
                merged[key] = value
        return merged


def to_config_value(value: Union[WordTransform, Preset, Language, Any]) -> Any:
    """Convert an option value into its JSON form"""
    if isinstance(value, WordTransform):
        return [member.cli_name for member in value.members()]
    if isinstance(value, (Preset, Language)):
        return value.value
    return value
