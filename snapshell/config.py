import os
import sys
import toml
import logging
from dataclasses import dataclass, field
from typing import Optional, Any

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "openai/gpt-oss-20b"
DEFAULT_API_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_TIMEOUT = 120.0

API_KEY_VAR = "SNAPSHELL_OPENROUTER_API_KEY"


def default_config_dir() -> str:
    """Directory holding the optional config.toml."""
    return os.path.join(os.path.expanduser("~"), ".config", "snapshell")


def default_data_dir() -> str:
    """
    Per-user data directory, following each platform's convention.

    Linux honours XDG_DATA_HOME, macOS uses Application Support under the
    reverse-domain identifier, Windows uses LOCALAPPDATA.
    """
    home = os.path.expanduser("~")
    if sys.platform == "darwin":
        return os.path.join(home, "Library", "Application Support", "com.snapshell.snapshell")
    if sys.platform.startswith("win"):
        base = os.environ.get("LOCALAPPDATA") or os.path.join(home, "AppData", "Local")
        return os.path.join(base, "snapshell", "snapshell", "data")
    base = os.environ.get("XDG_DATA_HOME") or os.path.join(home, ".local", "share")
    return os.path.join(base, "snapshell")


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Configuration assembled once at startup and passed to every component."""

    config_file: str = field(default_factory=lambda: os.environ.get(
        "SNAPSHELL_CONFIG_FILE", os.path.join(default_config_dir(), "config.toml")))
    _file_config: dict = field(init=False, repr=False)

    api_key: str = field(init=False)
    model: str = field(init=False)
    api_url: str = field(init=False)
    timeout: float = field(init=False)

    # Instruction overrides from persistent configuration
    system: Optional[str] = field(init=False)
    system_single: Optional[str] = field(init=False)
    system_multiline: Optional[str] = field(init=False)

    history_file: str = field(init=False)
    log_dir: str = field(init=False)
    verbose: bool = field(init=False)

    def __post_init__(self):
        """Post-initialization to resolve every value from env, file, then defaults."""
        self._file_config = self._load_config_from_file()
        self.api_key = self._get_str(API_KEY_VAR, "") or ""
        self.model = self._get_str("SNAPSHELL_MODEL", DEFAULT_MODEL)
        self.api_url = self._get_str("SNAPSHELL_API_URL", DEFAULT_API_URL)
        self.timeout = float(self._get_config("SNAPSHELL_TIMEOUT", DEFAULT_TIMEOUT))
        self.system = self._get_str("SNAPSHELL_SYSTEM")
        self.system_single = self._get_str("SNAPSHELL_SYSTEM_SINGLE")
        self.system_multiline = self._get_str("SNAPSHELL_SYSTEM_MULTILINE")
        data_dir = default_data_dir()
        self.history_file = self._get_config("SNAPSHELL_HISTORY_FILE", os.path.join(data_dir, "history.jsonl"))
        self.log_dir = self._get_config("SNAPSHELL_LOG_DIR", os.path.join(default_config_dir(), "logs"))
        self.verbose = _as_bool(self._get_config("SNAPSHELL_VERBOSE", False))

    def _load_config_from_file(self) -> dict:
        """Loads configuration from the TOML file, if there is one."""
        if not os.path.exists(self.config_file):
            return {}
        try:
            with open(self.config_file, 'r') as f:
                return toml.load(f)
        except (toml.TomlDecodeError, IOError) as e:
            logger.warning(f"Could not read config file at {self.config_file}: {e}")
            return {}

    def _get_config(self, key: str, default: Optional[Any] = None) -> Any:
        """
        Get a configuration value, prioritizing environment variables,
        then the config file, and finally a default value.
        """
        value = os.environ.get(key)
        if value is not None:
            return value

        # Keys may sit at the top level or inside any table
        if key in self._file_config and not isinstance(self._file_config[key], dict):
            return self._file_config[key]
        for section in self._file_config.values():
            if isinstance(section, dict) and key in section:
                return section[key]

        return default

    def _get_str(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Like _get_config, but TOML numbers and booleans come back as text."""
        value = self._get_config(key, default)
        if value is None or isinstance(value, str):
            return value
        return str(value)

    def validate(self) -> bool:
        """Check the API key; a missing key is reported but never fatal."""
        if not self.api_key:
            logger.info(f"{API_KEY_VAR} is not set; sending unauthenticated requests.")
            return False
        return True

    def __str__(self) -> str:
        config_dict = self.__dict__.copy()
        if self.api_key:
            config_dict['api_key'] = f"{self.api_key[:4]}...{self.api_key[-4:]}" if len(self.api_key) > 8 else "****"
        del config_dict['_file_config']
        return str(config_dict)
