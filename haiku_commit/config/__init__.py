"""Configuration Management Package"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from haiku_commit import PROVIDER_NAMES

log = logging.getLogger(__name__)

# Valid configuration values ("" means no provider selected)
VALID_PROVIDERS = {"", *PROVIDER_NAMES}
VALID_COUNTERS = {"cmudict", "heuristic"}
MAX_SAMPLES = 5

API_KEY_ENV = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
}


@dataclass
class Config:
    """User configuration with sensible defaults."""
    provider: str = "anthropic"
    model: str = ""  # Shared override for every provider
    anthropic_model: str = ""
    openai_model: str = ""
    gemini_model: str = ""
    max_tokens: int = 200
    strict: bool = True
    max_retries: int = 2
    samples: int = 1
    max_diff_length: int = 4000
    syllable_counter: str = "cmudict"
    debug: bool = False

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if not isinstance(self.provider, str) or self.provider not in VALID_PROVIDERS:
            warnings.append(f"Invalid provider '{self.provider}', using '{defaults.provider}'")
            self.provider = defaults.provider

        if not isinstance(self.syllable_counter, str) or self.syllable_counter not in VALID_COUNTERS:
            warnings.append(f"Invalid syllable_counter '{self.syllable_counter}', using '{defaults.syllable_counter}'")
            self.syllable_counter = defaults.syllable_counter

        for key in ("model", "anthropic_model", "openai_model", "gemini_model"):
            value = getattr(self, key)
            if not isinstance(value, str):
                warnings.append(f"Invalid {key} '{value}', using '{getattr(defaults, key)}'")
                setattr(self, key, getattr(defaults, key))

        for key in ("strict", "debug"):
            value = getattr(self, key)
            if not isinstance(value, bool):
                warnings.append(f"Invalid {key} '{value}', expected true or false, using {str(getattr(defaults, key)).lower()}")
                setattr(self, key, getattr(defaults, key))

        for key in ("max_tokens", "max_diff_length"):
            value = getattr(self, key)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                warnings.append(f"Invalid {key} '{value}', using {getattr(defaults, key)}")
                setattr(self, key, getattr(defaults, key))

        if not isinstance(self.max_retries, int) or isinstance(self.max_retries, bool) or self.max_retries < 0:
            warnings.append(f"Invalid max_retries '{self.max_retries}', using {defaults.max_retries}")
            self.max_retries = defaults.max_retries

        if not isinstance(self.samples, int) or isinstance(self.samples, bool) or not 1 <= self.samples <= MAX_SAMPLES:
            warnings.append(f"Invalid samples '{self.samples}', using {defaults.samples}")
            self.samples = defaults.samples

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            log.warning(f"Config warning: {warning}")
        return config


def apply_env_overrides(config: Config, environ: dict | None = None) -> Config:
    """Apply HAIKU_PROVIDER / HAIKU_MODEL / HAIKU_DEBUG on top of file config."""
    environ = os.environ if environ is None else environ
    if environ.get("HAIKU_PROVIDER"):
        config.provider = environ["HAIKU_PROVIDER"]
    if environ.get("HAIKU_MODEL"):
        config.model = environ["HAIKU_MODEL"]
    if environ.get("HAIKU_DEBUG", "").lower() in ("1", "true", "yes"):
        config.debug = True
    return config


def api_key_for(provider: str, environ: dict | None = None) -> str:
    environ = os.environ if environ is None else environ
    env_name = API_KEY_ENV.get(provider)
    return environ.get(env_name, "") if env_name else ""


class ConfigManager:
    """Loads configuration from the local or home .haikurc."""

    CONFIG_FILENAME = ".haikurc"

    def __init__(self):
        self._config: Config | None = None
        self._config_path: Path | None = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        for path in (Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME):
            if path.exists():
                self._config = self._load_from_file(path)
                self._config_path = path
                return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r') as f:
                data = json.load(f)
            return Config.from_dict(data)
        except (json.JSONDecodeError, IOError) as e:
            log.warning(f"Could not load {path}: {e}")
            return Config()

    def get_config_path(self) -> Path | None:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def get_config_path() -> Path | None:
    return _manager.get_config_path()


__all__ = [
    "API_KEY_ENV",
    "Config",
    "ConfigManager",
    "MAX_SAMPLES",
    "VALID_COUNTERS",
    "VALID_PROVIDERS",
    "api_key_for",
    "apply_env_overrides",
    "get_config_path",
    "load_config",
]
