"""Configuration management for code-guard.

Settings live in a flat INI-style file (``config.yaml`` by default, the name
the tool has always used; the content is ``key = value`` lines, not YAML)::

    APIServer = https://api.openai.com/v1
    Model = gpt-4o-mini
    API_KEY = sk-...
    Language = en

The ``API_KEY`` environment variable takes precedence over the file. A
``.env`` file in the working directory can supply it as well.
"""

import configparser
import os
from dataclasses import dataclass
from pathlib import Path

import structlog
from dotenv import find_dotenv, load_dotenv

from code_guard.errors import ConfigError

logger = structlog.get_logger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"
DEFAULT_LANGUAGE = "zh"
SUPPORTED_LANGUAGES = ("en", "zh")

API_KEY_ENV = "API_KEY"

# CLI name -> INI key
SETTING_KEYS = {
    "api-server": "APIServer",
    "model": "Model",
    "key": "API_KEY",
    "language": "Language",
}


def normalize_language(language: str | None) -> str:
    """Map a configured language to a supported report language."""
    value = (language or DEFAULT_LANGUAGE).strip().lower()
    if value not in SUPPORTED_LANGUAGES:
        logger.warning("Unsupported language, using default", language=language)
        return DEFAULT_LANGUAGE
    return value


@dataclass(frozen=True)
class Settings:
    """Resolved model and report settings."""

    api_server: str = ""
    model: str = ""
    api_key: str = ""
    language: str = DEFAULT_LANGUAGE

    @classmethod
    def from_values(cls, values: dict[str, str]) -> "Settings":
        """Create settings from raw INI values, applying env overrides."""
        api_key = os.getenv(API_KEY_ENV) or values.get("API_KEY", "")
        return cls(
            api_server=values.get("APIServer", ""),
            model=values.get("Model", ""),
            api_key=api_key,
            language=values.get("Language") or DEFAULT_LANGUAGE,
        )


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    # Keys are case-sensitive (APIServer, API_KEY)
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser


def _read(path: Path) -> configparser.ConfigParser:
    parser = _new_parser()
    # Flat files have no section header; keys land in DEFAULT
    text = path.read_text(encoding="utf-8")
    parser.read_string(f"[{parser.default_section}]\n{text}", source=str(path))
    return parser


def load_settings(path: str | Path = DEFAULT_CONFIG_PATH) -> Settings:
    """
    Load settings from an INI file.

    Raises:
        ConfigError: If the file is missing or cannot be parsed
    """
    config_path = Path(path)
    try:
        parser = _read(config_path)
    except (OSError, configparser.Error) as e:
        raise ConfigError(f"load config file failed: {e}") from e

    # .env never overrides variables already set in the process
    load_dotenv(find_dotenv(usecwd=True))
    return Settings.from_values(dict(parser.defaults()))


def save_setting(name: str, value: str, path: str | Path = DEFAULT_CONFIG_PATH) -> None:
    """
    Persist a single setting, creating the file if needed.

    Args:
        name: CLI setting name (api-server, model, key, language)
        value: Value to store
        path: Config file path

    Raises:
        ConfigError: If the name is unknown or the file cannot be written
    """
    key = SETTING_KEYS.get(name)
    if key is None:
        raise ConfigError(f"unknown setting: {name}")
    if name == "language" and value not in SUPPORTED_LANGUAGES:
        raise ConfigError(f"language must be one of {', '.join(SUPPORTED_LANGUAGES)}")

    config_path = Path(path)
    try:
        parser = _read(config_path) if config_path.exists() else _new_parser()
        parser[parser.default_section][key] = value
        with open(config_path, "w", encoding="utf-8") as f:
            parser.write(f)
    except (OSError, configparser.Error) as e:
        raise ConfigError(f"save config file failed: {e}") from e

    logger.info("Setting saved", key=key, path=str(config_path))
