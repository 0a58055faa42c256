"""
Environment configuration for stdext.

Configuration comes from, in order of precedence:

- Environment variables
- `.env` files in the working directory (`.env`, `.env.<ENV>`, `.env.<ENV>.local`)
- The defaults in `DEFAULT_ENV`
"""

import os
from pathlib import Path
from typing import Any, Optional

DEFAULT_ENV = {
    "ENV": "development",
    "LOG_LEVEL": None,
    "DEBUG": None,
    "STDEXT_LOG_LEVEL": "INFO",
}

NOT_GIVEN = object()

_FALSY = ("0", "false", "no", "off", "")


def load_dotenv_files(root: Optional[Path] = None) -> list[Path]:
    """Load environment variables from .env files based on the current environment.

    Variables that are already set are never overridden. Later files in the
    list only fill in what earlier ones left unset.

    Returns:
        The files that were found and loaded.
    """
    from dotenv import load_dotenv

    root = root if root is not None else Path.cwd()
    env_name = os.environ.get("ENV", DEFAULT_ENV["ENV"])

    env_files = [
        root / f".env.{env_name}.local",  # Local overrides (gitignored)
        root / f".env.{env_name}",  # Environment-specific file
        root / ".env",  # Base .env file
    ]

    loaded = []
    for env_file in env_files:
        if env_file.exists():
            load_dotenv(env_file, override=False)
            loaded.append(env_file)
    return loaded


class Environment(object):
    """
    Central access to configuration values.

    All accessors are classmethods; `.env` files are read lazily the first
    time a value is requested.
    """

    _dotenv_loaded: bool = False

    @classmethod
    def load_settings(cls) -> None:
        if not cls._dotenv_loaded:
            load_dotenv_files()
            cls._dotenv_loaded = True

    @classmethod
    def get(cls, key: str, default: Any = NOT_GIVEN) -> Any:
        """
        Return the value of a configuration key.

        Raises:
            KeyError: If the key is unknown and no default was given.
        """
        cls.load_settings()
        if key in os.environ:
            return os.environ[key]
        if key in DEFAULT_ENV:
            return DEFAULT_ENV[key]
        if default is not NOT_GIVEN:
            return default
        raise KeyError(f"Missing configuration value for {key}")

    @classmethod
    def get_env(cls) -> str:
        return cls.get("ENV")

    @classmethod
    def is_debug(cls) -> bool:
        """
        Is debug flag on?
        """
        debug = cls.get("DEBUG")
        return debug is not None and str(debug).lower() not in _FALSY

    @classmethod
    def get_log_level(cls) -> str:
        """Return desired log level string.

        Priority:
        1) Explicit LOG_LEVEL
        2) If DEBUG is truthy, return "DEBUG"
        3) STDEXT_LOG_LEVEL (default "INFO")
        """
        level = cls.get("LOG_LEVEL")
        if level:
            return str(level).upper()
        if cls.is_debug():
            return "DEBUG"
        return str(cls.get("STDEXT_LOG_LEVEL")).upper()
