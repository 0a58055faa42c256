import logging
import os
import sys
from typing import ClassVar, Optional

_PLAIN_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_COLOR_FORMAT = "\x1b[90m%(asctime)s\x1b[0m | %(levelname_color)s | \x1b[36m%(name)s\x1b[0m | %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Level the root logger was last configured with
_configured: str | int | None = None


def _supports_color() -> bool:
    try:
        return sys.stdout.isatty() and os.getenv("NO_COLOR") is None
    except Exception:
        return False


class _LevelColorFormatter(logging.Formatter):
    """Exposes `levelname_color` to format strings, ANSI-coloured when enabled."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\x1b[37m",
        "INFO": "\x1b[32m",
        "WARNING": "\x1b[33m",
        "ERROR": "\x1b[31m",
        "CRITICAL": "\x1b[41m",
    }

    RESET: ClassVar[str] = "\x1b[0m"

    def __init__(self, fmt: str, datefmt: str, use_color: bool) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        color = self.COLORS.get(levelname, "") if self.use_color else ""
        record.levelname_color = f"{color}{levelname}{self.RESET}" if color else levelname
        return super().format(record)


def _resolve_format(fmt: Optional[str], use_color: bool) -> str:
    if fmt is not None:
        return fmt
    env_fmt = os.getenv("STDEXT_LOG_FORMAT")
    if env_fmt is not None:
        return env_fmt
    return _COLOR_FORMAT if use_color else _PLAIN_FORMAT


def configure_logging(
    level: Optional[str | int] = None,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    propagate_root: bool = False,
) -> str | int:
    """Set up the root logger for stdext.

    Repeated calls with the level already in effect are no-ops. If the root
    logger has handlers (pytest installs its own), only their level and
    formatter are updated; otherwise a stream handler is installed.

    Environment overrides:
    - `LOG_LEVEL` / `DEBUG` / `STDEXT_LOG_LEVEL` (see `Environment.get_log_level`)
    - `STDEXT_LOG_FORMAT`
    - `STDEXT_LOG_DATEFMT`
    """
    from stdext.config.environment import Environment

    global _configured

    if level is None:
        level = Environment.get_log_level()
    elif isinstance(level, str):
        level = level.upper()

    if _configured is not None and _configured == level:
        return level
    _configured = level

    use_color = _supports_color()
    formatter = _LevelColorFormatter(
        _resolve_format(fmt, use_color),
        datefmt or os.getenv("STDEXT_LOG_DATEFMT", _DEFAULT_DATEFMT),
        use_color,
    )

    root = logging.getLogger()
    if not root.handlers:
        root.addHandler(logging.StreamHandler())
    root.setLevel(level)
    for handler in root.handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setLevel(level)
            handler.setFormatter(formatter)
    root.propagate = propagate_root
    return level


def get_logger(name: str) -> logging.Logger:
    """Return a module-scoped logger."""
    level = configure_logging()
    logger = logging.getLogger(name)
    logger.setLevel(level)
    return logger
