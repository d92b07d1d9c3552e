"""
Logging Setup
=============

One place that wires the root logger for the API process:

- colored console output (colorama) with short component names,
- a rotating plain-text file under ``logs/`` (``LOG_DIR`` overrides),
- the per-request id from ``g.request_id`` prefixed to each message.

Level comes from ``LOG_LEVEL``. Handlers installed here are tagged so that a
second ``create_app`` call replaces them instead of stacking duplicates.
"""

import logging
import os
import sys
import warnings
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional

from colorama import Fore, Style, init

init(autoreset=True)

APP_LOGGER_NAME = "UIForge"

LOG_FILE_NAME = "uiforge.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

_HANDLER_TAG = "_uiforge_handler"

LEVEL_COLORS = {
    logging.DEBUG: Fore.CYAN,
    logging.INFO: Fore.GREEN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}

# Substring of the short logger name -> color
COMPONENT_COLORS = {
    'generation': Fore.MAGENTA,
    'completion': Fore.CYAN,
    'oauth': Fore.GREEN,
    'auth': Fore.YELLOW,
    'user_store': Fore.YELLOW,
    'factory': Fore.BLUE,
}

NAME_PREFIXES = (
    (f'{APP_LOGGER_NAME}.', ''),
    ('uiforge.services.', 'svc.'),
    ('uiforge.routes.api.', 'api.'),
    ('uiforge.utils.', 'util.'),
    ('uiforge.', ''),
)

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS: Dict[str, int] = {
    'urllib3': logging.WARNING,
    'requests': logging.WARNING,
    'oauthlib': logging.WARNING,
    'requests_oauthlib': logging.WARNING,
    'sqlalchemy.engine': logging.WARNING,
    'sqlalchemy.pool': logging.WARNING,
}

NAME_WIDTH = 20


def short_name(name: str) -> str:
    """``uiforge.services.generation_service`` -> ``svc.generation_service``."""
    for prefix, replacement in NAME_PREFIXES:
        if name.startswith(prefix):
            name = replacement + name[len(prefix):]
            break
    if len(name) > NAME_WIDTH:
        name = name[:NAME_WIDTH - 3] + "..."
    return name


class RequestIdFilter(logging.Filter):
    """Copy ``g.request_id`` onto records emitted while a request is active."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, 'request_id', None) is None:
            from flask import g, has_request_context
            record.request_id = getattr(g, 'request_id', None) if has_request_context() else None
        return True


class RequestFormatter(logging.Formatter):
    """``[HH:MM:SS] LEVEL    component            [rid] message``

    With ``colors`` the level and component are tinted; with
    ``show_location`` warnings and worse also carry ``[func:line]``.
    """

    def __init__(self, colors: bool = True, show_location: bool = False):
        super().__init__()
        self.colors = colors
        self.show_location = show_location

    def _tint(self, text: str, color: str) -> str:
        return f"{color}{text}{Style.RESET_ALL}" if self.colors and color else text

    def _component_color(self, name: str) -> str:
        lowered = name.lower()
        return next((color for key, color in COMPONENT_COLORS.items() if key in lowered), Fore.WHITE)

    def format(self, record: logging.LogRecord) -> str:
        name = short_name(record.name)
        parts = [
            f"[{self.formatTime(record, '%H:%M:%S')}]",
            self._tint(f"{record.levelname:8}", LEVEL_COLORS.get(record.levelno, "")),
            self._tint(f"{name:{NAME_WIDTH}}", self._component_color(name)),
        ]
        if self.show_location and record.levelno >= logging.WARNING:
            parts.append(self._tint(f"[{record.funcName}:{record.lineno}]", Style.DIM))

        message = record.getMessage()
        request_id = getattr(record, 'request_id', None)
        if request_id:
            message = f"[{request_id[:8]}] {message}"
        parts.append(message)

        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class LoggingConfig:
    """Environment-derived logging settings and the handlers built from them."""

    def __init__(self, level: Optional[str] = None, log_dir: Optional[Path] = None,
                 development: Optional[bool] = None):
        level_name = (level or os.environ.get('LOG_LEVEL') or 'INFO').upper()
        self.level = getattr(logging, level_name, logging.INFO)
        self.log_dir = Path(log_dir or os.environ.get('LOG_DIR') or Path.cwd() / 'logs')
        if development is None:
            development = os.environ.get('FLASK_ENV', 'development') == 'development'
        self.development = development

    def _console_handler(self) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(self.level)
        handler.setFormatter(RequestFormatter(colors=True, show_location=self.development))
        return handler

    def _file_handler(self) -> Optional[logging.Handler]:
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                self.log_dir / LOG_FILE_NAME,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding='utf-8',
            )
        except OSError as e:
            logging.getLogger(APP_LOGGER_NAME).warning(f"File logging disabled for {self.log_dir}: {e}")
            return None
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(RequestFormatter(colors=False, show_location=True))
        return handler

    def apply(self) -> logging.Logger:
        """Install the handlers on the root logger, replacing earlier ones from here.

        Handlers owned by others (pytest's caplog, for one) are left alone.
        """
        root = logging.getLogger()
        for handler in [h for h in root.handlers if getattr(h, _HANDLER_TAG, False)]:
            root.removeHandler(handler)
            handler.close()
        root.setLevel(self.level)

        request_filter = RequestIdFilter()
        for handler in (self._console_handler(), self._file_handler()):
            if handler is None:
                continue
            handler.addFilter(request_filter)
            setattr(handler, _HANDLER_TAG, True)
            root.addHandler(handler)

        for name, level in QUIET_LOGGERS.items():
            logging.getLogger(name).setLevel(level)
        if not self.development:
            logging.getLogger('werkzeug').setLevel(logging.WARNING)

        logging.captureWarnings(True)
        warnings.filterwarnings('ignore', category=DeprecationWarning, module='flask_sqlalchemy')

        app_logger = logging.getLogger(APP_LOGGER_NAME)
        app_logger.info(f"Logging ready at {logging.getLevelName(self.level)} (files in {self.log_dir})")
        return app_logger


def setup_application_logging(**overrides) -> logging.Logger:
    """Configure process logging; safe to call once per app instance."""
    return LoggingConfig(**overrides).apply()


def get_logger(name: str) -> logging.Logger:
    """Logger under the application namespace (``UIForge.<name>``)."""
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")
