"""
Logging configuration for the binprobe package.

Every module logs through a child of the ``binprobe`` logger, so one handler
on that logger controls the whole package and levels can be raised per module.
"""

import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER = 'binprobe'

LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL', 'NONE')

# Child loggers created by the package, usable with --debug-modules
MODULES = ('codec', 'png', 'selection', 'document', 'detection', 'certificates',
           'xml_tree', 'hex_dump', 'exporter', 'cli')


class LoggingManager:
    """Installs the package handler and hands out module loggers."""

    class ColoredFormatter(logging.Formatter):
        """Formatter that colors the level name for terminals."""

        COLORS = {
            'DEBUG': '\033[36m',     # Cyan
            'INFO': '\033[32m',      # Green
            'WARNING': '\033[33m',   # Yellow
            'ERROR': '\033[31m',     # Red
            'CRITICAL': '\033[35m',  # Magenta
        }
        RESET = '\033[0m'

        def __init__(self, fmt=None, use_color=True):
            super().__init__(fmt)
            self.use_color = use_color

        def format(self, record):
            # the record is shared with other handlers, put the plain name back
            plain = record.levelname
            if self.use_color and plain in self.COLORS:
                record.levelname = f"{self.COLORS[plain]}{plain}{self.RESET}"
            try:
                return super().format(record)
            finally:
                record.levelname = plain

    FORMAT = '%(levelname)s [%(name)s] %(message)s'

    _handler: Optional[logging.Handler] = None

    @classmethod
    def setup(cls, level: str = 'WARNING', module_levels: Optional[dict] = None, use_color: bool = True,
              stream: Optional[TextIO] = None):
        """
        Install the package log handler.

        A later call replaces the handler of the previous one.

        Args:
            level: Package level, one of LEVELS (NONE silences the package)
            module_levels: Per-module overrides, e.g. {'png': 'DEBUG'}
            use_color: Color level names
            stream: Output stream (default: stderr)
        """
        package_logger = logging.getLogger(ROOT_LOGGER)
        if cls._handler is not None:
            package_logger.removeHandler(cls._handler)
            cls._handler = None

        if level.upper() == 'NONE':
            package_logger.setLevel(logging.CRITICAL + 1)
            return

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(cls.ColoredFormatter(cls.FORMAT, use_color=use_color))
        cls._handler = handler

        package_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
        package_logger.addHandler(handler)

        for module, module_level in (module_levels or {}).items():
            cls.get_logger(module).setLevel(getattr(logging, module_level.upper(), logging.WARNING))

    @staticmethod
    def parse_module_levels(names: str, level: str = 'DEBUG') -> dict[str, str]:
        """
        Turn a comma-separated module list into module_levels for setup().

        Raises:
            ValueError: If a name is not one of MODULES
        """
        result = {}
        for name in filter(None, (part.strip() for part in names.split(','))):
            if name not in MODULES:
                raise ValueError(f"Unknown module '{name}', expected one of: {', '.join(MODULES)}")
            result[name] = level
        return result

    @staticmethod
    def get_logger(name: str) -> logging.Logger:
        """Logger for a package module, e.g. get_logger('png') -> binprobe.png."""
        return logging.getLogger(f'{ROOT_LOGGER}.{name}')


def setup_logging(level: str = 'WARNING', module_levels: Optional[dict] = None, use_color: bool = True,
                  stream: Optional[TextIO] = None):
    """Module-level shortcut for LoggingManager.setup()."""
    LoggingManager.setup(level, module_levels, use_color, stream)


def get_logger(name: str) -> logging.Logger:
    """Module-level shortcut for LoggingManager.get_logger()."""
    return LoggingManager.get_logger(name)
