"""
HoneyBear Logging

Leveled, per-module logging for the engine and the headless runner. Lines
go to stdout as ``[module] LEVEL: message``.

Usage:
    from honeybear.logging import get_logger

    log = get_logger('movers')
    log.debug("Recycled %d bees", count)

Configuration:
    HONEYBEAR_LOG_LEVEL=DEBUG          # default for every module
    HONEYBEAR_LOG_MOVERS=OFF           # override for one module

    configure_logging(level='WARNING', modules={'controller': 'INFO'})
"""

import os
import traceback
from enum import IntEnum
from functools import lru_cache
from typing import Dict, Optional


class LogLevel(IntEnum):
    """Severity thresholds; a logger prints messages at or above its level."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100


ENV_PREFIX = 'HONEYBEAR_LOG_'

# Short labels printed in each line
_LABELS = {
    LogLevel.TRACE: 'TRACE',
    LogLevel.DEBUG: 'DEBUG',
    LogLevel.INFO: 'INFO',
    LogLevel.WARNING: 'WARN',
    LogLevel.ERROR: 'ERROR',
    LogLevel.CRITICAL: 'CRIT',
}

_config = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
}


def _parse_level(name: str) -> LogLevel:
    """Level from its name; WARN is accepted, anything unknown means INFO."""
    name = name.strip().upper()
    if name == 'WARN':
        return LogLevel.WARNING
    return LogLevel.__members__.get(name, LogLevel.INFO)


def _module_key(module: str) -> str:
    return module.lower().replace('.', '_')


def configure_logging(level: str = 'INFO', modules: Optional[Dict[str, str]] = None) -> None:
    """Set the default level and, optionally, per-module overrides."""
    _config['default_level'] = _parse_level(level)
    for module, module_level in (modules or {}).items():
        _config['module_levels'][_module_key(module)] = _parse_level(module_level)


def _load_env_config() -> None:
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        suffix = key[len(ENV_PREFIX):]
        if suffix == 'LEVEL':
            _config['default_level'] = _parse_level(value)
        else:
            _config['module_levels'][_module_key(suffix)] = _parse_level(value)


_load_env_config()


class HoneyBearLogger:
    """Logger bound to one module name.

    Arguments are merged into the message with ``%`` only when the line
    is actually printed.
    """

    def __init__(self, module: str):
        self.module = module
        self._key = _module_key(module)

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self._key, _config['default_level'])

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _emit(self, level: LogLevel, msg: str, args: tuple, label: Optional[str] = None) -> None:
        if not self.is_enabled_for(level):
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label or _LABELS[level]}: {msg}")

    def trace(self, msg: str, *args) -> None:
        self._emit(LogLevel.TRACE, msg, args)

    def debug(self, msg: str, *args) -> None:
        self._emit(LogLevel.DEBUG, msg, args)

    def info(self, msg: str, *args) -> None:
        self._emit(LogLevel.INFO, msg, args)

    def warning(self, msg: str, *args) -> None:
        self._emit(LogLevel.WARNING, msg, args)

    def error(self, msg: str, *args) -> None:
        self._emit(LogLevel.ERROR, msg, args)

    def critical(self, msg: str, *args) -> None:
        self._emit(LogLevel.CRITICAL, msg, args)

    def exception(self, msg: str, *args) -> None:
        """Log at ERROR, followed by the traceback being handled."""
        self._emit(LogLevel.ERROR, msg, args)
        if not self.is_enabled_for(LogLevel.ERROR):
            return
        tb = traceback.format_exc().strip()
        if tb and tb != 'NoneType: None':
            for line in tb.splitlines():
                self._emit(LogLevel.ERROR, line, (), label='TRACE')


@lru_cache(maxsize=64)
def get_logger(module: str) -> HoneyBearLogger:
    """Cached logger for ``module`` (e.g. 'controller', 'persistence')."""
    return HoneyBearLogger(module)


def disable_logging() -> None:
    _config['module_levels'].clear()
    _config['default_level'] = LogLevel.OFF
