from __future__ import annotations

import logging
import logging.handlers
from typing import Any, Dict, Optional, Union
from pathlib import Path
from datetime import datetime
import json
import sys


def _level(value: Union[str, int]) -> int:
    """Convert a configured level name such as 'debug' into a logging level."""
    if isinstance(value, int):
        return value
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level '{value}'")
    return level


class LogChannel:
    """Laravel-style log channel."""

    def __init__(self, name: str, handler: logging.Handler, level: Union[str, int] = logging.INFO) -> None:
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(_level(level))
        self.logger.addHandler(handler)
        self.logger.propagate = False

    def debug(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log info message."""
        self._log(logging.INFO, message, context)

    def warning(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log warning message."""
        self._log(logging.WARNING, message, context)

    def error(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log error message."""
        self._log(logging.ERROR, message, context)

    def log(self, level: Union[str, int], message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log message at specified level."""
        self._log(_level(level), message, context)

    def _log(self, level: int, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        extra = {'context': context} if context else {}
        self.logger.log(level, message, extra=extra)


class LaravelFormatter(logging.Formatter):
    """Formats records as ``[time] channel.LEVEL: message {context}``."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        log_line = f"[{timestamp}] {record.name}.{record.levelname}: {record.getMessage()}"

        context = getattr(record, 'context', {})
        if context:
            log_line += f" {json.dumps(context, default=str)}"

        if record.exc_info:
            log_line += f"\n{self.formatException(record.exc_info)}"

        return log_line


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'channel': record.name,
            'message': record.getMessage(),
            'context': getattr(record, 'context', {}),
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class LogManager:
    """
    Laravel-style log manager.

    Channels are built on first use from the ``channels`` section of the
    configuration. Supported drivers are ``single`` (one file), ``daily``
    (rotating file), ``stderr`` and ``stack`` (fan out to other channels).
    Unconfigured channel names fall back to the default channel's settings.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self._config = config or {}
        self._channels: Dict[str, LogChannel] = {}
        self._default_channel = self._config.get('default', 'stderr')

    def channel(self, name: Optional[str] = None) -> LogChannel:
        """Get a log channel."""
        if name is None:
            name = self._default_channel

        if name not in self._channels:
            self._create_channel(name)

        return self._channels[name]

    def _channel_config(self, name: str) -> Dict[str, Any]:
        channels = self._config.get('channels', {})
        if name in channels:
            return channels[name]
        return channels.get(self._default_channel, {'driver': 'stderr'})

    def _create_channel(self, name: str) -> None:
        """Create a new log channel."""
        config = self._channel_config(name)
        driver = config.get('driver', 'stderr')

        if driver == 'single':
            self._create_single_channel(name, config)
        elif driver == 'daily':
            self._create_daily_channel(name, config)
        elif driver == 'stack':
            self._create_stack_channel(name, config)
        elif driver == 'stderr':
            self._create_stderr_channel(name, config)
        else:
            raise ValueError(f"Log driver '{driver}' not supported")

    def _create_single_channel(self, name: str, config: Dict[str, Any]) -> None:
        """Create a single file log channel."""
        path = config.get('path', f'storage/logs/{name}.log')
        Path(path).parent.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(path, encoding='utf-8')
        handler.setFormatter(self._get_formatter(config))

        self._channels[name] = LogChannel(name, handler, config.get('level', logging.INFO))

    def _create_daily_channel(self, name: str, config: Dict[str, Any]) -> None:
        """Create a daily rotating log channel."""
        path = config.get('path', f'storage/logs/{name}.log')
        Path(path).parent.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.TimedRotatingFileHandler(
            path, when='midnight', interval=1, backupCount=config.get('days', 14), encoding='utf-8'
        )
        handler.setFormatter(self._get_formatter(config))

        self._channels[name] = LogChannel(name, handler, config.get('level', logging.INFO))

    def _create_stderr_channel(self, name: str, config: Dict[str, Any]) -> None:
        """Create a stderr log channel."""
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(self._get_formatter(config))

        self._channels[name] = LogChannel(name, handler, config.get('level', logging.INFO))

    def _create_stack_channel(self, name: str, config: Dict[str, Any]) -> None:
        """Create a stack log channel that writes through several channels."""
        channel = LogChannel(name, logging.NullHandler(), config.get('level', logging.DEBUG))

        for member in config.get('channels', []):
            if member == name:
                raise ValueError(f"Log stack '{name}' cannot contain itself")
            for handler in self.channel(member).logger.handlers:
                channel.logger.addHandler(handler)

        self._channels[name] = channel

    def _get_formatter(self, config: Dict[str, Any]) -> logging.Formatter:
        """Get formatter based on configuration."""
        if config.get('formatter', 'laravel') == 'json':
            return JsonFormatter()
        return LaravelFormatter()

    def get_default_driver(self) -> str:
        """Get the default log channel name."""
        return self._default_channel

    def set_default_driver(self, name: str) -> None:
        """Set the default log channel name."""
        self._default_channel = name

    def get_channels(self) -> Dict[str, LogChannel]:
        """Get all channels."""
        return self._channels

    def forget_channel(self, name: str) -> None:
        """Remove a channel, detaching and closing its handlers."""
        channel = self._channels.pop(name, None)
        if channel is not None:
            for handler in list(channel.logger.handlers):
                channel.logger.removeHandler(handler)
                handler.close()

    def info(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log info message to default channel."""
        self.channel().info(message, context)

    def error(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log error message to default channel."""
        self.channel().error(message, context)


# Global log manager instance
log_manager_instance: Optional[LogManager] = None


def get_log_manager() -> LogManager:
    """Get the global log manager, configured from config/logging.py."""
    global log_manager_instance
    if log_manager_instance is None:
        from config import logging as logging_config

        log_manager_instance = LogManager({
            'default': logging_config.default,
            'channels': logging_config.channels,
        })
    return log_manager_instance


def logger(channel: Optional[str] = None) -> LogChannel:
    """Get a log channel."""
    return get_log_manager().channel(channel)
