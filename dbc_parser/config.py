"""
Configuration management for the DBC parser.

© 2024 Intel Corporation
SPDX-License-Identifier: Apache-2.0 and MIT
"""

import codecs
import json
import logging
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class LogLevel(Enum):
    """Log levels accepted in configuration files."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"

    def to_logging(self) -> int:
        log_level_map = {
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.TRACE: logging.DEBUG  # Python doesn't have TRACE, use DEBUG
        }
        return log_level_map[self]


@dataclass
class ParserOptions:
    """Options controlling how a DBC buffer is read."""
    strict: bool = False
    require_signal_prefix: bool = True
    normalize_newlines: bool = True
    encoding: str = "utf-8"
    log_level: LogLevel = LogLevel.INFO

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ParserOptions':
        """Create ParserOptions from dictionary, ignoring invalid entries."""
        options = cls()
        known = {f.name for f in fields(cls)}

        for key, value in data.items():
            if key not in known:
                logger.warning(f"Unknown configuration key: {key}")
                continue

            if key == 'log_level':
                try:
                    options.log_level = LogLevel(value)
                except ValueError:
                    logger.warning(f"Invalid log level: {value}")
            elif key == 'encoding':
                try:
                    codecs.lookup(value)
                    options.encoding = value
                except (LookupError, TypeError):
                    logger.warning(f"Invalid encoding: {value}")
            elif isinstance(value, bool):
                setattr(options, key, value)
            else:
                logger.warning(f"Invalid value for {key}: {value!r}")

        return options

    def to_dict(self) -> Dict[str, Any]:
        return {
            'strict': self.strict,
            'require_signal_prefix': self.require_signal_prefix,
            'normalize_newlines': self.normalize_newlines,
            'encoding': self.encoding,
            'log_level': self.log_level.value,
        }


class Config:
    """Main configuration class for the DBC parser."""

    def __init__(self, options: Optional[ParserOptions] = None):
        self._options = options or ParserOptions()
        self._source: Optional[Path] = None

    @property
    def options(self) -> ParserOptions:
        return self._options

    @property
    def source(self) -> Optional[Path]:
        """The file the configuration was loaded from, if any."""
        return self._source

    @classmethod
    def load(cls, path: Path) -> 'Config':
        """
        Load configuration from a JSON file.

        The format is:
        {
          "strict": false,
          "require_signal_prefix": true,
          "normalize_newlines": true,
          "encoding": "utf-8",
          "log_level": "info"
        }

        Args:
            path: Path to the configuration JSON file
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except Exception as e:
            logger.error(f"Failed to load configuration from {path}: {e}")
            raise

        if not isinstance(data, dict):
            raise ValueError(f"Configuration in {path} must be a JSON object")

        config = cls(ParserOptions.from_dict(data))
        config._source = path
        logger.info(f"Loaded configuration from {path}: {config.options}")
        return config

    def apply_log_level(self) -> None:
        """Apply the configured log level to the root logger."""
        logging.getLogger().setLevel(self._options.log_level.to_logging())

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for serialization."""
        return {
            'source': str(self._source) if self._source else None,
            'options': self._options.to_dict(),
        }
