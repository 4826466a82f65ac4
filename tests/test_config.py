"""
Tests for parser configuration.

© 2024 Intel Corporation
SPDX-License-Identifier: Apache-2.0 and MIT
"""

import json
import logging

import pytest

from dbc_parser.config import Config, LogLevel, ParserOptions


class TestParserOptions:
    """Test option parsing from dictionaries."""

    def test_defaults(self):
        options = ParserOptions()
        assert options.strict is False
        assert options.require_signal_prefix is True
        assert options.normalize_newlines is True
        assert options.encoding == "utf-8"
        assert options.log_level == LogLevel.INFO

    def test_from_dict(self):
        options = ParserOptions.from_dict({
            "strict": True,
            "require_signal_prefix": False,
            "encoding": "cp1252",
            "log_level": "debug",
        })
        assert options.strict is True
        assert options.require_signal_prefix is False
        assert options.encoding == "cp1252"
        assert options.log_level == LogLevel.DEBUG

    def test_invalid_values_are_ignored(self, caplog):
        with caplog.at_level(logging.WARNING):
            options = ParserOptions.from_dict({
                "strict": "yes",
                "encoding": "no-such-codec",
                "log_level": "loud",
                "colour": "blue",
            })

        assert options == ParserOptions()
        assert "Invalid value for strict" in caplog.text
        assert "Invalid encoding" in caplog.text
        assert "Invalid log level" in caplog.text
        assert "Unknown configuration key: colour" in caplog.text

    def test_round_trip_dict(self):
        options = ParserOptions(strict=True, log_level=LogLevel.WARN)
        assert ParserOptions.from_dict(options.to_dict()) == options


class TestConfig:
    """Test loading configuration files."""

    def test_config_creation(self):
        config = Config()
        assert config.source is None
        assert config.options == ParserOptions()

    def test_load(self, tmp_path):
        path = tmp_path / "dbc.json"
        path.write_text(json.dumps({"strict": True, "log_level": "error"}))

        config = Config.load(path)

        assert config.source == path
        assert config.options.strict is True
        assert config.to_dict()["options"]["log_level"] == "error"

    def test_load_rejects_non_object(self, tmp_path):
        path = tmp_path / "dbc.json"
        path.write_text("[]")
        with pytest.raises(ValueError):
            Config.load(path)

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "dbc.json"
        path.write_text("{")
        with pytest.raises(ValueError):
            Config.load(path)

    def test_apply_log_level(self):
        root = logging.getLogger()
        previous = root.level
        try:
            Config(ParserOptions(log_level=LogLevel.TRACE)).apply_log_level()
            assert root.level == logging.DEBUG
            Config(ParserOptions(log_level=LogLevel.WARN)).apply_log_level()
            assert root.level == logging.WARNING
        finally:
            root.setLevel(previous)
