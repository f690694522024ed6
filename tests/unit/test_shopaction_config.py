"""Unit tests for configuration management."""

import json
import logging
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from pydantic import ValidationError

from shopaction.config import (
    LogLevel,
    OutputFormat,
    ShopActionConfig,
    create_default_config,
    find_config_file,
    load_config,
)


class TestShopActionConfig:
    """Test complete ShopActionConfig model."""

    def test_defaults(self):
        config = create_default_config()
        assert config.output.format == OutputFormat.TABLE
        assert config.output.errors_dir == ".shopaction/_errors"
        assert config.output.flush_errors is True
        assert config.input.jsonl is False
        assert config.logging.level == LogLevel.WARN

    def test_config_from_dict_with_aliases(self):
        config = ShopActionConfig(**{
            "output": {"format": "json", "errorsDir": "out/errors", "flushErrors": False},
            "input": {"jsonl": True},
            "logging": {"level": "debug"},
        })
        assert config.output.format == OutputFormat.JSON
        assert config.output.errors_dir == "out/errors"
        assert config.output.flush_errors is False
        assert config.input.jsonl is True
        assert config.logging.level == LogLevel.DEBUG

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValueError):
            ShopActionConfig(invalid_field="should-fail")

    def test_invalid_format(self):
        with pytest.raises(ValueError):
            ShopActionConfig(output={"format": "xml"})

    def test_blank_errors_dir(self):
        with pytest.raises(ValueError):
            ShopActionConfig(output={"errorsDir": "  "})

    @pytest.mark.parametrize("level,expected", [
        (LogLevel.ERROR, logging.ERROR),
        (LogLevel.WARN, logging.WARNING),
        (LogLevel.INFO, logging.INFO),
        (LogLevel.DEBUG, logging.DEBUG),
    ])
    def test_log_level_mapping(self, level, expected):
        assert level.to_logging_level() == expected


class TestConfigFileOperations:
    """Test configuration file loading and discovery."""

    def test_load_config_with_file(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".shopaction.json"
            with open(config_file, "w") as f:
                json.dump({"output": {"format": "json"}}, f)

            config = load_config(config_file)
            assert config.output.format == OutputFormat.JSON

    def test_load_config_file_not_found(self):
        with TemporaryDirectory() as temp_dir:
            config = load_config(Path(temp_dir) / "nonexistent.json")
            assert config == create_default_config()

    def test_load_config_invalid_json(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".shopaction.json"
            config_file.write_text("{invalid json")

            with pytest.raises(ValueError, match="Invalid JSON"):
                load_config(config_file)

    def test_load_config_invalid_structure(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".shopaction.json"
            config_file.write_text(json.dumps({"invalid": "structure"}))

            with pytest.raises(ValueError, match="Failed to load config"):
                load_config(config_file)

    def test_load_config_non_object_root(self, tmp_path):
        config_file = tmp_path / ".shopaction.json"
        config_file.write_text("[]")

        with pytest.raises(ValueError, match="Failed to load config") as excinfo:
            load_config(config_file)
        assert isinstance(excinfo.value.__cause__, ValidationError)

    def test_load_config_unreadable(self, tmp_path):
        config_dir = tmp_path / ".shopaction.json"
        config_dir.mkdir()

        with pytest.raises(ValueError, match="Cannot read config file"):
            load_config(config_dir)

    def test_find_config_in_parent(self):
        with TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            (root / ".shopaction.json").write_text("{}")
            nested = root / "a" / "b"
            nested.mkdir(parents=True)

            found = find_config_file(nested)
            assert found == (root / ".shopaction.json").resolve()

    def test_find_config_missing(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Path, "exists", lambda self: False)
        assert find_config_file(tmp_path) is None
