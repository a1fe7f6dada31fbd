"""
Unit tests for posprint/__init__.py.

Package metadata, logging setup, configuration loading and the public API.
"""

import json
import logging
import re
import sys
from pathlib import Path

import pytest

import posprint


class TestVersionMetadata:
    """Version metadata and constants."""

    def test_version_format(self) -> None:
        assert re.match(r"^\d+\.\d+\.\d+$", posprint.__version__)

    def test_version_components(self) -> None:
        expected = f"{posprint.VERSION_MAJOR}.{posprint.VERSION_MINOR}.{posprint.VERSION_PATCH}"
        assert posprint.__version__ == expected

    def test_metadata_attributes(self) -> None:
        for name in ("__author__", "__description__", "__license__", "__python_requires__"):
            value = getattr(posprint, name)
            assert isinstance(value, str) and value, f"{name} must be a non-empty string"


class TestPublicAPI:
    """Names exported by the package."""

    def test_all_exports_exist(self) -> None:
        for name in posprint.__all__:
            assert hasattr(posprint, name), f"{name!r} from __all__ is missing"

    def test_no_duplicate_exports(self) -> None:
        assert len(posprint.__all__) == len(set(posprint.__all__))

    def test_core_types_exported(self) -> None:
        for name in ("Printer", "PrinterState", "PrinterConfig", "int_low_high", "plan_chunks"):
            assert name in posprint.__all__

    def test_no_dependency_probe(self) -> None:
        assert not hasattr(posprint, "check_dependencies")

    def test_error_hierarchy(self) -> None:
        assert issubclass(posprint.FontSizeError, posprint.PrinterStateError)
        for error in (
            posprint.ValidationError,
            posprint.PrinterStateError,
            posprint.IntegerRangeError,
            posprint.RasterError,
        ):
            assert issubclass(error, posprint.PrinterError)
            assert issubclass(error, ValueError)


class TestLogging:
    """Logger naming and setup."""

    def test_get_logger_name_format(self) -> None:
        assert posprint.get_logger("receipts").name == "posprint.receipts"

    def test_get_logger_with_qualified_name(self) -> None:
        assert posprint.get_logger("posprint.escpos.raster").name == "posprint.escpos.raster"

    def test_get_logger_with_main(self) -> None:
        assert posprint.get_logger("__main__").name == "posprint.main"

    def test_get_logger_with_dots(self) -> None:
        assert posprint.get_logger(".jobs.queue").name == "posprint.jobs.queue"

    def test_package_logger_has_handler(self) -> None:
        assert logging.getLogger("posprint").handlers

    def test_log_level_and_file_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        root_logger = logging.getLogger("posprint")
        saved_handlers = root_logger.handlers[:]
        saved_level = root_logger.level
        monkeypatch.setenv("POSPRINT_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("POSPRINT_LOG_DIR", str(tmp_path))
        try:
            root_logger.handlers.clear()
            posprint._setup_logging()
            assert root_logger.level == logging.DEBUG
            assert len(root_logger.handlers) == 2
            assert (tmp_path / "posprint.log").exists()
        finally:
            for handler in root_logger.handlers:
                handler.close()
            root_logger.handlers[:] = saved_handlers
            root_logger.setLevel(saved_level)

    def test_setup_is_idempotent(self) -> None:
        root_logger = logging.getLogger("posprint")
        before = len(root_logger.handlers)
        posprint._setup_logging()
        assert len(root_logger.handlers) == before


class TestConfiguration:
    """load_config merging and error handling."""

    def test_defaults_when_file_missing(self, tmp_path: Path) -> None:
        config = posprint.load_config(tmp_path / "missing.json")
        assert config["encoding"] == "cp437"
        assert config["raster_mode"] == "graphics"
        assert config["max_width"] == 512

    def test_file_values_merged_over_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "posprint.json"
        path.write_text(json.dumps({"encoding": "cp850", "max_width": 384}), encoding="utf-8")

        config = posprint.load_config(path)

        assert config["encoding"] == "cp850"
        assert config["max_width"] == 384
        assert config["threshold"] == 0.5

    def test_invalid_json_falls_back(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            config = posprint.load_config(path)

        assert config["encoding"] == "cp437"
        assert "invalid JSON" in caplog.text

    def test_non_object_document_falls_back(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text(json.dumps(["a", "b"]), encoding="utf-8")

        config = posprint.load_config(path)

        assert isinstance(config, dict)
        assert config["dpi"] == 50.0

    def test_defaults_not_mutated(self, tmp_path: Path) -> None:
        path = tmp_path / "posprint.json"
        path.write_text(json.dumps({"dpi": 203}), encoding="utf-8")
        posprint.load_config(path)
        assert posprint.load_config(tmp_path / "missing.json")["dpi"] == 50.0


class TestPlatform:
    def test_python_version_requirement(self) -> None:
        assert sys.version_info >= (3, 11)
