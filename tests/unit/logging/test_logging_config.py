"""Unit tests for logging configuration, formatters and conversion context."""

import json
import logging
import sys
from pathlib import Path

import pytest

from ucvt.codec import utf8_to_ucs2
from ucvt.config.models import LoggingConfig
from ucvt.logging import (
    ConversionContextFilter,
    JSONFormatter,
    TextFormatter,
    configure_logging,
    conversion_context,
    get_conversion_context,
)


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Save and restore root logger state between tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


def _record(
    msg: str = "hello %s", args: tuple = ("world",), **extra
) -> logging.LogRecord:
    record = logging.LogRecord(
        name="ucvt.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestConfigureLogging:
    """Tests for configure_logging()."""

    @pytest.mark.parametrize(
        "level,expected",
        [
            ("debug", logging.DEBUG),
            ("info", logging.INFO),
            ("warning", logging.WARNING),
            ("error", logging.ERROR),
            ("DEBUG", logging.DEBUG),
        ],
    )
    def test_levels(self, level: str, expected: int) -> None:
        configure_logging(LoggingConfig(level=level))
        assert logging.getLogger().level == expected

    def test_stderr_only(self) -> None:
        configure_logging(LoggingConfig(level="info"))

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)

    def test_file_handler(self, temp_dir: Path) -> None:
        log_file = temp_dir / "logs" / "ucvt.log"
        configure_logging(LoggingConfig(level="info", file=log_file))

        logging.getLogger("ucvt.test").info("written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.exists()
        assert "written to file" in log_file.read_text(encoding="utf-8")
        assert len(logging.getLogger().handlers) == 1

    def test_file_and_stderr(self, temp_dir: Path) -> None:
        config = LoggingConfig(file=temp_dir / "ucvt.log", include_stderr=True)
        configure_logging(config)
        assert len(logging.getLogger().handlers) == 2

    def test_unwritable_file_falls_back_to_stderr(
        self, temp_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        blocker = temp_dir / "not-a-dir"
        blocker.write_text("", encoding="utf-8")

        configure_logging(LoggingConfig(file=blocker / "ucvt.log"))

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert not isinstance(handlers[0], logging.FileHandler)
        assert "Could not open log file" in capsys.readouterr().err

    def test_json_format(self) -> None:
        configure_logging(LoggingConfig(format="json"))
        assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)

    def test_text_format(self) -> None:
        configure_logging(LoggingConfig())
        assert isinstance(logging.getLogger().handlers[0].formatter, TextFormatter)

    def test_handlers_carry_context_filter(self, temp_dir: Path) -> None:
        config = LoggingConfig(file=temp_dir / "ucvt.log", include_stderr=True)
        configure_logging(config)

        for handler in logging.getLogger().handlers:
            assert any(isinstance(f, ConversionContextFilter) for f in handler.filters)

    def test_truncated_conversion_logged_as_json(
        self, temp_dir: Path, ucs2_buffer
    ) -> None:
        log_file = temp_dir / "ucvt.log"
        configure_logging(LoggingConfig(level="debug", file=log_file, format="json"))

        with conversion_context("utf8", "ucs2", "names.txt"):
            assert utf8_to_ucs2(b"abcdef", ucs2_buffer(4)) == 3
        for handler in logging.getLogger().handlers:
            handler.flush()

        entries = [
            json.loads(line)
            for line in log_file.read_text(encoding="utf-8").splitlines()
        ]
        exhausted = [e for e in entries if e.get("converter") == "utf8_to_ucs2"]
        assert len(exhausted) == 1
        assert exhausted[0]["logger"] == "ucvt.codec.converters"
        assert exhausted[0]["units_written"] == 3
        assert exhausted[0]["source_offset"] == 3
        assert exhausted[0]["conversion"] == "utf8->ucs2"
        assert exhausted[0]["input_path"] == "names.txt"
        assert "context" not in exhausted[0]

    def test_replaces_existing_handlers(self) -> None:
        configure_logging(LoggingConfig())
        configure_logging(LoggingConfig())
        assert len(logging.getLogger().handlers) == 1


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self) -> None:
        entry = json.loads(JSONFormatter().format(_record()))

        assert entry["level"] == "INFO"
        assert entry["message"] == "hello world"
        assert entry["logger"] == "ucvt.test"
        assert entry["timestamp"].endswith("+00:00")
        assert "context" not in entry

    def test_event_fields_at_top_level(self) -> None:
        record = _record(converter="utf8_to_ucs4", units_written=7, source_offset=9)
        entry = json.loads(JSONFormatter().format(record))

        assert entry["converter"] == "utf8_to_ucs4"
        assert entry["units_written"] == 7
        assert entry["source_offset"] == 9
        assert "context" not in entry

    def test_unset_event_fields_omitted(self) -> None:
        entry = json.loads(JSONFormatter().format(_record(conversion=None)))
        assert "conversion" not in entry

    def test_other_extras_go_to_context(self) -> None:
        entry = json.loads(JSONFormatter().format(_record(attempt=2, mapping_count=5)))

        assert entry["mapping_count"] == 5
        assert entry["context"] == {"attempt": 2}

    def test_non_serializable_context(self, temp_dir: Path) -> None:
        entry = json.loads(JSONFormatter().format(_record(path=temp_dir)))
        assert entry["context"]["path"] == str(temp_dir)

    def test_exception(self) -> None:
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()

        entry = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in entry["exception"]


class TestTextFormatter:
    """Tests for TextFormatter."""

    def test_plain_message(self) -> None:
        line = TextFormatter().format(_record())

        assert line.endswith(" - ucvt.test - INFO - hello world")

    def test_appends_event_fields(self) -> None:
        record = _record(converter="utf8_to_utf16", units_written=1, source_offset=1)
        line = TextFormatter().format(record)

        assert line.endswith(
            "hello world [converter=utf8_to_utf16 units_written=1 source_offset=1]"
        )

    def test_ignores_other_extras(self) -> None:
        assert "[" not in TextFormatter().format(_record(attempt=2))


class TestConversionContext:
    """Tests for conversion_context() and ConversionContextFilter."""

    def test_sets_and_restores(self) -> None:
        assert get_conversion_context() == (None, None)

        with conversion_context("ucs4", "utf8", Path("in.bin")):
            assert get_conversion_context() == ("ucs4->utf8", "in.bin")
            with conversion_context("utf8", "ucs2"):
                assert get_conversion_context() == ("utf8->ucs2", None)
            assert get_conversion_context() == ("ucs4->utf8", "in.bin")

        assert get_conversion_context() == (None, None)

    def test_restores_after_error(self) -> None:
        with pytest.raises(RuntimeError):
            with conversion_context("utf8", "ucs4"):
                raise RuntimeError("boom")
        assert get_conversion_context() == (None, None)

    def test_filter_injects_context(self) -> None:
        record = _record()
        with conversion_context("utf8", "utf16", "a.txt"):
            assert ConversionContextFilter().filter(record) is True

        assert record.conversion == "utf8->utf16"
        assert record.input_path == "a.txt"

    def test_filter_outside_context(self) -> None:
        record = _record()
        ConversionContextFilter().filter(record)

        assert record.conversion is None
        assert record.input_path is None

    def test_filter_keeps_explicit_values(self) -> None:
        record = _record(conversion="latin1->utf8")
        with conversion_context("utf8", "ucs2"):
            ConversionContextFilter().filter(record)

        assert record.conversion == "latin1->utf8"
