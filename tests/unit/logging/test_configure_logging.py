"""Unit tests for logging configuration and the JSON formatter."""

import json
import logging
import logging.handlers
import sys
from pathlib import Path

import pytest

from transcode_strategy.config.models import LoggingConfig
from transcode_strategy.logging import JSONFormatter, configure_logging
from transcode_strategy.size import Size
from transcode_strategy.video import DefaultVideoStrategy


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


class TestConfigureLogging:
    """Tests for configure_logging()."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("info", logging.INFO),
            ("debug", logging.DEBUG),
            ("WARNING", logging.WARNING),
            ("error", logging.ERROR),
        ],
    )
    def test_sets_level(self, level: str, expected: int) -> None:
        configure_logging(LoggingConfig(level=level))
        assert logging.getLogger().level == expected

    def test_stderr_only(self) -> None:
        """Should add a single stderr handler when no file is set."""
        configure_logging(LoggingConfig(file=None))
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_file_handler(self, tmp_path: Path) -> None:
        configure_logging(LoggingConfig(file=tmp_path / "ts.log"))
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.handlers.RotatingFileHandler)

    def test_file_and_stderr(self, tmp_path: Path) -> None:
        configure_logging(LoggingConfig(file=tmp_path / "ts.log", include_stderr=True))
        assert len(logging.getLogger().handlers) == 2

    def test_creates_log_directory(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "logs" / "nested"
        configure_logging(LoggingConfig(file=log_dir / "ts.log"))
        assert log_dir.exists()

    def test_falls_back_to_stderr(self, tmp_path: Path) -> None:
        """A log path that cannot be opened falls back to stderr."""
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("", encoding="utf-8")
        configure_logging(LoggingConfig(file=blocker / "ts.log"))
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0], logging.handlers.RotatingFileHandler)

    def test_json_formatter(self) -> None:
        configure_logging(LoggingConfig(format="json"))
        assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)

    def test_text_formatter(self) -> None:
        configure_logging(LoggingConfig(format="text"))
        assert not isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)

    def test_does_not_accumulate_handlers(self) -> None:
        configure_logging(LoggingConfig())
        configure_logging(LoggingConfig(level="debug"))
        assert len(logging.getLogger().handlers) == 1


class TestJSONFormatter:
    """Tests for JSONFormatter output."""

    def _record(self, **extra: object) -> logging.LogRecord:
        record = logging.LogRecord(
            name="transcode_strategy.video",
            level=logging.INFO,
            pathname="video.py",
            lineno=42,
            msg="Output width&height: %dx%d",
            args=(1280, 720),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_basic_entry(self) -> None:
        data = json.loads(JSONFormatter().format(self._record()))
        assert data["level"] == "INFO"
        assert data["message"] == "Output width&height: 1280x720"
        assert data["logger"] == "transcode_strategy.video"
        assert "timestamp" in data
        assert "context" not in data

    def test_extra_context(self) -> None:
        data = json.loads(JSONFormatter().format(self._record(track_index=1)))
        assert data["context"] == {"track_index": 1}

    def test_exception_info(self) -> None:
        record = self._record()
        try:
            raise ValueError("boom")
        except ValueError:
            record.exc_info = sys.exc_info()
        data = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in data["exception"]

    def test_root_logger_has_no_logger_key(self) -> None:
        record = self._record()
        record.name = "root"
        assert "logger" not in json.loads(JSONFormatter().format(record))

    def test_include_source(self) -> None:
        data = json.loads(JSONFormatter(include_source=True).format(self._record()))
        assert data["source"] == "video:42"

    def test_sizes_render_as_dimensions(self) -> None:
        record = self._record(input_size=Size.of(1920, 1080))
        data = json.loads(JSONFormatter().format(record))
        assert data["context"] == {"input_size": "1920x1080"}

    def test_strategy_decision_in_context(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """The strategy's decision record serializes with its criteria."""
        track = {
            "mime_type": "video/hevc",
            "width": 1920,
            "height": 1080,
            "frame_rate": 60,
        }
        with caplog.at_level(logging.DEBUG, logger="transcode_strategy.video"):
            DefaultVideoStrategy.at_most(720).build().create_output_format(track)
        record = next(r for r in caplog.records if r.message.startswith("Decision"))

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "DEBUG"
        assert data["logger"] == "transcode_strategy.video"
        assert data["context"] == {
            "frame_rate_done": False,
            "input_size": "1920x1080",
            "interval_done": False,
            "output_size": "1280x720",
            "size_done": False,
            "type_done": False,
        }

    def test_output_format_in_context(self, caplog: pytest.LogCaptureFixture) -> None:
        track = {"mime_type": "video/hevc", "width": 1280, "height": 720}
        with caplog.at_level(logging.DEBUG, logger="transcode_strategy.video"):
            output = DefaultVideoStrategy.at_most(720).build().create_output_format(
                track
            )
        record = next(
            r for r in caplog.records if r.message.startswith("Output format")
        )

        data = json.loads(JSONFormatter().format(record))

        assert data["context"]["output_format"] == output
