"""Tests for EnvReader and logging_config_from_env."""

import logging
from pathlib import Path

import pytest

from transcode_strategy.config.env import EnvReader, logging_config_from_env
from transcode_strategy.config.models import LoggingConfig


class TestEnvReader:
    """Tests for EnvReader typed getters."""

    def test_get_str(self) -> None:
        reader = EnvReader(env={"MY_VAR": "hello"})
        assert reader.get_str("MY_VAR") == "hello"
        assert reader.get_str("OTHER", "default") == "default"

    def test_get_int(self) -> None:
        reader = EnvReader(env={"MY_VAR": "42"})
        assert reader.get_int("MY_VAR") == 42
        assert reader.get_int("OTHER", 7) == 7

    def test_get_int_invalid_logs_warning(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        reader = EnvReader(env={"MY_VAR": "many"})
        with caplog.at_level(logging.WARNING):
            assert reader.get_int("MY_VAR", 5) == 5
        assert "Invalid integer value for MY_VAR" in caplog.text

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("true", True), ("1", True), ("YES", True), ("on", True), ("no", False)],
    )
    def test_get_bool(self, value: str, expected: bool) -> None:
        assert EnvReader(env={"FLAG": value}).get_bool("FLAG") is expected

    def test_get_bool_default(self) -> None:
        assert EnvReader(env={}).get_bool("FLAG", True) is True

    def test_get_path_expands_user(self) -> None:
        path = EnvReader(env={"LOG": "~/ts.log"}).get_path("LOG")
        assert path == Path("~/ts.log").expanduser()

    def test_get_path_empty_uses_default(self) -> None:
        assert EnvReader(env={"LOG": ""}).get_path("LOG") is None

    def test_defaults_to_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TS_TEST_VALUE", "from-env")
        assert EnvReader().get_str("TS_TEST_VALUE") == "from-env"


class TestLoggingConfigFromEnv:
    """Tests for logging_config_from_env()."""

    def test_empty_env_gives_defaults(self) -> None:
        assert logging_config_from_env(EnvReader(env={})) == LoggingConfig()

    def test_reads_all_variables(self, tmp_path: Path) -> None:
        env = {
            "TS_LOG_LEVEL": "debug",
            "TS_LOG_FORMAT": "json",
            "TS_LOG_FILE": str(tmp_path / "ts.log"),
            "TS_LOG_INCLUDE_STDERR": "true",
            "TS_LOG_MAX_BYTES": "2048",
            "TS_LOG_BACKUP_COUNT": "2",
        }
        config = logging_config_from_env(EnvReader(env=env))
        assert config.level == "debug"
        assert config.format == "json"
        assert config.file == tmp_path / "ts.log"
        assert config.include_stderr is True
        assert config.max_bytes == 2048
        assert config.backup_count == 2

    def test_base_supplies_unset_values(self) -> None:
        base = LoggingConfig(level="warning", format="json")
        reader = EnvReader(env={"TS_LOG_LEVEL": "error"})
        config = logging_config_from_env(reader, base)
        assert config.level == "error"
        assert config.format == "json"

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="level must be one of"):
            logging_config_from_env(EnvReader(env={"TS_LOG_LEVEL": "verbose"}))


class TestLoggingConfig:
    """Tests for LoggingConfig validation."""

    def test_level_case_insensitive(self) -> None:
        assert LoggingConfig(level="DEBUG").level == "DEBUG"

    def test_invalid_format(self) -> None:
        with pytest.raises(ValueError, match="format must be one of"):
            LoggingConfig(format="xml")

    def test_negative_backup_count(self) -> None:
        with pytest.raises(ValueError, match="backup_count"):
            LoggingConfig(backup_count=-1)
