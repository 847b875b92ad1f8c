"""Tests for configuration loading."""

from pathlib import Path

from libraryserver.config import Config, DEFAULT_LOAN_DAYS, get_config, reset_config


class TestConfig:
    """Tests for Config.from_env."""

    def test_defaults(self):
        """Test defaults without environment variables."""
        config = Config.from_env()

        assert config.db_path == Path.home() / ".libraryserver" / "library.db"
        assert config.loan_days == DEFAULT_LOAN_DAYS == 14
        assert config.guard_loan_references is False
        assert config.log_level == "WARNING"

    def test_from_environment(self, monkeypatch, tmp_path):
        """Test every variable is read."""
        monkeypatch.setenv("LIBRARYSERVER_DB_PATH", str(tmp_path / "lib.db"))
        monkeypatch.setenv("LIBRARYSERVER_LOAN_DAYS", "21")
        monkeypatch.setenv("LIBRARYSERVER_GUARD_LOAN_REFERENCES", "true")
        monkeypatch.setenv("LIBRARYSERVER_LOG_LEVEL", "debug")

        config = Config.from_env()

        assert config.db_path == tmp_path / "lib.db"
        assert config.loan_days == 21
        assert config.guard_loan_references is True
        assert config.log_level == "DEBUG"

    def test_validate(self, tmp_path):
        """Test validation reports a non-positive loan duration."""
        config = Config(
            db_path=tmp_path / "lib.db",
            loan_days=0,
            guard_loan_references=False,
            log_level="INFO",
        )

        errors = config.validate()

        assert len(errors) == 1
        assert "at least one day" in errors[0]

    def test_memory_path_is_valid(self):
        """Test an in-memory database needs no directory."""
        config = Config(
            db_path=Path(":memory:"),
            loan_days=14,
            guard_loan_references=False,
            log_level="INFO",
        )

        assert config.is_memory
        assert config.validate() == []

    def test_global_instance(self, monkeypatch):
        """Test get_config caches until reset."""
        first = get_config()
        monkeypatch.setenv("LIBRARYSERVER_LOAN_DAYS", "3")

        assert get_config() is first
        reset_config()
        assert get_config().loan_days == 3
