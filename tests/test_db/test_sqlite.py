"""Tests for SQLite database setup and shared schemas."""

from sqlalchemy import inspect

from libraryserver.db.schemas import UpsertOutcome, UpsertResult
from libraryserver.db.sqlite import Database, get_db, reset_db


class TestDatabaseCreation:
    """Tests for database initialization."""

    def test_creates_all_tables(self, db: Database):
        """Test that all four tables exist."""
        tables = set(inspect(db.engine).get_table_names())
        assert {"addresses", "customers", "media", "loans"} <= tables

    def test_file_database(self, tmp_path):
        """Test a file database creates its directory."""
        path = tmp_path / "nested" / "library.db"
        database = Database(str(path))
        database.create_tables()

        assert path.parent.exists()
        assert path.exists()

    def test_get_db_uses_config(self, tmp_path, monkeypatch):
        """Test the global database follows LIBRARYSERVER_DB_PATH."""
        path = tmp_path / "global.db"
        monkeypatch.setenv("LIBRARYSERVER_DB_PATH", str(path))

        database = get_db()

        assert database.db_path == path
        assert get_db() is database
        reset_db()
        assert get_db() is not database

    def test_session_rolls_back_on_error(self, db: Database):
        """Test a failing session leaves no partial writes."""
        from libraryserver.media.models import Medium

        try:
            with db.get_session() as session:
                session.add(Medium(title="Dune", author="Frank Herbert"))
                session.flush()
                raise RuntimeError("boom")
        except RuntimeError:
            pass

        with db.get_session() as session:
            assert session.query(Medium).count() == 0


class TestUpsertResult:
    """Tests for the tagged upsert result."""

    def test_created(self):
        """Test the created flag."""
        assert UpsertResult(UpsertOutcome.CREATED, "record").created
        assert not UpsertResult(UpsertOutcome.UPDATED, "record").created

    def test_outcome_values(self):
        """Test outcome values used in responses."""
        assert UpsertOutcome.CREATED.value == "created"
        assert UpsertOutcome.UPDATED.value == "updated"
