"""
Unit Tests for Configuration Management.

Tests run against the real project YAML files. Failure scenarios use
tmp_path to create controlled filesystems.
"""

import pytest

from temporal_books.core.config import (
    DEFAULT_CONNECTION_STRING,
    AppConfig,
    Settings,
    find_project_root,
    get_app_config,
    get_connection_string,
    get_server_address,
    get_settings,
    load_yaml_config,
    validate_project_root,
)


@pytest.fixture(autouse=True)
def _clear_config_cache():
    """Clear lru_cache between tests so each test gets a fresh load."""
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


class TestFindProjectRoot:
    """Tests for .project_root marker discovery."""

    def test_finds_root_from_project_directory(self):
        root = find_project_root()
        assert (root / ".project_root").exists()
        assert (root / "config" / "settings").is_dir()

    def test_raises_when_no_marker_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(RuntimeError, match="Project root not found"):
            find_project_root()

    def test_validate_exits_when_marker_missing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit):
            validate_project_root()


class TestLoadYamlConfig:
    """Tests for YAML loading."""

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            load_yaml_config("does-not-exist.yaml")

    def test_invalid_file_is_reported(self, tmp_path, monkeypatch):
        (tmp_path / ".project_root").touch()
        settings_dir = tmp_path / "config" / "settings"
        settings_dir.mkdir(parents=True)
        (settings_dir / "application.yaml").write_text("name: only-a-name\n")
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ValueError, match="application.yaml"):
            AppConfig()


class TestAppConfig:
    """Tests for the validated YAML configuration."""

    def test_database_settings(self):
        database = get_app_config().database

        assert database.name == "books"
        assert database.collections.changes == "books-changes"
        assert database.collections.states == "books-states"
        assert database.collections.best_so_far == "books-bestsofar"

    def test_pagination_defaults(self):
        pagination = get_app_config().application.pagination

        assert pagination.default_limit == 20

    def test_server_address(self):
        host, port = get_server_address()

        assert isinstance(host, str)
        assert isinstance(port, int)


class TestSettings:
    """Tests for secrets."""

    def test_default_connection_string(self, monkeypatch):
        monkeypatch.delenv("BooksConnectionString", raising=False)
        monkeypatch.delenv("BOOKSCONNECTIONSTRING", raising=False)

        assert Settings().books_connection_string == DEFAULT_CONNECTION_STRING
        assert DEFAULT_CONNECTION_STRING == "mongodb://localhost:27017"

    def test_connection_string_from_environment(self, monkeypatch):
        monkeypatch.setenv("BooksConnectionString", "mongodb://db.example:27017")

        assert get_connection_string() == "mongodb://db.example:27017"
