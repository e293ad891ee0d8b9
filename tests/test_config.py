"""
Confession Board — Settings Tests
==================================

What:  Environment loading, required fields and validators of Settings.
"""

import pytest
from pydantic import ValidationError

from confession_board.config import Settings


class TestRequiredSettings:

    def test_missing_database_url_fails(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("PORT", "8000")
        with pytest.raises(ValidationError, match="database_url"):
            Settings(_env_file=None)

    def test_missing_port_fails(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db/app")
        monkeypatch.delenv("PORT", raising=False)
        with pytest.raises(ValidationError, match="port"):
            Settings(_env_file=None)

    def test_loaded_from_environment(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db/app")
        monkeypatch.setenv("PORT", "3001")
        settings = Settings(_env_file=None)
        assert settings.port == 3001
        assert settings.database_url == "postgresql+asyncpg://u:p@db/app"


class TestDefaults:

    def test_defaults(self):
        settings = Settings(_env_file=None, database_url="sqlite+aiosqlite:///x.db", port=8000)
        assert settings.bcrypt_rounds == 10
        assert settings.strict_not_found is False
        assert settings.expose_password_hash is True
        assert settings.cors_origins_list == ["*"]


class TestValidators:

    @pytest.mark.parametrize(
        "url",
        ["postgres://u:p@db:5432/app", "postgresql://u:p@db:5432/app"],
    )
    def test_libpq_urls_use_asyncpg(self, url):
        settings = Settings(_env_file=None, database_url=url, port=8000)
        assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/app"

    def test_empty_database_url_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, database_url="", port=8000)

    def test_log_level_normalized(self):
        settings = Settings(_env_file=None, database_url="sqlite+aiosqlite:///x.db", port=8000, log_level="debug")
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError, match="Invalid log_level"):
            Settings(_env_file=None, database_url="sqlite+aiosqlite:///x.db", port=8000, log_level="LOUD")

    def test_port_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, database_url="sqlite+aiosqlite:///x.db", port=70000)

    def test_cors_origins_split(self):
        settings = Settings(
            _env_file=None,
            database_url="sqlite+aiosqlite:///x.db",
            port=8000,
            cors_origins="http://a.test, http://b.test",
        )
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
