"""
Tests for settings and the engine they select.
"""

from app.core.config import Settings, get_settings
from app.core.database import engine


def test_override_replaces_postgres_url():
    settings = Settings(DATABASE_URL_OVERRIDE="sqlite:///./local.db")

    assert settings.DATABASE_URL == "sqlite:///./local.db"


def test_postgres_url_built_from_parts():
    settings = Settings(
        DATABASE_URL_OVERRIDE=None,
        POSTGRES_USER="jobly",
        POSTGRES_PASSWORD="pw",
        POSTGRES_SERVER="db",
        POSTGRES_PORT="5433",
        POSTGRES_DB="jobs",
    )

    assert settings.DATABASE_URL == "postgresql://jobly:pw@db:5433/jobs"


def test_test_run_uses_sqlite_engine():
    assert get_settings().DATABASE_URL.startswith("sqlite")
    assert engine.dialect.name == "sqlite"
