import pytest

from portfolio.shared.config import ConfigError, Settings
from portfolio.shared.cors import DEV_ORIGINS, get_allowed_origins


ENV_VARS = ["DATABASE_URL", "PORT", "ENVIRONMENT", "FRONTEND_URL", "DB_CONNECT_TIMEOUT", "LOG_LEVEL"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so undo also removes values loaded from a .env file
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_database_url_is_required():
    with pytest.raises(ConfigError, match="DATABASE_URL"):
        Settings.from_env(env_file=None)


def test_defaults(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg2://user:pw@db:5432/portfolio")

    settings = Settings.from_env(env_file=None)

    assert settings.port == 5000
    assert settings.environment == "development"
    assert settings.is_production is False
    assert settings.frontend_url is None
    assert settings.db_connect_timeout == 5
    assert settings.log_level == "INFO"


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("FRONTEND_URL", "https://me.example.com/")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env(env_file=None)

    assert settings.port == 8080
    assert settings.is_production is True
    assert settings.frontend_url == "https://me.example.com/"
    assert settings.log_level == "DEBUG"


def test_malformed_port(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("PORT", "eighty")

    with pytest.raises(ConfigError, match="PORT"):
        Settings.from_env(env_file=None)


def test_values_from_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "DATABASE_URL=postgresql+psycopg2://user:pw@localhost:5432/portfolio\n"
        "PORT=7000\n"
        "ENVIRONMENT=staging\n"
    )

    settings = Settings.from_env(env_file=str(env_file))

    assert settings.database_url == "postgresql+psycopg2://user:pw@localhost:5432/portfolio"
    assert settings.port == 7000
    assert settings.environment == "staging"


def test_environment_wins_over_env_file(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("DATABASE_URL=sqlite:///from-file.db\nPORT=7000\n")
    monkeypatch.setenv("PORT", "9000")

    settings = Settings.from_env(env_file=str(env_file))

    assert settings.database_url == "sqlite:///from-file.db"
    assert settings.port == 9000


def test_missing_env_file_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")

    settings = Settings.from_env(env_file=str(tmp_path / "absent.env"))

    assert settings.database_url == "sqlite://"


def test_production_origins_come_from_frontend_url():
    assert get_allowed_origins("production", "https://me.example.com/") == ["https://me.example.com"]
    assert get_allowed_origins("production", "https://a.example.com, https://b.example.com/") == [
        "https://a.example.com",
        "https://b.example.com",
    ]
    assert get_allowed_origins("production") == []


def test_development_adds_local_origins():
    development = get_allowed_origins("development", "https://me.example.com")

    assert development[0] == "https://me.example.com"
    assert set(DEV_ORIGINS) <= set(development)
