import warnings

import pytest

from app.core.config import Settings


def test_default_secret_is_refused_in_production(monkeypatch):
    monkeypatch.setattr(Settings, "ENVIRONMENT", "production")
    monkeypatch.setattr(Settings, "DATABASE_URL", "postgresql://cart:pw@db:5432/cart")
    monkeypatch.setattr(Settings, "SECRET_KEY", "change_this_secret_in_prod")

    with pytest.raises(ValueError, match="SECRET_KEY"):
        Settings().validate()


def test_sqlite_is_refused_in_production(monkeypatch):
    monkeypatch.setattr(Settings, "ENVIRONMENT", "prod")
    monkeypatch.setattr(Settings, "SECRET_KEY", "real-secret")
    monkeypatch.setattr(Settings, "DATABASE_URL", "sqlite:///./cart.db")

    with pytest.raises(ValueError, match="SQLite"):
        Settings().validate()


def test_default_secret_warns_outside_production(monkeypatch):
    monkeypatch.setattr(Settings, "ENVIRONMENT", "development")
    monkeypatch.setattr(Settings, "SECRET_KEY", "change_this_secret_in_prod")

    with pytest.warns(UserWarning, match="SECRET_KEY"):
        Settings().validate()


def test_development_settings_pass_validation(monkeypatch):
    monkeypatch.setattr(Settings, "ENVIRONMENT", "development")
    monkeypatch.setattr(Settings, "SECRET_KEY", "real-secret")
    monkeypatch.setattr(Settings, "DATABASE_URL", "sqlite:///./cart.db")

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        Settings().validate()
