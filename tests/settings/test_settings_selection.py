from __future__ import annotations

import importlib

import pytest

from config import get_settings_module


@pytest.mark.parametrize(
    "app_env, expected",
    [
        ("prod", "config.production"),
        ("Production", "config.production"),
        ("test", "config.testing"),
        ("dev", "config.development"),
        ("staging", "config.development"),
    ],
)
def test_app_env_selects_settings_module(monkeypatch, app_env, expected):
    monkeypatch.setenv("APP_ENV", app_env)
    assert get_settings_module() == expected


def test_explicit_name_wins_over_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    assert get_settings_module("testing") == "config.testing"


def test_unset_app_env_defaults_to_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_settings_module() == "config.development"


def test_testing_settings_use_memory_backend_with_default_grace(monkeypatch):
    monkeypatch.delenv("STORAGE_BACKEND", raising=False)
    settings = importlib.reload(importlib.import_module("config.testing"))

    assert settings.STORAGE_BACKEND == "memory"
    assert settings.GRACE_PERIOD_MINUTES == 15
