from __future__ import annotations

import importlib

import pytest

from config import get_settings_module


@pytest.mark.parametrize(
    "value, expected",
    [
        ("production", "config.production"),
        ("PROD", "config.production"),
        (" testing ", "config.testing"),
        ("local", "config.development"),
        ("staging", "config.development"),
    ],
)
def test_app_env_selects_settings_module(monkeypatch, value, expected):
    monkeypatch.setenv("APP_ENV", value)

    assert get_settings_module() == expected


def test_default_is_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)

    assert get_settings_module() == "config.development"


def test_testing_settings_disable_aws_bootstrap():
    settings = importlib.import_module(get_settings_module())

    assert settings.TESTING is True
    assert settings.AUTO_INIT_AWS is False
    assert settings.TABLES["users"]
