"""
Unit tests for configuration resolution.

Checks environment-name lookup, the fixed token lifetime, and the
documented fallback signing secret used when ``JWT_SECRET`` is unset.
"""

from __future__ import annotations

import importlib

import pytest

import config

pytestmark = pytest.mark.unit


@pytest.fixture
def reload_config():
    """Reload the config module after the test so later tests see a clean copy."""
    yield lambda: importlib.reload(config)
    importlib.reload(config)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("development", "DevelopmentConfig"),
        ("testing", "TestingConfig"),
        ("production", "ProductionConfig"),
        ("nonsense", "DevelopmentConfig"),
    ],
)
def test_get_config_by_name(name, expected):
    """Test that names map to their classes and unknown names fall back."""
    assert config.get_config(name).__name__ == expected


def test_get_config_reads_flask_env(monkeypatch):
    """Test that FLASK_ENV is consulted when no name is given."""
    # Arrange
    monkeypatch.setenv("FLASK_ENV", "production")

    # Act & Assert
    assert config.get_config() is config.ProductionConfig


def test_token_lifetime_is_two_hours():
    """Test that every environment issues two-hour tokens."""
    for config_class in (config.DevelopmentConfig, config.TestingConfig, config.ProductionConfig):
        assert config_class.JWT_EXPIRY_HOURS == 2
        assert config_class.JWT_ALGORITHM == "HS256"


def test_missing_jwt_secret_falls_back_to_default(monkeypatch, reload_config):
    """Test that the service still starts with the fixed fallback secret."""
    # Arrange
    monkeypatch.delenv("JWT_SECRET", raising=False)

    # Act
    module = reload_config()

    # Assert
    assert module.Config.JWT_SECRET_KEY == "secretkey"
    assert module.ProductionConfig.JWT_SECRET_KEY == "secretkey"


def test_jwt_secret_env_overrides_default(monkeypatch, reload_config):
    """Test that JWT_SECRET replaces the fallback secret."""
    # Arrange
    monkeypatch.setenv("JWT_SECRET", "from-the-environment")

    # Act
    module = reload_config()

    # Assert
    assert module.Config.JWT_SECRET_KEY == "from-the-environment"



def test_environment_label_read_from_env(monkeypatch, reload_config):
    """Test that ENVIRONMENT sets the deployment label, defaulting to 'unknown'."""
    # Arrange
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    default_label = reload_config().Config.ENVIRONMENT
    monkeypatch.setenv("ENVIRONMENT", "staging")

    # Act
    module = reload_config()

    # Assert
    assert default_label == "unknown"
    assert module.ProductionConfig.ENVIRONMENT == "staging"
