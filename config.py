"""
Configuration for the task tracker service.

Provides environment-aware configuration classes following Flask's
recommended pattern: a shared ``Config`` base class holds defaults, and
environment-specific subclasses override only what differs.  The
``get_config`` factory resolves the correct class at runtime from an
explicit name or the ``FLASK_ENV`` environment variable.

A local ``.env`` file is honoured (without overriding variables that are
already set) so the service can be configured without exporting anything.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv(override=False)

# Fallback signing secret used when JWT_SECRET is not configured.  Must be
# overridden in any real deployment.
DEFAULT_JWT_SECRET = "secretkey"


class Config:
    """
    Base configuration shared by all environments.

    Every setting except the token lifetime can be overridden through an
    environment variable.
    """

    JWT_SECRET_KEY: str = os.environ.get("JWT_SECRET") or DEFAULT_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    # Session tokens always live for two hours
    JWT_EXPIRY_HOURS: int = 2
    # Seconds of tolerance for clock differences between issuer and verifier
    JWT_CLOCK_SKEW_SECONDS: int = int(os.environ.get("JWT_CLOCK_SKEW_SECONDS", "0"))

    PASSWORD_HASH_METHOD: str = os.environ.get("PASSWORD_HASH_METHOD", "scrypt")

    HOST: str = os.environ.get("HOST", "127.0.0.1")
    PORT: int = int(os.environ.get("PORT", "3000"))

    # Deployment label reported by the health endpoint
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "unknown")


class DevelopmentConfig(Config):
    """Local development: debug on, testing off."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """
    Configuration for the automated test suite.

    ``TESTING = True`` makes Flask propagate exceptions instead of rendering
    error pages.  A cheap PBKDF2 work factor keeps registration-heavy tests
    fast; it is never used outside tests.
    """

    DEBUG: bool = True
    TESTING: bool = True
    JWT_SECRET_KEY: str = (
        os.environ.get("TEST_JWT_SECRET")
        or os.environ.get("JWT_SECRET")
        or DEFAULT_JWT_SECRET
    )
    PASSWORD_HASH_METHOD: str = "pbkdf2:sha256:1000"


class ProductionConfig(Config):
    """
    Configuration for production deployments.

    ``JWT_SECRET`` should always be supplied here; the fallback secret from
    the base class still applies when it is not.
    """

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Resolve a configuration class by environment name.

    Args:
        env: One of ``"development"``, ``"testing"``, or ``"production"``.
            When ``None``, the ``FLASK_ENV`` environment variable is
            consulted, falling back to ``"development"`` if unset.

    Returns:
        The configuration class (not an instance).  Unrecognised names fall
        back to ``DevelopmentConfig``.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
