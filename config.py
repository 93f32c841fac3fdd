"""
Task tracker settings, one class per environment.

``get_config`` picks the class from ``FLASK_ENV``.  Tokens are RS256, so
the app needs both halves of a PEM key pair: the private key signs tokens
at login/registration, the public key checks every bearer token.
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent


def _env_int(name: str, default: int) -> int:
    return int(os.environ.get(name, str(default)))


def _read_pem(value_var: str, path_var: str) -> str:
    """Return the PEM text in *value_var*, else the file named by *path_var*."""
    pem = os.environ.get(value_var, "").strip()
    if pem:
        return pem

    path = os.environ.get(path_var, "").strip()
    if not path:
        raise RuntimeError(f"Missing JWT key configuration: set {value_var} or {path_var}.")
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Unable to read JWT key file at '{path}' from {path_var}.") from exc


def _key_vars(prefix: str) -> list[tuple[str, str]]:
    return [
        (f"{prefix}JWT_PRIVATE_KEY", f"{prefix}JWT_PRIVATE_KEY_PATH"),
        (f"{prefix}JWT_PUBLIC_KEY", f"{prefix}JWT_PUBLIC_KEY_PATH"),
    ]


def load_jwt_keys(*, testing: bool) -> tuple[str, str]:
    """
    Return ``(private_pem, public_pem)``.

    The test suite sets ``TEST_JWT_*`` variables; when any of them is
    present in testing mode they are used instead of ``JWT_*``.
    """
    prefix = ""
    if testing and any(
        os.environ.get(name, "").strip() for pair in _key_vars("TEST_") for name in pair
    ):
        prefix = "TEST_"
    private_vars, public_vars = _key_vars(prefix)
    return _read_pem(*private_vars), _read_pem(*public_vars)


class Config:
    """Defaults; every value can be overridden from the environment."""

    SECRET_KEY: str = os.environ.get("SECRET_KEY", "tracker-dev-secret-change-in-production")
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "DATABASE_URL",
        f"sqlite:///{BASE_DIR / 'instance' / 'tracker.db'}",
    )
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    JWT_EXPIRY_HOURS: int = _env_int("JWT_EXPIRY_HOURS", 24)
    # leeway for issuer/verifier clock drift
    JWT_CLOCK_SKEW_SECONDS: int = _env_int("JWT_CLOCK_SKEW_SECONDS", 30)

    DEFAULT_PAGE_SIZE: int = _env_int("DEFAULT_PAGE_SIZE", 10)
    MAX_PAGE_SIZE: int = _env_int("MAX_PAGE_SIZE", 100)

    # Account created by ``flask seed-admin``
    DEFAULT_ADMIN_EMAIL: str = os.environ.get("DEFAULT_ADMIN_EMAIL", "admin@test.com")
    DEFAULT_ADMIN_PASSWORD: str = os.environ.get("DEFAULT_ADMIN_PASSWORD", "password123")


class DevelopmentConfig(Config):
    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Separate SQLite file so test runs never touch ``tracker.db``."""

    DEBUG: bool = True
    TESTING: bool = True
    # check_same_thread=False: fixtures and the test client share one connection
    SQLALCHEMY_DATABASE_URI: str = os.environ.get(
        "TEST_DATABASE_URL",
        f"sqlite:///{BASE_DIR / 'instance' / 'test_tracker.db'}?check_same_thread=False",
    )
    SQLALCHEMY_ENGINE_OPTIONS: dict = {"pool_pre_ping": True}
    JWT_EXPIRY_HOURS: int = _env_int("TEST_JWT_EXPIRY_HOURS", 1)


class ProductionConfig(Config):
    """Secrets and keys must come from the environment."""

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """Config class for *env* (default ``FLASK_ENV``); unknown names get development."""
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
