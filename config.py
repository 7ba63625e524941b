"""
Suite configuration module.

This module defines configuration classes for the environments the
SpendWise UI suite runs in (a developer machine, CI, and the unit tests
of the harness itself). Values are loaded from environment variables
with sensible defaults.
"""

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent


def _float_env(name: str, default: float) -> float:
    return float(os.environ.get(name, str(default)))


class Config:
    """Base configuration with default settings."""

    # Entry point of the application under test. The local dev server
    # uses a self-signed certificate, hence the TLS settings below.
    BASE_URL: str = os.environ.get("SPENDWISE_BASE_URL", "https://localhost:51302")
    VERIFY_TLS: bool = False
    IGNORE_HTTPS_ERRORS: bool = True

    USERNAME: str = os.environ.get("SPENDWISE_USERNAME", "le")
    PASSWORD: str = os.environ.get("SPENDWISE_PASSWORD", "123456")

    # Text of the post-login marker that proves the session is usable.
    LOGIN_MARKER_TEXT: str = "Dashboard"

    # Wait policy, in seconds
    DEFAULT_TIMEOUT: float = _float_env("SPENDWISE_TIMEOUT", 30)
    VALIDATION_TIMEOUT: float = _float_env("SPENDWISE_VALIDATION_TIMEOUT", 10)
    POLL_INTERVAL: float = _float_env("SPENDWISE_POLL_INTERVAL", 0.5)
    DIALOG_SETTLE_DELAY: float = _float_env("SPENDWISE_DIALOG_SETTLE_DELAY", 0.5)
    APP_READY_TIMEOUT: float = _float_env("SPENDWISE_APP_READY_TIMEOUT", 30)

    VIEWPORT: dict = {"width": 1280, "height": 720}

    LOCATORS_FILE: Path = Path(
        os.environ.get(
            "SPENDWISE_LOCATORS",
            BASE_DIR / "tests" / "e2e" / "locators" / "spendwise.yml",
        )
    )

    SCREENSHOT_DIR: str = "test-results/screenshots"


class LocalConfig(Config):
    """Developer machine configuration."""


class CIConfig(Config):
    """CI configuration: slower shared runners get a longer app warm-up."""

    APP_READY_TIMEOUT: float = _float_env("SPENDWISE_APP_READY_TIMEOUT", 120)
    VIEWPORT: dict = {"width": 1920, "height": 1080}


class TestingConfig(Config):
    """Configuration for the harness's own unit tests."""

    BASE_URL: str = "https://spendwise.test"
    USERNAME: str = "tester"
    PASSWORD: str = "secret"

    # Short waits so a failing fake page fails fast
    DEFAULT_TIMEOUT: float = 2.0
    VALIDATION_TIMEOUT: float = 1.0
    POLL_INTERVAL: float = 0.1
    DIALOG_SETTLE_DELAY: float = 0.0
    APP_READY_TIMEOUT: float = 1.0


# Configuration mapping for easy access
config = {
    "local": LocalConfig,
    "ci": CIConfig,
    "testing": TestingConfig,
    "default": LocalConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (local, ci, testing).
             If None, uses the SPENDWISE_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("SPENDWISE_ENV", "local")
    return config.get(env, config["default"])
