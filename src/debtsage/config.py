"""Application configuration objects and helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment, rejecting garbage early."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}.") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "DebtSage"
    LOG_FILENAME = "debtsage.log"
    STRATEGIES = ("snowball", "avalanche")

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("DEBTSAGE_DEV_MODE", default=True)
        self.LOG_LEVEL = self._resolve_log_level()
        self.DEFAULT_STRATEGY = os.getenv("DEBTSAGE_DEFAULT_STRATEGY", "avalanche").strip().lower()
        self.DEFAULT_EXTRA_PAYMENT = _env_float("DEBTSAGE_DEFAULT_EXTRA_PAYMENT", 0.0)
        if self.DEFAULT_STRATEGY not in self.STRATEGIES:
            raise ValueError(
                f"DEBTSAGE_DEFAULT_STRATEGY must be one of {', '.join(self.STRATEGIES)}."
            )
        if self.DEFAULT_EXTRA_PAYMENT < 0:
            raise ValueError("DEBTSAGE_DEFAULT_EXTRA_PAYMENT cannot be negative.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs and exports live."""

        data_root = os.getenv("DEBTSAGE_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected locations fall back to user-local storage.
            fallback_path = Path.home() / ".local" / "share" / self.APP_NAME
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _resolve_log_level(self) -> int:
        name = os.getenv("DEBTSAGE_LOG_LEVEL", "INFO").strip().upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"DEBTSAGE_LOG_LEVEL {name!r} is not a logging level.")
        return level

    @property
    def log_file(self) -> Path:
        """Location of the rotating JSON log."""

        return self.DATA_DIR / "logs" / self.LOG_FILENAME


class DevConfig(BaseConfig):
    """Development configuration."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration used by the test suite."""

    __test__ = False  # keep pytest from collecting this as a test class

    DEBUG = False
    TESTING = True
