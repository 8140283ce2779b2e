import logging
import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv


load_dotenv()

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def env_port_or(port: str) -> Tuple[str, bool]:
    """Return the listen address from ``PORT``, or ``port`` when unset.

    The second value is True when the environment override was used. Empty
    values count as unset. The value is not checked for being numeric.
    """
    env_port = os.getenv("PORT")
    if not env_port:
        return f":{port}", False
    return f":{env_port}", True


def split_port(address: str) -> int:
    return int(address.lstrip(":"))


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables."""

    HOST: str = os.getenv("HOST", "0.0.0.0")
    DEFAULT_PORT: str = os.getenv("DEFAULT_PORT", "8080")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").upper()
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")

    @classmethod
    def log_level(cls) -> int:
        return getattr(logging, cls.LOG_LEVEL)

    @classmethod
    def validate(cls) -> None:
        if cls.LOG_LEVEL not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(sorted(LOG_LEVELS))}")
        if not cls.DEFAULT_PORT:
            raise ValueError("DEFAULT_PORT environment variable must not be empty")
