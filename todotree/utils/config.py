"""
Configuration utilities for the todotree tool.
"""

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from .logger import get_logger

log = get_logger(__name__)

ENV_FILE_NAME = ".todotree.env"
APP_NAME = "todotree"


def load_env_vars() -> None:
    """
    Load environment variables from .env files in the following order:
    1. .todotree.env in the current directory
    2. .todotree.env in the user's home directory
    Variables already set in the environment are never overridden.
    """
    # Load from current directory
    if os.path.exists(ENV_FILE_NAME):
        load_dotenv(ENV_FILE_NAME)

    # Load from home directory
    home_env = Path.home() / ENV_FILE_NAME
    if home_env.exists():
        load_dotenv(home_env)


def get_config(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get configuration value from environment variables."""
    return os.getenv(key, default)


def _get_hours(key: str, default: float) -> float:
    raw = get_config(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        log.warning("Ignoring %s=%r: not a number, using %s", key, raw, default)
        return default
    if value < 0:
        log.warning("Ignoring %s=%r: must not be negative, using %s", key, raw, default)
        return default
    return value


def default_tasks_path() -> Path:
    return Path(typer.get_app_dir(APP_NAME)) / "tasks.json"


@dataclass
class Settings:
    tasks_file: Path
    done_visible: timedelta
    due_soon: timedelta
    breadcrumb_separator: str
    log_level: str


def get_settings() -> Settings:
    """Build settings from the environment (call ``load_env_vars`` first)."""
    tasks_file = get_config("TODOTREE_FILE")
    return Settings(
        tasks_file=Path(tasks_file).expanduser() if tasks_file else default_tasks_path(),
        done_visible=timedelta(hours=_get_hours("TODOTREE_DONE_VISIBLE_HOURS", 24)),
        due_soon=timedelta(hours=_get_hours("TODOTREE_DUE_SOON_HOURS", 24)),
        breadcrumb_separator=get_config("TODOTREE_BREADCRUMB_SEP", " > "),
        log_level=get_config("TODOTREE_LOG_LEVEL", "WARNING").upper(),
    )
