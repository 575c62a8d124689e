"""Per-user directories for configuration, data, cache and logs."""

from __future__ import annotations

from pathlib import Path

import platformdirs

APP_NAME = "activitywatch"
SERVER_NAME = "aw-server-rust"


def _ensure(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Return the server's configuration directory, creating it if needed."""
    base = Path(platformdirs.user_config_dir(appname=APP_NAME, roaming=False))
    return _ensure(base / SERVER_NAME)


def get_data_dir() -> Path:
    """Return the server's data directory, creating it if needed."""
    base = Path(platformdirs.user_data_dir(appname=APP_NAME, roaming=False))
    return _ensure(base / SERVER_NAME)


def get_cache_dir() -> Path:
    """Return the server's cache directory, creating it if needed."""
    base = Path(platformdirs.user_cache_dir(appname=APP_NAME))
    return _ensure(base / SERVER_NAME)


def get_log_dir(module: str) -> Path:
    """Return the log directory of ``module``, creating it if needed."""
    base = Path(platformdirs.user_log_dir(appname=APP_NAME))
    return _ensure(base / module)


def db_path(testing: bool, data_dir: Path | str | None = None) -> Path:
    """Return the path of the database file, kept apart for testing mode."""
    directory = Path(data_dir) if data_dir is not None else get_data_dir()
    return directory / ("sqlite-testing.db" if testing else "sqlite.db")