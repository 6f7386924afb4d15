"""
Runtime configuration for jobmatch.

Values come from the environment, optionally seeded from a .env file in the
working directory. Defaults match the engine constants.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Optional

from dotenv import load_dotenv

DEFAULT_FUZZY_THRESHOLD = 0.85
DEFAULT_DESCRIPTION_PREFIX = 500
DEFAULT_MATCH_LIMIT = 20
DEFAULT_DB_PATH = "data/jobs.db"
DEFAULT_LOG_LEVEL = "INFO"


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""
    pass


def load_env(env_path: Optional[Path] = None) -> bool:
    """Load .env from the project root if present.

    Existing environment variables win over values in the file.
    Returns True when a file was loaded.
    """
    env_path = env_path or Path.cwd() / ".env"
    if not env_path.exists():
        return False
    return load_dotenv(dotenv_path=env_path, override=False)


@dataclass(frozen=True)
class Settings:
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD
    description_prefix: int = DEFAULT_DESCRIPTION_PREFIX
    match_limit: int = DEFAULT_MATCH_LIMIT
    db_path: Path = Path(DEFAULT_DB_PATH)
    log_level: str = DEFAULT_LOG_LEVEL
    log_dir: Optional[Path] = None


def _read(env: Mapping[str, str], name: str, cast: Callable, default):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as e:
        raise ConfigError(f"{name} has an invalid value {raw!r}: {e}") from e


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        env: Mapping to read from (default: os.environ)

    Raises:
        ConfigError: If a numeric variable is malformed or out of range
    """
    if env is None:
        env = os.environ

    threshold = _read(env, "JOBMATCH_FUZZY_THRESHOLD", float, DEFAULT_FUZZY_THRESHOLD)
    if not 0.0 <= threshold <= 1.0:
        raise ConfigError(f"JOBMATCH_FUZZY_THRESHOLD must be between 0 and 1, got {threshold}")

    prefix = _read(env, "JOBMATCH_DESCRIPTION_PREFIX", int, DEFAULT_DESCRIPTION_PREFIX)
    if prefix < 0:
        raise ConfigError(f"JOBMATCH_DESCRIPTION_PREFIX must be >= 0, got {prefix}")

    limit = _read(env, "JOBMATCH_MATCH_LIMIT", int, DEFAULT_MATCH_LIMIT)

    log_level = _read(env, "JOBMATCH_LOG_LEVEL", str.upper, DEFAULT_LOG_LEVEL)
    if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigError(f"JOBMATCH_LOG_LEVEL must be a logging level name, got {log_level!r}")

    log_dir = _read(env, "JOBMATCH_LOG_DIR", Path, None)

    return Settings(
        fuzzy_threshold=threshold,
        description_prefix=prefix,
        match_limit=limit,
        db_path=_read(env, "JOBMATCH_DB_PATH", Path, Path(DEFAULT_DB_PATH)),
        log_level=log_level,
        log_dir=log_dir,
    )
