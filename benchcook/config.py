"""
Configuration loader for benchcook.

Defaults can be overridden from an ini file with a [cook] section, e.g.

    [cook]
    data_dir = /srv/bench/data
    output = /srv/bench/data.js
    jobs = 4
    log_level = DEBUG

The ini file is taken from the --config flag or, failing that, from the
BENCHCOOK_CONFIG environment variable. Command line flags override the ini.
"""

from dataclasses import dataclass, fields, replace
from typing import Optional
import configparser
import os

DEFAULT_DATA_DIR = "data"
DEFAULT_OUTPUT = "data.js"
CONFIG_ENV_VAR = "BENCHCOOK_CONFIG"
CONFIG_SECTION = "cook"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class CookConfig:
    """Settings for loading logs and writing the cooked report."""

    data_dir: str = DEFAULT_DATA_DIR
    output: str = DEFAULT_OUTPUT
    jobs: int = 1
    log_level: str = "INFO"

    def with_overrides(self, **overrides) -> "CookConfig":
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        changes = {k: v for k, v in overrides.items() if k in known and v is not None}
        config = replace(self, **changes)
        config.jobs = max(1, int(config.jobs))
        config.log_level = config.log_level.upper()
        return config


def load_config(path: Optional[str] = None) -> CookConfig:
    """
    Load configuration from an ini file.

    Args:
        path: Path to the ini file; falls back to $BENCHCOOK_CONFIG, then defaults

    Returns:
        CookConfig with ini values applied

    Raises:
        OSError: If an explicitly named config file cannot be read
        ValueError: If a value has the wrong type or the ini is malformed
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    config = CookConfig()
    if not path:
        return config

    parser = configparser.ConfigParser()
    try:
        with open(path) as f:
            parser.read_file(f)
    except configparser.Error as e:
        raise ValueError(f"Could not parse config {path}: {e}") from e

    if not parser.has_section(CONFIG_SECTION):
        return config

    section = parser[CONFIG_SECTION]
    try:
        jobs = section.getint("jobs", fallback=config.jobs)
    except ValueError as e:
        raise ValueError(f"{path}: [{CONFIG_SECTION}] jobs must be an integer") from e

    log_level = section.get("log_level", fallback=config.log_level).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"{path}: [{CONFIG_SECTION}] log_level must be one of {', '.join(LOG_LEVELS)}")

    return config.with_overrides(
        data_dir=section.get("data_dir", fallback=None),
        output=section.get("output", fallback=None),
        jobs=jobs,
        log_level=log_level,
    )
