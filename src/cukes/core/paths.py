from __future__ import annotations

import os
from pathlib import Path

from cukes.core import config

DEFAULT_FEATURES_DIR = Path("specs/bdd")
DEFAULT_FEATURE_PATTERN = "*.feature"


def features_dir(cli_value: str | None = None) -> Path:
    """Resolve the directory holding feature files.

    Precedence: explicit CLI value, `CUKES_FEATURES_DIR`, `features.dir` in config, then `specs/bdd`.
    """
    if cli_value:
        return Path(cli_value).expanduser()
    override = os.environ.get("CUKES_FEATURES_DIR")
    if override:
        return Path(override).expanduser()
    configured = config.get_config_value("features", "dir")
    if isinstance(configured, str) and configured.strip():
        return Path(configured).expanduser()
    return DEFAULT_FEATURES_DIR


def feature_pattern(cli_value: str | None = None) -> str:
    if cli_value:
        return cli_value
    return config.get_config_str("features", "pattern", default=DEFAULT_FEATURE_PATTERN)
