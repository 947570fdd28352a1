# src/libpack/env.py
"""Compile-time definitions sourced from .env files."""

import io
import json
from pathlib import Path

from dotenv import dotenv_values

from .constants import ENV_FILES_DEVELOPMENT, ENV_FILES_PRODUCTION
from .utils_logs import get_logger


def env_files(*, production: bool) -> tuple[str, ...]:
    """Env file names to try for a mode, most specific first."""
    return ENV_FILES_PRODUCTION if production else ENV_FILES_DEVELOPMENT


def read_env(root: Path, *, production: bool) -> dict[str, str]:
    """Parse the first readable env file for the mode.

    Falls back from the mode file to the generic `.env`, then to an empty
    mapping. Never raises.
    """
    logger = get_logger()

    for name in env_files(production=production):
        path = root / name
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.trace("[ENV] skip %s: %s", path, e)
            continue

        logger.debug("Using env file %s", name)
        # `${NAME}` stays literal; the host environment is never consulted
        values = dotenv_values(stream=io.StringIO(text), interpolate=False)
        # bare `KEY` lines (no `=`) define nothing
        return {key: value for key, value in values.items() if value is not None}

    logger.trace("[ENV] no env file found in %s", root)
    return {}


def parse_definition(root: Path, *, production: bool) -> dict[str, str]:
    """Map every env variable to a `process.env.NAME` string-literal definition."""
    return {
        f"process.env.{key}": json.dumps(value)
        for key, value in read_env(root, production=production).items()
    }
