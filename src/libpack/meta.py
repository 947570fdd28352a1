# src/libpack/meta.py

"""Centralized program identity constants for Libpack."""

from typing import NamedTuple

_BASE = "libpack"

# CLI script name (the console entrypoint)
PROGRAM_SCRIPT = _BASE

# Human-readable name for banners, help text, etc.
PROGRAM_DISPLAY = _BASE.replace("-", " ").title()

# Python package / import name
PROGRAM_PACKAGE = _BASE.replace("-", "_")

# Environment variable prefix (used for LIBPACK_LOG_LEVEL, etc.)
PROGRAM_ENV = _BASE.replace("-", "_").upper()

# Short tagline or description for help screens and metadata
DESCRIPTION = (
    "Build a library package into development, production and ESM bundles"
    " with type declarations."
)


class Metadata(NamedTuple):
    version: str
    commit: str
