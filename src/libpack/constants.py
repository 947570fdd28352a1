# src/libpack/constants.py
"""
Central constants used across the project.
"""

# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"
DEFAULT_ENV_WATCH_INTERVAL: str = "WATCH_INTERVAL"
DEFAULT_ENV_BUNDLER: str = "ESBUILD"
DEFAULT_ENV_TYPECHECKER: str = "TSC"

# --- config files (relative to the project root) ---
DEFAULT_BUILD_CONFIG: str = "build.config.json"
DEFAULT_PACKAGE_FILE: str = "package.json"
DEFAULT_TSCONFIG: str = "tsconfig.json"

# --- env files, in lookup order per mode ---
ENV_FILES_PRODUCTION: tuple[str, ...] = (".env.production", ".env")
ENV_FILES_DEVELOPMENT: tuple[str, ...] = (".env.development", ".env")

# --- external tools ---
DEFAULT_BUNDLER_COMMAND: str = "npx --no-install esbuild"
DEFAULT_TYPECHECKER_COMMAND: str = "npx --no-install tsc"

# --- config defaults ---
DEFAULT_LOG_LEVEL: str = "info"
DEFAULT_WATCH_INTERVAL: float = 1.0  # seconds
DEFAULT_HINT_CUTOFF: float = 0.6

# --- generated files ---
ROOT_FILE_NAME: str = "index.js"
DEV_FLAG: str = "__DEV__"
