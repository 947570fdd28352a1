# src/libpack/__init__.py

"""Libpack: bundle a library package for development, production and ESM.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use or custom build scripts.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - main()              → CLI entrypoint
    - load_project()      → Read package.json, tsconfig and build config
    - run_build()         → Execute one full build
    - watch_for_changes() → Rebuild whenever sources change
"""

from .actions import (
    get_metadata,
    watch_for_changes,
)
from .build import (
    build,
    run_build,
)
from .bundler import (
    MODE_SETTINGS,
    BuildMode,
    ModeSettings,
    build_all,
    build_bundle,
    build_development,
    build_esm,
    build_production,
    bundle_options,
    esbuild_args,
    output_path,
)
from .cli import (
    main,
)
from .config import (
    Project,
    determine_log_level,
    determine_watch_interval,
    find_build_config,
    load_build_config,
    load_package,
    load_project,
    load_tsconfig,
)
from .config_validate import ValidationSummary, validate_build_config
from .constants import (
    DEFAULT_BUILD_CONFIG,
    DEFAULT_BUNDLER_COMMAND,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PACKAGE_FILE,
    DEFAULT_TSCONFIG,
    DEFAULT_TYPECHECKER_COMMAND,
    DEFAULT_WATCH_INTERVAL,
)
from .declarations import compile_declarations, declaration_options
from .dependencies import get_package_name, read_dependencies
from .env import parse_definition, read_env
from .meta import (
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
    Metadata,
)
from .root import build_root, render_root
from .runtime import current_runtime
from .tools import ToolError, run_tool, run_tool_async, tool_command
from .types import (
    BuildConfig,
    BundleOptions,
    PackageMetadata,
    Runtime,
    TypeCheckConfig,
)
from .utils import (
    load_json,
    load_jsonc,
    output_file,
    should_use_color,
)
from .utils_async import gather_or_cancel
from .utils_logs import (
    LEVEL_ORDER,
    get_logger,
    log_elapsed,
    set_log_level,
)


__all__ = [  # noqa: RUF022
    # --- CLI / Actions ---
    "get_metadata",
    "main",
    "watch_for_changes",
    #
    # --- Build Engine ---
    "build",
    "build_all",
    "build_bundle",
    "build_development",
    "build_esm",
    "build_production",
    "build_root",
    "bundle_options",
    "compile_declarations",
    "declaration_options",
    "esbuild_args",
    "output_path",
    "render_root",
    "run_build",
    #
    # --- Config Handling ---
    "determine_log_level",
    "determine_watch_interval",
    "find_build_config",
    "get_package_name",
    "load_build_config",
    "load_package",
    "load_project",
    "load_tsconfig",
    "parse_definition",
    "read_dependencies",
    "read_env",
    "validate_build_config",
    #
    # --- Constants / Metadata / Runtime ---
    "DEFAULT_BUILD_CONFIG",
    "DEFAULT_BUNDLER_COMMAND",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_PACKAGE_FILE",
    "DEFAULT_TSCONFIG",
    "DEFAULT_TYPECHECKER_COMMAND",
    "DEFAULT_WATCH_INTERVAL",
    "MODE_SETTINGS",
    "Metadata",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    "current_runtime",
    #
    # --- utils ---
    "LEVEL_ORDER",
    "gather_or_cancel",
    "get_logger",
    "load_json",
    "load_jsonc",
    "log_elapsed",
    "output_file",
    "run_tool",
    "run_tool_async",
    "set_log_level",
    "should_use_color",
    "tool_command",
    #
    # --- Types ---
    "BuildConfig",
    "BuildMode",
    "BundleOptions",
    "ModeSettings",
    "PackageMetadata",
    "Project",
    "Runtime",
    "ToolError",
    "TypeCheckConfig",
    "ValidationSummary",
]
