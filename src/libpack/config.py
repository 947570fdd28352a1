# src/libpack/config.py


import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from .config_validate import ValidationSummary, validate_build_config
from .constants import (
    DEFAULT_BUILD_CONFIG,
    DEFAULT_ENV_LOG_LEVEL,
    DEFAULT_ENV_WATCH_INTERVAL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PACKAGE_FILE,
    DEFAULT_TSCONFIG,
    DEFAULT_WATCH_INTERVAL,
)
from .dependencies import DEPENDENCY_GROUPS, get_package_name
from .meta import PROGRAM_ENV
from .types import BuildConfig, PackageMetadata, TypeCheckConfig
from .utils import load_json, load_jsonc, plural, remove_path_in_error_message
from .utils_logs import get_logger


# --------------------------------------------------------------------------- #
# project
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class Project:
    """Everything a build needs, loaded once at startup.

    Components receive this explicitly; nothing reads configuration
    from module globals.
    """

    root: Path
    package: PackageMetadata
    build: BuildConfig
    tsconfig: TypeCheckConfig
    tsconfig_path: Path

    @property
    def src_dir(self) -> Path:
        return (self.root / self.build["srcDir"]).resolve()

    @property
    def entry_point(self) -> Path:
        return self.src_dir / self.build["srcFile"]

    @property
    def out_dir(self) -> Path:
        return (self.root / self.build["outDir"]).resolve()

    @property
    def output_name(self) -> str:
        """Basename shared by every bundle and the root dispatcher."""
        return get_package_name(self.build.get("name") or self.package["name"])

    @property
    def output_base(self) -> Path:
        return self.out_dir / self.output_name


# --------------------------------------------------------------------------- #
# runtime settings
# --------------------------------------------------------------------------- #


def determine_log_level(
    args: argparse.Namespace,
    config_log_level: str | None = None,
) -> str:
    """Resolve log level from CLI → env → build config → default."""
    if getattr(args, "log_level", None):
        return cast("str", args.log_level)

    env_log_level = os.getenv(f"{PROGRAM_ENV}_{DEFAULT_ENV_LOG_LEVEL}") or os.getenv(
        DEFAULT_ENV_LOG_LEVEL
    )
    if env_log_level:
        return env_log_level

    if config_log_level:
        return config_log_level

    return DEFAULT_LOG_LEVEL


def determine_watch_interval(
    args: argparse.Namespace,
    build_cfg: BuildConfig | None = None,
) -> float:
    """Resolve the watch interval from CLI → build config → env → default."""
    cli_interval = getattr(args, "watch", None)
    if isinstance(cli_interval, (int, float)) and cli_interval > 0:
        return float(cli_interval)

    if build_cfg and "watchInterval" in build_cfg:
        return float(build_cfg["watchInterval"])

    env_interval = os.getenv(f"{PROGRAM_ENV}_{DEFAULT_ENV_WATCH_INTERVAL}")
    if env_interval:
        try:
            return float(env_interval)
        except ValueError:
            get_logger().warning(
                "Ignoring invalid %s_%s=%r",
                PROGRAM_ENV,
                DEFAULT_ENV_WATCH_INTERVAL,
                env_interval,
            )

    return DEFAULT_WATCH_INTERVAL


# --------------------------------------------------------------------------- #
# loading
# --------------------------------------------------------------------------- #


def find_build_config(args: argparse.Namespace, cwd: Path) -> Path:
    """Locate the build config: --config if given, else ./build.config.json."""
    if getattr(args, "config", None):
        config = Path(args.config).expanduser().resolve()
        if config.is_dir():
            config = config / DEFAULT_BUILD_CONFIG
    else:
        config = cwd / DEFAULT_BUILD_CONFIG

    if not config.exists():
        xmsg = f"No build config found ({config})"
        raise FileNotFoundError(xmsg)
    return config


def _log_validation_summary(summary: ValidationSummary, config_path: Path) -> None:
    logger = get_logger()

    if summary.warnings:
        logger.warning(
            "Build config %s has %d warning%s:\n  • %s",
            config_path.name,
            len(summary.warnings),
            plural(summary.warnings),
            "\n  • ".join(summary.warnings),
        )
    if summary.errors:
        logger.error(
            "Build config %s has %d error%s:\n  • %s",
            config_path.name,
            len(summary.errors),
            plural(summary.errors),
            "\n  • ".join(summary.errors),
        )
    elif not summary.warnings:
        logger.debug("Validated %s successfully.", config_path.name)


def load_build_config(config_path: Path) -> BuildConfig:
    """Load and validate the build options document."""
    try:
        raw: dict[str, Any] = load_jsonc(config_path)
    except ValueError as e:
        clean_msg = remove_path_in_error_message(str(e), config_path)
        xmsg = f"Error while loading build config '{config_path.name}': {clean_msg}"
        raise ValueError(xmsg) from e

    summary = validate_build_config(raw)
    _log_validation_summary(summary, config_path)
    if not summary.valid:
        xmsg = f"Build config {config_path.name} contains validation errors."
        exception = ValueError(xmsg)
        exception.silent = True  # type: ignore[attr-defined]
        exception.data = summary  # type: ignore[attr-defined]
        raise exception

    return cast("BuildConfig", raw)


def load_package(root: Path) -> PackageMetadata:
    """Load package.json from the project root."""
    path = root / DEFAULT_PACKAGE_FILE
    package = cast("PackageMetadata", load_json(path))

    for group in DEPENDENCY_GROUPS:
        value = package.get(group)
        if value is not None and not isinstance(value, dict):
            xmsg = f"'{group}' in {path.name} must be an object"
            raise TypeError(xmsg)
    return package


def load_tsconfig(root: Path, build_cfg: BuildConfig) -> tuple[Path, TypeCheckConfig]:
    """Load the type-check options named by the build config (or tsconfig.json)."""
    path = (root / build_cfg.get("tsconfig", DEFAULT_TSCONFIG)).resolve()
    tsconfig = cast("TypeCheckConfig", load_jsonc(path))

    options = tsconfig.get("compilerOptions", {})
    if not isinstance(options, dict):
        xmsg = f"'compilerOptions' in {path.name} must be an object"
        raise TypeError(xmsg)
    return path, tsconfig


def load_project(config_path: Path) -> Project:
    """Read every configuration document a build needs.

    Any missing or malformed document raises before a build starts.
    """
    logger = get_logger()
    root = config_path.parent.resolve()

    build_cfg = load_build_config(config_path)
    package = load_package(root)
    tsconfig_path, tsconfig = load_tsconfig(root, build_cfg)

    if not (build_cfg.get("name") or package.get("name")):
        xmsg = (
            f"Cannot name the output: {DEFAULT_PACKAGE_FILE} has no 'name'"
            f" and {config_path.name} sets none"
        )
        raise ValueError(xmsg)

    project = Project(
        root=root,
        package=package,
        build=build_cfg,
        tsconfig=tsconfig,
        tsconfig_path=tsconfig_path,
    )

    # the output directory is wiped on every build
    if root.is_relative_to(project.out_dir):
        xmsg = f"outDir {build_cfg['outDir']!r} would remove the project root"
        raise ValueError(xmsg)
    if not project.output_name:
        xmsg = f"Package name {package.get('name')!r} yields an empty output name"
        raise ValueError(xmsg)

    logger.trace("[CONFIG] project=%s", project)
    return project
