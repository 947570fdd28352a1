# src/libpack/bundler.py
"""Development, production and ESM bundles through esbuild."""

import json
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from .config import Project
from .constants import DEFAULT_BUNDLER_COMMAND, DEFAULT_ENV_BUNDLER, DEV_FLAG
from .dependencies import read_dependencies
from .env import parse_definition
from .tools import run_tool_async, tool_command
from .types import BundleOptions
from .utils_async import gather_or_cancel
from .utils_logs import get_logger, log_elapsed


class BuildMode(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    ESM = "esm"


@dataclass(frozen=True)
class ModeSettings:
    label: str
    suffix: str
    minify: bool
    sourcemap: bool
    format: str | None
    platform: str | None
    dev_flag: Any  # value substituted for __DEV__
    production_env: bool  # which .env file family to read


MODE_SETTINGS: dict[BuildMode, ModeSettings] = {
    BuildMode.DEVELOPMENT: ModeSettings(
        label="Development",
        suffix=".development.js",
        minify=False,
        sourcemap=True,
        format=None,
        platform="node",
        dev_flag=True,
        production_env=False,
    ),
    BuildMode.PRODUCTION: ModeSettings(
        label="Production",
        suffix=".production.min.js",
        minify=True,
        sourcemap=True,
        format=None,
        platform="node",
        dev_flag=False,
        production_env=True,
    ),
    # __DEV__ → `process` keeps a runtime check in the module output
    BuildMode.ESM: ModeSettings(
        label="ESM",
        suffix=".esm.js",
        minify=False,
        sourcemap=False,
        format="esm",
        platform=None,
        dev_flag="process",
        production_env=False,
    ),
}


def output_path(project: Project, mode: BuildMode) -> Path:
    return Path(f"{project.output_base}{MODE_SETTINGS[mode].suffix}")


def bundle_options(
    project: Project,
    mode: BuildMode,
    external: list[str],
) -> BundleOptions:
    """Compose the bundler options for one mode.

    Definitions merge as config definitions → env definitions → __DEV__,
    later entries winning.
    """
    settings = MODE_SETTINGS[mode]
    build_cfg = project.build

    options: BundleOptions = {
        "entryPoints": [str(project.entry_point)],
        "outfile": str(output_path(project, mode)),
        "bundle": True,
        "minify": settings.minify,
        "sourcemap": settings.sourcemap,
        "define": {
            **build_cfg.get("definitions", {}),
            **parse_definition(project.root, production=settings.production_env),
            DEV_FLAG: settings.dev_flag,
        },
        "external": list(external),
    }
    if settings.format:
        options["format"] = settings.format
    if settings.platform:
        options["platform"] = settings.platform
    if "target" in build_cfg:
        options["target"] = build_cfg["target"]
    if "tsconfig" in build_cfg:
        options["tsconfig"] = str((project.root / build_cfg["tsconfig"]).resolve())
    if "jsxFactory" in build_cfg:
        options["jsxFactory"] = build_cfg["jsxFactory"]
    if "jsxFragment" in build_cfg:
        options["jsxFragment"] = build_cfg["jsxFragment"]
    return options


def _define_value(value: Any) -> str:
    # strings are already source text; anything else becomes a JSON literal
    return value if isinstance(value, str) else json.dumps(value)


def esbuild_args(options: BundleOptions) -> list[str]:
    """Translate bundler options into esbuild command-line arguments."""
    args = [*options["entryPoints"], f"--outfile={options['outfile']}"]

    if options["bundle"]:
        args.append("--bundle")
    if options["minify"]:
        args.append("--minify")
    if options["sourcemap"]:
        args.append("--sourcemap")
    if "format" in options:
        args.append(f"--format={options['format']}")
    if "platform" in options:
        args.append(f"--platform={options['platform']}")
    if "target" in options:
        target = options["target"]
        joined = target if isinstance(target, str) else ",".join(target)
        args.append(f"--target={joined}")
    if "tsconfig" in options:
        args.append(f"--tsconfig={options['tsconfig']}")
    if "jsxFactory" in options:
        args.append(f"--jsx-factory={options['jsxFactory']}")
    if "jsxFragment" in options:
        args.append(f"--jsx-fragment={options['jsxFragment']}")

    args.extend(f"--external:{name}" for name in options["external"])
    args.extend(
        f"--define:{key}={_define_value(value)}"
        for key, value in options["define"].items()
    )
    return args


async def build_bundle(
    project: Project,
    mode: BuildMode,
    external: list[str],
) -> Path:
    """Produce one bundle. Raises ToolError if esbuild fails."""
    logger = get_logger()
    label = MODE_SETTINGS[mode].label
    logger.info("Generating %s Build", label)
    start = time.perf_counter()

    options = bundle_options(project, mode, external)
    cmd = [
        *tool_command(DEFAULT_ENV_BUNDLER, DEFAULT_BUNDLER_COMMAND),
        *esbuild_args(options),
    ]
    await run_tool_async("esbuild", cmd, cwd=project.root)

    log_elapsed(f"{label} Build", start)
    return Path(options["outfile"])


async def build_development(project: Project, external: list[str]) -> Path:
    return await build_bundle(project, BuildMode.DEVELOPMENT, external)


async def build_production(project: Project, external: list[str]) -> Path:
    return await build_bundle(project, BuildMode.PRODUCTION, external)


async def build_esm(project: Project, external: list[str]) -> Path:
    return await build_bundle(project, BuildMode.ESM, external)


async def build_all(project: Project) -> list[Path]:
    """Build every bundle variant concurrently."""
    logger = get_logger()
    logger.info("Generating build output")
    start = time.perf_counter()

    external = read_dependencies(project.package)
    logger.debug("External packages: %s", ", ".join(external) or "(none)")

    outputs = await gather_or_cancel(
        build_development(project, external),
        build_production(project, external),
        build_esm(project, external),
    )
    log_elapsed("Total Build", start)
    return outputs
