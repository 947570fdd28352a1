# src/libpack/declarations.py
"""Type declaration (.d.ts) emission through the TypeScript compiler."""

import json
import os
import shutil
import tempfile
import time
from pathlib import Path
from typing import Any

from .config import Project
from .constants import DEFAULT_ENV_TYPECHECKER, DEFAULT_TYPECHECKER_COMMAND
from .meta import PROGRAM_SCRIPT
from .tools import run_tool, tool_command
from .types import TypeCheckConfig
from .utils import output_file
from .utils_logs import get_logger, log_elapsed

# always applied on top of the project's compilerOptions
FORCED_OPTIONS: dict[str, Any] = {
    "declaration": True,
    "emitDeclarationOnly": True,
    "noEmit": False,
    "moduleResolution": "node",
}

DECLARATION_SUFFIXES = (".d.ts", ".d.ts.map")


def declaration_options(tsconfig: TypeCheckConfig, out_dir: Path) -> dict[str, Any]:
    """Merge the project's compiler options with the declaration-only overrides."""
    return {
        **tsconfig.get("compilerOptions", {}),
        "outDir": str(out_dir),
        **FORCED_OPTIONS,
    }


def _is_declaration(path: Path) -> bool:
    # build info and other compiler bookkeeping stay out of the output
    return path.is_file() and path.name.endswith(DECLARATION_SUFFIXES)


def _write_temp_config(project: Project, staging: Path) -> Path:
    """Write a one-off tsconfig rooted at the entry point.

    It sits beside the project's tsconfig so relative paths inside the
    compiler options (baseUrl, typeRoots, extends...) resolve the same way.
    """
    config: dict[str, Any] = {
        "compilerOptions": declaration_options(project.tsconfig, staging),
        "files": [str(project.entry_point)],
        "include": [],
    }
    if "extends" in project.tsconfig:
        config["extends"] = project.tsconfig["extends"]

    fd, name = tempfile.mkstemp(
        prefix=f".{PROGRAM_SCRIPT}-tsconfig-",
        suffix=".json",
        dir=project.tsconfig_path.parent,
    )
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)
    return Path(name)


def compile_declarations(project: Project) -> list[Path]:
    """Emit declaration files for the entry point into the output directory.

    tsc writes into a private staging directory; each emitted file is then
    copied through output_file(), which creates nested directories on demand.
    Blocks until done. Raises ToolError on any compiler diagnostic.
    """
    logger = get_logger()
    logger.info("Compiling source")
    start = time.perf_counter()

    staging = Path(tempfile.mkdtemp(prefix=f"{PROGRAM_SCRIPT}-dts-"))
    temp_config: Path | None = None
    written: list[Path] = []
    try:
        temp_config = _write_temp_config(project, staging)
        cmd = [
            *tool_command(DEFAULT_ENV_TYPECHECKER, DEFAULT_TYPECHECKER_COMMAND),
            "--project",
            str(temp_config),
        ]
        run_tool("tsc", cmd, cwd=project.root)

        for emitted in sorted(p for p in staging.rglob("*") if _is_declaration(p)):
            dest = project.out_dir / emitted.relative_to(staging)
            written.append(output_file(dest, emitted.read_bytes()))
            logger.debug("📄 %s", dest)
    finally:
        if temp_config is not None:
            temp_config.unlink(missing_ok=True)
        shutil.rmtree(staging, ignore_errors=True)

    if not written:
        logger.warning("Type checker emitted no declaration files.")
    log_elapsed("Type declarations", start)
    return written
