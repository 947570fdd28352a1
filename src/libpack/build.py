# src/libpack/build.py
"""Build coordination: clean, declarations, then bundles and root together."""

import asyncio
import shutil
import time
from pathlib import Path

from .bundler import build_all
from .config import Project
from .declarations import compile_declarations
from .root import build_root
from .utils_async import gather_or_cancel
from .utils_logs import get_logger, log_elapsed


def _prepare_output_dir(out_dir: Path) -> None:
    """Remove any previous output so no stale artifact survives."""
    logger = get_logger()
    if out_dir.exists():
        logger.debug("Removing %s", out_dir)
        shutil.rmtree(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)


async def build(project: Project) -> None:
    """Run one full build.

    Declarations are emitted to completion first, so a type error stops
    the build before any bundle is produced. The three bundles and the
    root dispatcher then run concurrently; the first failure cancels the
    others and propagates.

    A failed build may leave a partial output directory behind.
    """
    logger = get_logger()
    logger.info("Building Project")
    start = time.perf_counter()

    _prepare_output_dir(project.out_dir)
    compile_declarations(project)
    await gather_or_cancel(
        build_all(project),
        build_root(project),
    )

    log_elapsed("Build duration", start)
    logger.info("✅ Build completed → %s\n", project.out_dir)


def run_build(project: Project) -> None:
    """Blocking entry point for a single build."""
    asyncio.run(build(project))
