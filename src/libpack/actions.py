# src/libpack/actions.py
import importlib.metadata
import re
import subprocess
import time
from collections.abc import Callable, Iterable
from contextlib import suppress
from pathlib import Path

from .constants import DEFAULT_WATCH_INTERVAL
from .meta import PROGRAM_SCRIPT, Metadata
from .utils_logs import get_logger


def _collect_watched_files(
    watch_dirs: Iterable[Path],
    ignore_dirs: Iterable[Path],
) -> dict[Path, float]:
    """Snapshot the mtime of every file under the watched directories."""
    ignored = [d.resolve() for d in ignore_dirs]
    mtimes: dict[Path, float] = {}

    for root in watch_dirs:
        if not root.exists():
            continue
        for p in root.rglob("*"):
            resolved = p.resolve()
            # skip anything inside an output directory
            if any(resolved.is_relative_to(d) for d in ignored):
                continue
            with suppress(FileNotFoundError):  # deleted mid-scan
                if p.is_file():
                    mtimes[resolved] = p.stat().st_mtime

    return mtimes


def _diff_snapshots(old: dict[Path, float], new: dict[Path, float]) -> list[Path]:
    """Return files added, modified, or removed between two snapshots."""
    changed = [f for f, m in new.items() if f not in old or m > old[f]]
    changed.extend(f for f in old if f not in new)
    return sorted(changed)


def watch_for_changes(
    rebuild_func: Callable[[], None],
    watch_dirs: list[Path],
    *,
    ignore_dirs: list[Path] | None = None,
    interval: float = DEFAULT_WATCH_INTERVAL,
) -> None:
    """Poll file modification times and rebuild when anything changes.

    Features:
    - Runs an initial build before watching.
    - Detects added, modified and removed files on every tick.
    - Skips files inside the ignored (output) directories.
    - Single-flight: builds run inline, so they never overlap. Changes
      made during a build are picked up on the next tick and coalesce
      into one follow-up rebuild.

    Stops on KeyboardInterrupt. A rebuild error propagates to the caller.
    """
    logger = get_logger()
    ignore = ignore_dirs or []
    logger.info(
        "👀 Watching for changes (interval=%.2fs)... Press Ctrl+C to stop.", interval
    )

    # snapshot before building so edits made during the build are not lost
    mtimes = _collect_watched_files(watch_dirs, ignore)
    logger.trace("[WATCH] initial files: %s", [str(f) for f in mtimes])

    try:
        rebuild_func()  # initial build

        while True:
            time.sleep(interval)

            current = _collect_watched_files(watch_dirs, ignore)
            changed = _diff_snapshots(mtimes, current)
            if not changed:
                continue

            for f in changed:
                logger.trace("[WATCH] changed: %s", f)
            logger.info(
                "\n🔁 Detected %d changed file(s). Rebuilding...", len(changed)
            )
            mtimes = current
            rebuild_func()
    except KeyboardInterrupt:
        logger.info("\n🛑 Watch stopped.")


def get_metadata() -> Metadata:
    """Return (version, commit) for this tool.

    Version comes from pyproject.toml in a source checkout, else from the
    installed distribution. Commit comes from git when available.
    """
    logger = get_logger()
    version = "unknown"
    commit = "unknown"

    root = Path(__file__).resolve().parents[2]
    pyproject = root / "pyproject.toml"
    if pyproject.exists():
        logger.trace("trying to read metadata from %s", pyproject)
        text = pyproject.read_text(encoding="utf-8")
        match = re.search(r'(?m)^\s*version\s*=\s*["\']([^"\']+)["\']', text)
        if match:
            version = match.group(1)
    else:
        with suppress(importlib.metadata.PackageNotFoundError):
            version = importlib.metadata.version(PROGRAM_SCRIPT)

    # Try git for commit
    with suppress(Exception):
        logger.trace("trying to get commit from git")
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],  # noqa: S607
            cwd=root,
            capture_output=True,
            text=True,
            check=True,
        )
        commit = result.stdout.strip()

    logger.trace("got package version %s with commit %s", version, commit)
    return Metadata(version, commit)
