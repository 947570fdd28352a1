# src/libpack/cli.py

import argparse
import platform
import sys
from difflib import get_close_matches
from pathlib import Path

from .actions import get_metadata, watch_for_changes
from .build import run_build
from .config import (
    determine_log_level,
    determine_watch_interval,
    find_build_config,
    load_project,
)
from .constants import DEFAULT_BUILD_CONFIG, DEFAULT_HINT_CUTOFF, DEFAULT_WATCH_INTERVAL
from .meta import (
    DESCRIPTION,
    PROGRAM_DISPLAY,
    PROGRAM_SCRIPT,
)
from .runtime import current_runtime
from .utils import safe_log
from .utils_logs import LEVEL_ORDER, get_logger, set_log_level


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        # Build known option strings: ["-v", "--verbose", "--log-level", ...]
        known_opts: list[str] = []
        for action in self._actions:
            known_opts.extend([s for s in action.option_strings if s])

        hint_lines: list[str] = []
        # Argparse message for bad flags is typically
        # "unrecognized arguments: --wacth ..."
        if "unrecognized arguments:" in message:
            bad = message.split("unrecognized arguments:", 1)[1].strip()
            bad_args = [tok for tok in bad.split() if tok.startswith("-")]
            for arg in bad_args:
                close = get_close_matches(
                    arg, known_opts, n=1, cutoff=DEFAULT_HINT_CUTOFF
                )
                if close:
                    hint_lines.append(f"Hint: did you mean {close[0]}?")

        # Print usage + the original error
        self.print_usage(sys.stderr)
        full = f"{self.prog}: error: {message}"
        if hint_lines:
            full += "\n" + "\n".join(hint_lines)
        self.exit(2, full + "\n")


def _positive_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        xmsg = f"invalid interval: {raw!r}"
        raise argparse.ArgumentTypeError(xmsg) from None
    if value <= 0:
        xmsg = f"interval must be positive: {raw!r}"
        raise argparse.ArgumentTypeError(xmsg)
    return value


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(prog=PROGRAM_SCRIPT, description=DESCRIPTION)

    parser.add_argument(
        "-c",
        "--config",
        help=f"Path to the build config (default: ./{DEFAULT_BUILD_CONFIG}).",
    )
    parser.add_argument(
        "-w",
        "--watch",
        nargs="?",
        type=_positive_float,
        const=0.0,
        metavar="SECONDS",
        default=None,
        help=(
            "Rebuild automatically when source files change. "
            "Optionally specify the polling interval in seconds"
            f" (default config or: {DEFAULT_WATCH_INTERVAL})."
        ),
    )

    # --- Color ---
    color = parser.add_mutually_exclusive_group()
    color.add_argument(
        "--no-color",
        dest="use_color",
        action="store_const",
        const=False,
        help="Disable ANSI color output.",
    )
    color.add_argument(
        "--color",
        dest="use_color",
        action="store_const",
        const=True,
        help="Force-enable ANSI color output (overrides auto-detect).",
    )
    color.set_defaults(use_color=None)

    # --- Version and verbosity ---
    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    log_level.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="warning",
        dest="log_level",
        help="Suppress non-critical output (same as --log-level warning).",
    )
    log_level.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="debug",
        dest="log_level",
        help="Verbose output (same as --log-level debug).",
    )
    log_level.add_argument(
        "--log-level",
        choices=LEVEL_ORDER,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )
    return parser


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:
    logger = get_logger()  # init (use env + defaults)

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        # --- Early runtime init (use CLI + env + defaults) ---
        set_log_level(determine_log_level(args))
        if args.use_color is not None:
            current_runtime["use_color"] = args.use_color
        logger.trace("[BOOT] log-level initialized: %s", logger.level_name)

        logger.debug(
            "Runtime: Python %s (%s)\n    %s",
            platform.python_version(),
            platform.python_implementation(),
            sys.version.replace("\n", " "),
        )

        # --- Version flag ---
        if args.version:
            meta = get_metadata()
            logger.info("%s %s (%s)", PROGRAM_DISPLAY, meta.version, meta.commit)
            return 0

        # --- Load configuration ---
        cwd = Path.cwd().resolve()
        config_path = find_build_config(args, cwd)
        project = load_project(config_path)

        # NOTE: log-level may now come from the build config
        set_log_level(determine_log_level(args, project.build.get("logLevel")))
        logger.trace("[CONFIG] log-level re-resolved: %s", logger.level_name)

        logger.info("🔧 Using config: %s", config_path.name)
        logger.info("📁 Project root: %s", project.root)
        logger.info("📦 Output: %s\n", project.out_dir)

        # --- Watch or run ---
        if args.watch is not None:
            watch_for_changes(
                lambda: run_build(project),
                [project.src_dir],
                ignore_dirs=[project.out_dir],
                interval=determine_watch_interval(args, project.build),
            )
        else:
            run_build(project)

    except (FileNotFoundError, ValueError, TypeError, RuntimeError) as e:
        # controlled termination
        silent = getattr(e, "silent", False)
        if not silent:
            try:
                logger.error_if_not_debug(str(e))
            except Exception:  # noqa: BLE001
                safe_log(f"[FATAL] Logging failed while reporting: {e}")
        return getattr(e, "code", 1)

    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        try:
            logger.critical_if_not_debug("Unexpected internal error: %s", e)
        except Exception:  # noqa: BLE001
            safe_log(f"[FATAL] Logging failed while reporting: {e}")

        return getattr(e, "code", 1)

    else:
        return 0
