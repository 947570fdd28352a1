# src/libpack/tools.py
"""Running the external bundler and type-checker."""

import asyncio
import os
import shlex
import subprocess
from pathlib import Path

from .meta import PROGRAM_ENV
from .utils_logs import get_logger


class ToolError(RuntimeError):
    """An external tool could not be started or exited non-zero."""

    def __init__(
        self,
        tool: str,
        cmd: list[str],
        returncode: int,
        output: str = "",
    ) -> None:
        self.tool = tool
        self.cmd = cmd
        self.returncode = returncode
        self.output = output
        msg = f"{tool} failed (exit {returncode})"
        if output.strip():
            msg += f":\n{output.strip()}"
        super().__init__(msg)


def tool_command(env_name: str, default: str) -> list[str]:
    """Return the command for a tool, honoring a LIBPACK_<NAME> override.

    Example:
        LIBPACK_ESBUILD="node_modules/.bin/esbuild" → ["node_modules/.bin/esbuild"]
    """
    raw = os.getenv(f"{PROGRAM_ENV}_{env_name}") or default
    return shlex.split(raw, posix=os.name != "nt")


def _combine(stdout: str, stderr: str) -> str:
    return "\n".join(part.strip() for part in (stdout, stderr) if part.strip())


def _not_found(tool: str, cmd: list[str], e: OSError) -> ToolError:
    return ToolError(tool, cmd, 127, f"could not run {cmd[0]!r}: {e}")


def run_tool(tool: str, cmd: list[str], *, cwd: Path) -> str:
    """Run a tool to completion, blocking. Returns its combined output."""
    logger = get_logger()
    logger.trace("[TOOL] %s: %s (cwd=%s)", tool, shlex.join(cmd), cwd)

    try:
        result = subprocess.run(  # noqa: S603
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise _not_found(tool, cmd, e) from e

    output = _combine(result.stdout, result.stderr)
    if result.returncode != 0:
        raise ToolError(tool, cmd, result.returncode, output)
    if output:
        logger.debug("%s output:\n%s", tool, output)
    return output


async def run_tool_async(tool: str, cmd: list[str], *, cwd: Path) -> str:
    """Run a tool without blocking the event loop.

    If the awaiting task is cancelled, the child process is killed
    before the cancellation propagates.
    """
    logger = get_logger()
    logger.trace("[TOOL] %s: %s (cwd=%s)", tool, shlex.join(cmd), cwd)

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise _not_found(tool, cmd, e) from e

    try:
        stdout_bytes, stderr_bytes = await process.communicate()
    except asyncio.CancelledError:
        if process.returncode is None:
            process.kill()
            await process.wait()
        logger.debug("%s cancelled", tool)
        raise

    output = _combine(
        stdout_bytes.decode("utf-8", errors="replace"),
        stderr_bytes.decode("utf-8", errors="replace"),
    )
    if process.returncode != 0:
        raise ToolError(tool, cmd, process.returncode or 1, output)
    if output:
        logger.debug("%s output:\n%s", tool, output)
    return output
