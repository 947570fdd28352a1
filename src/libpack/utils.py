# src/libpack/utils.py


import json
import os
import re
import sys
from contextlib import suppress
from pathlib import Path
from typing import (
    Any,
    TextIO,
    cast,
)

# Matches a JSON string literal so comment/comma stripping can skip it
_JSON_STRING = r'"(?:\\.|[^"\\])*"'
_JSONC_COMMENTS = re.compile(rf"{_JSON_STRING}|//[^\n]*|/\*.*?\*/", re.DOTALL)
_JSONC_TRAILING_COMMAS = re.compile(rf"{_JSON_STRING}|,(?=\s*[}}\]])")


# --- utils --------------------------------------------------------------------


def should_use_color() -> bool:
    """Return True if colored output should be enabled."""
    # Respect explicit overrides
    if "NO_COLOR" in os.environ:
        return False
    if os.getenv("FORCE_COLOR", "").lower() in {"1", "true", "yes"}:
        return True

    # Auto-detect: use color if output is a TTY
    return sys.stdout.isatty()


def _keep_strings(match: re.Match[str]) -> str:
    text = match.group(0)
    return text if text.startswith('"') else ""


def _read_document(path: Path) -> str:
    if not path.exists():
        xmsg = f"File not found: {path}"
        raise FileNotFoundError(xmsg)

    if not path.is_file():
        xmsg = f"Expected a file: {path}"
        raise ValueError(xmsg)

    return path.read_text(encoding="utf-8")


def _decode_object(text: str, path: Path, kind: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        xmsg = (
            f"Invalid {kind} syntax in {path}:"
            f" {e.msg} (line {e.lineno}, column {e.colno})"
        )
        raise ValueError(xmsg) from e

    # Every document we read is an object at the root
    if not isinstance(data, dict):
        xmsg = f"Invalid {kind} root type in {path}: {type(data).__name__}"
        raise ValueError(xmsg)  # noqa: TRY004

    return cast("dict[str, Any]", data)


def load_json(path: Path) -> dict[str, Any]:
    """Load a strict JSON object document (e.g. package.json)."""
    return _decode_object(_read_document(path), path, "JSON")


def load_jsonc(path: Path) -> dict[str, Any]:
    """Load JSONC (JSON with // and /* */ comments and trailing commas).

    Comment markers inside string literals are left alone, so values like
    "https://example.com" or "./src/**/*" survive.
    """
    text = _read_document(path)
    text = _JSONC_COMMENTS.sub(_keep_strings, text)
    text = _JSONC_TRAILING_COMMAS.sub(_keep_strings, text)
    text = text.strip()

    if not text:
        xmsg = f"Empty JSONC document: {path}"
        raise ValueError(xmsg)

    return _decode_object(text, path, "JSONC")


def output_file(path: Path | str, data: str | bytes) -> Path:
    """Write `data` to `path`, creating missing parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, bytes):
        path.write_bytes(data)
    else:
        path.write_text(data, encoding="utf-8")
    return path


def remove_path_in_error_message(inner_msg: str, path: Path) -> str:
    """Remove redundant file path mentions (and nearby filler)
    from error messages.

    Useful when wrapping a lower-level exception that already
    embeds its own file reference, so the higher-level message
    can use its own path without duplication.

    Example:
        "Invalid JSONC syntax in /abs/path/build.config.json: Expecting value"
        → "Invalid JSONC syntax: Expecting value"

    """
    full_path = str(path)
    filename = path.name

    candidates = [
        f"in {full_path}",
        f"in '{full_path}'",
        f'in "{full_path}"',
        f"in {filename}",
        full_path,
        filename,
    ]

    clean_msg = inner_msg
    for pattern in candidates:
        clean_msg = clean_msg.replace(pattern, "").strip(": ").strip()

    # Normalize leftover spaces and colons
    clean_msg = re.sub(r"\s{2,}", " ", clean_msg)
    clean_msg = re.sub(r"\s*:\s*", ": ", clean_msg)

    return clean_msg


def plural(obj: Any) -> str:
    """Return 's' if obj represents a plural count.

    Accepts ints, floats, and any object implementing __len__().
    Returns '' for singular.
    """
    count: int | float
    try:
        count = len(obj)
    except TypeError:
        count = obj if isinstance(obj, (int, float)) else 0
    return "s" if count != 1 else ""


def safe_log(msg: str) -> None:
    """Emergency logger that never fails."""
    stream = cast("TextIO", sys.__stderr__)
    try:
        print(msg, file=stream)
    except Exception:  # noqa: BLE001
        # As final guardrail, never crash during crash reporting
        with suppress(Exception):
            stream.write(f"[INTERNAL] {msg}\n")
