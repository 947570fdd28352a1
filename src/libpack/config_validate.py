# src/libpack/config_validate.py

from dataclasses import dataclass, field
from difflib import get_close_matches
from typing import Any

from .constants import DEFAULT_HINT_CUTOFF
from .types import BuildConfig
from .utils_logs import LEVEL_ORDER

# --- constants ------------------------------------------------------

# key → accepted runtime types
BUILD_SCHEMA: dict[str, tuple[type, ...]] = {
    "outDir": (str,),
    "srcDir": (str,),
    "srcFile": (str,),
    "name": (str,),
    "target": (str, list),
    "tsconfig": (str,),
    "jsxFactory": (str,),
    "jsxFragment": (str,),
    "definitions": (dict,),
    "watchInterval": (int, float),
    "logLevel": (str,),
}

REQUIRED_KEYS: frozenset[str] = BuildConfig.__required_keys__


# --- dataclasses ------------------------------------------------------


@dataclass
class ValidationSummary:
    valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# granular validators (private and testable)
# ---------------------------------------------------------------------------


def _type_label(types: tuple[type, ...]) -> str:
    return " or ".join(t.__name__ for t in types)


def _check_unknown_key(key: str, summary: ValidationSummary) -> None:
    msg = f"Unknown key {key!r} in build config (ignored)."
    close = get_close_matches(key, list(BUILD_SCHEMA), n=1, cutoff=DEFAULT_HINT_CUTOFF)
    if close:
        msg += f" Hint: did you mean {close[0]!r}?"
    summary.warnings.append(msg)


def _check_value(key: str, val: Any, summary: ValidationSummary) -> None:
    expected = BUILD_SCHEMA[key]

    # bool is an int subclass, but `"watchInterval": true` is a mistake
    if isinstance(val, bool) or not isinstance(val, expected):
        summary.errors.append(
            f"{key!r} must be {_type_label(expected)}, not {type(val).__name__}."
        )
        return

    if key == "target" and isinstance(val, list):
        if not all(isinstance(t, str) for t in val):
            summary.errors.append("'target' list must contain only strings.")
    elif key in {"outDir", "srcDir", "srcFile"} and not val.strip():
        summary.errors.append(f"{key!r} must not be empty.")
    elif key == "watchInterval" and val <= 0:
        summary.errors.append("'watchInterval' must be a positive number of seconds.")
    elif key == "logLevel" and val.lower() not in LEVEL_ORDER:
        summary.errors.append(
            f"'logLevel' must be one of {', '.join(LEVEL_ORDER)}, not {val!r}."
        )


# ---------------------------------------------------------------------------
# main validator
# ---------------------------------------------------------------------------


def validate_build_config(raw: dict[str, Any]) -> ValidationSummary:
    """Check a loaded build config against the known keys and their types.

    Missing required keys and wrong types are errors. Unknown keys are
    warnings (with a spelling hint when one is close).
    """
    summary = ValidationSummary()

    for key in sorted(REQUIRED_KEYS - raw.keys()):
        summary.errors.append(f"Missing required key {key!r}.")

    for key, val in raw.items():
        if key not in BUILD_SCHEMA:
            _check_unknown_key(key, summary)
            continue
        _check_value(key, val, summary)

    summary.valid = not summary.errors
    return summary
