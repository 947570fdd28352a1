# src/libpack/dependencies.py
"""Which packages stay out of the bundle, and what the bundle files are called."""

import re

from .types import PackageMetadata

DEPENDENCY_GROUPS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)

# scope prefix | leading non-letters | invalid chars | trailing non-alphanumerics
_PACKAGE_NAME_STRIP = re.compile(
    r"(^@.*/)|((^[^a-zA-Z]+)|[^\w.-])|([^a-zA-Z0-9]+$)",
    re.ASCII,
)


def read_dependencies(package: PackageMetadata) -> list[str]:
    """Return every dependency name declared in any group, once each.

    Missing groups count as empty. The package's own name is never
    returned, even if it lists itself (e.g. as a dev dependency for tests).
    """
    own_name = package.get("name")
    external: dict[str, None] = {}

    for group in DEPENDENCY_GROUPS:
        for key in package.get(group) or {}:
            if key != own_name:
                external.setdefault(key, None)

    return list(external)


def get_package_name(name: str) -> str:
    """Derive a file-safe output basename from a package name.

    Example:
        "@acme/Widget-Kit" → "widget-kit"
    """
    return _PACKAGE_NAME_STRIP.sub("", name.lower())
