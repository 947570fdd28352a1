# src/libpack/types.py
from typing import Any

from typing_extensions import NotRequired, TypedDict


class PackageMetadata(TypedDict, total=False):
    name: str
    version: str
    dependencies: dict[str, str]
    devDependencies: dict[str, str]
    peerDependencies: dict[str, str]
    optionalDependencies: dict[str, str]


class BuildConfig(TypedDict):
    outDir: str
    srcDir: str
    srcFile: str

    # output basename override (defaults to the package name)
    name: NotRequired[str]

    # passed through to the bundler
    target: NotRequired[str | list[str]]
    tsconfig: NotRequired[str]
    jsxFactory: NotRequired[str]
    jsxFragment: NotRequired[str]
    definitions: NotRequired[dict[str, Any]]

    # runtime behavior
    watchInterval: NotRequired[float]
    logLevel: NotRequired[str]


class TypeCheckConfig(TypedDict, total=False):
    extends: str
    compilerOptions: dict[str, Any]
    include: list[str]
    exclude: list[str]


class BundleOptions(TypedDict):
    entryPoints: list[str]
    outfile: str
    bundle: bool
    minify: bool
    sourcemap: bool
    define: dict[str, Any]
    external: list[str]
    format: NotRequired[str]
    platform: NotRequired[str]
    target: NotRequired[str | list[str]]
    tsconfig: NotRequired[str]
    jsxFactory: NotRequired[str]
    jsxFragment: NotRequired[str]


class Runtime(TypedDict):
    log_level: str
    use_color: bool
