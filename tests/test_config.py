# tests/test_config.py

import argparse
import json
from pathlib import Path

import pytest

import libpack.config as mod_config
from libpack.meta import PROGRAM_ENV
from tests.utils import make_build_cfg, write_project

# --------------------------------------------------------------------------- #
# locating the build config
# --------------------------------------------------------------------------- #


def test_find_build_config_defaults_to_cwd(tmp_path: Path) -> None:
    # --- setup ---
    config = write_project(tmp_path)

    # --- execute ---
    found = mod_config.find_build_config(argparse.Namespace(config=None), tmp_path)

    # --- verify ---
    assert found == config


def test_find_build_config_explicit_file(tmp_path: Path) -> None:
    # --- setup ---
    config = write_project(tmp_path / "proj")
    custom = config.with_name("lib.build.json")
    config.rename(custom)

    # --- execute ---
    found = mod_config.find_build_config(
        argparse.Namespace(config=str(custom)), tmp_path
    )

    # --- verify ---
    assert found == custom.resolve()


def test_find_build_config_explicit_directory(tmp_path: Path) -> None:
    # --- setup ---
    config = write_project(tmp_path / "proj")

    # --- execute ---
    found = mod_config.find_build_config(
        argparse.Namespace(config=str(tmp_path / "proj")), tmp_path
    )

    # --- verify ---
    assert found == config.resolve()


def test_find_build_config_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="No build config found"):
        mod_config.find_build_config(argparse.Namespace(config=None), tmp_path)


# --------------------------------------------------------------------------- #
# individual documents
# --------------------------------------------------------------------------- #


def test_load_build_config_accepts_jsonc(tmp_path: Path) -> None:
    # --- setup ---
    config = write_project(
        tmp_path,
        build="""
        {
          // where the output goes
          "outDir": "dist",
          "srcDir": "src", /* sources */
          "srcFile": "index.ts",
          "definitions": {"HOMEPAGE": "\\"https://example.com\\""},
        }
        """,
    )

    # --- execute ---
    build_cfg = mod_config.load_build_config(config)

    # --- verify ---
    assert build_cfg["outDir"] == "dist"
    assert build_cfg["definitions"] == {"HOMEPAGE": '"https://example.com"'}


def test_load_build_config_invalid_syntax(tmp_path: Path) -> None:
    # --- setup ---
    config = write_project(tmp_path, build='{"outDir": "dist" "srcDir": "src"}')

    # --- execute ---
    with pytest.raises(ValueError, match="Error while loading build config") as e:
        mod_config.load_build_config(config)

    # --- verify ---
    # the path is reported once, by name only
    assert str(tmp_path) not in str(e.value)


def test_load_build_config_validation_errors_are_silent(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- setup ---
    config = write_project(tmp_path, build={"outDir": "dist", "srcDir": 3})

    # --- execute ---
    with pytest.raises(ValueError, match="contains validation errors") as e:
        mod_config.load_build_config(config)

    # --- verify ---
    assert getattr(e.value, "silent", False) is True
    summary = e.value.data  # type: ignore[attr-defined]
    assert summary.valid is False
    err = capsys.readouterr().err
    assert "Missing required key 'srcFile'" in err
    assert "'srcDir' must be str" in err


def test_load_build_config_warns_on_unknown_key(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- setup ---
    config = write_project(tmp_path, build=make_build_cfg(outdir="lib"))

    # --- execute ---
    mod_config.load_build_config(config)

    # --- verify ---
    err = capsys.readouterr().err
    assert "Unknown key 'outdir'" in err
    assert "did you mean 'outDir'" in err


def test_load_package_is_strict_json(tmp_path: Path) -> None:
    # --- setup ---
    (tmp_path / "package.json").write_text('{"name": "x", // nope\n}')

    # --- execute / verify ---
    with pytest.raises(ValueError, match="Invalid JSON syntax"):
        mod_config.load_package(tmp_path)


def test_load_package_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        mod_config.load_package(tmp_path)


def test_load_package_rejects_non_object_dependencies(tmp_path: Path) -> None:
    # --- setup ---
    (tmp_path / "package.json").write_text(
        json.dumps({"name": "x", "dependencies": ["react"]})
    )

    # --- execute / verify ---
    with pytest.raises(TypeError, match="'dependencies' in package.json"):
        mod_config.load_package(tmp_path)


def test_load_tsconfig_default_location(tmp_path: Path) -> None:
    # --- setup ---
    write_project(
        tmp_path,
        tsconfig='{\n  // strictness\n  "compilerOptions": {"strict": true,},\n}',
    )

    # --- execute ---
    path, tsconfig = mod_config.load_tsconfig(tmp_path, make_build_cfg())

    # --- verify ---
    assert path == (tmp_path / "tsconfig.json").resolve()
    assert tsconfig == {"compilerOptions": {"strict": True}}


def test_load_tsconfig_custom_location(tmp_path: Path) -> None:
    # --- setup ---
    custom = tmp_path / "config" / "tsconfig.lib.json"
    custom.parent.mkdir()
    custom.write_text('{"compilerOptions": {"jsx": "react"}}')

    # --- execute ---
    path, tsconfig = mod_config.load_tsconfig(
        tmp_path, make_build_cfg(tsconfig="config/tsconfig.lib.json")
    )

    # --- verify ---
    assert path == custom.resolve()
    assert tsconfig["compilerOptions"] == {"jsx": "react"}


def test_load_tsconfig_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        mod_config.load_tsconfig(tmp_path, make_build_cfg())


def test_load_tsconfig_rejects_non_object_options(tmp_path: Path) -> None:
    (tmp_path / "tsconfig.json").write_text('{"compilerOptions": []}')

    with pytest.raises(TypeError, match="compilerOptions"):
        mod_config.load_tsconfig(tmp_path, make_build_cfg())


# --------------------------------------------------------------------------- #
# project
# --------------------------------------------------------------------------- #


def test_load_project_paths(tmp_path: Path) -> None:
    # --- setup ---
    config = write_project(tmp_path / "proj")
    root = (tmp_path / "proj").resolve()

    # --- execute ---
    project = mod_config.load_project(config)

    # --- verify ---
    assert project.root == root
    assert project.src_dir == root / "src"
    assert project.entry_point == root / "src" / "index.ts"
    assert project.out_dir == root / "dist"
    assert project.output_name == "widget-kit"
    assert project.output_base == root / "dist" / "widget-kit"
    assert project.tsconfig_path == root / "tsconfig.json"


def test_load_project_root_is_config_directory(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Relative paths resolve against the config, not the working directory."""
    # --- setup ---
    config = write_project(tmp_path / "proj")
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)

    # --- execute ---
    project = mod_config.load_project(config)

    # --- verify ---
    assert project.out_dir == (tmp_path / "proj" / "dist").resolve()


@pytest.mark.parametrize("out_dir", [".", "..", "./"])
def test_load_project_rejects_out_dir_containing_root(
    tmp_path: Path,
    out_dir: str,
) -> None:
    # --- setup ---
    config = write_project(tmp_path / "proj", build=make_build_cfg(outDir=out_dir))

    # --- execute / verify ---
    with pytest.raises(ValueError, match="would remove the project root"):
        mod_config.load_project(config)


def test_load_project_requires_a_name(tmp_path: Path) -> None:
    config = write_project(tmp_path, package={"version": "1.0.0"})

    with pytest.raises(ValueError, match="Cannot name the output"):
        mod_config.load_project(config)


def test_load_project_config_name_stands_in(tmp_path: Path) -> None:
    # --- setup ---
    config = write_project(
        tmp_path,
        package={"version": "1.0.0"},
        build=make_build_cfg(name="standalone"),
    )

    # --- execute ---
    project = mod_config.load_project(config)

    # --- verify ---
    assert project.output_name == "standalone"


def test_load_project_rejects_empty_output_name(tmp_path: Path) -> None:
    config = write_project(tmp_path, package={"name": "---"})

    with pytest.raises(ValueError, match="empty output name"):
        mod_config.load_project(config)


# --------------------------------------------------------------------------- #
# runtime settings
# --------------------------------------------------------------------------- #


def test_determine_log_level_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    # --- default ---
    args = argparse.Namespace(log_level=None)
    assert mod_config.determine_log_level(args) == "info"

    # --- config ---
    assert mod_config.determine_log_level(args, "warning") == "warning"

    # --- generic env beats config ---
    monkeypatch.setenv("LOG_LEVEL", "error")
    assert mod_config.determine_log_level(args, "warning") == "error"

    # --- program env beats generic env ---
    monkeypatch.setenv(f"{PROGRAM_ENV}_LOG_LEVEL", "trace")
    assert mod_config.determine_log_level(args, "warning") == "trace"

    # --- CLI beats everything ---
    args = argparse.Namespace(log_level="critical")
    assert mod_config.determine_log_level(args, "warning") == "critical"


def test_determine_watch_interval_precedence(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- default (bare --watch) ---
    args = argparse.Namespace(watch=0.0)
    assert mod_config.determine_watch_interval(args) == 1.0

    # --- invalid env is ignored with a warning ---
    monkeypatch.setenv(f"{PROGRAM_ENV}_WATCH_INTERVAL", "soon")
    assert mod_config.determine_watch_interval(args) == 1.0
    assert "Ignoring invalid" in capsys.readouterr().err

    # --- env ---
    monkeypatch.setenv(f"{PROGRAM_ENV}_WATCH_INTERVAL", "2.5")
    assert mod_config.determine_watch_interval(args) == 2.5

    # --- config beats env ---
    build_cfg = make_build_cfg(watchInterval=4)
    assert mod_config.determine_watch_interval(args, build_cfg) == 4.0

    # --- CLI beats config ---
    args = argparse.Namespace(watch=0.25)
    assert mod_config.determine_watch_interval(args, build_cfg) == 0.25
