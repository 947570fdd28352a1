# tests/utils/__init__.py

from .config_validate import make_summary
from .fake_tools import FAIL_BUNDLE_ENV, RECORD_TSC_ENV, install_fake_tools
from .force_mtime_advance import force_mtime_advance
from .patch_everywhere import patch_everywhere
from .project import make_build_cfg, make_project, write_project
from .trace import TRACE, make_trace

__all__ = [
    "FAIL_BUNDLE_ENV",
    "RECORD_TSC_ENV",
    "TRACE",
    "force_mtime_advance",
    "install_fake_tools",
    "make_build_cfg",
    "make_project",
    "make_summary",
    "make_trace",
    "patch_everywhere",
    "write_project",
]
