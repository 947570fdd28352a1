# src/libpack/root.py
"""The index.js dispatcher that picks a bundle at require() time."""

import time
from pathlib import Path

from .bundler import MODE_SETTINGS, BuildMode
from .config import Project
from .constants import ROOT_FILE_NAME
from .utils import output_file
from .utils_logs import get_logger, log_elapsed

ROOT_TEMPLATE = """\
'use strict'
if (process.env.NODE_ENV === 'production') {{
  module.exports = require('./{production}')
}} else {{
  module.exports = require('./{development}')
}}
"""


def render_root(basename: str) -> str:
    """Return the dispatcher source for bundles named `basename`."""
    return ROOT_TEMPLATE.format(
        production=basename + MODE_SETTINGS[BuildMode.PRODUCTION].suffix,
        development=basename + MODE_SETTINGS[BuildMode.DEVELOPMENT].suffix,
    )


async def build_root(project: Project) -> Path:
    logger = get_logger()
    logger.info("Creating root")
    start = time.perf_counter()

    path = output_file(
        project.out_dir / ROOT_FILE_NAME,
        render_root(project.output_name),
    )

    log_elapsed("Root Build", start)
    return path
