"""
Package version lookup.

Installed distributions report their metadata version. Source checkouts read
``[project].version`` from the pyproject.toml next to the package.
"""
import importlib.metadata
import pathlib
from typing import Optional

import tomli

DISTRIBUTION_NAME = "vsc-client"
FALLBACK_VERSION = "0.2.0"
PYPROJECT_PATH = pathlib.Path(__file__).resolve().parent.parent / "pyproject.toml"


def _pyproject_version(path: pathlib.Path) -> Optional[str]:
    try:
        with path.open("rb") as f:
            project = tomli.load(f).get("project", {})
    except (OSError, tomli.TOMLDecodeError):
        return None
    return project.get("version")


def _resolve_version() -> str:
    try:
        return importlib.metadata.version(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        return _pyproject_version(PYPROJECT_PATH) or FALLBACK_VERSION


__version__ = _resolve_version()
