"""Utilities for exposing the project version consistently."""

from __future__ import annotations

from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "madmatch"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the packaged version, falling back to ``pyproject.toml`` when needed."""

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return _read_version_from_pyproject()


def _read_version_from_pyproject() -> str:
    """Parse the ``[project]`` version out of ``pyproject.toml``.

    Used when the package metadata is unavailable, such as when tests run
    straight from a checkout without an install.
    """

    pyproject_path = Path(__file__).resolve().parents[3] / "pyproject.toml"
    if not pyproject_path.exists():  # pragma: no cover - repository invariant
        raise RuntimeError(f"Unable to locate project metadata at {pyproject_path}")

    current_section: str | None = None
    for raw_line in pyproject_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("[") and line.endswith("]"):
            current_section = line.strip("[]")
            continue
        if current_section == "project" and line.startswith("version"):
            _, _, value = line.partition("=")
            version = value.strip().strip('"')
            if version:
                return version
            break

    raise RuntimeError("Unable to determine project version from pyproject.toml")


__all__ = ["get_project_version"]
