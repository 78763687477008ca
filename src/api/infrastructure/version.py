"""Version of the Chrononagram API.

Installed package metadata wins; a plain source checkout falls back to the
``[project]`` table of the repository's pyproject.toml.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION = "chrononagram-api"

# src/api/infrastructure/version.py -> repository root
PYPROJECT = Path(__file__).resolve().parents[3] / "pyproject.toml"


def version_from_pyproject(path: Path = PYPROJECT) -> str:
    with path.open("rb") as f:
        return tomllib.load(f)["project"]["version"]


def get_version() -> str:
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return version_from_pyproject()


__version__ = get_version()
