"""Version information for the Rasman Music API.

Read from installed package metadata, or from pyproject.toml when running
from a source checkout.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "rasman-music-api"


def get_version() -> str:
    """Get the application version (e.g. "0.1.0")."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        pyproject_path = Path(__file__).resolve().parents[3] / "pyproject.toml"

        with open(pyproject_path, "rb") as f:
            pyproject_data = tomllib.load(f)

        return pyproject_data["project"]["version"]


__version__ = get_version()
