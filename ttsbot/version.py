"""Single source of truth for the application version.

Uses the installed distribution's metadata, or reads pyproject.toml with
tomllib (stdlib, Python 3.11+) when running from a source checkout.
"""

import tomllib
from importlib import metadata
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parent.parent


def get_version() -> str:
    """Return the version string of the ttsbot distribution."""
    pyproject_path = _PROJECT_ROOT / "pyproject.toml"
    if pyproject_path.exists():
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
        return data["project"]["version"]
    return metadata.version("ttsbot")


__version__: str = get_version()
