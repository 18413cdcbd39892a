"""Switch the DNS servers of a network interface from the terminal."""

import pathlib
import tomllib


def get_version() -> str:
    """Read version from pyproject.toml."""
    current_dir = pathlib.Path(__file__).parent
    for parent in [current_dir] + list(current_dir.parents):
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.exists():
            with pyproject_path.open("rb") as f:
                pyproject_data = tomllib.load(f)
            project = pyproject_data.get("project", {})
            if project.get("name") == "dnswitch":
                return project["version"]

    # Installed without the source tree
    return "0.0.0"


__version__ = get_version()
