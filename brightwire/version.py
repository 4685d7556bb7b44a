"""
Version information for Brightwire
"""
import subprocess
from importlib import metadata
from pathlib import Path
from typing import Optional
import tomllib

# Source checkout root (holds pyproject.toml and .git when run from a clone)
SOURCE_ROOT = Path(__file__).resolve().parent.parent


def get_version() -> str:
    """Read the version from pyproject.toml, falling back to package metadata

    Returns:
        Version string
    """
    pyproject_path = SOURCE_ROOT / "pyproject.toml"
    if pyproject_path.exists():
        try:
            with open(pyproject_path, "rb") as f:
                data = tomllib.load(f)
            return data["project"]["version"]
        except (OSError, KeyError, tomllib.TOMLDecodeError):
            pass

    try:
        return metadata.version("brightwire")
    except metadata.PackageNotFoundError:
        return "unknown"


def get_git_commit(checkout: Path = SOURCE_ROOT) -> Optional[str]:
    """Short hash of the checked-out commit, None for an installed wheel"""
    if not (checkout / ".git").exists():
        return None

    try:
        result = subprocess.run(
            ["git", "-C", str(checkout), "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
        )
    except OSError:
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


__version__ = get_version()
