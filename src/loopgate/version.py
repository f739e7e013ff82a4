"""Version string for --version.

The installed distribution's metadata wins; a source tree that was never
installed falls back to PACKAGE_VERSION. When the package sits inside a
git work tree the short commit is appended.
"""

import subprocess
from importlib import metadata
from pathlib import Path

PACKAGE_VERSION = "0.3.0"

_SOURCE_ROOT = Path(__file__).resolve().parents[2]


def _installed_version() -> str:
    try:
        return metadata.version("loopgate")
    except metadata.PackageNotFoundError:
        return PACKAGE_VERSION


def _checkout_commit() -> str | None:
    """Short HEAD hash of the work tree holding this package, if any."""
    if not (_SOURCE_ROOT / ".git").exists():
        return None
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            cwd=_SOURCE_ROOT,
            capture_output=True,
            text=True,
            timeout=5,
            check=True,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    return completed.stdout.strip() or None


def get_version() -> str:
    """Return '0.3.0' or, inside a checkout, '0.3.0 (g3a7f2c1)'."""
    version = _installed_version()
    commit = _checkout_commit()
    return f"{version} (g{commit})" if commit else version
