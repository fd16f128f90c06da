"""Application version module.

The major.minor version lives in the VERSION file at the project root.
The patch component is the git commit count when a checkout is available.
"""

from pathlib import Path


def get_version() -> str:
    """Get the application version string (e.g. '1.0.12')."""
    return _dev_version()


def _dev_version() -> str:
    """Derive version from VERSION file and git history (dev only)."""
    import subprocess

    # editor/src/version.py -> ../../VERSION
    version_file = Path(__file__).resolve().parent.parent.parent / "VERSION"
    try:
        major_minor = version_file.read_text().strip()
    except FileNotFoundError:
        major_minor = "0.0"

    try:
        result = subprocess.run(
            ['git', 'rev-list', '--count', 'HEAD'],
            capture_output=True, text=True, check=False,
            cwd=str(version_file.parent),
        )
        if result.returncode == 0 and result.stdout.strip().isdigit():
            return f"{major_minor}.{result.stdout.strip()}"
    except FileNotFoundError:
        pass  # git not installed

    return f"{major_minor}.0"
