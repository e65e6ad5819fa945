"""firattr version lookup."""

import re
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"
_VERSION_RE = re.compile(r'^version\s*=\s*["\']([^"\']+)["\']', re.MULTILINE)


def get_version() -> str:
    """
    Return the firattr version.

    A source checkout reads it from pyproject.toml so editable installs never
    report a stale number; an installed wheel falls back to its metadata.
    """
    if _PYPROJECT.exists():
        if match := _VERSION_RE.search(_PYPROJECT.read_text()):
            return match.group(1)
    try:
        return version("firattr")
    except PackageNotFoundError:
        return "0.0.0"
