"""Package version, resolved from installed metadata.

SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

__all__ = ["__version__"]

try:
    __version__ = _get_version("langcache")
except PackageNotFoundError:
    # Development mode: package not installed yet
    # Run: pip install -e .
    __version__ = "0.0.0+dev"
