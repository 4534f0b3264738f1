"""
harmonylayers package initializer.

This package migrates a legacy single-node miner configuration into named,
database-resident configuration layers shared by a provider fleet.

The package exposes a ``__version__`` attribute indicating the installed
version of harmonylayers. The version is read from pyproject.toml via
importlib.metadata – this is the single source of truth.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("harmonylayers")
except PackageNotFoundError:
    # Package is not installed (running from source without pip install -e .)
    __version__ = "0.0.0.dev"

__all__: list[str] = ["__version__"]
