"""CLI interface facades for harmonylayers.

This package is the canonical home for all Click commands.
"""

from .__main__ import cli
from .layers import layers
from .migrate import from_miner, migrate

__all__ = [
    "cli",
    "from_miner",
    "layers",
    "migrate",
]
