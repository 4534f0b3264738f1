"""Interface layer for harmonylayers.

Packages under ``harmonylayers.interfaces`` expose boundary adapters such as
CLI commands.
"""

from . import cli

__all__ = ["cli"]
