"""Domain layer facade for harmonylayers.

This package groups the configuration schemas, layer records and the error
taxonomy. Nothing in here performs I/O.
"""

from . import errors, models

__all__ = ["errors", "models"]
