"""Infrastructure layer for harmonylayers.

Holds adapters for the layer database, the legacy miner repo and its RPC
endpoints, and logging.
"""

from . import db, node, observability

__all__ = ["db", "node", "observability"]
