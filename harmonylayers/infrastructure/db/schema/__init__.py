from .manager import ensure_schema
from .tables import SCHEMA_HARMONY_CONFIG_SQL

__all__ = [
    "SCHEMA_HARMONY_CONFIG_SQL",
    "ensure_schema",
]
