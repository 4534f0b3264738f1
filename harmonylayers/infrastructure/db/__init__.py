from .config import (DEFAULT_DB_TIMEOUT, get_default_timeout, get_enable_wal,
                     get_path_config, load_config)
from .connection import DatabaseError, apply_pragmas, get_connection
from .schema import ensure_schema

__all__ = [
    "DEFAULT_DB_TIMEOUT",
    "DatabaseError",
    "apply_pragmas",
    "ensure_schema",
    "get_connection",
    "get_default_timeout",
    "get_enable_wal",
    "get_path_config",
    "load_config",
]
