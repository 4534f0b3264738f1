"""Service layer modules for harmonylayers."""

from .followup import build_followup_message, derive_db_flags  # noqa: F401
from .layers import LayerStoreService, resolve_target_name  # noqa: F401
from .migration import (  # noqa: F401
    MigrationResult,
    MigrationService,
    MigrationState,
)
from .translator import Translation, parse_bearer_token, translate  # noqa: F401

__all__ = [
    "LayerStoreService",
    "MigrationResult",
    "MigrationService",
    "MigrationState",
    "Translation",
    "build_followup_message",
    "derive_db_flags",
    "parse_bearer_token",
    "resolve_target_name",
    "translate",
]
