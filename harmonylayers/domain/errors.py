"""Error taxonomy for configuration migrations.

Every step of a migration run raises one of these and the run stops there.
Nothing is retried; the CLI turns any :class:`MigrationError` into a non-zero
exit status with the message printed.
"""

from __future__ import annotations

DB_REMEDIATION_HINT = (
    "Ensure the miner config toml's HarmonyDB entry is setup to reach the "
    "database correctly"
)


class MigrationError(Exception):
    """Base class for failures that abort a migration run."""


class RepoAccessError(MigrationError):
    """Raised when the legacy miner repo is missing or cannot be read."""


class ConfigDecodeError(MigrationError):
    """Raised when a configuration file is not valid TOML for its schema."""


class EncodingError(MigrationError):
    """Raised when secret material cannot be encoded into the new layer."""


class StoreUnreachableError(MigrationError):
    """Raised when the layer store cannot be opened or queried."""

    def __init__(self, message: str, hint: str = DB_REMEDIATION_HINT) -> None:
        self.hint = hint
        super().__init__(f"{message}. {hint}" if hint else message)


class DuplicateLayerError(MigrationError):
    """Raised when a layer title is taken and overwriting was not confirmed."""

    def __init__(self, title: str, message: str | None = None) -> None:
        self.title = title
        super().__init__(
            message
            or f"the overwrite flag is needed to replace existing layer: {title}"
        )


class StoreIntegrityError(DuplicateLayerError):
    """Raised when the store rejects an insert because the title exists.

    This happens when another writer inserted the same title between the
    title listing and the insert, or when the title belongs to a row whose
    content was blanked.
    """

    def __init__(self, title: str) -> None:
        super().__init__(
            title, f"layer '{title}' already exists in the store (insert rejected)"
        )


class LayerNotFoundError(MigrationError):
    """Raised when a layer expected in the store has no row."""


class SecretLookupError(MigrationError):
    """Raised when a key cannot be read from the miner keystore."""


class IdentityLookupError(MigrationError):
    """Raised when the miner actor address cannot be obtained."""


class MissingIdentityError(IdentityLookupError):
    """Raised when the miner reports an empty actor address."""


class ApiInfoError(MigrationError):
    """Raised when chain API connection info cannot be obtained."""


class AuthorizationHeaderError(ApiInfoError):
    """Raised when an Authorization header is not of the form ``Bearer <token>``."""


__all__ = [
    "ApiInfoError",
    "AuthorizationHeaderError",
    "ConfigDecodeError",
    "DB_REMEDIATION_HINT",
    "DuplicateLayerError",
    "EncodingError",
    "IdentityLookupError",
    "LayerNotFoundError",
    "MigrationError",
    "MissingIdentityError",
    "RepoAccessError",
    "SecretLookupError",
    "StoreIntegrityError",
    "StoreUnreachableError",
]
