"""Naming and persistence rules for configuration layers."""

from __future__ import annotations

import sqlite3
from collections.abc import Collection

from harmonylayers.domain.errors import (
    DuplicateLayerError,
    StoreIntegrityError,
    StoreUnreachableError,
)
from harmonylayers.domain.models import (
    BASE_LAYER,
    Layer,
    default_provider_config,
    provider_config_to_toml,
)
from harmonylayers.infrastructure.db.repositories import (
    DuplicateLayerTitleError,
    LayerRepository,
)
from harmonylayers.infrastructure.observability import get_logger

_logger = get_logger(__name__)

GENERATED_NAME_PREFIX = "mig"


def resolve_target_name(
    requested_name: str, existing_titles: Collection[str], overwrite_allowed: bool
) -> str:
    """Pick the title the new layer is stored under.

    An empty request yields ``mig<N>`` where N is the number of existing
    layers. The generated name is not reserved: a concurrent run can compute
    the same one, and the loser fails at insert time.

    Raises:
        DuplicateLayerError: If ``requested_name`` exists and overwriting was
            not allowed.
    """
    if not requested_name:
        return f"{GENERATED_NAME_PREFIX}{len(existing_titles)}"
    if requested_name in existing_titles and not overwrite_allowed:
        raise DuplicateLayerError(requested_name)
    return requested_name


def default_layer_config() -> str:
    """Serialized default provider config used for the ``base`` layer."""
    return provider_config_to_toml(default_provider_config())


class LayerStoreService:
    """Service layer over the ``harmony_config`` table."""

    def __init__(self, repository: LayerRepository) -> None:
        self._repository = repository

    def list_non_empty_titles(self) -> set[str]:
        """Return the titles of all layers with content.

        Raises:
            StoreUnreachableError: If the store cannot be queried.
        """
        try:
            titles = set(self._repository.list_titles(non_empty_only=True))
        except sqlite3.Error as exc:
            raise StoreUnreachableError(f"cannot list layers: {exc}") from exc
        _logger.debug("Found %d layers", len(titles))
        return titles

    def list_layers(self) -> list[Layer]:
        try:
            return self._repository.list()
        except sqlite3.Error as exc:
            raise StoreUnreachableError(f"cannot list layers: {exc}") from exc

    def get_layer(self, title: str) -> Layer | None:
        try:
            return self._repository.get(title)
        except sqlite3.Error as exc:
            raise StoreUnreachableError(f"cannot read layer {title}: {exc}") from exc

    def insert_layer(self, title: str, config: str) -> None:
        """Insert a new layer. Never overwrites.

        Raises:
            StoreIntegrityError: If a row with ``title`` already exists.
            StoreUnreachableError: On any other store failure.
        """
        _logger.info("Inserting layer: %s", title)
        try:
            self._repository.add(title, config)
        except DuplicateLayerTitleError as exc:
            _logger.warning("Layer already exists in store: %s", title)
            raise StoreIntegrityError(title) from exc
        except sqlite3.Error as exc:
            raise StoreUnreachableError(f"cannot insert layer {title}: {exc}") from exc

    def replace_layer(self, title: str, config: str) -> None:
        """Overwrite the content of an existing layer.

        Raises:
            LayerNotFoundError: If no row with ``title`` exists.
        """
        _logger.info("Replacing layer: %s", title)
        try:
            self._repository.replace(title, config)
        except sqlite3.Error as exc:
            raise StoreUnreachableError(f"cannot replace layer {title}: {exc}") from exc

    def ensure_base_layer(self, existing_titles: Collection[str]) -> bool:
        """Create the ``base`` layer with default content if it is missing.

        Returns:
            True if a ``base`` row was inserted, False if it already existed.
        """
        if BASE_LAYER in existing_titles:
            return False
        _logger.info("Base layer missing, creating it with defaults")
        self.insert_layer(BASE_LAYER, default_layer_config())
        return True
