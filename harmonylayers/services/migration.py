"""Migrate a miner repo's configuration into a provider layer.

One run reads the miner repo, lists the existing layers, picks the target
name, translates the config, creates ``base`` when it is missing and stores
the new layer. Every step either succeeds or aborts the run; nothing is
retried and nothing is rolled back. In particular a freshly created ``base``
layer stays in place when the target insert fails afterwards.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Protocol

from harmonylayers.domain.errors import (
    MigrationError,
    StoreUnreachableError,
)
from harmonylayers.domain.models import BASE_LAYER, default_storage_miner_config
from harmonylayers.infrastructure.db import DatabaseError
from harmonylayers.infrastructure.node import (
    JWT_SECRET_NAME,
    FullNodeApiInfo,
    MinerIdentity,
    MinerRepo,
)
from harmonylayers.infrastructure.observability import (
    get_logger,
    log_context,
    log_exception,
)
from harmonylayers.services.followup import build_followup_message
from harmonylayers.services.layers import LayerStoreService, resolve_target_name
from harmonylayers.services.translator import translate

StoreFactory = Callable[[], AbstractContextManager[LayerStoreService]]


class IdentityProvider(Protocol):
    def actor_address(self) -> str: ...


class SecretProvider(Protocol):
    def private_key(self, name: str) -> bytes: ...


class ApiInfoProvider(Protocol):
    def authorization_header(self) -> str: ...


class MigrationState(str, Enum):
    """Progress of a single migration run."""

    IDLE = "idle"
    TITLES_LISTED = "titles_listed"
    BASE_ENSURED = "base_ensured"
    LAYER_INSERTED = "layer_inserted"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class MigrationResult:
    layer_name: str
    base_created: bool
    replaced: bool
    config_toml: str
    message: str


class MigrationService:
    """Runs the miner-to-layer migration against one layer store.

    The identity, secret and API info providers default to the real lotus
    adapters for the given repo; tests pass fakes.
    """

    def __init__(
        self,
        store_factory: StoreFactory,
        *,
        identity: IdentityProvider | None = None,
        secrets: SecretProvider | None = None,
        api_info: ApiInfoProvider | None = None,
    ) -> None:
        self._store_factory = store_factory
        self._identity = identity
        self._secrets = secrets
        self._api_info = api_info
        self._logger = get_logger(__name__)
        self.state = MigrationState.IDLE
        self.history: list[MigrationState] = [MigrationState.IDLE]

    def _transition(self, state: MigrationState) -> None:
        self._logger.debug("Migration state %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def run(
        self,
        miner_repo: str | Path | MinerRepo,
        *,
        to_layer: str = "",
        overwrite: bool = False,
    ) -> MigrationResult:
        """Create (or, with ``overwrite``, replace) a layer from ``miner_repo``.

        Raises:
            MigrationError: Any failure; the concrete subclass names the step.
        """
        repo = miner_repo if isinstance(miner_repo, MinerRepo) else MinerRepo(miner_repo)
        with log_context(miner_repo=str(repo.path)):
            try:
                return self._run(repo, to_layer=to_layer, overwrite=overwrite)
            except MigrationError as exc:
                self._transition(MigrationState.FAILED)
                self._logger.error("Migration failed: %s", exc)
                raise
            except Exception as exc:
                self._transition(MigrationState.FAILED)
                log_exception(self._logger, "Unexpected migration failure", exc)
                raise

    def _run(self, repo: MinerRepo, *, to_layer: str, overwrite: bool) -> MigrationResult:
        repo.ensure_initialized()
        legacy = repo.load_config()
        legacy_toml = repo.read_config_text()

        try:
            with self._store_factory() as store:
                titles = store.list_non_empty_titles()
                self._transition(MigrationState.TITLES_LISTED)

                name = resolve_target_name(to_layer, titles, overwrite)
                # generated names always insert, so a collision fails loudly
                replacing = bool(to_layer) and overwrite and name in titles
                self._logger.info("Target layer resolved: %s", name)

                identity = self._identity or MinerIdentity(repo.path)
                secrets = self._secrets or repo.keystore()
                api_info = self._api_info or FullNodeApiInfo()
                translation = translate(
                    legacy_toml,
                    identity.actor_address(),
                    secrets.private_key(JWT_SECRET_NAME),
                    api_info.authorization_header(),
                )
                config_toml = translation.to_toml()

                base_created = False
                if name != BASE_LAYER:
                    base_created = store.ensure_base_layer(titles)
                    self._transition(MigrationState.BASE_ENSURED)

                with log_context(layer=name):
                    if replacing:
                        store.replace_layer(name, config_toml)
                    else:
                        store.insert_layer(name, config_toml)
                self._transition(MigrationState.LAYER_INSERTED)
        except DatabaseError as exc:
            raise StoreUnreachableError(f"could not reach the database: {exc}") from exc

        message = (
            f"Layer {name} {'replaced' if replacing else 'created'}.\n"
            + translation.advisory
            + build_followup_message(
                name, legacy.harmony_db, default_storage_miner_config().harmony_db
            )
        )
        self._transition(MigrationState.DONE)
        self._logger.info("Layer %s stored", name)
        return MigrationResult(
            layer_name=name,
            base_created=base_created,
            replaced=replacing,
            config_toml=config_toml,
            message=message,
        )
