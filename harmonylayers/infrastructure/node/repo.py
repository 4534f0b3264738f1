"""Read-only view of a legacy miner repo directory."""

from __future__ import annotations

from pathlib import Path

from harmonylayers.domain.errors import RepoAccessError
from harmonylayers.domain.models import StorageMinerConfig, parse_storage_miner_config

from .keystore import FsKeyStore

CONFIG_FILE = "config.toml"
KEYSTORE_DIR = "keystore"
DEFAULT_MINER_REPO = "~/.lotusminer"


class MinerRepo:
    """A miner repo such as ``~/.lotusminer``.

    The repo is never written to. Lotus does not lock a repo for read-only
    access either, so a running miner does not block the migration.
    """

    def __init__(self, path: str | Path = DEFAULT_MINER_REPO) -> None:
        self.path = Path(path).expanduser()

    @property
    def config_path(self) -> Path:
        return self.path / CONFIG_FILE

    def ensure_initialized(self) -> None:
        """Raise :class:`RepoAccessError` unless the repo has a ``config.toml``."""
        if not self.path.is_dir():
            raise RepoAccessError(f"repo not found at {self.path}")
        if not self.config_path.is_file():
            raise RepoAccessError(f"repo not initialized: {self.config_path} is missing")

    def read_config_text(self) -> str:
        try:
            return self.config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise RepoAccessError(f"could not read {CONFIG_FILE}: {exc}") from exc

    def load_config(self) -> StorageMinerConfig:
        """Read and decode the miner's ``config.toml``."""
        return parse_storage_miner_config(self.read_config_text())

    def keystore(self) -> FsKeyStore:
        return FsKeyStore(self.path / KEYSTORE_DIR)
