"""Read-only access to a lotus filesystem keystore.

Each key lives in its own file under ``<repo>/keystore``. The file name is the
key name in unpadded base32 and the content is a JSON ``KeyInfo`` object whose
``PrivateKey`` is standard base64.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from pathlib import Path

from harmonylayers.domain.errors import SecretLookupError

JWT_SECRET_NAME = "auth-jwt-private"


def encode_key_name(name: str) -> str:
    return base64.b32encode(name.encode("utf-8")).decode("ascii").rstrip("=")


@dataclass(frozen=True)
class KeyInfo:
    type: str
    private_key: bytes


class FsKeyStore:
    """Keystore backed by one JSON file per key."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def get(self, name: str) -> KeyInfo:
        """Return the key stored under ``name``.

        Raises:
            SecretLookupError: If the key is missing or its file is corrupt.
        """
        key_path = self.path / encode_key_name(name)
        if not key_path.is_file():
            raise SecretLookupError(f"error getting {name}: key not found in {self.path}")
        try:
            with open(key_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            private_key = base64.b64decode(payload["PrivateKey"], validate=True)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise SecretLookupError(f"error getting {name}: {exc}") from exc
        return KeyInfo(type=str(payload.get("Type", "")), private_key=private_key)

    def private_key(self, name: str) -> bytes:
        return self.get(name).private_key
