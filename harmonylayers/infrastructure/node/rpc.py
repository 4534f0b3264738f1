"""Minimal JSON-RPC client for lotus node APIs.

Only the calls the migration needs are wrapped. Requests go through a
:class:`requests.Session` so tests can hand in a fake session.
"""

from __future__ import annotations

import itertools
import os
from typing import Any

import requests
from requests import Session

from harmonylayers.domain.errors import (
    ApiInfoError,
    IdentityLookupError,
    MissingIdentityError,
)
from harmonylayers.infrastructure.observability import get_logger

from .api_info import ApiInfo

logger = get_logger(__name__)

DEFAULT_RPC_TIMEOUT = 30.0


class RpcError(Exception):
    """Raised when the node answers with a JSON-RPC error object."""

    def __init__(self, method: str, code: int | None, message: str) -> None:
        self.method = method
        self.code = code
        super().__init__(f"{method}: {message} (code {code})")


class JsonRpcClient:
    """Synchronous JSON-RPC 2.0 client over HTTP POST."""

    def __init__(
        self,
        url: str,
        *,
        token: str | None = None,
        timeout: float = DEFAULT_RPC_TIMEOUT,
        session: Session | None = None,
    ) -> None:
        self.url = url
        self.token = token
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()
        self._ids = itertools.count(1)

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "JsonRpcClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def call(self, method: str, *params: Any) -> Any:
        """Invoke ``method`` and return its ``result``.

        Raises:
            requests.RequestException: On transport or HTTP status errors.
            RpcError: If the response carries an ``error`` object.
            ValueError: If the response body is not a JSON object.
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": list(params),
            "id": next(self._ids),
        }
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        logger.debug("RPC %s -> %s", method, self.url)
        response = self.session.post(
            self.url, json=payload, headers=headers, timeout=self.timeout
        )
        response.raise_for_status()
        body = response.json()
        if not isinstance(body, dict):
            raise ValueError(f"{method}: response is not a JSON-RPC object")
        error = body.get("error")
        if isinstance(error, dict):
            raise RpcError(method, error.get("code"), error.get("message", ""))
        if error:
            raise RpcError(method, None, str(error))
        return body.get("result")


class MinerIdentity:
    """Looks up the miner actor address over the miner's own API.

    ``MINER_API_INFO`` overrides the ``api``/``token`` files of the miner repo.
    """

    ENV_VARS = ("MINER_API_INFO",)

    def __init__(
        self,
        repo_path: str | os.PathLike[str],
        *,
        session: Session | None = None,
        timeout: float = DEFAULT_RPC_TIMEOUT,
    ) -> None:
        self.repo_path = repo_path
        self._session = session
        self._timeout = timeout

    def _client(self) -> JsonRpcClient:
        info = ApiInfo.from_env(*self.ENV_VARS) or ApiInfo.from_repo(self.repo_path)
        return JsonRpcClient(
            info.rpc_url("v0"),
            token=info.token or None,
            timeout=self._timeout,
            session=self._session,
        )

    def actor_address(self) -> str:
        """Return the miner's actor address (e.g. ``f01000``).

        Raises:
            IdentityLookupError: If the API cannot be located or called.
            MissingIdentityError: If the miner answers with an empty address.
        """
        try:
            client = self._client()
        except ApiInfoError as exc:
            raise IdentityLookupError(f"could not get storage miner API: {exc}") from exc
        try:
            with client:
                address = client.call("Filecoin.ActorAddress")
        except (requests.RequestException, RpcError, ValueError) as exc:
            raise IdentityLookupError(f"could not read actor address: {exc}") from exc
        if not address:
            raise MissingIdentityError("miner reported an empty actor address")
        return str(address)
