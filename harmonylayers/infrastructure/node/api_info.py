"""API connection info for lotus nodes.

A node advertises its RPC endpoint as a multiaddr (``/ip4/127.0.0.1/tcp/1234/http``)
in the repo's ``api`` file and its auth token in ``token``. The same pair can
be given as a single ``token:multiaddr`` string, e.g. in ``FULLNODE_API_INFO``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

from harmonylayers.domain.errors import ApiInfoError

API_FILE = "api"
TOKEN_FILE = "token"

_HOST_PROTOCOLS = {"ip4", "ip6", "dns", "dns4", "dns6"}
_SCHEME_PROTOCOLS = {"http": "http", "https": "https", "ws": "http", "wss": "https"}


def multiaddr_to_url(addr: str) -> str:
    """Convert a TCP multiaddr into an HTTP base URL.

    Plain ``http(s)://`` / ``ws(s)://`` URLs are accepted too and normalised to
    their HTTP form without a trailing slash.

    Raises:
        ValueError: If the address has no host or no TCP port.
    """
    addr = addr.strip()
    if "://" in addr:
        parts = urlsplit(addr)
        scheme = _SCHEME_PROTOCOLS.get(parts.scheme)
        if scheme is None or not parts.netloc:
            raise ValueError(f"unsupported API address: {addr}")
        return f"{scheme}://{parts.netloc}"

    segments = [s for s in addr.split("/") if s]
    host: str | None = None
    port: str | None = None
    scheme = "http"
    i = 0
    while i < len(segments):
        proto = segments[i]
        if proto in _HOST_PROTOCOLS and i + 1 < len(segments):
            value = segments[i + 1]
            host = f"[{value}]" if proto == "ip6" else value
            i += 2
        elif proto == "tcp" and i + 1 < len(segments):
            port = segments[i + 1]
            i += 2
        elif proto in _SCHEME_PROTOCOLS:
            scheme = _SCHEME_PROTOCOLS[proto]
            i += 1
        else:
            raise ValueError(f"unsupported multiaddr component '{proto}' in {addr}")
    if host is None or port is None or not port.isdigit():
        raise ValueError(f"multiaddr needs a host and a tcp port: {addr}")
    return f"{scheme}://{host}:{port}"


@dataclass(frozen=True)
class ApiInfo:
    """Token and address of a node RPC endpoint."""

    address: str
    token: str = ""

    @classmethod
    def parse(cls, value: str) -> "ApiInfo":
        """Parse ``token:multiaddr`` (or a bare multiaddr)."""
        value = value.strip()
        if not value:
            raise ApiInfoError("empty API info")
        if value.startswith("/") or "://" in value:
            return cls(address=value)
        token, sep, address = value.partition(":")
        if not sep or not address:
            raise ApiInfoError(f"malformed API info (expected token:multiaddr): {value!r}")
        return cls(address=address, token=token)

    @classmethod
    def from_env(cls, *names: str) -> "ApiInfo | None":
        """Return the info from the first set environment variable, if any."""
        for name in names:
            value = os.environ.get(name)
            if value:
                return cls.parse(value)
        return None

    @classmethod
    def from_repo(cls, repo_path: str | Path) -> "ApiInfo":
        """Read the ``api`` and ``token`` files of a node repo.

        Raises:
            ApiInfoError: If the ``api`` file is missing or unreadable.
        """
        root = Path(repo_path).expanduser()
        try:
            address = (root / API_FILE).read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ApiInfoError(
                f"could not read API endpoint from {root / API_FILE}: {exc}"
            ) from exc
        token_path = root / TOKEN_FILE
        try:
            token = token_path.read_text(encoding="utf-8").strip() if token_path.exists() else ""
        except OSError as exc:
            raise ApiInfoError(f"could not read API token from {token_path}: {exc}") from exc
        return cls(address=address, token=token)

    def rpc_url(self, version: str = "v0") -> str:
        try:
            return f"{multiaddr_to_url(self.address)}/rpc/{version}"
        except ValueError as exc:
            raise ApiInfoError(str(exc)) from exc

    def authorization_header(self) -> str:
        """Return the ``Authorization`` header value for this endpoint."""
        if not self.token:
            raise ApiInfoError(f"no API token available for {self.address}")
        return f"Bearer {self.token}"


class FullNodeApiInfo:
    """Locates the chain (full node) API the new layer should talk to.

    ``FULLNODE_API_INFO`` wins; otherwise the full node repo at ``LOTUS_PATH``
    (default ``~/.lotus``) is read.
    """

    ENV_VARS = ("FULLNODE_API_INFO",)
    REPO_ENV_VAR = "LOTUS_PATH"
    DEFAULT_REPO = "~/.lotus"

    def __init__(self, repo_path: str | Path | None = None) -> None:
        self._repo_path = repo_path

    def api_info(self) -> ApiInfo:
        info = ApiInfo.from_env(*self.ENV_VARS)
        if info is not None:
            return info
        repo_path = self._repo_path or os.environ.get(self.REPO_ENV_VAR) or self.DEFAULT_REPO
        return ApiInfo.from_repo(repo_path)

    def authorization_header(self) -> str:
        return self.api_info().authorization_header()
