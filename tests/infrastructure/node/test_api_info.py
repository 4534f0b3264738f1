from __future__ import annotations

from pathlib import Path

import pytest

from harmonylayers.domain.errors import ApiInfoError
from harmonylayers.infrastructure.node import ApiInfo, FullNodeApiInfo, multiaddr_to_url


@pytest.mark.parametrize(
    ("addr", "url"),
    [
        ("/ip4/127.0.0.1/tcp/1234/http", "http://127.0.0.1:1234"),
        ("/ip4/10.0.0.5/tcp/2345", "http://10.0.0.5:2345"),
        ("/dns/lotus.example.com/tcp/443/https", "https://lotus.example.com:443"),
        ("/ip6/::1/tcp/1234/ws", "http://[::1]:1234"),
        ("ws://127.0.0.1:1234/rpc/v0", "http://127.0.0.1:1234"),
    ],
)
def test_multiaddr_to_url(addr: str, url: str) -> None:
    assert multiaddr_to_url(addr) == url


@pytest.mark.parametrize("addr", ["/ip4/127.0.0.1", "/tcp/1234", "/udp/1/quic", "ftp://x"])
def test_multiaddr_to_url_rejects_unusable_addresses(addr: str) -> None:
    with pytest.raises(ValueError):
        multiaddr_to_url(addr)


def test_parse_token_and_address() -> None:
    info = ApiInfo.parse("tok.en:/ip4/127.0.0.1/tcp/1234/http")

    assert info.token == "tok.en"
    assert info.rpc_url() == "http://127.0.0.1:1234/rpc/v0"
    assert info.authorization_header() == "Bearer tok.en"


def test_parse_bare_address_has_no_token() -> None:
    info = ApiInfo.parse("/ip4/127.0.0.1/tcp/1234/http")

    assert info.token == ""
    with pytest.raises(ApiInfoError):
        info.authorization_header()


@pytest.mark.parametrize("value", ["", "   ", "justatoken", "token:"])
def test_parse_rejects_malformed_info(value: str) -> None:
    with pytest.raises(ApiInfoError):
        ApiInfo.parse(value)


def test_full_node_env_wins_over_repo(monkeypatch, tmp_path: Path) -> None:
    (tmp_path / "api").write_text("/ip4/127.0.0.1/tcp/1234/http")
    (tmp_path / "token").write_text("repo-token")
    monkeypatch.setenv("FULLNODE_API_INFO", "env-token:/ip4/127.0.0.1/tcp/1234/http")

    assert FullNodeApiInfo(tmp_path).authorization_header() == "Bearer env-token"


def test_full_node_reads_lotus_path(monkeypatch, tmp_path: Path) -> None:
    (tmp_path / "api").write_text("/ip4/127.0.0.1/tcp/1234/http\n")
    (tmp_path / "token").write_text("repo-token\n")
    monkeypatch.delenv("FULLNODE_API_INFO", raising=False)
    monkeypatch.setenv("LOTUS_PATH", str(tmp_path))

    assert FullNodeApiInfo().authorization_header() == "Bearer repo-token"


def test_full_node_missing_repo(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("FULLNODE_API_INFO", raising=False)

    with pytest.raises(ApiInfoError):
        FullNodeApiInfo(tmp_path / "missing").authorization_header()
