from __future__ import annotations

import json
from pathlib import Path

import pytest
import requests
from requests import Response

from harmonylayers.domain.errors import IdentityLookupError, MissingIdentityError
from harmonylayers.infrastructure.node import JsonRpcClient, MinerIdentity, RpcError

from conftest import write_miner_repo


def _make_response(payload: object, status: int = 200) -> Response:
    resp = Response()
    resp._content = json.dumps(payload).encode("utf-8")
    resp.status_code = status
    resp.headers["Content-Type"] = "application/json"
    return resp


class FakeSession:
    def __init__(self, response: Response | Exception) -> None:
        self.response = response
        self.posts: list[dict] = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.posts.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def test_call_sends_jsonrpc_payload_with_token() -> None:
    session = FakeSession(_make_response({"jsonrpc": "2.0", "id": 1, "result": "f01000"}))
    client = JsonRpcClient("http://127.0.0.1:2345/rpc/v0", token="tkn", session=session)

    assert client.call("Filecoin.ActorAddress") == "f01000"

    sent = session.posts[0]
    assert sent["url"] == "http://127.0.0.1:2345/rpc/v0"
    assert sent["json"] == {
        "jsonrpc": "2.0",
        "method": "Filecoin.ActorAddress",
        "params": [],
        "id": 1,
    }
    assert sent["headers"]["Authorization"] == "Bearer tkn"


def test_call_raises_on_error_object() -> None:
    session = FakeSession(
        _make_response({"jsonrpc": "2.0", "id": 1, "error": {"code": 1, "message": "denied"}})
    )
    client = JsonRpcClient("http://x/rpc/v0", session=session)

    with pytest.raises(RpcError, match="denied"):
        client.call("Filecoin.ActorAddress")
    assert "Authorization" not in session.posts[0]["headers"]


def test_miner_identity_uses_repo_api_files(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("MINER_API_INFO", raising=False)
    repo = write_miner_repo(tmp_path / "repo", api="/ip4/10.1.1.1/tcp/2345/http", token="mtok")
    session = FakeSession(_make_response({"jsonrpc": "2.0", "id": 1, "result": "f01234"}))

    identity = MinerIdentity(repo, session=session)

    assert identity.actor_address() == "f01234"
    assert session.posts[0]["url"] == "http://10.1.1.1:2345/rpc/v0"
    assert session.posts[0]["headers"]["Authorization"] == "Bearer mtok"


def test_miner_identity_env_override(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("MINER_API_INFO", "envtok:/ip4/10.2.2.2/tcp/2345/http")
    repo = write_miner_repo(tmp_path / "repo", api=None, token=None)
    session = FakeSession(_make_response({"jsonrpc": "2.0", "id": 1, "result": "f09"}))

    assert MinerIdentity(repo, session=session).actor_address() == "f09"
    assert session.posts[0]["url"] == "http://10.2.2.2:2345/rpc/v0"


def test_miner_identity_without_api_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("MINER_API_INFO", raising=False)
    repo = write_miner_repo(tmp_path / "repo", api=None)

    with pytest.raises(IdentityLookupError, match="storage miner API"):
        MinerIdentity(repo, session=FakeSession(_make_response({}))).actor_address()


def test_miner_identity_transport_error(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("MINER_API_INFO", raising=False)
    repo = write_miner_repo(tmp_path / "repo")
    session = FakeSession(requests.ConnectionError("refused"))

    with pytest.raises(IdentityLookupError, match="actor address"):
        MinerIdentity(repo, session=session).actor_address()


def test_miner_identity_http_error(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("MINER_API_INFO", raising=False)
    repo = write_miner_repo(tmp_path / "repo")
    session = FakeSession(_make_response({"message": "unauthorized"}, status=401))

    with pytest.raises(IdentityLookupError):
        MinerIdentity(repo, session=session).actor_address()


def test_miner_identity_empty_address(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("MINER_API_INFO", raising=False)
    repo = write_miner_repo(tmp_path / "repo")
    session = FakeSession(_make_response({"jsonrpc": "2.0", "id": 1, "result": ""}))

    with pytest.raises(MissingIdentityError):
        MinerIdentity(repo, session=session).actor_address()


@pytest.mark.parametrize("body", [["f01000"], "f01000", None])
def test_miner_identity_rejects_non_object_body(
    tmp_path: Path, monkeypatch, body: object
) -> None:
    monkeypatch.delenv("MINER_API_INFO", raising=False)
    repo = write_miner_repo(tmp_path / "repo")
    session = FakeSession(_make_response(body))

    with pytest.raises(IdentityLookupError, match="actor address"):
        MinerIdentity(repo, session=session).actor_address()


def test_call_raises_on_non_object_error() -> None:
    session = FakeSession(_make_response({"jsonrpc": "2.0", "id": 1, "error": "boom"}))
    client = JsonRpcClient("http://x/rpc/v0", session=session)

    with pytest.raises(RpcError, match="boom"):
        client.call("Filecoin.ActorAddress")


def test_miner_identity_closes_its_own_session(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("MINER_API_INFO", raising=False)
    repo = write_miner_repo(tmp_path / "repo")
    created: list[ClosingSession] = []

    class ClosingSession(FakeSession):
        def __init__(self) -> None:
            super().__init__(_make_response({"jsonrpc": "2.0", "id": 1, "result": "f01000"}))
            self.closed = False
            created.append(self)

        def close(self) -> None:
            self.closed = True

    monkeypatch.setattr(requests, "Session", ClosingSession)

    assert MinerIdentity(repo).actor_address() == "f01000"
    assert len(created) == 1
    assert created[0].closed is True


def test_injected_session_is_left_open() -> None:
    class TrackingSession(FakeSession):
        closed = False

        def close(self) -> None:
            self.closed = True

    session = TrackingSession(_make_response({"jsonrpc": "2.0", "id": 1, "result": "f01000"}))

    with JsonRpcClient("http://x/rpc/v0", session=session) as client:
        client.call("Filecoin.ActorAddress")

    assert session.closed is False
