import asyncio

import httpx

from dayflow.core.auth import (
    Identity,
    RemoteIdentityProvider,
    StaticTokenIdentityProvider,
    bearer_token,
)


def test_bearer_token():
    assert bearer_token("Bearer abc") == "abc"
    assert bearer_token("bearer  abc ") == "abc"
    assert bearer_token("Basic abc") is None
    assert bearer_token("Bearer ") is None
    assert bearer_token(None) is None


def test_static_provider():
    provider = StaticTokenIdentityProvider(
        {"t1": "alice", "t2": {"id": "bob", "email": "bob@example.com"}}
    )
    assert asyncio.run(provider.resolve("t1")) == Identity(id="alice")
    assert asyncio.run(provider.resolve("t2")).email == "bob@example.com"
    assert asyncio.run(provider.resolve("t3")) is None


def _remote(handler):
    return RemoteIdentityProvider(
        "https://auth.example.com/user",
        api_key="anon-key",
        transport=httpx.MockTransport(handler),
    )


def test_remote_provider_resolves_user():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "id": "u-1",
                "email": "carol@example.com",
                "user_metadata": {"full_name": "Carol"},
            },
        )

    identity = asyncio.run(_remote(handler).resolve("secret"))

    assert identity == Identity(id="u-1", email="carol@example.com", name="Carol")
    assert seen[0].headers["authorization"] == "Bearer secret"
    assert seen[0].headers["apikey"] == "anon-key"


def test_remote_provider_rejects():
    assert asyncio.run(_remote(lambda r: httpx.Response(401)).resolve("x")) is None
    assert asyncio.run(_remote(lambda r: httpx.Response(200, json={})).resolve("x")) is None
    assert asyncio.run(_remote(lambda r: httpx.Response(200, text="oops")).resolve("x")) is None


def test_remote_provider_network_error():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    assert asyncio.run(_remote(handler).resolve("x")) is None
