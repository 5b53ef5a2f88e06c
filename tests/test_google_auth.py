import asyncio

import pytest

from lexideck.components.google_auth import GoogleAuthService


class FakeTransport:
    created = 0

    def __init__(self):
        FakeTransport.created += 1


@pytest.fixture(autouse=True)
def reset_transport_count():
    FakeTransport.created = 0


def test_verify_token_returns_claims():
    seen = []

    def verifier(token, request, client_id):
        seen.append((token, request, client_id))
        return {"email": "a@example.com"}

    service = GoogleAuthService("client-1", verifier=verifier, request_factory=FakeTransport)

    claims = asyncio.run(service.verify_token("jwt"))

    assert claims == {"email": "a@example.com"}
    assert seen[0][0] == "jwt"
    assert isinstance(seen[0][1], FakeTransport)
    assert seen[0][2] == "client-1"
    assert service.is_configured


def test_concurrent_initialization_runs_once():
    service = GoogleAuthService("client-1", request_factory=FakeTransport)

    async def main():
        await asyncio.gather(*(service.initialize() for _ in range(5)))
        await service.initialize()

    asyncio.run(main())

    assert FakeTransport.created == 1


def test_invalid_token_returns_none():
    def verifier(token, request, client_id):
        raise ValueError("Token expired")

    service = GoogleAuthService("client-1", verifier=verifier, request_factory=FakeTransport)

    assert asyncio.run(service.verify_token("jwt")) is None


def test_empty_token_skips_initialization():
    service = GoogleAuthService("client-1", request_factory=FakeTransport)

    assert asyncio.run(service.verify_token("")) is None
    assert FakeTransport.created == 0


def test_missing_client_id_fails_and_can_retry():
    service = GoogleAuthService(None, request_factory=FakeTransport)

    with pytest.raises(RuntimeError):
        asyncio.run(service.initialize())
    assert asyncio.run(service.verify_token("jwt")) is None

    service.client_id = "client-1"
    asyncio.run(service.initialize())
    assert service.is_configured
