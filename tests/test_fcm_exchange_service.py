from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from fcm_broker.clients import PushCredential
from fcm_broker.core.config import ClientCredentialSettings, FcmSettings
from fcm_broker.services import CredentialValidator, FcmExchangeService, TokenStore
from fcm_broker.services.credentials import CLIENT_CREDENTIALS_GRANT_TYPE, FCM_SCOPE
from fcm_broker.services.errors import (
    InvalidGrantError,
    InvalidOrExpiredTokenError,
    MintingCollaboratorError,
    MissingBearerTokenError,
    UnexpectedProjectIdentityError,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class DummyMinter:
    def __init__(self, clock: FakeClock, *, lifetime: timedelta = timedelta(hours=1)) -> None:
        self._clock = clock
        self._lifetime = lifetime
        self.scopes: list[str] = []
        self.error: Exception | None = None

    async def mint(self, scope: str) -> PushCredential:
        self.scopes.append(scope)
        if self.error is not None:
            raise self.error
        return PushCredential(
            access_token=f"fcm-token-{len(self.scopes)}",
            expires_at=self._clock() + self._lifetime,
        )


def _build(
    *, ttl_override_seconds: int | None = None, lifetime: timedelta = timedelta(hours=1)
) -> tuple[FcmExchangeService, TokenStore, DummyMinter, FakeClock]:
    clock = FakeClock()
    store = TokenStore(ttl_seconds=600, clock=clock)
    minter = DummyMinter(clock, lifetime=lifetime)
    validator = CredentialValidator(
        ClientCredentialSettings(BROKER_CLIENT_ID="client", BROKER_CLIENT_SECRET="secret"),
        FcmSettings(FCM_EXPECTED_PROJECT_NUMBER="123456"),
    )
    service = FcmExchangeService(
        validator=validator,
        store=store,
        minter=minter,
        ttl_override_seconds=ttl_override_seconds,
        clock=clock,
    )
    return service, store, minter, clock


def _request(token: str, **overrides):
    payload = {
        "authorization": f"Bearer {token}",
        "fcm_project_number": "123456",
        "grant_type": CLIENT_CREDENTIALS_GRANT_TYPE,
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_exchange_returns_minted_credential() -> None:
    service, store, minter, _ = _build()
    token = store.issue()

    response = await service.exchange(**_request(token.value))

    assert response.access_token == "fcm-token-1"
    assert response.expires_in == 3600
    assert response.token_type == "Bearer"
    assert minter.scopes == [FCM_SCOPE]


@pytest.mark.asyncio
async def test_expires_in_is_floored_to_whole_seconds() -> None:
    service, store, _, _ = _build(lifetime=timedelta(seconds=3599, milliseconds=900))
    token = store.issue()

    response = await service.exchange(**_request(token.value))

    assert response.expires_in == 3599


@pytest.mark.asyncio
async def test_configured_ttl_override_wins() -> None:
    service, store, _, _ = _build(ttl_override_seconds=60)
    token = store.issue()

    response = await service.exchange(**_request(token.value))

    assert response.expires_in == 60


@pytest.mark.asyncio
async def test_token_is_not_consumed_by_exchange() -> None:
    service, store, minter, _ = _build()
    token = store.issue()

    first = await service.exchange(**_request(token.value))
    second = await service.exchange(**_request(token.value))

    assert first.access_token == "fcm-token-1"
    assert second.access_token == "fcm-token-2"
    assert store.is_valid(token.value)
    assert len(store) == 1
    assert len(minter.scopes) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("authorization", [None, "", "bearer abc", "Basic abc", "Bearer"])
async def test_missing_bearer_token(authorization) -> None:
    service, store, minter, _ = _build()
    store.issue()

    with pytest.raises(MissingBearerTokenError):
        await service.exchange(**_request("unused", authorization=authorization))
    assert minter.scopes == []


@pytest.mark.asyncio
async def test_unknown_token_is_rejected() -> None:
    service, _, minter, _ = _build()

    with pytest.raises(InvalidOrExpiredTokenError):
        await service.exchange(**_request("not-issued"))
    assert minter.scopes == []


@pytest.mark.asyncio
async def test_expired_token_is_rejected() -> None:
    service, store, minter, clock = _build()
    token = store.issue()

    clock.advance(600)

    with pytest.raises(InvalidOrExpiredTokenError):
        await service.exchange(**_request(token.value))
    assert minter.scopes == []


@pytest.mark.asyncio
async def test_unexpected_project_number_is_rejected() -> None:
    service, store, minter, _ = _build()
    token = store.issue()

    with pytest.raises(UnexpectedProjectIdentityError):
        await service.exchange(**_request(token.value, fcm_project_number="654321"))
    assert minter.scopes == []


@pytest.mark.asyncio
async def test_invalid_grant_is_checked_after_project_number() -> None:
    service, store, _, _ = _build()
    token = store.issue()

    with pytest.raises(UnexpectedProjectIdentityError):
        await service.exchange(
            **_request(token.value, fcm_project_number="654321", grant_type="password")
        )
    with pytest.raises(InvalidGrantError):
        await service.exchange(**_request(token.value, grant_type="password"))


@pytest.mark.asyncio
async def test_minting_failure_propagates() -> None:
    service, store, minter, _ = _build()
    token = store.issue()
    minter.error = MintingCollaboratorError()

    with pytest.raises(MintingCollaboratorError) as exc_info:
        await service.exchange(**_request(token.value))

    assert exc_info.value.status_code == 502
    assert store.is_valid(token.value)
