from __future__ import annotations

import json

import httpx
import pytest

from billing_client.app import create_app
from billing_client.domain import SessionStatus
from billing_client.infrastructure.storage import MemorySessionStorage
from billing_client.shared.config import ApiConfig, AppConfig, SessionConfig


@pytest.mark.asyncio
async def test_create_app_restores_persisted_session(tmp_path) -> None:
    storage = MemorySessionStorage(
        {"token": "tok-1", "user": json.dumps({"_id": "u1", "name": "Asha"})}
    )
    config = AppConfig(
        api=ApiConfig(base_url="http://billing.test"),
        session=SessionConfig(
            storage_file=tmp_path / "s.json", preferences_file=tmp_path / "p.json"
        ),
    )

    app = create_app(
        config,
        storage=storage,
        preferences=MemorySessionStorage(),
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
    )

    assert app.session.status is SessionStatus.AUTHENTICATED
    assert app.session.user is not None and app.session.user.name == "Asha"
    await app.shutdown()
