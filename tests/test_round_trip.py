import httpx
import pytest

import scoreclient.api as api
import scoreserver.app as server


@pytest.fixture
def asgi_backend(monkeypatch):
    server.RT.users.clear()
    real_client = httpx.AsyncClient
    transport = httpx.ASGITransport(app=server.app)

    def client_factory(*args, **kwargs):
        return real_client(*args, transport=transport, **kwargs)

    monkeypatch.setattr(api.httpx, "AsyncClient", client_factory)
    yield "http://scoreserver"
    server.RT.users.clear()


@pytest.mark.asyncio
async def test_get_missing_then_create_then_read(asgi_backend):
    url = f"{asgi_backend}/users/myUserName"

    first = await api.get(url)
    assert first.status == 404
    assert first.data == {"Error": "user not found"}

    created = await api.post(url, {"score": 0})
    assert created.status == 201
    assert created.user().score == 0

    updated = await api.post(url, {"score": 5})
    assert updated.status == 200

    read = await api.get(url)
    assert read.status == 200
    assert read.data == {"id": "myUserName", "score": 5}


@pytest.mark.asyncio
async def test_bad_request_round_trip_is_data_not_exception(asgi_backend):
    url = f"{asgi_backend}/users/alice"

    r = await api.post(url, {"score": -1})

    assert r.status == 400
    assert r.ok is False
    assert "score" in r.error().error
