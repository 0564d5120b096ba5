import asyncio

import pytest
from fastapi.testclient import TestClient

from chartsignal.api import signals
from chartsignal.api.signals import get_controller
from chartsignal.controller import SignalController
from chartsignal.core.config import Settings
from chartsignal.core.errors import ANALYSIS_FAILED_MESSAGE, INPUT_MISSING_MESSAGE, UPLOAD_FAILED_MESSAGE
from chartsignal.main import app

from conftest import FakeClient, png_bytes


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def client(store, fake_client):
    controller = SignalController(store, fake_client)
    app.dependency_overrides[get_controller] = lambda: controller
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_upload_then_analyze(client, fake_client):
    r = client.post("/v1/upload", files={"file": ("chart.png", png_bytes(), "image/png")})
    assert r.status_code == 200
    body = r.json()
    assert body["phase"] == "image_loaded"
    assert body["image"].startswith("data:image/png;base64,")

    r = client.post("/v1/analyze")
    assert r.status_code == 200
    body = r.json()
    assert body["phase"] == "signaled"
    assert body["current_signal"]["type"] == "BUY"
    assert body["current_signal"]["confidence"] == 92
    assert fake_client.calls == 1

    history = client.get("/v1/history").json()
    assert history == [body["current_signal"]]
    assert client.get("/v1/state").json()["history"] == history


def test_analyze_without_upload_is_400(client, fake_client):
    r = client.post("/v1/analyze")
    assert r.status_code == 400
    assert r.json()["detail"] == INPUT_MISSING_MESSAGE
    assert fake_client.calls == 0
    assert client.get("/v1/state").json()["error"] == INPUT_MISSING_MESSAGE


def test_bad_model_output_is_502(store, client, fake_client):
    fake_client.responses = ["I think it goes up"]
    client.post("/v1/upload", files={"file": ("chart.png", png_bytes(), "image/png")})

    r = client.post("/v1/analyze")
    assert r.status_code == 502
    assert r.json()["detail"] == ANALYSIS_FAILED_MESSAGE
    assert client.get("/v1/history").json() == []
    assert store.all() == []


def test_upload_without_file_keeps_state(client):
    before = client.get("/v1/state").json()
    r = client.post("/v1/upload")
    assert r.status_code == 200
    assert r.json() == before


def test_unreadable_upload_is_400(client, monkeypatch):
    async def broken_read(upload):
        raise OSError("stream closed")

    monkeypatch.setattr("chartsignal.controller.read_as_data_uri", broken_read)
    r = client.post("/v1/upload", files={"file": ("chart.png", png_bytes(), "image/png")})

    assert r.status_code == 400
    assert r.json()["detail"] == UPLOAD_FAILED_MESSAGE


def test_controller_is_built_once_under_concurrent_first_use(tmp_path, monkeypatch):
    monkeypatch.setattr(signals, "_CONTROLLER", None)
    monkeypatch.setattr(signals, "settings", Settings(redis_url="", history_path=str(tmp_path / "h.json")))

    async def first_use():
        return await asyncio.gather(*(get_controller() for _ in range(8)))

    controllers = asyncio.run(first_use())

    assert all(c is controllers[0] for c in controllers)
    assert controllers[0].state.history == []
