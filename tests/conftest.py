"""Shared fakes for the signal pipeline tests."""

from __future__ import annotations

import io
from typing import Optional

import pytest
from PIL import Image

from chartsignal.history import HistoryStore
from chartsignal.vision.request import SignalRequest

SAMPLE_RESPONSE = '{"type":"BUY","confidence":92,"timeframe":"5M","validity":"5 min","reasoning":"breakout"}'


class FakeUpload:
    def __init__(self, data: bytes, filename: Optional[str] = "chart.png", content_type: Optional[str] = "image/png"):
        self.data = data
        self.filename = filename
        self.content_type = content_type
        self.reads = 0

    async def read(self, size: int = -1) -> bytes:
        self.reads += 1
        return self.data


class FakeClient:
    """Counts calls; returns the queued responses in order, raising any exception instances."""

    def __init__(self, *responses):
        self.responses = list(responses) or [SAMPLE_RESPONSE]
        self.requests: list[SignalRequest] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def analyze(self, request: SignalRequest) -> Optional[str]:
        self.requests.append(request)
        resp = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(resp, Exception):
            raise resp
        return resp


class MemorySlot:
    def __init__(self, data: Optional[str] = None):
        self.data = data
        self.writes = 0

    def read(self) -> Optional[str]:
        return self.data

    def write(self, data: str) -> None:
        self.writes += 1
        self.data = data


def png_bytes(size=(4, 3)) -> bytes:
    out = io.BytesIO()
    Image.new("RGB", size, (10, 200, 30)).save(out, format="PNG")
    return out.getvalue()


@pytest.fixture
def slot() -> MemorySlot:
    return MemorySlot()


@pytest.fixture
def store(slot) -> HistoryStore:
    return HistoryStore(slot)
