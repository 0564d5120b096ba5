from __future__ import annotations

import asyncio
from enum import Enum
from typing import List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, computed_field

from .core.errors import AnalysisBusy, AnalysisFailed, InputMissing, UploadFailed
from .history import HistoryStore
from .vision.client import InferenceClient
from .vision.ingest import Upload, read_as_data_uri
from .vision.parser import parse_signal
from .vision.request import build_signal_request
from .vision.schema import Signal


class Phase(str, Enum):
    IDLE = "idle"
    IMAGE_LOADED = "image_loaded"
    IN_FLIGHT = "in_flight"
    SIGNALED = "signaled"
    FAILED = "failed"


class AppState(BaseModel):
    model_config = ConfigDict(frozen=True)

    image: Optional[str] = None  # data URI
    loading: bool = False
    error: Optional[str] = None
    current_signal: Optional[Signal] = None
    history: List[Signal] = Field(default_factory=list)

    @computed_field
    @property
    def phase(self) -> Phase:
        if self.loading:
            return Phase.IN_FLIGHT
        if self.error:
            return Phase.FAILED
        if self.current_signal is not None:
            return Phase.SIGNALED
        if self.image:
            return Phase.IMAGE_LOADED
        return Phase.IDLE


class SignalController:
    """Single owner of the screen state.

    Every transition replaces the AppState; callers get the new one back.
    At most one analysis runs at a time, extra requests are rejected.
    """

    def __init__(self, history: HistoryStore, client: InferenceClient, timeout: float | None = None):
        self.history = history
        self.client = client
        self.timeout = timeout or None
        self._in_flight = asyncio.Lock()
        self._state = AppState(history=history.all())

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def in_flight(self) -> bool:
        return self._in_flight.locked()

    def _update(self, **changes) -> AppState:
        self._state = self._state.model_copy(update=changes)
        return self._state

    async def select_image(self, upload: Upload | None) -> AppState:
        if upload is None:
            return self._state
        if self.in_flight:
            raise AnalysisBusy()

        # nothing stale may sit next to the new image, even while it is being read
        self._update(image=None, current_signal=None, error=None)

        try:
            image = await read_as_data_uri(upload)
        except Exception as e:
            logger.opt(exception=e).error("Reading upload failed: {}: {}", type(e).__name__, e)
            failure = UploadFailed()
            self._update(error=failure.message)
            raise failure from e
        logger.info("Image loaded: {} ({} chars as data URI)", upload.filename or "<unnamed>", len(image))
        return self._update(image=image)

    async def analyze(self) -> AppState:
        if self.in_flight:
            raise AnalysisBusy()

        try:
            request = build_signal_request(self._state.image)
        except InputMissing as e:
            self._update(error=e.message)
            raise

        async with self._in_flight:
            self._update(loading=True, error=None)
            logger.info("Analyzing chart ({} base64 chars)", len(request.image_b64))
            try:
                text = await asyncio.wait_for(self.client.analyze(request), timeout=self.timeout)
                signal = parse_signal(text)
            except Exception as e:
                logger.opt(exception=e).error("Analysis failed: {}: {}", type(e).__name__, e)
                failure = AnalysisFailed()
                self._update(loading=False, error=failure.message)
                raise failure from e
            finally:
                # cancellation skips the handler above
                if self._state.loading:
                    self._update(loading=False)

            history = self.history.record(signal)
            logger.info("Signal {} at {:.0f}% ({})", signal.type, signal.confidence, signal.timeframe)
            return self._update(current_signal=signal, history=history)
