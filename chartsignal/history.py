from __future__ import annotations

import json

from loguru import logger
from pydantic import TypeAdapter

from .core.storage import HistorySlot
from .vision.schema import Signal

HISTORY_LIMIT = 20

_signals_adapter = TypeAdapter(list[Signal])


class HistoryStore:
    """Newest-first, capped list of accepted signals, rewritten whole to its slot on every change."""

    def __init__(self, slot: HistorySlot, limit: int = HISTORY_LIMIT):
        self.slot = slot
        self.limit = limit
        self._signals: tuple[Signal, ...] = ()

    def load(self) -> list[Signal]:
        """Read the persisted history. Missing or corrupt data gives an empty history."""
        self._signals = ()
        try:
            raw = self.slot.read()
        except Exception as e:
            logger.warning("History slot {} unreadable, starting empty: {}: {}", self.slot, type(e).__name__, e)
            return []

        if not raw:
            return []

        try:
            signals = _signals_adapter.validate_python(json.loads(raw))
        except (ValueError, RecursionError) as e:
            # JSONDecodeError and ValidationError are ValueErrors; absurd nesting overflows the decoder
            logger.warning("History in {} is corrupt, starting empty: {}", self.slot, type(e).__name__)
            return []

        self._signals = tuple(signals[: self.limit])
        logger.info("Loaded {} signal(s) from {}", len(self._signals), self.slot)
        return self.all()

    def record(self, signal: Signal) -> list[Signal]:
        self._signals = ((signal,) + self._signals)[: self.limit]
        self._save()
        return self.all()

    def all(self) -> list[Signal]:
        return list(self._signals)

    def _save(self) -> None:
        payload = json.dumps([s.model_dump() for s in self._signals])
        try:
            self.slot.write(payload)
        except Exception as e:
            logger.warning("Could not persist history to {}, keeping it in memory: {}: {}", self.slot, type(e).__name__, e)
