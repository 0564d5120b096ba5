from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Protocol

from redis import Redis

from .config import Settings


class HistorySlot(Protocol):
    """One named place holding the serialized history blob."""

    def read(self) -> Optional[str]: ...

    def write(self, data: str) -> None: ...


class FileSlot:
    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def write(self, data: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(data, encoding="utf-8")
        os.replace(tmp, self.path)

    def __repr__(self) -> str:
        return f"FileSlot({str(self.path)!r})"


class RedisSlot:
    def __init__(self, conn: Redis, key: str):
        self.conn = conn
        self.key = key

    def read(self) -> Optional[str]:
        data = self.conn.get(self.key)
        if data is None:
            return None
        return data.decode("utf-8") if isinstance(data, bytes) else str(data)

    def write(self, data: str) -> None:
        self.conn.set(self.key, data)

    def __repr__(self) -> str:
        return f"RedisSlot({self.key!r})"


def open_history_slot(cfg: Settings) -> HistorySlot:
    if cfg.redis_url:
        return RedisSlot(Redis.from_url(cfg.redis_url), cfg.history_key)
    return FileSlot(cfg.history_path)
