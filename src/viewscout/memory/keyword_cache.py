"""Keyword cache — JSON file store with a time-to-live.

Entries look like ``{"<keyword>": {"timestamp": <epoch seconds>, "payload": {...}}}``.
Read and write failures are logged and degrade to a cache miss / skipped
write; they never reach the caller.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
import time
from pathlib import Path
from typing import Any, Callable

import structlog

logger = structlog.get_logger()

DEFAULT_TTL_SECONDS = 24 * 60 * 60


class KeywordCache:
    """File-backed cache keyed by keyword.

    Writes are serialised per instance and land via an atomic rename, so readers
    always see a complete file. Concurrent misses may still both fetch.
    """

    def __init__(
        self,
        path: str | Path,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.path = Path(path)
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._write_lock = asyncio.Lock()

    # -- sync helpers (run in a worker thread) ------------------------------

    def _load_sync(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"cache file {self.path} does not hold an object")
        return data

    def _save_sync(self, store: dict[str, Any]) -> None:
        text = json.dumps(store, ensure_ascii=False, indent=2)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=self.path.parent, suffix=".tmp", delete=False
        ) as tmp:
            tmp.write(text)
        try:
            os.replace(tmp.name, self.path)
        except OSError:
            os.unlink(tmp.name)
            raise

    def _set_sync(self, key: str, payload: Any) -> None:
        try:
            store = self._load_sync()
        except (OSError, ValueError):
            logger.warning("keyword_cache.load_failed", path=str(self.path), exc_info=True)
            store = {}
        store[key] = {"timestamp": self._clock(), "payload": payload}
        self._save_sync(store)

    # -- public API ---------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        """Return the cached payload, or ``None`` if absent or older than the TTL."""
        try:
            store = await asyncio.to_thread(self._load_sync)
        except (OSError, ValueError):
            logger.warning("keyword_cache.load_failed", path=str(self.path), exc_info=True)
            return None

        entry = store.get(key)
        if not isinstance(entry, dict) or "timestamp" not in entry:
            return None

        try:
            age = self._clock() - float(entry["timestamp"])
        except (TypeError, ValueError):
            logger.warning("keyword_cache.bad_entry", key=key)
            return None

        if age > self.ttl_seconds:
            logger.info("keyword_cache.expired", key=key, age_sec=round(age))
            return None

        return entry.get("payload")

    async def set(self, key: str, payload: Any) -> None:
        """Store *payload* under *key*, overwriting any previous entry."""
        try:
            async with self._write_lock:
                await asyncio.to_thread(self._set_sync, key, payload)
            logger.info("keyword_cache.saved", key=key)
        except (OSError, TypeError, ValueError):
            logger.warning("keyword_cache.save_failed", key=key, path=str(self.path), exc_info=True)
