# wildatlas/services/cache.py
from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional, Tuple

from ..schemas import CountryRecord

log = logging.getLogger(__name__)


class ReadWriteLock:
    """Lectores en paralelo; un escritor excluye a lectores y a otros escritores."""

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @asynccontextmanager
    async def reading(self) -> AsyncIterator[None]:
        async with self._cond:
            # escritores en espera tienen prioridad para no quedar con hambre
            await self._cond.wait_for(lambda: not self._writer and self._writers_waiting == 0)
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @asynccontextmanager
    async def writing(self) -> AsyncIterator[None]:
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(lambda: not self._writer and self._readers == 0)
            except BaseException:
                # cancelado en espera: liberar a los lectores retenidos
                self._writers_waiting -= 1
                self._cond.notify_all()
                raise
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            async with self._cond:
                self._writer = False
                self._cond.notify_all()


class ResponseCache:
    """
    Caché de CountryRecord por código de país, con cota de tamaño (LRU) y TTL.

    ``ttl_seconds <= 0`` desactiva la expiración. No deduplica cálculos
    concurrentes: dos fallos simultáneos para el mismo código calculan ambos
    y gana la última escritura.
    """

    def __init__(
        self,
        max_entries: int = 256,
        ttl_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries debe ser >= 1")
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = ReadWriteLock()
        self._entries: "OrderedDict[str, Tuple[float, CountryRecord]]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def _expired(self, stored_at: float) -> bool:
        return self.ttl_seconds > 0 and (self._clock() - stored_at) >= self.ttl_seconds

    async def get(self, code: str) -> Optional[CountryRecord]:
        async with self._lock.reading():
            hit = self._entries.get(code)
            if hit is None or self._expired(hit[0]):
                if hit is not None:
                    # vencida: libera su lugar en el LRU
                    del self._entries[code]
                self.misses += 1
                return None
            # move_to_end no cede el control: seguro bajo el lock de lectura
            self._entries.move_to_end(code)
            self.hits += 1
            return hit[1]

    async def put(self, code: str, record: CountryRecord) -> None:
        async with self._lock.writing():
            self._entries[code] = (self._clock(), record)
            self._entries.move_to_end(code)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                if log.isEnabledFor(logging.DEBUG):
                    log.debug("caché: desalojado %s", evicted)

    async def get_or_compute(
        self, code: str, compute: Callable[[], Awaitable[CountryRecord]]
    ) -> CountryRecord:
        cached = await self.get(code)
        if cached is not None:
            return cached
        record = await compute()
        await self.put(code, record)
        return record

    async def clear(self) -> None:
        async with self._lock.writing():
            self._entries.clear()


__all__ = ["ReadWriteLock", "ResponseCache"]
