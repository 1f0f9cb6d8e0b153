# wildatlas/services/country_names.py
from __future__ import annotations

import asyncio
import logging
from types import MappingProxyType
from typing import Awaitable, Callable, Dict, Mapping, Optional, Protocol

log = logging.getLogger(__name__)


class CountryLister(Protocol):
    def list_countries(self) -> Awaitable[Dict[str, str]]: ...


class CountryNameIndex:
    """
    Mapa código → nombre de país, poblado una sola vez en segundo plano.

    Contrato de lectura: ``lookup`` nunca espera a la carga. Lee una
    instantánea inmutable que puede estar vacía (carga pendiente o fallida);
    en ese caso devuelve el código recibido tal cual.
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._names: Mapping[str, str] = MappingProxyType(
            {k.upper(): v for k, v in (initial or {}).items()}
        )
        self._task: Optional[asyncio.Task] = None
        self._ready = bool(initial)

    @property
    def ready(self) -> bool:
        return self._ready

    def __len__(self) -> int:
        return len(self._names)

    def lookup(self, code: str) -> str:
        name = self._names.get((code or "").strip().upper())
        return name if name else code

    def populate_in_background(self, gateway: CountryLister) -> asyncio.Task:
        """Lanza (una sola vez) la tarea desacoplada que llama a list_countries."""
        if self._task is None:
            self._task = asyncio.create_task(self._populate(gateway.list_countries))
        return self._task

    async def _populate(self, fetch: Callable[[], Awaitable[Dict[str, str]]]) -> None:
        try:
            names = await fetch()
        except Exception as e:  # la carga es best-effort: solo queda en el log
            log.warning("No se pudo cargar la lista de países: %s", e)
            return
        # intercambio atómico de la instantánea
        self._names = MappingProxyType({k.upper(): v for k, v in names.items() if v})
        self._ready = True
        log.info("Índice de países cargado (%d entradas)", len(self._names))


__all__ = ["CountryNameIndex", "CountryLister"]
