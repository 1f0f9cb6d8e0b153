# wildatlas/services/fetcher.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, List, Optional, Protocol, Sequence, Union

from ..errors import WildAtlasError
from ..schemas import Assessment, TaxonDetail

log = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 10
TARGET_LANGUAGE = "eng"


class TaxonLookup(Protocol):
    def get_taxon_detail(self, scientific_name: str) -> Awaitable[TaxonDetail]: ...


# --------------------- Resultado etiquetado por especie ---------------------

@dataclass(frozen=True)
class Resolved:
    detail: TaxonDetail


@dataclass(frozen=True)
class Unresolved:
    reason: str


DetailOutcome = Union[Resolved, Unresolved]


def pick_common_name(detail: TaxonDetail, language: str = TARGET_LANGUAGE) -> Optional[str]:
    """
    Primer nombre en ``language`` marcado como principal; si ninguno lo está,
    el primero en ese idioma. ``None`` si no hay nombre utilizable.
    """
    first_in_language: Optional[str] = None
    for cn in detail.common_names:
        name = (cn.name or "").strip()
        if not name or cn.language != language:
            continue
        if cn.main:
            return name
        if first_in_language is None:
            first_in_language = name
    return first_in_language


async def fetch_details(
    gateway: TaxonLookup,
    assessments: Sequence[Assessment],
    concurrency: int = DEFAULT_CONCURRENCY,
) -> List[DetailOutcome]:
    """
    Consulta la taxonomía de cada evaluación con a lo sumo ``concurrency``
    llamadas en vuelo. El resultado i corresponde a la evaluación i, sin
    importar el orden en que terminen las tareas. Un fallo individual queda
    como ``Unresolved`` y no aborta el lote.
    """
    if concurrency < 1:
        raise ValueError("concurrency debe ser >= 1")

    slots: List[Optional[DetailOutcome]] = [None] * len(assessments)
    sem = asyncio.Semaphore(concurrency)

    async def _one(idx: int, a: Assessment) -> None:
        async with sem:
            try:
                slots[idx] = Resolved(await gateway.get_taxon_detail(a.scientific_name))
            except WildAtlasError as e:
                if log.isEnabledFor(logging.DEBUG):
                    log.debug("Sin detalle para %s: %s", a.scientific_name, e)
                slots[idx] = Unresolved(str(e) or e.__class__.__name__)
            except Exception as e:
                # error no tipado: queda en el log y no corta la barrera
                log.warning("Error inesperado consultando %s: %r", a.scientific_name, e)
                slots[idx] = Unresolved(e.__class__.__name__)

    # barrera: no se expone nada hasta que termina la última tarea
    await asyncio.gather(*(_one(i, a) for i, a in enumerate(assessments)))
    return [s if s is not None else Unresolved("not fetched") for s in slots]


__all__ = [
    "Resolved",
    "Unresolved",
    "DetailOutcome",
    "TaxonLookup",
    "pick_common_name",
    "fetch_details",
    "DEFAULT_CONCURRENCY",
]
