# wildatlas/services/aggregator.py
from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Protocol, Sequence, Tuple

from ..errors import InvalidCountryCode, UpstreamError
from ..schemas import Assessment, CountryRecord, Species, TaxonDetail
from .cache import ResponseCache
from .country_names import CountryNameIndex
from .fetcher import DEFAULT_CONCURRENCY, DetailOutcome, Resolved, fetch_details, pick_common_name

log = logging.getLogger(__name__)

MAX_SPECIES = 20
ENDANGERED_CATEGORIES = frozenset({"CR", "EN", "VU"})

_CATEGORY_LABELS = {
    "CR": "Critically Endangered",
    "EN": "Endangered",
    "VU": "Vulnerable",
    "NT": "Near Threatened",
}


def category_label(code: str) -> str:
    """Etiqueta legible; códigos desconocidos se devuelven sin cambios."""
    return _CATEGORY_LABELS.get(code, code)


def normalize_country_code(code: str) -> str:
    c = (code or "").strip()
    if len(c) != 2:
        raise InvalidCountryCode(c)
    return c.upper()


def select_assessments(assessments: Sequence[Assessment], limit: int = MAX_SPECIES) -> List[Assessment]:
    """Solo CR/EN/VU, en orden de descubrimiento, cortado en ``limit``."""
    out: List[Assessment] = []
    for a in assessments:
        if a.category not in ENDANGERED_CATEGORIES:
            continue
        if len(out) >= limit:
            break
        out.append(a)
    return out


def build_species(assessment: Assessment, outcome: DetailOutcome) -> Species:
    fields = {
        "scientific_name": assessment.scientific_name,
        "status": category_label(assessment.category),
        "url": assessment.url or None,
    }
    if isinstance(outcome, Resolved):
        d: TaxonDetail = outcome.detail
        fields.update(
            name=pick_common_name(d) or "",
            kingdom=d.kingdom or "",
            phylum=d.phylum or "",
            class_name=d.class_name or "",
            order=d.order or "",
            family=d.family or "",
        )
    # sin detalle: rangos vacíos y el validador de Species pone el nombre científico
    return Species(**fields)


class AssessmentGateway(Protocol):
    async def get_country_assessments(self, code: str) -> Tuple[str, List[Assessment]]: ...
    async def get_taxon_detail(self, scientific_name: str) -> TaxonDetail: ...


class SpeciesAggregator:
    """
    Arma el CountryRecord de un país a partir de la IUCN.

    Dependencias inyectadas: la pasarela, el índice de nombres de país y,
    opcionalmente, una caché de respuestas y registros de respaldo offline.
    """

    def __init__(
        self,
        gateway: AssessmentGateway,
        names: Optional[CountryNameIndex] = None,
        *,
        max_species: int = MAX_SPECIES,
        concurrency: int = DEFAULT_CONCURRENCY,
        cache: Optional[ResponseCache] = None,
        fallback: Optional[Mapping[str, CountryRecord]] = None,
    ):
        self.gateway = gateway
        self.names = names if names is not None else CountryNameIndex()
        self.max_species = max_species
        self.concurrency = concurrency
        self.cache = cache
        self.fallback = dict(fallback or {})

    async def get_country_data(self, code: str) -> CountryRecord:
        cc = normalize_country_code(code)
        try:
            if self.cache is not None:
                return await self.cache.get_or_compute(cc, lambda: self._build(cc))
            return await self._build(cc)
        except UpstreamError as e:
            if cc not in self.fallback:
                raise
            # el registro offline nunca entra en la caché
            log.warning("IUCN falló para %s (%s); sirviendo registro offline", cc, e)
            return self.fallback[cc]

    async def _build(self, cc: str) -> CountryRecord:
        country_name, assessments = await self.gateway.get_country_assessments(cc)

        selected = select_assessments(assessments, self.max_species)
        outcomes = await fetch_details(self.gateway, selected, self.concurrency)
        species = tuple(build_species(a, o) for a, o in zip(selected, outcomes))

        if log.isEnabledFor(logging.DEBUG):
            unresolved = sum(1 for o in outcomes if not isinstance(o, Resolved))
            log.debug("%s: %d/%d especies, %d sin taxonomía", cc, len(species), len(assessments), unresolved)

        return CountryRecord(
            country=country_name or self.names.lookup(cc),
            country_code=cc,
            species=species,
        )


__all__ = [
    "SpeciesAggregator",
    "category_label",
    "normalize_country_code",
    "select_assessments",
    "build_species",
    "ENDANGERED_CATEGORIES",
    "MAX_SPECIES",
]
