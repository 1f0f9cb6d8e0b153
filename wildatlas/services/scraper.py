# wildatlas/services/scraper.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Protocol

from ..errors import WildAtlasError
from ..reference.countries import country_name
from ..reference.samples import sample_species
from ..schemas import CountryRecord, Species
from .aggregator import MAX_SPECIES, normalize_country_code
from .cache import ResponseCache

log = logging.getLogger(__name__)


class SpeciesPageSource(Protocol):
    async def endangered_species(self, country_name: str, limit: int = ...) -> List[Species]: ...


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class ScrapedSpeciesSource:
    """
    Variante por scraping: Wikipedia → datos de muestra → relleno, con caché.

    Mismo contrato que ``SpeciesAggregator.get_country_data``; para un código
    válido nunca falla.
    """

    def __init__(
        self,
        pages: SpeciesPageSource,
        cache: Optional[ResponseCache] = None,
        *,
        max_species: int = MAX_SPECIES,
        now: Callable[[], str] = _utc_now_iso,
    ):
        self.pages = pages
        self.cache = cache if cache is not None else ResponseCache()
        self.max_species = max_species
        self._now = now

    async def get_country_data(self, code: str) -> CountryRecord:
        cc = normalize_country_code(code)
        return await self.cache.get_or_compute(cc, lambda: self._scrape(cc))

    async def _scrape(self, cc: str) -> CountryRecord:
        name = country_name(cc)
        try:
            species = tuple(await self.pages.endangered_species(name, limit=self.max_species))
        except WildAtlasError as e:
            log.info("Scraping de %s falló (%s); usando datos de muestra", name, e)
            species = sample_species(cc)
        return CountryRecord(
            country=name,
            country_code=cc,
            species=species,
            last_updated=self._now(),
        )


__all__ = ["ScrapedSpeciesSource"]
