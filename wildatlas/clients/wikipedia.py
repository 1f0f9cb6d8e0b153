# wildatlas/clients/wikipedia.py
from __future__ import annotations
import logging
from typing import List
from urllib.parse import quote

import httpx
from bs4 import BeautifulSoup

from ..errors import DecodeError
from ..schemas import Species
from ._utils import get_checked

log = logging.getLogger(__name__)

WIKI_BASE = "https://en.wikipedia.org/wiki"
USER_AGENT = "WildAtlas/1.0 (Educational Project)"
DEFAULT_STATUS = "Endangered"
PAGE_HEADERS = {"User-Agent": USER_AGENT, "Accept": "text/html"}


def endangered_list_url(country_name: str) -> str:
    page = "List_of_endangered_species_in_" + country_name.strip().replace(" ", "_")
    return f"{WIKI_BASE}/{quote(page)}"


def parse_species_table(html: str, limit: int = 20) -> List[Species]:
    """
    Lee las filas de ``table.wikitable``: col 0 nombre común, col 1 nombre
    científico, col 2 (opcional) estado. La primera fila (cabecera) se salta.
    """
    soup = BeautifulSoup(html, "html.parser")
    out: List[Species] = []
    for i, row in enumerate(soup.select("table.wikitable tbody tr")):
        if i == 0:
            continue
        cells = row.find_all("td")
        if len(cells) < 2:
            continue
        name = cells[0].get_text(" ", strip=True)
        if not name:
            continue
        if len(out) >= limit:
            break
        status = cells[2].get_text(" ", strip=True) if len(cells) >= 3 else ""
        out.append(Species(
            name=name,
            scientific_name=cells[1].get_text(" ", strip=True),
            status=status or DEFAULT_STATUS,
        ))
    return out


class WikipediaClient:
    def __init__(self, http: httpx.AsyncClient, timeout: float = 30.0):
        self.http = http
        self.timeout = timeout

    async def endangered_species(self, country_name: str, limit: int = 20) -> List[Species]:
        """Especies de la lista de Wikipedia del país; DecodeError si no hay filas."""
        url = endangered_list_url(country_name)
        r = await get_checked(self.http, url, headers=PAGE_HEADERS, timeout=self.timeout, follow_redirects=True)
        species = parse_species_table(r.text, limit=limit)
        if not species:
            raise DecodeError(f"No species rows found at {url}")
        if log.isEnabledFor(logging.DEBUG):
            log.debug("Wikipedia %s: %d filas", country_name, len(species))
        return species


__all__ = ["WikipediaClient", "parse_species_table", "endangered_list_url", "USER_AGENT"]
