# wildatlas/clients/iucn.py
from __future__ import annotations
import logging
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field, ValidationError

from ..config import IUCN_BASE_URL
from ..errors import DecodeError, InvalidName
from ..schemas import Assessment, TaxonDetail
from ._utils import get_checked, json_body

log = logging.getLogger(__name__)

# ---------- Formas de respuesta de la API v4 (las fija el tercero) ----------

class _Description(BaseModel):
    en: Optional[str] = None


class _Country(BaseModel):
    code: str
    description: _Description = Field(default_factory=_Description)


class _CountryListPayload(BaseModel):
    countries: List[_Country]


class _CountryPayload(BaseModel):
    country: _Country
    assessments: List[Assessment]


class _TaxonPayload(BaseModel):
    taxon: TaxonDetail


def split_binomial(scientific_name: str) -> Tuple[str, str]:
    """'Panthera tigris tigris' → ('Panthera', 'tigris'). Menos de dos tokens → InvalidName."""
    parts = (scientific_name or "").split()
    if len(parts) < 2:
        raise InvalidName(scientific_name)
    return parts[0], parts[1]


class IUCNClient:
    """
    Pasarela hacia la API de la Lista Roja (v4).

    Cada llamada es un único intento con el timeout del cliente httpx; los
    errores salen tipados (UpstreamUnavailable / UpstreamStatus / DecodeError).
    """

    def __init__(self, http: httpx.AsyncClient, token: str = "", base_url: str = IUCN_BASE_URL):
        self.http = http
        self.token = (token or "").strip()
        self.base_url = base_url.rstrip("/")
        if not self.token:
            log.warning("IUCN_API_TOKEN no configurado: las llamadas a la IUCN irán sin token")

    def _params(self, **extra: str) -> Dict[str, str]:
        params = dict(extra)
        if self.token:
            params["token"] = self.token
        return params

    async def _get_payload(self, path: str, model, params: Dict[str, str]):
        url = f"{self.base_url}{path}"
        r = await get_checked(self.http, url, params=params)
        try:
            return model.model_validate(json_body(r))
        except ValidationError as e:
            raise DecodeError(f"Unexpected payload shape from {path}: {e.error_count()} error(s)") from e

    async def list_countries(self) -> Dict[str, str]:
        data = await self._get_payload("/countries", _CountryListPayload, self._params())
        return {c.code.upper(): (c.description.en or "") for c in data.countries if c.code}

    async def get_country_assessments(self, code: str) -> Tuple[str, List[Assessment]]:
        path = f"/countries/{quote(code.strip().upper())}"
        data = await self._get_payload(path, _CountryPayload, self._params())
        if log.isEnabledFor(logging.DEBUG):
            log.debug("IUCN %s: %d evaluaciones", code, len(data.assessments))
        return (data.country.description.en or "").strip(), data.assessments

    async def get_taxon_detail(self, scientific_name: str) -> TaxonDetail:
        genus, species = split_binomial(scientific_name)
        data = await self._get_payload(
            "/taxa/scientific_name",
            _TaxonPayload,
            self._params(genus_name=genus, species_name=species),
        )
        return data.taxon


__all__ = ["IUCNClient", "split_binomial"]
