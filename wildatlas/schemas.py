# wildatlas/schemas.py
from __future__ import annotations

from typing import List, Optional, Tuple
from pydantic import BaseModel, Field, model_validator

# ------------------ Modelos de origen (IUCN, efímeros) ------------------

class Assessment(BaseModel):
    """Evaluación de la Lista Roja tal como la entrega /countries/{code}."""
    scientific_name: str = Field(validation_alias="taxon_scientific_name", min_length=1)
    category: str = Field(default="", validation_alias="red_list_category_code")
    url: Optional[str] = None

    model_config = {"populate_by_name": True, "frozen": True}


class CommonName(BaseModel):
    name: Optional[str] = None
    language: Optional[str] = None
    main: bool = False

    model_config = {"frozen": True}


class TaxonDetail(BaseModel):
    scientific_name: Optional[str] = None
    kingdom: Optional[str] = Field(default=None, validation_alias="kingdom_name")
    phylum: Optional[str] = Field(default=None, validation_alias="phylum_name")
    class_name: Optional[str] = Field(default=None, validation_alias="class_name")
    order: Optional[str] = Field(default=None, validation_alias="order_name")
    family: Optional[str] = Field(default=None, validation_alias="family_name")
    common_names: List[CommonName] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "frozen": True}

# ------------------ Modelos de salida (cuerpo JSON) ------------------

class Species(BaseModel):
    name: str = ""
    scientific_name: str
    status: str
    kingdom: str = ""
    phylum: str = ""
    class_name: str = Field(default="", alias="class")
    order: str = ""
    family: str = ""

    # Opcionales según la fuente (IUCN → url; scraping → population/habitat/threats)
    url: Optional[str] = None
    population: Optional[str] = None
    habitat: Optional[str] = None
    threats: Optional[str] = None

    model_config = {"populate_by_name": True, "frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _name_fallback(cls, data):
        # nombre visible nunca vacío: cae al nombre científico
        if isinstance(data, dict) and not (data.get("name") or "").strip():
            data = {**data, "name": data.get("scientific_name") or ""}
        return data


class CountryRecord(BaseModel):
    country: str
    country_code: str
    species: Tuple[Species, ...] = ()
    last_updated: Optional[str] = None

    model_config = {"frozen": True}

    def to_json(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


class ErrorBody(BaseModel):
    error: str
    message: str


__all__ = ["Assessment", "CommonName", "TaxonDetail", "Species", "CountryRecord", "ErrorBody"]
