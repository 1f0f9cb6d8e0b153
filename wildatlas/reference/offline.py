# wildatlas/reference/offline.py
"""Registros IUCN embebidos, servidos cuando la API no responde (OFFLINE_FIXTURES=1)."""
from __future__ import annotations

from typing import Dict

from ..schemas import CountryRecord, Species

_ANIMALIA_CHORDATA = ("Animalia", "Chordata")

# (nombre, nombre científico, estado, clase, orden, familia, url)
_RAW = {
    "CA": ("Canada", [
        ("Polar Bear", "Ursus maritimus", "Vulnerable", "Mammalia", "Carnivora", "Ursidae",
         "https://www.iucnredlist.org/species/22823/14871490"),
        ("Vancouver Island Marmot", "Marmota vancouverensis", "Critically Endangered", "Mammalia", "Rodentia", "Sciuridae",
         "https://www.iucnredlist.org/species/12828/111561606"),
        ("Whooping Crane", "Grus americana", "Endangered", "Aves", "Gruiformes", "Gruidae",
         "https://www.iucnredlist.org/species/22692156/111562000"),
    ]),
    "BR": ("Brazil", [
        ("Golden Lion Tamarin", "Leontopithecus rosalia", "Endangered", "Mammalia", "Primates", "Callitrichidae",
         "https://www.iucnredlist.org/species/11506/192319267"),
        ("Hyacinth Macaw", "Anodorhynchus hyacinthinus", "Vulnerable", "Aves", "Psittaciformes", "Psittacidae",
         "https://www.iucnredlist.org/species/22685516/93077457"),
    ]),
    "AU": ("Australia", [
        ("Koala", "Phascolarctos cinereus", "Vulnerable", "Mammalia", "Diprotodontia", "Phascolarctidae",
         "https://www.iucnredlist.org/species/16892/166496779"),
        ("Tasmanian Devil", "Sarcophilus harrisii", "Endangered", "Mammalia", "Dasyuromorphia", "Dasyuridae",
         "https://www.iucnredlist.org/species/40540/10331066"),
        ("Regent Honeyeater", "Anthochaera phrygia", "Critically Endangered", "Aves", "Passeriformes", "Meliphagidae",
         "https://www.iucnredlist.org/species/22704415/219632355"),
    ]),
}


def _build() -> Dict[str, CountryRecord]:
    kingdom, phylum = _ANIMALIA_CHORDATA
    out: Dict[str, CountryRecord] = {}
    for code, (country, rows) in _RAW.items():
        species = tuple(
            Species(
                name=name, scientific_name=sci, status=status,
                kingdom=kingdom, phylum=phylum, class_name=klass,
                order=order, family=family, url=url,
            )
            for name, sci, status, klass, order, family, url in rows
        )
        out[code] = CountryRecord(country=country, country_code=code, species=species)
    return out


OFFLINE_RECORDS: Dict[str, CountryRecord] = _build()

__all__ = ["OFFLINE_RECORDS"]
