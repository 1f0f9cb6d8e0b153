import asyncio
from typing import Dict, Iterable, List, Optional

import pytest

from wildatlas.errors import UpstreamStatus, UpstreamUnavailable
from wildatlas.schemas import Assessment, CommonName, TaxonDetail


def make_assessment(name: str, category: str = "EN", url: Optional[str] = None) -> Assessment:
    return Assessment(scientific_name=name, category=category, url=url)


def make_detail(name: str, common: Iterable[tuple] = (), kingdom: str = "Animalia") -> TaxonDetail:
    return TaxonDetail(
        scientific_name=name,
        kingdom=kingdom,
        phylum="Chordata",
        class_name="Mammalia",
        order="Carnivora",
        family="Felidae",
        common_names=[CommonName(name=n, language=lang, main=main) for n, lang, main in common],
    )


class FakeGateway:
    """Pasarela en memoria: demoras y fallas por especie, y conteo de llamadas en vuelo."""

    def __init__(
        self,
        assessments: List[Assessment] = (),
        country_name: str = "",
        details: Optional[Dict[str, TaxonDetail]] = None,
        delays: Optional[Dict[str, float]] = None,
        failing: Iterable[str] = (),
        countries: Optional[Dict[str, str]] = None,
        assessments_error: Optional[Exception] = None,
    ):
        self.assessments = list(assessments)
        self.country_name = country_name
        self.details = details or {}
        self.delays = delays or {}
        self.failing = set(failing)
        self.countries = countries or {}
        self.assessments_error = assessments_error

        self.assessment_calls: List[str] = []
        self.detail_calls: List[str] = []
        self.completed: List[str] = []
        self.list_calls = 0
        self.in_flight = 0
        self.max_in_flight = 0

    async def list_countries(self) -> Dict[str, str]:
        self.list_calls += 1
        return dict(self.countries)

    async def get_country_assessments(self, code: str):
        self.assessment_calls.append(code)
        if self.assessments_error is not None:
            raise self.assessments_error
        return self.country_name, list(self.assessments)

    async def get_taxon_detail(self, scientific_name: str) -> TaxonDetail:
        self.detail_calls.append(scientific_name)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(scientific_name, 0.001))
            if scientific_name in self.failing:
                raise UpstreamStatus(404, f"/taxa/{scientific_name}")
            self.completed.append(scientific_name)
            return self.details.get(scientific_name) or make_detail(scientific_name)
        finally:
            self.in_flight -= 1


@pytest.fixture
def gateway_factory():
    return FakeGateway


@pytest.fixture
def unavailable():
    return UpstreamUnavailable("ConnectError for https://iucn.test/countries/US")
