"""Tests for the IUCN v4 gateway against an httpx mock transport."""

import logging

import httpx
import pytest

from wildatlas.clients.iucn import IUCNClient, split_binomial
from wildatlas.errors import DecodeError, InvalidName, UpstreamStatus, UpstreamUnavailable

BASE = "https://iucn.test/api/v4"

COUNTRIES = {
    "countries": [
        {"code": "US", "description": {"en": "United States"}},
        {"code": "ke", "description": {"en": "Kenya"}},
    ]
}

COUNTRY_US = {
    "country": {"code": "US", "description": {"en": "United States"}},
    "assessments": [
        {"taxon_scientific_name": "Canis rufus", "red_list_category_code": "CR", "url": "https://iucn/1"},
        {"taxon_scientific_name": "Puma concolor", "red_list_category_code": "LC", "url": "https://iucn/2"},
    ],
}

TAXON = {
    "taxon": {
        "scientific_name": "Canis rufus",
        "kingdom_name": "Animalia",
        "phylum_name": "Chordata",
        "class_name": "Mammalia",
        "order_name": "Carnivora",
        "family_name": "Canidae",
        "common_names": [
            {"name": "Red Wolf", "language": "eng", "main": True},
            {"name": "Loup rouge", "language": "fre", "main": False},
        ],
    }
}


def _client(handler, token="tok"):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return http, IUCNClient(http, token=token, base_url=BASE)


class TestSplitBinomial:
    def test_uses_first_two_tokens(self):
        assert split_binomial("Panthera tigris tigris") == ("Panthera", "tigris")

    def test_collapses_whitespace(self):
        assert split_binomial("  Canis\trufus ") == ("Canis", "rufus")

    @pytest.mark.parametrize("name", ["", "Panthera", "   "])
    def test_rejects_single_token(self, name):
        with pytest.raises(InvalidName):
            split_binomial(name)


class TestIUCNClient:
    @pytest.mark.asyncio
    async def test_list_countries(self):
        seen = []

        def handler(request: httpx.Request):
            seen.append(request)
            return httpx.Response(200, json=COUNTRIES)

        http, client = _client(handler)
        async with http:
            names = await client.list_countries()

        assert names == {"US": "United States", "KE": "Kenya"}
        assert seen[0].url.path == "/api/v4/countries"
        assert seen[0].url.params["token"] == "tok"

    @pytest.mark.asyncio
    async def test_country_assessments_in_order(self):
        def handler(request: httpx.Request):
            assert request.url.path == "/api/v4/countries/US"
            return httpx.Response(200, json=COUNTRY_US)

        http, client = _client(handler)
        async with http:
            name, assessments = await client.get_country_assessments("us")

        assert name == "United States"
        assert [a.scientific_name for a in assessments] == ["Canis rufus", "Puma concolor"]
        assert [a.category for a in assessments] == ["CR", "LC"]
        assert assessments[0].url == "https://iucn/1"

    @pytest.mark.asyncio
    async def test_taxon_detail_query(self):
        seen = []

        def handler(request: httpx.Request):
            seen.append(request)
            return httpx.Response(200, json=TAXON)

        http, client = _client(handler)
        async with http:
            detail = await client.get_taxon_detail("Canis rufus gregoryi")

        params = seen[0].url.params
        assert seen[0].url.path == "/api/v4/taxa/scientific_name"
        assert params["genus_name"] == "Canis"
        assert params["species_name"] == "rufus"
        assert detail.family == "Canidae"
        assert detail.class_name == "Mammalia"
        assert detail.common_names[0].name == "Red Wolf"
        assert detail.common_names[0].main is True

    @pytest.mark.asyncio
    async def test_invalid_name_makes_no_request(self):
        calls = []

        def handler(request: httpx.Request):
            calls.append(request)
            return httpx.Response(200, json=TAXON)

        http, client = _client(handler)
        async with http:
            with pytest.raises(InvalidName):
                await client.get_taxon_detail("Canis")
        assert calls == []

    @pytest.mark.asyncio
    async def test_non_2xx_is_upstream_status(self):
        http, client = _client(lambda request: httpx.Response(429, json={"error": "slow down"}))
        async with http:
            with pytest.raises(UpstreamStatus) as info:
                await client.get_country_assessments("US")
        assert info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_transport_error_is_unavailable(self):
        def handler(request: httpx.Request):
            raise httpx.ConnectError("connection refused", request=request)

        http, client = _client(handler)
        async with http:
            with pytest.raises(UpstreamUnavailable):
                await client.list_countries()

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self):
        def handler(request: httpx.Request):
            raise httpx.ReadTimeout("timed out", request=request)

        http, client = _client(handler)
        async with http:
            with pytest.raises(UpstreamUnavailable):
                await client.get_taxon_detail("Canis rufus")

    @pytest.mark.asyncio
    async def test_non_json_is_decode_error(self):
        http, client = _client(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
        async with http:
            with pytest.raises(DecodeError):
                await client.get_country_assessments("US")

    @pytest.mark.asyncio
    async def test_schema_drift_is_decode_error(self):
        drifted = {"country": {"code": "US"}, "results": []}
        http, client = _client(lambda request: httpx.Response(200, json=drifted))
        async with http:
            with pytest.raises(DecodeError):
                await client.get_country_assessments("US")

    @pytest.mark.asyncio
    async def test_missing_token_is_logged_and_omitted(self, caplog):
        seen = []

        def handler(request: httpx.Request):
            seen.append(request)
            return httpx.Response(200, json=COUNTRIES)

        with caplog.at_level(logging.WARNING, logger="wildatlas.clients.iucn"):
            http, client = _client(handler, token="")
        async with http:
            await client.list_countries()

        assert "IUCN_API_TOKEN" in caplog.text
        assert "token" not in seen[0].url.params
