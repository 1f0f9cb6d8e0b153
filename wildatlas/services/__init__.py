from .aggregator import SpeciesAggregator, category_label
from .cache import ResponseCache
from .country_names import CountryNameIndex
from .fetcher import Resolved, Unresolved, fetch_details, pick_common_name
from .scraper import ScrapedSpeciesSource

__all__ = [
    "SpeciesAggregator",
    "category_label",
    "ResponseCache",
    "CountryNameIndex",
    "Resolved",
    "Unresolved",
    "fetch_details",
    "pick_common_name",
    "ScrapedSpeciesSource",
]
