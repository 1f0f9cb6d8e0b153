# wildatlas/config.py
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

IUCN_BASE_URL = "https://api.iucnredlist.org/api/v4"
SOURCES = ("iucn", "scraper")


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    return float(raw) if raw else default


@dataclass(frozen=True)
class Settings:
    """Configuración del proceso, leída una sola vez desde el entorno (o .env)."""

    iucn_token: str = ""
    iucn_base_url: str = IUCN_BASE_URL
    iucn_timeout: float = 15.0

    detail_concurrency: int = 10  # máximo de consultas de taxonomía simultáneas
    max_species: int = 20

    species_source: str = "iucn"  # "iucn" | "scraper"
    iucn_cache: bool = False
    cache_ttl_seconds: float = 3600.0  # 0 → sin expiración
    cache_max_entries: int = 256
    offline_fixtures: bool = False

    scraper_timeout: float = 30.0

    api_key: str = ""
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls) -> "Settings":
        source = (os.getenv("SPECIES_SOURCE") or "iucn").strip().lower()
        if source not in SOURCES:
            raise RuntimeError(f"SPECIES_SOURCE debe ser uno de {SOURCES}, no {source!r}")
        return cls(
            iucn_token=(os.getenv("IUCN_API_TOKEN") or "").strip(),
            iucn_base_url=(os.getenv("IUCN_BASE_URL") or IUCN_BASE_URL).rstrip("/"),
            iucn_timeout=_env_float("IUCN_TIMEOUT", 15.0),
            detail_concurrency=_env_int("DETAIL_CONCURRENCY", 10),
            max_species=_env_int("MAX_SPECIES", 20),
            species_source=source,
            iucn_cache=_env_bool("IUCN_CACHE"),
            cache_ttl_seconds=_env_float("CACHE_TTL_SECONDS", 3600.0),
            cache_max_entries=_env_int("CACHE_MAX_ENTRIES", 256),
            offline_fixtures=_env_bool("OFFLINE_FIXTURES"),
            scraper_timeout=_env_float("SCRAPER_TIMEOUT", 30.0),
            api_key=(os.getenv("API_KEY") or "").strip(),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_env_int("PORT", 8080),
        )
