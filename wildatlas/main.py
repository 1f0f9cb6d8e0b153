from __future__ import annotations

# ------------------------------------------------------------
# Importaciones estándar y de terceros
# ------------------------------------------------------------
import logging
from typing import Optional, Protocol

import httpx
import uvicorn
from fastapi import FastAPI, Depends, HTTPException, Request, Security
from fastapi.responses import JSONResponse, Response
from fastapi.security.api_key import APIKeyHeader
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

# ------------------------------------------------------------
# Importaciones internas del proyecto
# ------------------------------------------------------------
from .clients._utils import create_http_client
from .clients.iucn import IUCNClient
from .clients.wikipedia import WikipediaClient
from .config import Settings
from .diagnostics import check_all
from .errors import InvalidCountryCode, InvalidInput, UpstreamError, WildAtlasError
from .reference.offline import OFFLINE_RECORDS
from .schemas import CountryRecord
from .services.aggregator import SpeciesAggregator
from .services.cache import ResponseCache
from .services.country_names import CountryNameIndex
from .services.scraper import ScrapedSpeciesSource

log = logging.getLogger(__name__)

TAGS_METADATA = [
    {"name": "Health", "description": "Estado del servicio y de los proveedores externos."},
    {"name": "Species", "description": "Especies amenazadas por país (IUCN o scraping)."},
]

_HTTP_ERRORS = {
    400: "bad_request",
    401: "unauthorized",
    404: "not_found",
    405: "method_not_allowed",
}


class SpeciesSource(Protocol):
    async def get_country_data(self, code: str) -> CountryRecord: ...


def _error(status_code: int, error: str, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse({"error": error, "message": message}, status_code=status_code, headers=headers)


def build_source(settings: Settings, http: httpx.AsyncClient) -> SpeciesSource:
    """Arma la fuente configurada. Debe llamarse con el loop corriendo (lanza la carga de países)."""
    cache = ResponseCache(max_entries=settings.cache_max_entries, ttl_seconds=settings.cache_ttl_seconds)
    if settings.species_source == "scraper":
        return ScrapedSpeciesSource(
            WikipediaClient(http, timeout=settings.scraper_timeout),
            cache,
            max_species=settings.max_species,
        )

    gateway = IUCNClient(http, token=settings.iucn_token, base_url=settings.iucn_base_url)
    names = CountryNameIndex()
    names.populate_in_background(gateway)
    return SpeciesAggregator(
        gateway,
        names,
        max_species=settings.max_species,
        concurrency=settings.detail_concurrency,
        cache=cache if settings.iucn_cache else None,
        fallback=OFFLINE_RECORDS if settings.offline_fixtures else None,
    )


# ------------------------------------------------------------
# Middleware: CORS abierto + JSON en todas las respuestas
# ------------------------------------------------------------
class ApiHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        # preflight CORS: 200 sin cuerpo
        if request.method.upper() == "OPTIONS" and request.url.path.startswith("/api"):
            resp = Response(status_code=200)
        else:
            resp = await call_next(request)
        resp.headers["Access-Control-Allow-Origin"] = "*"
        resp.headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
        resp.headers["Access-Control-Allow-Headers"] = "*"
        # /docs y /openapi.json conservan su propio tipo
        if request.url.path.startswith("/api"):
            resp.headers["Content-Type"] = "application/json"
        return resp


def create_app(
    settings: Optional[Settings] = None,
    source: Optional[SpeciesSource] = None,
    http: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="WildAtlas",
        description="Especies en peligro por país para el mapa de WildAtlas, a partir de la Lista Roja de la IUCN.",
        version="1.0.0",
        openapi_tags=TAGS_METADATA,
    )
    app.state.settings = settings
    app.state.source = source
    app.state.http = http
    app.state.owns_http = False

    app.add_middleware(ApiHeadersMiddleware)

    # ---------------- Ciclo de vida ----------------
    @app.on_event("startup")
    async def _startup():
        if app.state.source is not None:
            return
        if app.state.http is None:
            app.state.http = create_http_client(timeout=settings.iucn_timeout)
            app.state.owns_http = True
        app.state.source = build_source(settings, app.state.http)
        log.info("WildAtlas listo (fuente: %s)", settings.species_source)

    @app.on_event("shutdown")
    async def _shutdown():
        if app.state.owns_http and app.state.http is not None:
            await app.state.http.aclose()
            app.state.http = None

    # ---------------- Errores → cuerpo JSON {error, message} ----------------
    @app.exception_handler(InvalidInput)
    async def _invalid_input(request: Request, exc: InvalidInput):
        error = "invalid_country_code" if isinstance(exc, InvalidCountryCode) else "invalid_input"
        return _error(400, error, str(exc))

    @app.exception_handler(UpstreamError)
    async def _upstream_error(request: Request, exc: UpstreamError):
        # el detalle del proveedor queda en el log, nunca en la respuesta
        log.warning("Falla del proveedor en %s: %s", request.url.path, exc)
        return _error(500, "upstream_error", "Failed to fetch data")

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return _error(
            exc.status_code,
            _HTTP_ERRORS.get(exc.status_code, "http_error"),
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    # ---------------- Seguridad por API Key (opcional) ----------------
    api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)

    async def require_key(api_key: str = Security(api_key_header)):
        if not settings.api_key:
            return True
        if api_key == settings.api_key:
            return True
        raise HTTPException(status_code=401, detail="Invalid API key")

    # ---------------- Salud ----------------
    @app.get("/api/health", tags=["Health"])
    async def health():
        return {"status": "healthy"}

    @app.get("/api/debug/upstream", tags=["Health"], dependencies=[Depends(require_key)])
    async def debug_upstream():
        if app.state.http is not None:
            return await check_all(app.state.http, settings)
        async with create_http_client(timeout=settings.iucn_timeout) as client:
            return await check_all(client, settings)

    # ---------------- Especies por país ----------------
    @app.get("/api/species/{country_code:path}", tags=["Species"])
    async def species_by_country(country_code: str):
        code = country_code.strip()
        log.info("Solicitud de especies para %r", code)
        if len(code) != 2:
            raise InvalidCountryCode(code)

        src: Optional[SpeciesSource] = app.state.source
        if src is None:
            return _error(500, "internal_error", "Species source not initialized")
        try:
            record = await src.get_country_data(code)
        except WildAtlasError:
            raise
        except Exception:
            log.exception("Error inesperado armando especies para %s", code)
            return _error(500, "internal_error", "Failed to fetch data")
        return Response(content=record.to_json(), media_type="application/json")

    return app


app = create_app()


def run() -> None:
    s: Settings = app.state.settings
    log.info("WildAtlas escuchando en http://%s:%s", s.host, s.port)
    uvicorn.run("wildatlas.main:app", host=s.host, port=s.port)


# ---------------- Main ----------------
if __name__ == "__main__":
    run()
