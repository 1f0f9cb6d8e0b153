from __future__ import annotations
import logging
from typing import Any, Dict

import httpx

from ..errors import DecodeError, UpstreamStatus, UpstreamUnavailable

log = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "WildAtlas/1.0 (Educational Project)",
    "Accept": "application/json",
    "Accept-Charset": "utf-8",
}


def create_http_client(timeout: float = 15.0, **kwargs: Any) -> httpx.AsyncClient:
    """Cliente httpx compartido con HTTP/2 y límites de pool."""
    kwargs.setdefault("headers", DEFAULT_HEADERS)
    kwargs.setdefault("http2", True)
    kwargs.setdefault(
        "limits",
        httpx.Limits(max_connections=40, max_keepalive_connections=20),
    )
    return httpx.AsyncClient(timeout=timeout, **kwargs)


async def get_checked(
    client: httpx.AsyncClient, url: str, params: dict | None = None, **kwargs: Any
) -> httpx.Response:
    """
    GET de un solo intento. Traduce fallas de transporte y estados no-2xx
    a los errores tipados del servicio. No hay reintentos.
    """
    try:
        r = await client.get(url, params=params or {}, **kwargs)
    except httpx.HTTPError as e:  # incluye timeouts y errores de conexión
        raise UpstreamUnavailable(f"{e.__class__.__name__} for {url}") from e
    if not r.is_success:
        raise UpstreamStatus(r.status_code, url)
    return r


def json_body(r: httpx.Response) -> Dict[str, Any]:
    """Devuelve el cuerpo como dict; cualquier otra cosa es DecodeError."""
    try:
        data = r.json()
    except ValueError as e:
        raise DecodeError(f"Non-JSON body from {r.request.url}") from e
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object from {r.request.url}, got {type(data).__name__}")
    return data
