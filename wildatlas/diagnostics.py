from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, Optional

import httpx

from .clients._utils import DEFAULT_HEADERS, create_http_client
from .clients.wikipedia import endangered_list_url
from .config import Settings

TIMEOUT = 10.0

async def _ping(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    t0 = time.perf_counter()
    try:
        r = await client.get(url, params=params or {}, headers=headers, timeout=TIMEOUT, follow_redirects=True)
    except httpx.HTTPError as e:
        elapsed = round(time.perf_counter() - t0, 3)
        return {"status": "FAIL", "detail": e.__class__.__name__, "seconds": elapsed}
    elapsed = round(time.perf_counter() - t0, 3)
    if r.status_code < 400:
        return {"status": "OK", "http": r.status_code, "seconds": elapsed}
    # el token viaja en la query: no se devuelve el cuerpo ni la URL
    return {"status": "FAIL", "http": r.status_code, "seconds": elapsed}

# ---- Checks por proveedor
async def check_iucn(client: httpx.AsyncClient, settings: Settings) -> Dict[str, Any]:
    if not settings.iucn_token:
        return {"status": "NO_TOKEN"}
    return await _ping(client, f"{settings.iucn_base_url}/countries", {"token": settings.iucn_token})

async def check_wikipedia(client: httpx.AsyncClient) -> Dict[str, Any]:
    return await _ping(client, endangered_list_url("Kenya"), headers={"Accept": "text/html"})

async def check_all(client: httpx.AsyncClient, settings: Settings) -> Dict[str, Dict[str, Any]]:
    iucn_r, wiki_r = await asyncio.gather(
        check_iucn(client, settings),
        check_wikipedia(client),
    )
    return {"iucn": iucn_r, "wikipedia": wiki_r}

async def _main() -> Dict[str, Dict[str, Any]]:
    async with create_http_client(timeout=TIMEOUT, headers=DEFAULT_HEADERS) as client:
        return await check_all(client, Settings.from_env())

if __name__ == "__main__":
    import json
    out = asyncio.run(_main())
    print(json.dumps(out, ensure_ascii=False, indent=2))
