# wildatlas/errors.py
from __future__ import annotations


class WildAtlasError(Exception):
    """Raíz de los errores propios del servicio."""


# ---------- Entrada inválida (→ 400) ----------

class InvalidInput(WildAtlasError):
    pass


class InvalidCountryCode(InvalidInput):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Invalid country code: {code!r} (expected 2 characters)")


class InvalidName(InvalidInput):
    def __init__(self, scientific_name: str):
        self.scientific_name = scientific_name
        super().__init__(f"Invalid scientific name: {scientific_name!r} (need genus and species)")


# ---------- Fallas del proveedor externo (→ 500) ----------

class UpstreamError(WildAtlasError):
    pass


class UpstreamUnavailable(UpstreamError):
    """Red caída, DNS, timeout: la llamada no obtuvo respuesta."""


class UpstreamStatus(UpstreamError):
    def __init__(self, status_code: int, url: str = ""):
        self.status_code = status_code
        self.url = url
        super().__init__(f"Upstream returned status {status_code} for {url or '<unknown>'}")


class DecodeError(UpstreamError):
    """Cuerpo no-JSON o con forma distinta a la esperada."""


__all__ = [
    "WildAtlasError",
    "InvalidInput",
    "InvalidCountryCode",
    "InvalidName",
    "UpstreamError",
    "UpstreamUnavailable",
    "UpstreamStatus",
    "DecodeError",
]
