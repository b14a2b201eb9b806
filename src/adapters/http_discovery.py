"""Descubrimiento de publicaciones vía HTTP.

Contrato del servicio:
- `GET {discovery_base_url}{discovery_path}?url=<stub>`
- 200 con `{"id": <int>}`; 404 significa "sin publicación" (-1).

Cualquier otro fallo (red, status, JSON inválido) es un `DiscoveryError`.
"""

from __future__ import annotations

import threading

import httpx
from pydantic import BaseModel, ValidationError
from pydantic.config import ConfigDict

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.errors import DiscoveryError
from core.domain.models import UNRESOLVED_PUBLICATION_ID


class DiscoveryResponse(BaseModel):
    """Cuerpo de respuesta del servicio de descubrimiento.

    Por qué un modelo: un JSON sin `id` entero es un fallo de deserialización,
    no un "sin publicación".
    """

    model_config = ConfigDict(extra="ignore")

    id: int


class HttpPublicationDiscovery:
    """Implementa `PublicationDiscovery` contra el servicio HTTP configurado."""

    def __init__(self, settings: AppSettings | None = None, *, client: httpx.Client | None = None) -> None:
        self._settings = settings or AppSettings()
        self._client = client
        self._client_lock = threading.Lock()

    def __enter__(self) -> "HttpPublicationDiscovery":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get_client(self) -> httpx.Client:
        # Varios requests concurrentes pueden llegar aquí a la vez: un solo cliente.
        with self._client_lock:
            if self._client is None:
                self._client = build_client(self._settings)
            return self._client

    def discover_publication_id(self, url_stub: str) -> int:
        if self._client is None and not self._settings.discovery_base_url:
            raise DiscoveryError(url_stub, "discovery_base_url is not configured")

        try:
            response = self._get_client().get(self._settings.discovery_path, params={"url": url_stub})
        except httpx.HTTPError as exc:
            raise DiscoveryError(url_stub, str(exc)) from exc

        if response.status_code == 404:
            return UNRESOLVED_PUBLICATION_ID
        if response.is_error:
            raise DiscoveryError(url_stub, f"HTTP {response.status_code}")

        try:
            return DiscoveryResponse.model_validate_json(response.content).id
        except ValidationError as exc:
            raise DiscoveryError(url_stub, f"invalid response body: {exc}") from exc

    def close(self) -> None:
        with self._client_lock:
            client, self._client = self._client, None
        if client is not None:
            client.close()
