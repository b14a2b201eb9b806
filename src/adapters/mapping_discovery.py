"""Descubrimiento desde un mapeo local (JSON).

Formato:
- {"publications": [{"id": 42, "publication_url": "/en/products"}, ...]}

Útil para la CLI y entornos sin servicio de descubrimiento.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import UNRESOLVED_PUBLICATION_ID, PublicationsFile
from core.url_paths import normalize_url


def load_publications(path: Path) -> PublicationsFile:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    return PublicationsFile.model_validate(data)


def _stub_key(url: str) -> str:
    return normalize_url(url).rstrip("/") or "/"


class MappingPublicationDiscovery:
    """Implementa `PublicationDiscovery` con un dict stub -> id."""

    def __init__(self, publications: dict[str, int] | None = None) -> None:
        self._ids = {_stub_key(url): pid for url, pid in (publications or {}).items()}

    @classmethod
    def from_file(cls, path: Path) -> "MappingPublicationDiscovery":
        publications = load_publications(path)
        return cls({entry.publication_url: entry.id for entry in publications.publications})

    def discover_publication_id(self, url_stub: str) -> int:
        return self._ids.get(_stub_key(url_stub), UNRESOLVED_PUBLICATION_ID)
