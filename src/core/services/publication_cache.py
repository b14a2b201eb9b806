"""Caché global stub -> id de publicación.

Por qué una instancia inyectada y no un dict estático:
- El composition root decide su ciclo de vida (uno por proceso en producción,
  uno por test en la suite).
- Las entradas no expiran: el mapeo stub -> id es estable durante la vida del
  proceso.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator


class PublicationIdCache:
    """Mapa thread-safe de stubs normalizados a ids de publicación.

    Solo guarda ids positivos. Dos descubrimientos concurrentes del mismo stub
    pueden escribir ambos; el último gana y el valor es el mismo.
    """

    def __init__(self, initial: dict[str, int] | None = None) -> None:
        self._lock = threading.Lock()
        self._ids: dict[str, int] = {}
        for stub, publication_id in (initial or {}).items():
            self.put(stub, publication_id)

    def get(self, url_stub: str) -> int | None:
        with self._lock:
            return self._ids.get(url_stub)

    def put(self, url_stub: str, publication_id: int) -> None:
        if publication_id <= 0:
            raise ValueError(f"only positive publication ids are cached, got {publication_id}")
        with self._lock:
            self._ids[url_stub] = publication_id

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._ids)

    def __contains__(self, url_stub: object) -> bool:
        with self._lock:
            return url_stub in self._ids

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())
