"""Contrato del proveedor de descubrimiento de publicaciones.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite intercambiar el proveedor HTTP por un mapeo en memoria (CLI, tests)
  sin acoplar el Core a implementaciones concretas.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PublicationDiscovery(Protocol):
    """Contrato mínimo para descubrir el id de una publicación.

    Reglas de diseño:
    - `discover_publication_id` es síncrono: se ejecuta en el hilo del request.
    - Devuelve un entero opaco; valores no positivos significan "sin match".
    - Lanza `DiscoveryError` ante fallos de lookup o deserialización.
    """

    def discover_publication_id(self, url_stub: str) -> int:
        """Devuelve el id de la publicación cuyo URL coincide con `url_stub`."""

        ...
