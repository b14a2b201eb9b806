"""Errores del dominio.

Por qué una jerarquía propia:
- El resolver distingue fallos esperados (path raíz) de fallos fatales del
  proveedor de descubrimiento.
- Cada error hereda también del builtin equivalente para que código externo
  pueda capturarlo sin conocer este paquete.
"""

from __future__ import annotations


class PubResolveError(Exception):
    """Base de los errores de pubresolve."""


class PublicationNotFoundError(PubResolveError, LookupError):
    """El path del request no permite derivar una publicación (raíz o vacío)."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No publication found for path {path!r}")
        self.path = path


class DiscoveryError(PubResolveError):
    """Fallo del proveedor de descubrimiento (lookup o deserialización)."""

    def __init__(self, url_stub: str, message: str) -> None:
        super().__init__(f"Error while discovering publication id by url {url_stub!r}: {message}")
        self.url_stub = url_stub


class PublicationResolutionError(PubResolveError, RuntimeError):
    """Fallo fatal al resolver la publicación del request actual."""


class RequestContextError(PubResolveError, LookupError):
    """No hay request activo en el contexto de ejecución."""
