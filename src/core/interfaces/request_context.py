"""Contratos del request y la sesión actuales.

Por qué aquí:
- El resolver necesita el URI original, el context path y un hueco tipado en
  la sesión; nada más del framework web.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import PublicationDescriptor


@runtime_checkable
class PublicationSession(Protocol):
    """Hueco tipado de la sesión de usuario para el último descriptor resuelto."""

    def get_publication_descriptor(self) -> PublicationDescriptor | None:
        ...

    def set_publication_descriptor(self, descriptor: PublicationDescriptor) -> None:
        ...

    def clear_publication_descriptor(self) -> None:
        ...


@runtime_checkable
class RequestContext(Protocol):
    @property
    def original_uri(self) -> str:
        """URI del request antes de cualquier forward interno."""

        ...

    @property
    def context_path(self) -> str:
        """Prefijo de montaje de la aplicación ('' si está en la raíz)."""

        ...

    @property
    def session(self) -> PublicationSession:
        ...


@runtime_checkable
class RequestContextProvider(Protocol):
    def current_request(self) -> RequestContext:
        """Devuelve el request activo o lanza `RequestContextError`."""

        ...
