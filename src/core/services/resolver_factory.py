"""Acceso estático al resolver configurado.

Por qué existe:
- Las funciones de plantilla (Jinja2) no reciben dependencias por constructor;
  necesitan un punto de acceso compartido al resolver.
- El composition root crea el resolver y lo registra aquí; el resto del código
  debería recibirlo por inyección.
"""

from __future__ import annotations

import threading
from typing import ClassVar

from core.logging import get_logger
from core.services.publication_resolver import UrlPublicationResolver

logger = get_logger(__name__)


class PublicationResolverFactory:
    """Contenedor del resolver actual (último escritor gana)."""

    _instance: ClassVar[PublicationResolverFactory | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, resolver: UrlPublicationResolver | None = None) -> None:
        self._resolver = resolver

    @classmethod
    def get_instance(cls) -> PublicationResolverFactory:
        """Instancia de proceso, creada de forma perezosa en el primer acceso."""

        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    logger.debug("publication_resolver_factory_created")
                    cls._instance = cls()
        return cls._instance

    def get_resolver(self) -> UrlPublicationResolver | None:
        """Devuelve el resolver configurado o None si aún no hay ninguno."""

        return self._resolver

    def set_resolver(self, resolver: UrlPublicationResolver | None) -> None:
        logger.debug("publication_resolver_set", resolver=type(resolver).__name__)
        self._resolver = resolver
