"""Resolución de la publicación del request actual a partir de su URL.

Flujo:
1. Del URI original del request se quita el context path y se toman los
   primeros `level` segmentos: ese es el stub de la publicación.
2. Si la sesión ya guarda un descriptor para ese stub, se reutiliza.
3. Si no, se consulta la caché global stub -> id y, en caso de fallo, el
   proveedor de descubrimiento. Solo los ids positivos entran en la caché.
4. El descriptor nuevo reemplaza al de la sesión.

Los paths raíz ('' o '/') no pertenecen a ninguna publicación: devuelven un
descriptor vacío que no se guarda en ningún sitio.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from core.config import AppSettings
from core.domain.errors import DiscoveryError, PublicationNotFoundError, PublicationResolutionError
from core.domain.models import UNRESOLVED_PUBLICATION_ID, PublicationDescriptor
from core.interfaces.discovery import PublicationDiscovery
from core.interfaces.request_context import RequestContext, RequestContextProvider
from core.logging import get_logger
from core.services.publication_cache import PublicationIdCache
from core.url_paths import create_path_from_uri, normalize_url, strip_context_path

logger = get_logger(__name__)


class UrlPublicationResolver:
    """Resuelve el id de publicación mirando el URI del request.

    `level` indica cuántos segmentos del path forman el stub. Si hay
    `include_pattern`, solo los stubs que casan completos se envían al
    proveedor de descubrimiento; el resto queda sin resolver (-1).
    """

    def __init__(
        self,
        requests: RequestContextProvider,
        discovery: PublicationDiscovery,
        cache: PublicationIdCache | None = None,
        settings: AppSettings | None = None,
        *,
        level: int | None = None,
        include_pattern: str | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._requests = requests
        self._discovery = discovery
        self._cache = cache if cache is not None else PublicationIdCache()
        self._level = self._settings.level if level is None else level
        self._include_pattern: re.Pattern[str] | None = None
        if include_pattern is not None:
            self.set_include_pattern(include_pattern)

    @property
    def cache(self) -> PublicationIdCache:
        return self._cache

    @property
    def level(self) -> int:
        return self._level

    def set_level(self, level: int) -> None:
        if level < 0:
            raise ValueError(f"level must be >= 0, got {level}")
        logger.debug("publication_resolver_level_set", level=level)
        self._level = level

    @property
    def include_pattern(self) -> re.Pattern[str] | None:
        """Patrón de inclusión; si no se fijó, se toma (una vez) de la config."""

        if self._include_pattern is None and self._settings.include_pattern:
            self._include_pattern = re.compile(self._settings.include_pattern)
            logger.debug("publication_include_pattern_set", include_pattern=self._settings.include_pattern)
        return self._include_pattern

    def set_include_pattern(self, include_pattern: str) -> None:
        try:
            self._include_pattern = re.compile(include_pattern)
        except re.error as exc:
            raise ValueError(f"invalid include_pattern {include_pattern!r}: {exc}") from exc
        logger.debug("publication_include_pattern_set", include_pattern=include_pattern)

    def get_publication_id(self) -> int:
        return self.get_publication_descriptor().id

    def get_publication_url(self) -> str:
        return self.get_publication_descriptor().publication_url

    def get_images_url(self) -> str:
        return self.get_publication_descriptor().image_url

    def get_local_page_url(self, url: str) -> str | None:
        """URL de página en la publicación actual para un path genérico.

        Devuelve None si la publicación no tiene URL.
        """

        publication_url = self.get_publication_url()
        if publication_url:
            return normalize_url(f"{publication_url}/{url}")
        return None

    def get_local_binary_url(self, url: str) -> str | None:
        """URL de binario en la publicación actual para un path genérico."""

        images_url = self.get_images_url()
        if images_url:
            return normalize_url(f"{images_url}/{url}")
        return None

    def get_publication_descriptor(self) -> PublicationDescriptor:
        request = self._requests.current_request()
        session = request.session
        stored = session.get_publication_descriptor()

        try:
            base_url = self._get_base_url(request)
        except PublicationNotFoundError:
            if stored is not None:
                # Descriptor de otra publicación: no lo reutilizamos en la raíz.
                session.clear_publication_descriptor()
            return PublicationDescriptor.empty()

        if stored is not None and stored.publication_url == base_url:
            return stored

        descriptor = self._create_publication_descriptor(base_url)
        session.set_publication_descriptor(descriptor)
        return descriptor

    def _get_base_url(self, request: RequestContext) -> str:
        url_path = strip_context_path(urlsplit(request.original_uri).path, request.context_path)
        if not url_path or url_path == "/":
            raise PublicationNotFoundError(url_path)
        url_stub = create_path_from_uri(url_path, self._level)
        # '/index.html' o level 0: el stub es la raíz.
        if url_stub == "/":
            raise PublicationNotFoundError(url_path)
        return url_stub

    def _create_publication_descriptor(self, url_stub: str) -> PublicationDescriptor:
        cached_id = self._cache.get(url_stub)
        if cached_id is not None:
            return PublicationDescriptor(id=cached_id, publication_url=url_stub)

        include_pattern = self.include_pattern
        if include_pattern is not None and include_pattern.fullmatch(url_stub) is None:
            logger.debug("publication_stub_excluded", url_stub=url_stub, include_pattern=include_pattern.pattern)
            return PublicationDescriptor(id=UNRESOLVED_PUBLICATION_ID, publication_url=url_stub)

        publication_id = self._discover_publication_id(url_stub)
        if publication_id > 0:
            logger.info("publication_id_discovered", publication_id=publication_id, url_stub=url_stub)
            self._cache.put(url_stub, publication_id)
        else:
            logger.error("publication_discovery_non_positive", publication_id=publication_id, url_stub=url_stub)

        return PublicationDescriptor(id=publication_id, publication_url=url_stub)

    def _discover_publication_id(self, url_stub: str) -> int:
        logger.debug("publication_discovery_started", url_stub=url_stub)
        try:
            return self._discovery.discover_publication_id(url_stub)
        except DiscoveryError as exc:
            logger.error("publication_discovery_failed", url_stub=url_stub, exc_info=True)
            raise PublicationResolutionError(str(exc)) from exc
