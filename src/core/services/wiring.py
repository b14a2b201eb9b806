"""Composition root del resolver.

Junta configuración, proveedor de descubrimiento, caché y contexto de request
en un único punto, y registra el resultado en la factoría para el acceso
estático desde plantillas.
"""

from __future__ import annotations

from adapters.http_discovery import HttpPublicationDiscovery
from core.config import AppSettings
from core.interfaces.discovery import PublicationDiscovery
from core.interfaces.request_context import RequestContextProvider
from core.services.publication_cache import PublicationIdCache
from core.services.publication_resolver import UrlPublicationResolver
from core.services.resolver_factory import PublicationResolverFactory


def create_publication_resolver(
    settings: AppSettings | None = None,
    *,
    requests: RequestContextProvider,
    discovery: PublicationDiscovery | None = None,
    cache: PublicationIdCache | None = None,
    factory: PublicationResolverFactory | None = None,
) -> UrlPublicationResolver:
    """Crea el resolver y lo registra en `factory` (por defecto, la de proceso).

    Sin `discovery`, se usa el proveedor HTTP configurado en `settings`.
    """

    settings = settings or AppSettings()
    if discovery is None:
        discovery = HttpPublicationDiscovery(settings)

    resolver = UrlPublicationResolver(
        requests,
        discovery,
        cache if cache is not None else PublicationIdCache(),
        settings,
    )
    (factory or PublicationResolverFactory.get_instance()).set_resolver(resolver)
    return resolver
