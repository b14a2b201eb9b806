"""Funciones de plantilla (Jinja2) para URLs de la publicación actual.

Por qué está en adapters:
- Jinja2 es un detalle de presentación; el Core solo expone el resolver.
- Las plantillas no reciben dependencias: leen el resolver de la factoría.
"""

from __future__ import annotations

from jinja2 import Environment

from core.domain.models import UNRESOLVED_PUBLICATION_ID
from core.services.resolver_factory import PublicationResolverFactory


def _factory(factory: PublicationResolverFactory | None) -> PublicationResolverFactory:
    return factory or PublicationResolverFactory.get_instance()


def publication_url(url: str, factory: PublicationResolverFactory | None = None) -> str | None:
    """URL de página local; None si no hay resolver o publicación."""

    resolver = _factory(factory).get_resolver()
    if resolver is None:
        return None
    return resolver.get_local_page_url(url)


def binary_url(url: str, factory: PublicationResolverFactory | None = None) -> str | None:
    resolver = _factory(factory).get_resolver()
    if resolver is None:
        return None
    return resolver.get_local_binary_url(url)


def publication_id(factory: PublicationResolverFactory | None = None) -> int:
    resolver = _factory(factory).get_resolver()
    if resolver is None:
        return UNRESOLVED_PUBLICATION_ID
    return resolver.get_publication_id()


def register_template_functions(env: Environment, factory: PublicationResolverFactory | None = None) -> Environment:
    """Instala `publication_url`, `binary_url` y `publication_id` como globals."""

    env.globals.update(
        publication_url=lambda url: publication_url(url, factory),
        binary_url=lambda url: binary_url(url, factory),
        publication_id=lambda: publication_id(factory),
    )
    return env
