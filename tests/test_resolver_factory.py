# tests/test_resolver_factory.py

import pytest

from adapters.request_scope import WebRequest
from core.domain.errors import PublicationResolutionError
from core.services.publication_cache import PublicationIdCache
from core.services.publication_resolver import UrlPublicationResolver
from core.services.resolver_factory import PublicationResolverFactory
from core.services.wiring import create_publication_resolver


@pytest.fixture
def clean_instance():
    PublicationResolverFactory._instance = None
    yield
    PublicationResolverFactory._instance = None


def test_get_instance_is_singleton(clean_instance):
    first = PublicationResolverFactory.get_instance()

    assert PublicationResolverFactory.get_instance() is first
    assert first.get_resolver() is None


def test_set_resolver_last_writer_wins(requests, discovery, settings):
    factory = PublicationResolverFactory()
    first = UrlPublicationResolver(requests, discovery, settings=settings)
    second = UrlPublicationResolver(requests, discovery, settings=settings)

    factory.set_resolver(first)
    factory.set_resolver(second)

    assert factory.get_resolver() is second


class TestWiring:
    def test_registers_in_given_factory(self, requests, discovery, settings):
        factory = PublicationResolverFactory()
        cache = PublicationIdCache()

        resolver = create_publication_resolver(
            settings, requests=requests, discovery=discovery, cache=cache, factory=factory
        )

        assert factory.get_resolver() is resolver
        assert resolver.cache is cache
        assert resolver.level == settings.level

    def test_registers_in_process_factory_by_default(self, clean_instance, requests, discovery, settings):
        resolver = create_publication_resolver(settings, requests=requests, discovery=discovery)

        assert PublicationResolverFactory.get_instance().get_resolver() is resolver

    def test_defaults_to_http_discovery(self, requests, settings, session):
        resolver = create_publication_resolver(settings, requests=requests, factory=PublicationResolverFactory())

        with requests.bind(WebRequest(path="/en/products", session=session)):
            with pytest.raises(PublicationResolutionError, match="not configured"):
                resolver.get_publication_id()
