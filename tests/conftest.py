# tests/conftest.py

from __future__ import annotations

import pytest
import structlog

from adapters.request_scope import ContextVarRequestProvider, InMemoryPublicationSession, WebRequest
from core.config import AppSettings
from core.domain.errors import DiscoveryError
from core.services.publication_cache import PublicationIdCache
from core.services.publication_resolver import UrlPublicationResolver


class FakeDiscovery:
    def __init__(self, ids: dict[str, int] | None = None, error: bool = False):
        self.ids = ids or {}
        self.error = error
        self.calls: list[str] = []

    def discover_publication_id(self, url_stub: str) -> int:
        self.calls.append(url_stub)
        if self.error:
            raise DiscoveryError(url_stub, "broker unavailable")
        return self.ids.get(url_stub, -1)


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def settings():
    return AppSettings(_env_file=None, include_pattern=None, discovery_base_url=None)


@pytest.fixture
def discovery():
    return FakeDiscovery({"/en/products": 42, "/fr/products": 7})


@pytest.fixture
def requests():
    return ContextVarRequestProvider()


@pytest.fixture
def session():
    return InMemoryPublicationSession("s1")


@pytest.fixture
def cache():
    return PublicationIdCache()


@pytest.fixture
def resolver(requests, discovery, cache, settings):
    return UrlPublicationResolver(requests, discovery, cache, settings, level=2)


@pytest.fixture
def resolve(requests, resolver, session):
    """Resolve `path` inside a bound request that shares the `session` fixture."""

    def _resolve(path, *, context_path="", use_session=None):
        request = WebRequest(path=path, context_path=context_path, session=use_session or session)
        with requests.bind(request):
            return resolver.get_publication_descriptor()

    return _resolve
