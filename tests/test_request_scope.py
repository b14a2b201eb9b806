# tests/test_request_scope.py

import threading

import pytest

from adapters.request_scope import ContextVarRequestProvider, InMemoryPublicationSession, SessionRegistry, WebRequest
from core.domain.errors import RequestContextError
from core.domain.models import PublicationDescriptor
from core.interfaces.request_context import PublicationSession, RequestContext, RequestContextProvider


def test_session_slot():
    session = InMemoryPublicationSession("abc")
    descriptor = PublicationDescriptor(id=3, publication_url="/en")

    assert session.get_publication_descriptor() is None
    session.set_publication_descriptor(descriptor)
    assert session.get_publication_descriptor() is descriptor
    session.clear_publication_descriptor()
    assert session.get_publication_descriptor() is None


def test_implementations_satisfy_protocols():
    provider = ContextVarRequestProvider()
    request = WebRequest(path="/en")

    assert isinstance(provider, RequestContextProvider)
    assert isinstance(request, RequestContext)
    assert isinstance(request.session, PublicationSession)


def test_original_uri_prefers_forwarded_uri():
    assert WebRequest(path="/en/a").original_uri == "/en/a"
    assert WebRequest(path="/error", forwarded_uri="/fr/b").original_uri == "/fr/b"


def test_from_wsgi_environ():
    session = InMemoryPublicationSession()
    request = WebRequest.from_wsgi_environ({"SCRIPT_NAME": "/app", "PATH_INFO": "/en/products"}, session)

    assert request.original_uri == "/app/en/products"
    assert request.context_path == "/app"
    assert request.session is session


def test_from_wsgi_environ_without_script_name():
    request = WebRequest.from_wsgi_environ({"PATH_INFO": "/"}, InMemoryPublicationSession())

    assert request.original_uri == "/"
    assert request.context_path == ""


class TestContextVarRequestProvider:
    def test_unbound_raises(self):
        with pytest.raises(RequestContextError):
            ContextVarRequestProvider().current_request()

    def test_bind_and_reset(self):
        provider = ContextVarRequestProvider()
        outer = WebRequest(path="/en")
        inner = WebRequest(path="/fr")

        with provider.bind(outer):
            assert provider.current_request() is outer
            with provider.bind(inner):
                assert provider.current_request() is inner
            assert provider.current_request() is outer

        with pytest.raises(LookupError):
            provider.current_request()

    def test_requests_are_isolated_per_thread(self):
        provider = ContextVarRequestProvider()
        seen = {}

        def worker(path):
            with provider.bind(WebRequest(path=path)):
                seen[path] = provider.current_request().path

        threads = [threading.Thread(target=worker, args=(f"/p{i}",)) for i in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert seen == {f"/p{i}": f"/p{i}" for i in range(5)}


class TestSessionRegistry:
    def test_get_or_create_returns_same_session(self):
        registry = SessionRegistry()

        first = registry.get_or_create("abc")

        assert registry.get_or_create("abc") is first
        assert registry.get_or_create("def") is not first
        assert len(registry) == 2

    def test_discard(self):
        registry = SessionRegistry()
        first = registry.get_or_create("abc")

        registry.discard("abc")
        registry.discard("missing")

        assert registry.get_or_create("abc") is not first
