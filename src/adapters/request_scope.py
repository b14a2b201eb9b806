"""Request y sesión actuales (implementación sin framework).

Por qué contextvars:
- Cada hilo (o tarea) que sirve un request ve solo su propio request, sin
  pasar el objeto por toda la pila de llamadas.
- Cualquier framework (WSGI, Flask, FastAPI) puede enlazar su request con
  `ContextVarRequestProvider.bind()`.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from core.domain.errors import RequestContextError
from core.domain.models import PublicationDescriptor


class InMemoryPublicationSession:
    """Sesión de usuario con un hueco tipado para el descriptor."""

    def __init__(self, session_id: str = "") -> None:
        self.session_id = session_id
        self._descriptor: PublicationDescriptor | None = None

    def get_publication_descriptor(self) -> PublicationDescriptor | None:
        return self._descriptor

    def set_publication_descriptor(self, descriptor: PublicationDescriptor) -> None:
        self._descriptor = descriptor

    def clear_publication_descriptor(self) -> None:
        self._descriptor = None


class SessionRegistry:
    """Sesiones en memoria indexadas por id (una por cookie de sesión)."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[str, InMemoryPublicationSession] = {}

    def get_or_create(self, session_id: str) -> InMemoryPublicationSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = InMemoryPublicationSession(session_id)
                self._sessions[session_id] = session
            return session

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


@dataclass(frozen=True)
class WebRequest:
    """Request entrante tal como lo ve el resolver.

    `forwarded_uri` es el URI antes de un forward interno; si existe, es el
    que identifica la publicación.
    """

    path: str
    context_path: str = ""
    session: InMemoryPublicationSession = field(default_factory=InMemoryPublicationSession)
    forwarded_uri: str | None = None

    @property
    def original_uri(self) -> str:
        return self.forwarded_uri or self.path

    @classmethod
    def from_wsgi_environ(
        cls,
        environ: Mapping[str, Any],
        session: InMemoryPublicationSession,
    ) -> "WebRequest":
        script_name = str(environ.get("SCRIPT_NAME", "") or "")
        path_info = str(environ.get("PATH_INFO", "") or "")
        return cls(path=script_name + path_info, context_path=script_name, session=session)


class ContextVarRequestProvider:
    """Implementa `RequestContextProvider` con un `ContextVar`."""

    def __init__(self, name: str = "pubresolve_current_request") -> None:
        self._current: ContextVar[WebRequest | None] = ContextVar(name, default=None)

    def current_request(self) -> WebRequest:
        request = self._current.get()
        if request is None:
            raise RequestContextError("No request bound to the current context")
        return request

    @contextmanager
    def bind(self, request: WebRequest) -> Iterator[WebRequest]:
        token = self._current.set(request)
        try:
            yield request
        finally:
            self._current.reset(token)
