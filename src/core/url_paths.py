"""Utilidades de paths/URLs para el resolver.

Por qué en el Core:
- El stub de publicación es la clave de la caché global: su forma debe ser
  estable y no depender del framework web.
"""

from __future__ import annotations

import posixpath
from urllib.parse import urlsplit


def normalize_url(url: str) -> str:
    """Normaliza una URL o path.

    Reglas:
    - Colapsa barras repetidas (respetando un prefijo `scheme://`).
    - Resuelve segmentos `.` y `..` sin salir de la raíz.
    - Conserva la barra final si existía.
    - Un input vacío se normaliza a `/`.
    """

    if not url:
        return "/"

    prefix = ""
    path = url
    if "://" in url:
        scheme, rest = url.split("://", 1)
        host, sep, path = rest.partition("/")
        prefix = f"{scheme}://{host}"
        path = sep + path
        if not path:
            return prefix

    trailing = path.endswith("/")
    absolute = path.startswith("/")
    normalized = posixpath.normpath(path) if path else ""
    # normpath conserva '//' inicial (POSIX); lo colapsamos también.
    normalized = "/" + normalized.lstrip("/") if absolute else normalized
    if normalized == ".":
        normalized = ""
    if trailing and not normalized.endswith("/"):
        normalized += "/"
    return prefix + normalized if prefix or normalized else "/"


def strip_context_path(path: str, context_path: str) -> str:
    """Quita el context path de la aplicación si el path empieza por él."""

    if not context_path or context_path == "/":
        return path
    context_path = context_path.rstrip("/")
    if path == context_path:
        return ""
    if path.startswith(context_path + "/"):
        return path[len(context_path):]
    return path


def create_path_from_uri(uri: str, level: int) -> str:
    """Construye el stub de publicación con los primeros `level` segmentos.

    Ejemplos:
    - ('/en/products/123', 2) -> '/en/products'
    - ('/en/index.html', 2) -> '/en'
    - (cualquier path, 0) -> '/'
    """

    path = urlsplit(uri).path
    segments = [segment for segment in path.split("/") if segment]
    # El último segmento es un fichero (index.html) si no acaba en '/' y tiene punto.
    if segments and not path.endswith("/") and "." in segments[-1]:
        segments = segments[:-1]
    if level <= 0:
        return "/"
    return "/" + "/".join(segments[:level])
