"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que resolver y adaptadores (HTTP) lean config de forma consistente.
- `include_pattern` es el parámetro estático por despliegue que el resolver
  consulta cuando nadie lo ha fijado explícitamente.
"""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "pubresolve"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "pubresolve"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "pubresolve"
    return Path.home() / ".config" / "pubresolve"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# pubresolve user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para resolver, adaptadores y CLI.
    """

    model_config = SettingsConfigDict(
        env_prefix="PUBRESOLVE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    level: int = Field(
        default=1,
        ge=0,
        description="Número de segmentos del path que forman el stub de la publicación.",
    )
    include_pattern: str | None = Field(
        default=None,
        description="Regex opcional: solo los stubs que casan se envían a descubrimiento.",
    )

    discovery_base_url: str | None = Field(
        default=None,
        description="Base URL del servicio de descubrimiento de publicaciones.",
    )
    discovery_path: str = Field(
        default="/publications/discover",
        min_length=1,
        description="Ruta del endpoint de descubrimiento (relativa a la base URL).",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request al servicio de descubrimiento (segundos).",
    )
    user_agent: str = Field(
        default="pubresolve/0.1",
        min_length=1,
        description="User-Agent para las peticiones de descubrimiento.",
    )

    log_level: str = Field(
        default="INFO",
        description="Nivel de log (DEBUG, INFO, WARNING, ERROR).",
    )
    log_json: bool = Field(
        default=False,
        description="Renderizar logs como JSON (producción) en vez de consola.",
    )

    @field_validator("include_pattern")
    @classmethod
    def _check_include_pattern(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid include_pattern: {exc}") from exc
        return value
