"""Exportación JSON del descriptor resuelto.

Por qué JSON:
- Interoperabilidad con scripts de despliegue y pipelines.
- Formato estable (claves ordenadas) para comparar resultados entre entornos.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import PublicationDescriptor


def descriptor_payload(
    descriptor: PublicationDescriptor,
    *,
    page_url: str | None = None,
    binary_url: str | None = None,
) -> dict[str, Any]:
    payload = descriptor.model_dump(mode="json")
    payload["local_page_url"] = page_url
    payload["local_binary_url"] = binary_url
    return payload


def export_descriptor_json(*, payload: dict[str, Any], output_path: Path) -> Path:
    """Exporta el payload del descriptor a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
