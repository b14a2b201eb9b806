"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a frameworks web ni a clientes HTTP.
- El descriptor se guarda en sesión y se exporta a JSON; un modelo inmutable
  evita que un request modifique el estado compartido de otro.

Nota:
- Estos modelos describen *qué* es una publicación, no *cómo* se descubre.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


UNRESOLVED_PUBLICATION_ID = -1


class PublicationDescriptor(BaseModel):
    """Publicación (tenant/sitio) asociada al request actual.

    Reglas:
    - `id == -1` significa "no resuelta". Estos descriptores nunca entran en la
      caché global; como mucho viven en la sesión.
    - Con `id > 0`, `publication_url` es el stub normalizado usado como clave.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(
        default=UNRESOLVED_PUBLICATION_ID,
        description="Identificador de la publicación (-1 = no resuelta).",
    )
    publication_url: str = Field(
        default="",
        description="Prefijo de URL canónico de la publicación.",
    )
    image_url: str = Field(
        default="",
        description="Prefijo de URL para binarios/imágenes de la publicación.",
    )

    @classmethod
    def empty(cls) -> "PublicationDescriptor":
        """Descriptor volátil para paths raíz: nunca se almacena."""

        return cls(id=UNRESOLVED_PUBLICATION_ID, publication_url="/", image_url="/")

    @property
    def is_resolved(self) -> bool:
        return self.id > 0


class PublicationEntry(BaseModel):
    """Entrada de un fichero de mapeo stub -> publicación."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="Identificador de la publicación.")
    publication_url: str = Field(
        ...,
        min_length=1,
        description="Stub de URL (p.ej. '/en/products').",
    )


class PublicationsFile(BaseModel):
    publications: list[PublicationEntry] = Field(default_factory=list)
