"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import PublicationDescriptor


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Se omite en modo `--json` para no ensuciar la salida.
    """

    title = Text("pubresolve", style="bold cyan")
    subtitle = Text("Request URL → publicación", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_descriptor_table(
    descriptor: PublicationDescriptor,
    *,
    path: str,
    page_url: str | None = None,
    binary_url: str | None = None,
) -> Table:
    """Tabla Rich con el descriptor resuelto y las URLs locales."""

    table = Table(title="Publication")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    id_style = "green" if descriptor.is_resolved else "red"
    table.add_row("Request path", path)
    table.add_row("Publication id", Text(str(descriptor.id), style=id_style))
    table.add_row("Publication URL", descriptor.publication_url or "-")
    table.add_row("Images URL", descriptor.image_url or "-")
    if page_url is not None:
        table.add_row("Local page URL", page_url)
    if binary_url is not None:
        table.add_row("Local binary URL", binary_url)
    return table
