"""CLI principal (Typer).

Por qué una CLI:
- Permite comprobar, desde una shell de despliegue, a qué publicación
  resuelve un path con la configuración real (level, include pattern,
  servicio de descubrimiento) sin levantar la aplicación web.
"""

from __future__ import annotations

import json
from contextlib import ExitStack
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from adapters.http_discovery import HttpPublicationDiscovery
from adapters.json_exporter import descriptor_payload, export_descriptor_json
from adapters.mapping_discovery import MappingPublicationDiscovery
from adapters.request_scope import ContextVarRequestProvider, WebRequest
from cli import doctor
from cli.ui_components import build_descriptor_table, print_banner
from core.config import AppSettings
from core.domain.errors import PublicationResolutionError
from core.domain.models import PublicationDescriptor
from core.interfaces.discovery import PublicationDiscovery
from core.logging import configure_logging
from core.services.resolver_factory import PublicationResolverFactory
from core.services.wiring import create_publication_resolver

app = typer.Typer(no_args_is_help=True, help="Resolve request paths to content publications.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _resolve_once(
    settings: AppSettings,
    discovery: PublicationDiscovery,
    path: str,
    context_path: str,
    level: int | None,
    include_pattern: str | None,
    page: str | None,
    binary: str | None,
) -> tuple[PublicationDescriptor, str | None, str | None]:
    requests = ContextVarRequestProvider()
    resolver = create_publication_resolver(
        settings,
        requests=requests,
        discovery=discovery,
        factory=PublicationResolverFactory(),
    )
    if level is not None:
        resolver.set_level(level)
    if include_pattern:
        try:
            resolver.set_include_pattern(include_pattern)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--include-pattern") from exc

    with requests.bind(WebRequest(path=path, context_path=context_path)):
        try:
            descriptor = resolver.get_publication_descriptor()
            page_url = resolver.get_local_page_url(page) if page is not None else None
            binary_url = resolver.get_local_binary_url(binary) if binary is not None else None
        except PublicationResolutionError as exc:
            _console.print(f"[red]Discovery failed:[/red] {escape(str(exc))}")
            raise typer.Exit(code=1) from exc
    return descriptor, page_url, binary_url


@app.command()
def resolve(
    path: str = typer.Argument(..., help="Request URI to resolve (e.g. /en/products/123)."),
    context_path: str = typer.Option("", "--context-path", help="Application context path to strip."),
    level: int | None = typer.Option(None, "--level", min=0, help="Path segments that form the stub."),
    include_pattern: str | None = typer.Option(None, "--include-pattern", help="Only discover matching stubs."),
    mapping: Path | None = typer.Option(
        None,
        "--mapping",
        exists=True,
        dir_okay=False,
        help="JSON file with {publications: [{id, publication_url}]} instead of HTTP discovery.",
    ),
    page: str | None = typer.Option(None, "--page", help="Generic page URL to localize."),
    binary: str | None = typer.Option(None, "--binary", help="Generic binary URL to localize."),
    json_output: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Also write the JSON result to a file."),
) -> None:
    """Resolve PATH to its publication using a throw-away session."""

    settings = AppSettings()
    configure_logging(settings)

    with ExitStack() as stack:
        discovery: PublicationDiscovery
        if mapping is not None:
            discovery = MappingPublicationDiscovery.from_file(mapping)
        else:
            discovery = stack.enter_context(HttpPublicationDiscovery(settings))
        descriptor, page_url, binary_url = _resolve_once(
            settings, discovery, path, context_path, level, include_pattern, page, binary
        )

    payload = descriptor_payload(descriptor, page_url=page_url, binary_url=binary_url)
    if output is not None:
        export_descriptor_json(payload=payload, output_path=output)

    if json_output:
        typer.echo(json.dumps(payload, ensure_ascii=False, sort_keys=True))
        return

    print_banner(_console)
    _console.print(build_descriptor_table(descriptor, path=path, page_url=page_url, binary_url=binary_url))
    if output is not None:
        _console.print(f"[green]Saved:[/green] {output}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
