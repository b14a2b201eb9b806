"""Doctor command for environment diagnostics."""

from __future__ import annotations

import re

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        with build_client(settings) as client:
            response = client.get("/")
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="pubresolve Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Level", "OK", str(settings.level))
    if settings.include_pattern:
        table.add_row("Include pattern", "OK", settings.include_pattern)
    else:
        table.add_row("Include pattern", "OPTIONAL", "Not set -> every stub goes to discovery")

    if settings.discovery_base_url:
        table.add_row("Discovery URL", "OK", settings.discovery_base_url + settings.discovery_path)
        ok_http, detail_http = _check_http(settings)
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)
    else:
        table.add_row("Discovery URL", "MISSING", "Set PUBRESOLVE_DISCOVERY_BASE_URL or use --mapping")

    _console.print(table)


@app.command(name="setup-discovery")
def setup_discovery() -> None:
    """Interactive discovery setup (stores config in the user config .env)."""

    base_url = typer.prompt("Discovery base URL").strip()
    path = typer.prompt("Discovery path", default="/publications/discover", show_default=True).strip()
    level = typer.prompt("Level", default=1, type=int, show_default=True)
    include_pattern = typer.prompt("Include pattern (empty for none)", default="", show_default=False).strip()

    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base URL must start with http:// or https://")
    if include_pattern:
        try:
            re.compile(include_pattern)
        except re.error as exc:
            raise typer.BadParameter(f"invalid include pattern: {exc}") from exc

    env_path = write_user_env_vars(
        {
            "PUBRESOLVE_DISCOVERY_BASE_URL": base_url,
            "PUBRESOLVE_DISCOVERY_PATH": path,
            "PUBRESOLVE_LEVEL": str(level),
            "PUBRESOLVE_INCLUDE_PATTERN": include_pattern or None,
        }
    )

    _console.print(f"[green]Saved discovery config to:[/green] {env_path}")
