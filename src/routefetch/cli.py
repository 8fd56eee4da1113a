from __future__ import annotations

import asyncio
import json
import logging
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from routefetch.api.users import get_user
from routefetch.config.settings import (
    ClientConfig,
    EnvConfigProvider,
    StaticConfigProvider,
    load_config,
    validate_config,
)
from routefetch.domain.errors import ConfigError
from routefetch.domain.json_value import JSON
from routefetch.domain.result import Failure
from routefetch.routes.general import GeneralRoute
from routefetch.routes.catalog import find_route, iter_routes
from routefetch.service.network import NetworkService


app = typer.Typer(no_args_is_help=True, add_completion=False)

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _config_or_exit(
    api_key: Optional[str],
    base_url: Optional[str],
    timeout: Optional[float],
) -> ClientConfig:
    env = EnvConfigProvider()
    try:
        provider = StaticConfigProvider(api_key, **env.settings) if api_key else env
    except ConfigError as exc:
        _exit_config_error(str(exc))
    check = validate_config(provider, base_url=base_url, timeout_s=timeout)
    if not check.ok or check.config is None:
        _exit_config_error(check.error)
    return check.config


def _exit_config_error(message: Optional[str]) -> NoReturn:
    console.print(f"[bold red]Configuration error:[/bold red] {message}")
    raise typer.Exit(code=1)


async def _fetch_json(config: ClientConfig, route_name: str):
    route = find_route(route_name)
    async with NetworkService(config) as service:
        return await service.fetch(route.endpoint(config), JSON)


async def _fetch_user(config: ClientConfig):
    async with NetworkService(config) as service:
        return await get_user(service)


def _print_failure(result: Failure) -> None:
    err = result.error
    console.print(f"[bold red]{err.kind}[/bold red]: {err.description}")
    if err.kind == "invalid_resource" and err.message:
        console.print(f"  {err.message}")


@app.command()
def routes(
    base_url: Optional[str] = typer.Option(None, help="API base url (default: $ROUTEFETCH_BASE_URL)"),
) -> None:
    """List every route in the catalog."""
    try:
        # listing needs urls only, so the real credential is not required
        settings = EnvConfigProvider().settings
        config = load_config(StaticConfigProvider("unused", **settings), base_url=base_url)
    except ConfigError as exc:
        _exit_config_error(str(exc))

    table = Table(show_header=True, header_style="bold")
    table.add_column("NAME", no_wrap=True)
    table.add_column("METHOD", no_wrap=True)
    table.add_column("URL")
    table.add_column("ENCODING", no_wrap=True)

    for route in iter_routes():
        ep = route.endpoint(config)
        table.add_row(ep.name, ep.method, ep.url, ep.encoding)

    console.print(table)


@app.command()
def fetch(
    route: str = typer.Argument(..., help="Route name, e.g. general.status"),
    format: str = typer.Option("pretty", help="Output format: pretty|json"),
    api_key: Optional[str] = typer.Option(None, help="API key (default: $ROUTEFETCH_API_KEY)"),
    base_url: Optional[str] = typer.Option(None, help="API base url"),
    timeout: Optional[float] = typer.Option(None, help="Request timeout in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and responses"),
) -> None:
    """Fetch a route and print the JSON it returns."""
    fmt = format.lower().strip()
    if fmt not in ("pretty", "json"):
        raise typer.BadParameter("format must be one of: pretty, json")

    _setup_logging(verbose)
    config = _config_or_exit(api_key, base_url, timeout)

    try:
        find_route(route)
    except KeyError:
        names = ", ".join(r.route_name for r in iter_routes())
        raise typer.BadParameter(f"unknown route {route!r} (known: {names})")

    result = asyncio.run(_fetch_json(config, route))
    if isinstance(result, Failure):
        _print_failure(result)
        raise typer.Exit(code=1)

    if fmt == "json":
        console.print(json.dumps(result.value.to_python(), indent=2))
    else:
        console.print_json(data=result.value.to_python())


@app.command()
def user(
    api_key: Optional[str] = typer.Option(None, help="API key (default: $ROUTEFETCH_API_KEY)"),
    timeout: Optional[float] = typer.Option(None, help="Request timeout in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and responses"),
) -> None:
    """Fetch a random user and show the name and pictures."""
    _setup_logging(verbose)
    config = _config_or_exit(api_key, None, timeout)

    result = asyncio.run(_fetch_user(config))
    if isinstance(result, Failure):
        _print_failure(result)
        raise typer.Exit(code=1)

    if not result.value.results:
        console.print("No users returned.")
        return

    person = result.value.results[0]
    console.print(f"[bold]{person.name.full_name}[/bold]")
    console.print(f"  large:     {person.picture.large}")
    console.print(f"  medium:    {person.picture.medium}")
    console.print(f"  thumbnail: {person.picture.thumbnail}")


@app.command("check-config")
def check_config(
    api_key: Optional[str] = typer.Option(None, help="API key (default: $ROUTEFETCH_API_KEY)"),
    base_url: Optional[str] = typer.Option(None, help="API base url"),
    timeout: Optional[float] = typer.Option(None, help="Request timeout in seconds"),
) -> None:
    """Validate client configuration the way the app does at startup."""
    config = _config_or_exit(api_key, base_url, timeout)
    console.print("[bold green]Configuration OK[/bold green]")
    console.print(f"API base: {config.api_base}")
    console.print(f"Timeout: {config.timeout_s:g}s")


@app.command()
def ping(
    api_key: Optional[str] = typer.Option(None, help="API key (default: $ROUTEFETCH_API_KEY)"),
    base_url: Optional[str] = typer.Option(None, help="API base url"),
    timeout: Optional[float] = typer.Option(None, help="Request timeout in seconds"),
) -> None:
    """Check that the API answers on general.status."""
    config = _config_or_exit(api_key, base_url, timeout)

    result = asyncio.run(_fetch_json(config, GeneralRoute.STATUS.route_name))
    if isinstance(result, Failure):
        console.print(f"[bold red]Unreachable:[/bold red] {config.api_base}")
        _print_failure(result)
        raise typer.Exit(code=1)

    console.print(f"[bold green]OK[/bold green] {config.api_base}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
