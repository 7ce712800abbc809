"""CLI entry point for the dactyl command."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any, NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dactyl.api.client import PanelClient, normalize_url
from dactyl.api.exceptions import PanelAPIError
from dactyl.api.facade import AdminClient, UserClient
from dactyl.api.handle import Handle
from dactyl.config import has_credentials, load_config, save_config

# command -> (facade method, [(column title, record attribute)])
ADMIN_LISTINGS: dict[str, tuple[str, list[tuple[str, str]]]] = {
    "users": ("get_users", [("ID", "id"), ("Username", "username"), ("Email", "email"), ("Admin", "admin")]),
    "nodes": ("get_nodes", [("ID", "id"), ("Name", "name"), ("FQDN", "fqdn"), ("Memory", "memory"), ("Disk", "disk")]),
    "locations": ("get_locations", [("ID", "id"), ("Short", "short_code"), ("Description", "description")]),
    "servers": ("get_servers", [("ID", "id"), ("Identifier", "identifier"), ("Name", "name"), ("Node", "node"), ("Suspended", "suspended")]),
    "nests": ("get_nests", [("ID", "id"), ("Name", "name"), ("Author", "author")]),
}

CLIENT_COLUMNS = [("Identifier", "identifier"), ("Name", "name"), ("Node", "node"), ("Status", "status")]


def _console() -> Console:
    return Console(no_color=not load_config().output.color)


def _fail(message: str) -> NoReturn:
    _console().print(f"[red]Error:[/red] {escape(message)}")
    sys.exit(1)


def _facade(mode: str) -> AdminClient | UserClient:
    panel = load_config().panel
    if mode == "admin":
        return AdminClient(PanelClient(panel.url, panel.application_key))
    return UserClient(PanelClient(panel.url, panel.client_key))


async def _fetch(mode: str, method: str, page: int | None) -> list[Handle]:
    async with _facade(mode) as facade:
        return await getattr(facade, method)(page)


def render(title: str, handles: list[Handle], columns: list[tuple[str, str]]) -> Table:
    table = Table(title=title)
    for heading, _ in columns:
        table.add_column(heading)
    for handle in handles:
        row: list[Any] = [getattr(handle.record, attr) for _, attr in columns]
        table.add_row(*("" if value is None else escape(str(value)) for value in row))
    if handles and handles[0].pagination:
        p = handles[0].pagination
        table.caption = f"page {p.current_page} of {p.total_pages} ({p.total_items} total)"
    return table


def _list(mode: str, title: str, method: str, columns: list[tuple[str, str]], page: int | None) -> None:
    if not has_credentials(mode):
        _fail("No panel URL or API key configured. Run `dactyl configure` first.")
    try:
        handles = asyncio.run(_fetch(mode, method, page))
    except (PanelAPIError, ValueError) as exc:
        _fail(str(exc))
    _console().print(render(title, handles, columns))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log every request.")
def main(verbose: bool) -> None:
    """Command line client for a Pterodactyl panel."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("--url", help="Panel URL, e.g. https://panel.example.com")
@click.option("--application-key", help="Application API key (admin).")
@click.option("--client-key", help="Client API key (user).")
@click.option("--color/--no-color", default=None, help="Colored output.")
def configure(url: str | None, application_key: str | None, client_key: str | None, color: bool | None) -> None:
    """Store the panel URL and API keys."""
    config = load_config()
    if url is not None:
        try:
            config.panel.url = normalize_url(url)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--url") from exc
    if application_key is not None:
        config.panel.application_key = application_key
    if client_key is not None:
        config.panel.client_key = client_key
    if color is not None:
        config.output.color = color
    save_config(config)
    _console().print("[green]Configuration saved.[/green]")


@main.command()
@click.option("--client", "as_client", is_flag=True, help="Check the client key instead.")
def check(as_client: bool) -> None:
    """Verify the panel is reachable and accepts the key."""
    mode = "user" if as_client else "admin"
    if not has_credentials(mode):
        _fail("No panel URL or API key configured. Run `dactyl configure` first.")
    panel = load_config().panel
    facade_cls = UserClient if as_client else AdminClient
    key = panel.client_key if as_client else panel.application_key

    async def run() -> None:
        facade = await facade_cls.connect(panel.url, key)
        await facade.close()

    try:
        asyncio.run(run())
    except (PanelAPIError, ValueError) as exc:
        _fail(str(exc))
    _console().print(f"[green]Connected to {escape(panel.url)}.[/green]")


@main.command()
@click.option("--page", type=int, default=None)
def users(page: int | None) -> None:
    """List users."""
    method, columns = ADMIN_LISTINGS["users"]
    _list("admin", "Users", method, columns, page)


@main.command()
@click.option("--page", type=int, default=None)
def nodes(page: int | None) -> None:
    """List nodes."""
    method, columns = ADMIN_LISTINGS["nodes"]
    _list("admin", "Nodes", method, columns, page)


@main.command()
@click.option("--page", type=int, default=None)
def locations(page: int | None) -> None:
    """List locations."""
    method, columns = ADMIN_LISTINGS["locations"]
    _list("admin", "Locations", method, columns, page)


@main.command()
@click.option("--page", type=int, default=None)
def servers(page: int | None) -> None:
    """List all servers on the panel."""
    method, columns = ADMIN_LISTINGS["servers"]
    _list("admin", "Servers", method, columns, page)


@main.command()
@click.option("--page", type=int, default=None)
def nests(page: int | None) -> None:
    """List nests."""
    method, columns = ADMIN_LISTINGS["nests"]
    _list("admin", "Nests", method, columns, page)


@main.command("my-servers")
@click.option("--page", type=int, default=None)
def my_servers(page: int | None) -> None:
    """List servers the client key can access."""
    _list("user", "My servers", "get_client_servers", CLIENT_COLUMNS, page)
