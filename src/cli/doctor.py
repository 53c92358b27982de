"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.graphql_client import GraphQLClient
from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.errors import RemoteOperationError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

PING_QUERY = "query Ping { __typename }"


async def _check_graphql(settings: AppSettings) -> tuple[bool, str]:
    async with build_async_client(settings) as client:
        graphql = GraphQLClient(url=settings.graphql_url, client=client)
        try:
            data = await graphql.execute(PING_QUERY, operation="ping")
        except RemoteOperationError as exc:
            return False, exc.message
    return True, f"__typename={data.get('__typename')}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="CATALOG-D2 Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("GraphQL URL", "OK", settings.graphql_url)
    if settings.auth_token:
        table.add_row("Auth token", "OK", "Bearer token configured")
    else:
        table.add_row("Auth token", "OPTIONAL", "No token set -> anonymous requests")
    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))

    ok_graphql, detail_graphql = asyncio.run(_check_graphql(settings))
    table.add_row("GraphQL endpoint", "OK" if ok_graphql else "FAIL", detail_graphql)

    _console.print(table)

    if not ok_graphql:
        _console.print(
            "\n[yellow]Note:[/yellow] Run `catalog-d2 doctor setup` to point the CLI at another endpoint."
        )
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive endpoint setup (stores config in the user config .env)."""

    settings = AppSettings()
    url = typer.prompt("GraphQL URL", default=settings.graphql_url, show_default=True).strip()
    token = typer.prompt(
        "Bearer token (empty for none)",
        default="",
        show_default=False,
        hide_input=True,
    ).strip()

    if not url.startswith(("http://", "https://")):
        raise typer.BadParameter("GraphQL URL must start with http:// or https://")

    env_path = write_user_env_vars(
        {
            "CATALOG_D2_GRAPHQL_URL": url,
            "CATALOG_D2_AUTH_TOKEN": token,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
