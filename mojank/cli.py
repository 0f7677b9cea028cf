"""Command-line interface for mojank."""

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Any
from uuid import UUID

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

from mojank import CachedMojank, Mojank, MojankConfig, MojankResult, __version__
from mojank.config import EndpointSet, LogFormat
from mojank.logging import configure_logging
from mojank.models.profile import Profile, SimpleProfile
from mojank.models.skin import Skin
from mojank.models.types import parse_uuid

app = typer.Typer(
    name="mojank",
    help="Mojang player identity lookups",
    add_completion=False,
)
console = Console()

EXIT_NOT_FOUND = 1
EXIT_INCONCLUSIVE = 2


def version_callback(value: bool):
    if value:
        console.print(f"mojank version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """mojank - Mojang player identity lookups."""
    pass


def _build_client(config: MojankConfig) -> Mojank:
    return CachedMojank(config=config)


def _run(
    action: Callable[[Mojank], Awaitable[MojankResult[Any]]],
    alternate: bool,
    quiet: bool,
) -> MojankResult[Any]:
    """Run one lookup with retries and return its result."""
    config = MojankConfig(
        endpoints=EndpointSet.ALTERNATE if alternate else EndpointSet.DEFAULT,
        log_format=LogFormat.JSON if quiet else LogFormat.CONSOLE,
        log_level="ERROR" if quiet else "WARNING",
    )
    configure_logging(config)

    async def run():
        async with _build_client(config) as mojank:
            return await mojank.attempt(action)

    return asyncio.run(run())


def _exit_on_failure(result: MojankResult[Any]) -> None:
    """Print the failure reason and exit; partials only warn."""
    if result.is_partial:
        console.print(f"[yellow]![/yellow] {result.get_reason()}")
        return
    if result.is_failure:
        console.print(f"[red]✗[/red] {result.get_reason()}")
        raise typer.Exit(EXIT_NOT_FOUND if result.is_conclusive else EXIT_INCONCLUSIVE)


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, list):
        return [_to_jsonable(v) for v in value]
    return str(value)


def _print_json(value: Any) -> None:
    console.print_json(json.dumps(_to_jsonable(value)))


def _parse_target(target: str) -> UUID | None:
    """Treat the argument as a uuid when it looks like one."""
    try:
        return parse_uuid(target)
    except ValueError:
        return None


JsonOption = typer.Option(False, "--json", "-j", help="Print raw JSON")
AlternateOption = typer.Option(False, "--alternate", "-a", help="Use the alternate endpoints")
QuietOption = typer.Option(False, "--quiet", "-q", help="Suppress log output")


@app.command()
def uuid(
    username: str = typer.Argument(..., help="Player username"),
    as_json: bool = JsonOption,
    alternate: bool = AlternateOption,
    quiet: bool = QuietOption,
):
    """Look up a player's uuid."""
    result = _run(lambda m: m.username_to_uuid(username), alternate, quiet)
    _exit_on_failure(result)
    if as_json:
        _print_json(result.get())
    else:
        console.print(str(result.get()))


@app.command()
def name(
    player_uuid: str = typer.Argument(..., metavar="UUID", help="Player uuid, dashed or not"),
    as_json: bool = JsonOption,
    alternate: bool = AlternateOption,
    quiet: bool = QuietOption,
):
    """Look up a player's current username."""
    parsed = _parse_target(player_uuid)
    if parsed is None:
        console.print(f"[red]Invalid uuid: {player_uuid}[/red]")
        raise typer.Exit(EXIT_NOT_FOUND)

    result = _run(lambda m: m.uuid_to_username(parsed), alternate, quiet)
    _exit_on_failure(result)
    if as_json:
        _print_json(result.get())
    else:
        console.print(result.get())


@app.command()
def profile(
    target: str = typer.Argument(..., help="Username or uuid"),
    as_json: bool = JsonOption,
    alternate: bool = AlternateOption,
    quiet: bool = QuietOption,
):
    """Show a player's full profile."""
    parsed = _parse_target(target)
    if parsed is None:
        result = _run(lambda m: m.username_to_profile(target), alternate, quiet)
    else:
        result = _run(lambda m: m.uuid_to_profile(parsed), alternate, quiet)
    _exit_on_failure(result)

    if as_json:
        _print_json(result.get())
    else:
        _print_profile_table(result.get())


@app.command()
def bulk(
    usernames: list[str] = typer.Argument(..., help="Usernames to resolve"),
    as_json: bool = JsonOption,
    alternate: bool = AlternateOption,
    quiet: bool = QuietOption,
):
    """Resolve many usernames at once."""
    result = _run(lambda m: m.usernames_to_simple_profiles(usernames), alternate, quiet)
    _exit_on_failure(result)

    profiles = result.get()
    if as_json:
        _print_json(profiles)
        return
    _print_profiles_table(profiles)
    console.print(f"\n[bold]Resolved {len(profiles)}/{len(usernames)} usernames[/bold]")


@app.command()
def skin(
    target: str = typer.Argument(..., help="Username or uuid"),
    as_json: bool = JsonOption,
    alternate: bool = AlternateOption,
    quiet: bool = QuietOption,
):
    """Show a player's skin and cape."""
    parsed = _parse_target(target)
    if parsed is None:
        result = _run(lambda m: m.username_to_skin(target), alternate, quiet)
    else:
        result = _run(lambda m: m.uuid_to_skin(parsed), alternate, quiet)
    _exit_on_failure(result)

    if as_json:
        _print_json(result.get())
    else:
        _print_skin(result.get())


def _print_profile_table(p: Profile):
    """Print a full profile as a table."""
    table = Table(title=p.name, show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("UUID", str(p.id))
    table.add_row("Legacy", "✓" if p.legacy else "✗")
    table.add_row("Properties", ", ".join(prop.name for prop in p.properties) or "-")
    table.add_row("Actions", ", ".join(p.profile_actions) or "-")

    console.print(table)


def _print_profiles_table(profiles: list[SimpleProfile]):
    table = Table(show_header=True)
    table.add_column("Name")
    table.add_column("UUID", style="dim")
    table.add_column("Legacy")
    table.add_column("Demo")

    for p in profiles:
        table.add_row(p.name, str(p.id), "✓" if p.legacy else "", "✓" if p.demo else "")

    console.print(table)


def _print_skin(s: Skin):
    console.print(f"\n[bold]{s.profile_name}[/bold] [dim]{s.profile_id}[/dim]")
    model = "slim" if s.textures.skin.is_slim else "classic"
    console.print(f"  Skin ({model}): [blue]{s.textures.skin.url}[/blue]")
    if s.textures.cape:
        console.print(f"  Cape: [blue]{s.textures.cape.url}[/blue]")


if __name__ == "__main__":
    app()
