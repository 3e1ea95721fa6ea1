"""
Click-based CLI for ral.
"""

import json
import sys
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .core.config import RalSettings, load_settings
from .core.discovery import discover_providers
from .core.log import configure_logging
from .providers import ChangeSet, ExternalProvider, Provider, ProviderRegistry, Resource

console = Console()
err_console = Console(stderr=True)


def _fail(message: str) -> None:
    err_console.print(f"[red]✗ Error:[/red] {escape(message)}", soft_wrap=True)
    sys.exit(1)


def _emit_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2))


def _provider(ctx: click.Context, name: str) -> Provider:
    registry: ProviderRegistry = ctx.obj["registry"]
    provider = registry.get(name)
    if provider is None:
        _fail(f"unknown provider '{name}'")
    return provider


def _print_resource(resource: Resource) -> None:
    table = Table(title=escape(resource.name), show_header=False, title_justify="left")
    table.add_column("attribute", style="cyan")
    table.add_column("value")
    for attr, value in resource.attributes().items():
        table.add_row(escape(attr), escape(value.to_string()))
    console.print(table)


def _print_changes(changes: ChangeSet) -> None:
    if not changes:
        console.print("[green]✓[/green] No changes needed")
        return
    for change in changes:
        was = escape(change.was.to_string() or "(absent)")
        is_ = escape(change.is_.to_string() or "(absent)")
        console.print(f"  [cyan]{escape(change.attr)}[/cyan]: {was} → {is_}")


@click.group()
@click.version_option(version=__version__, prog_name="ral")
@click.option(
    "--provider-path",
    "-p",
    "provider_paths",
    multiple=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory containing *.prov providers (repeatable, overrides RAL_PROVIDER_PATH)",
)
@click.option("--timeout", type=float, help="Timeout in seconds for each provider invocation")
@click.option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--json", "as_json", is_flag=True, help="Emit machine-readable JSON")
@click.pass_context
def cli(
    ctx: click.Context,
    provider_paths: tuple[Path, ...],
    timeout: Optional[float],
    log_level: Optional[str],
    as_json: bool,
) -> None:
    """ral: inspect and reconcile system resources through providers"""
    loaded = load_settings(
        provider_paths=list(provider_paths) or None,
        timeout_seconds=timeout,
        log_level=log_level,
    )
    if loaded.is_err():
        _fail(loaded.err().detail)
    settings: RalSettings = loaded.unwrap()
    configure_logging(settings.log_level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["json"] = as_json
    if "registry" not in ctx.obj:
        ctx.obj["registry"] = discover_providers(settings.provider_paths, config=settings.execution)


@cli.command()
@click.pass_context
def providers(ctx: click.Context) -> None:
    """List the available providers and whether they are suitable"""
    registry: ProviderRegistry = ctx.obj["registry"]
    rows = []
    for provider in registry.get_all():
        suitable = provider.suitable()
        rows.append(
            {
                "name": provider.name,
                "source": provider.source(),
                "suitable": suitable.ok(),
                "error": suitable.err().detail if suitable.is_err() else None,
            }
        )

    if ctx.obj["json"]:
        _emit_json(rows)
        return
    if not rows:
        console.print("[yellow]No providers found[/yellow]")
        return

    table = Table(title="Providers")
    table.add_column("Name", style="cyan")
    table.add_column("Source")
    table.add_column("Suitable")
    for row in rows:
        if row["error"]:
            status = f"[red]error: {escape(row['error'])}[/red]"
        else:
            status = "[green]yes[/green]" if row["suitable"] else "[yellow]no[/yellow]"
        table.add_row(escape(row["name"]), escape(row["source"]), status)
    console.print(table)


@cli.command(name="list")
@click.argument("provider_name")
@click.pass_context
def list_resources(ctx: click.Context, provider_name: str) -> None:
    """List every resource a provider sees"""
    provider = _provider(ctx, provider_name)
    listed = provider.try_instances()
    if listed.is_err():
        _fail(f"{provider.name}: {listed.err().detail}")
    resources = listed.unwrap()

    if ctx.obj["json"]:
        _emit_json([resource.to_dict() for resource in resources])
        return
    if not resources:
        console.print(f"[yellow]{escape(provider.name)} has no resources[/yellow]")
        return
    for resource in resources:
        _print_resource(resource)


@cli.command()
@click.argument("provider_name")
@click.argument("name")
@click.pass_context
def find(ctx: click.Context, provider_name: str, name: str) -> None:
    """Show one resource"""
    provider = _provider(ctx, provider_name)
    found = provider.try_find(name)
    if found.is_err():
        _fail(f"{provider.name}: {found.err().detail}")
    resource = found.unwrap()

    if ctx.obj["json"]:
        _emit_json(resource.to_dict() if resource is not None else None)
        return
    if resource is None:
        console.print(
            f"[yellow]{escape(provider.name)}: no resource named '{escape(name)}'[/yellow]"
        )
        return
    _print_resource(resource)


@cli.command()
@click.argument("provider_name")
@click.argument("name")
@click.argument("assignments", nargs=-1)
@click.option("--noop", is_flag=True, help="Report changes without applying them")
@click.pass_context
def update(
    ctx: click.Context,
    provider_name: str,
    name: str,
    assignments: tuple[str, ...],
    noop: bool,
) -> None:
    """Reconcile a resource toward ATTR=VALUE assignments"""
    provider = _provider(ctx, provider_name)
    if noop and isinstance(provider, ExternalProvider):
        provider.config = provider.config.model_copy(update={"noop": True})

    raw: dict[str, str] = {}
    for assignment in assignments:
        attr, sep, text = assignment.partition("=")
        if not sep or not attr:
            _fail(f"expected ATTR=VALUE but got '{assignment}'")
        raw[attr] = text
    desired = provider.parse_attrs(raw)
    if desired.is_err():
        _fail(f"{provider.name}: {desired.err().detail}")

    found = provider.try_find(name)
    if found.is_err():
        _fail(f"{provider.name}: {found.err().detail}")
    resource = found.unwrap() or provider.create(name)

    updated = resource.update(desired.unwrap())
    if updated.is_err():
        _fail(f"{provider.name}: {updated.err().detail}")
    resource.flush()
    changes = updated.unwrap()

    if ctx.obj["json"]:
        _emit_json({"resource": resource.to_dict(), "changes": changes.to_dict()})
        return
    console.print(f"[bold]{escape(provider.name)}[/bold] {escape(name)}")
    _print_changes(changes)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
