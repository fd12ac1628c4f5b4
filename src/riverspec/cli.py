"""Command line interface: apply, destroy, import and list declared projects."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import resources  # noqa: F401  (registers entity specs)
from .config import ProviderConfig
from .context import Context
from .errors import LifecycleError
from .hcl import scan
from .managed import ManagedSpec
from .projects import Project
from .provider import Provider
from .spec import registered_specs
from .state import State
from .workspace import Workspace

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="riverspec",
    help="Declarative management of CDN services, domains, origins and certificates.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

ConfigOption = typer.Option(Path("."), "--config", "-c", help="Directory of .hcl files")
StateOption = typer.Option(Path("riverspec.state.json"), "--state", help="State file")
VarOption = typer.Option(None, "--var", help="Template variable as key=value (repeatable)")
EndpointOption = typer.Option(None, "--endpoint", help="Management API endpoint")
TokenOption = typer.Option(None, "--token", help="Management API token")
DryRunOption = typer.Option(False, "--dry-run", help="Read remote state but change nothing")


def make_provider(config: ProviderConfig) -> Provider:
    return Provider.configure(config)


def _parse_vars(pairs: list[str] | None) -> dict[str, str]:
    variables: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {pair!r}", param_hint="--var")
        variables[key] = value
    return variables


def _workspace(config: Path, variables: dict[str, str]) -> Workspace[Project]:
    try:
        return scan(config, context=variables)
    except ValueError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(2) from exc


def _provider(ws: Workspace[Project], endpoint: str | None, token: str | None) -> Provider:
    try:
        return make_provider(ws.provider_config(endpoint=endpoint, token=token))
    except ValueError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(2) from exc


def _select(ws: Workspace[Project], names: list[str] | None) -> list[Project]:
    if not names:
        return list(ws.values())
    missing = [n for n in names if n not in ws]
    if missing:
        err_console.print(f"[red]Error:[/red] unknown project(s): {', '.join(missing)}")
        raise typer.Exit(2)
    return ws.filter(names)


def _report(exc: LifecycleError) -> None:
    for diag in exc.diagnostics:
        err_console.print(f"[red]{diag.severity.value}:[/red] {diag.summary}")
        if diag.detail:
            err_console.print(f"  {diag.detail}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


@app.command("list")
def list_projects(
    config: Path = ConfigOption,
    var: Optional[list[str]] = VarOption,
) -> None:
    """List the projects declared in the configuration."""
    ws = _workspace(config, _parse_vars(var))

    table = Table(title="Projects")
    table.add_column("Name")
    table.add_column("Description")
    table.add_column("Operations", justify="right")
    for project in ws.values():
        ops = sum(len(bp.ops) for bp in project.blueprints)
        table.add_row(project.name, project.description, str(ops))
    console.print(table)


@app.command()
def apply(
    projects: Optional[list[str]] = typer.Argument(None, help="Projects to apply (default: all)"),
    config: Path = ConfigOption,
    state_file: Path = StateOption,
    var: Optional[list[str]] = VarOption,
    endpoint: Optional[str] = EndpointOption,
    token: Optional[str] = TokenOption,
    dry_run: bool = DryRunOption,
) -> None:
    """Create or update everything the selected projects declare."""
    variables = _parse_vars(var)
    ws = _workspace(config, variables)
    selected = _select(ws, projects)
    provider = _provider(ws, endpoint, token)
    state = State.load(state_file)

    try:
        for project in selected:
            project.build(provider=provider, state=state, variables=variables, dry_run=dry_run)
    except LifecycleError as exc:
        _report(exc)
        raise typer.Exit(1) from exc
    except ValueError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc
    finally:
        provider.close()

    console.print(f"[green]Applied[/green] {len(selected)} project(s)")


@app.command()
def destroy(
    projects: Optional[list[str]] = typer.Argument(None, help="Projects to destroy (default: all)"),
    config: Path = ConfigOption,
    state_file: Path = StateOption,
    var: Optional[list[str]] = VarOption,
    endpoint: Optional[str] = EndpointOption,
    token: Optional[str] = TokenOption,
    dry_run: bool = DryRunOption,
) -> None:
    """Delete everything the selected projects declare."""
    variables = _parse_vars(var)
    ws = _workspace(config, variables)
    selected = _select(ws, projects)
    provider = _provider(ws, endpoint, token)
    state = State.load(state_file)

    try:
        for project in reversed(selected):
            project.destroy(provider=provider, state=state, variables=variables, dry_run=dry_run)
    except LifecycleError as exc:
        _report(exc)
        raise typer.Exit(1) from exc
    except ValueError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc
    finally:
        provider.close()

    console.print(f"[green]Destroyed[/green] {len(selected)} project(s)")


@app.command("import")
def import_entity(
    kind: str = typer.Argument(..., help="Entity kind, e.g. domain"),
    label: str = typer.Argument(..., help="Label to record the entity under"),
    entity_id: str = typer.Argument(..., help="Entity id, or service-id,id for service-scoped kinds"),
    config: Path = ConfigOption,
    state_file: Path = StateOption,
    var: Optional[list[str]] = VarOption,
    endpoint: Optional[str] = EndpointOption,
    token: Optional[str] = TokenOption,
) -> None:
    """Adopt an existing remote entity into state."""
    spec_cls = registered_specs().get(kind)
    if spec_cls is None or not issubclass(spec_cls, ManagedSpec):
        err_console.print(f"[red]Error:[/red] unknown entity kind: {kind!r}")
        raise typer.Exit(2)

    ws = _workspace(config, _parse_vars(var))
    provider = _provider(ws, endpoint, token)
    state = State.load(state_file)
    ctx = Context(target=None, provider=provider, state=state)

    try:
        spec_cls.import_(ctx, label, entity_id)
    except LifecycleError as exc:
        _report(exc)
        raise typer.Exit(1) from exc
    finally:
        provider.close()

    console.print(f"[green]Imported[/green] {kind}.{label}")
