"""goenv-switch CLI: all commands."""

import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from goenv_switch.errors import ConfigParseError, ConfigReadError, ExternalToolFailure, GoEnvSwitchError
from goenv_switch.manager import ProfileManager
from goenv_switch.models import ProfileSummary
from goenv_switch.settings import (
    DEFAULT_CONFIG_TEMPLATE,
    USER_CONFIG_PATH,
    get_settings,
    load_config,
    read_template,
    resolve_path,
    write_default_config,
)
from goenv_switch.toolchain.go import GoToolchain

app = typer.Typer(
    help="goenv-switch: switch between named Go environment profiles (GOPROXY, GOPRIVATE, GOSUMDB, ...)",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

err_console = Console(stderr=True)

ConfigOpt = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Config file (default: ./config.yaml, then ~/.goenv-switch/config.yaml)"),
]

_INIT_HINT = "Run 'goenv-switch init' to create a default configuration."
_SWITCH_FAILURE_HINT = "Settings applied before the failure were kept. Check them with 'goenv-switch current'."


def _version() -> str:
    try:
        return version("goenv-switch")
    except PackageNotFoundError:
        return "dev"


def _fail(message: str, hint: str | None = None) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    if hint:
        err_console.print(f"[yellow]{escape(hint)}[/yellow]")
    raise typer.Exit(1)


def _format_value(value: str) -> str:
    return escape(value) if value else "[dim](not set)[/dim]"


def _config_override(ctx: typer.Context, config: Path | None) -> Path | None:
    """Per-command -c wins over the global -c given before the command word."""
    return config or ctx.find_root().params.get("config")


# ---------------------------------------------------------------------------
# Manager factory
# ---------------------------------------------------------------------------


def get_manager(config_path: Path) -> ProfileManager:
    try:
        configuration = load_config(config_path)
    except (ConfigReadError, ConfigParseError) as exc:
        _fail(str(exc), hint=_INIT_HINT)
    try:
        settings = get_settings()
    except ValidationError as exc:
        problems = "; ".join(
            f"GOENV_SWITCH_{'_'.join(map(str, err['loc'])).upper()}: {err['msg']}" for err in exc.errors()
        )
        _fail(f"Invalid settings: {problems}")
    return ProfileManager(configuration, GoToolchain(settings))


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _profiles_table(summaries: list[ProfileSummary], numbered: bool = False) -> Table:
    table = Table(title="Profiles")
    if numbered:
        table.add_column("#", style="yellow", justify="right")
    table.add_column("Key", style="cyan")
    table.add_column("Name", overflow="fold")
    table.add_column("Default", style="green")

    for i, s in enumerate(summaries, start=1):
        row = [escape(s.key), escape(s.display_name), "(default)" if s.is_default else ""]
        table.add_row(*([str(i)] + row if numbered else row))
    return table


def _print_applied(name: str, value: str) -> None:
    rprint(f"  [green]✓[/green] {name} = {_format_value(value)}")


def _run_switch(manager: ProfileManager, key: str) -> None:
    profile = manager.show(key)
    rprint(f"[bold]Switching to profile:[/bold] {escape(key)} ({escape(profile.display_name)})")
    try:
        manager.switch(key, on_applied=_print_applied)
    except ExternalToolFailure as exc:
        # Settings written before the failure are not rolled back.
        _fail(
            f"Failed to set {exc.key}: {exc.output}",
            hint=_SWITCH_FAILURE_HINT,
        )
    rprint("[green]Switch complete.[/green]")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"goenv-switch version {_version()}")
        raise typer.Exit()


# Eager on the root and on every command so -v works anywhere on the line.
VersionOpt = Annotated[
    bool,
    typer.Option("--version", "-v", callback=_version_callback, is_eager=True, help="Show version and exit"),
]


@app.callback()
def main(
    config: ConfigOpt = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log go invocations to stderr")] = False,
    show_version: VersionOpt = False,
) -> None:
    """Manage named Go environment profiles and apply them with `go env -w`."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command("list")
def list_cmd(ctx: typer.Context, config: ConfigOpt = None, show_version: VersionOpt = False) -> None:
    """List all profiles."""
    manager = get_manager(resolve_path(_config_override(ctx, config)))
    summaries = manager.list_profiles()
    if not summaries:
        rprint("[yellow]No profiles configured.[/yellow]")
        return
    rprint(_profiles_table(summaries))


@app.command("show")
def show(
    ctx: typer.Context,
    key: Annotated[str | None, typer.Argument(help="Profile key")] = None,
    config: ConfigOpt = None,
    show_version: VersionOpt = False,
) -> None:
    """Show the settings stored in a profile."""
    manager = get_manager(resolve_path(_config_override(ctx, config)))
    if not key:
        _fail("Missing profile key.", hint="Usage: goenv-switch show <key>")

    try:
        profile = manager.show(key)
    except GoEnvSwitchError as exc:
        _fail(str(exc))

    table = Table(title=f"Profile: {escape(key)}")
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")

    table.add_row("Name", _format_value(profile.display_name))
    for name, value in profile.settings():
        table.add_row(name, _format_value(value))

    rprint(table)


@app.command("switch")
def switch(
    ctx: typer.Context,
    key: Annotated[str | None, typer.Argument(help="Profile key to apply")] = None,
    config: ConfigOpt = None,
    show_version: VersionOpt = False,
) -> None:
    """Apply a profile with `go env -w`."""
    manager = get_manager(resolve_path(_config_override(ctx, config)))
    if not key:
        err_console.print("[red]Error:[/red] Missing profile key. Usage: goenv-switch switch <key>")
        summaries = manager.list_profiles()
        if summaries:
            err_console.print(_profiles_table(summaries))
        raise typer.Exit(1)

    try:
        _run_switch(manager, key)
    except GoEnvSwitchError as exc:
        _fail(str(exc))


@app.command("interactive")
def interactive(ctx: typer.Context, config: ConfigOpt = None, show_version: VersionOpt = False) -> None:
    """Pick a profile from a numbered list and apply it."""
    manager = get_manager(resolve_path(_config_override(ctx, config)))

    def choose(summaries: list[ProfileSummary]) -> str:
        rprint(_profiles_table(summaries, numbered=True))
        return typer.prompt(
            f"Enter a number (1-{len(summaries)}) or a profile key",
            default="",
            show_default=False,
        )

    try:
        key = manager.interactive_switch(choose, on_applied=_print_applied)
    except ExternalToolFailure as exc:
        _fail(
            f"Failed to set {exc.key}: {exc.output}",
            hint=_SWITCH_FAILURE_HINT,
        )
    except GoEnvSwitchError as exc:
        _fail(str(exc))
    rprint(f"[green]Switched to {escape(key)}.[/green]")


@app.command("i", hidden=True)
def interactive_alias(ctx: typer.Context, config: ConfigOpt = None, show_version: VersionOpt = False) -> None:
    """Alias for interactive."""
    interactive(ctx, config)


@app.command("current")
def current(ctx: typer.Context, config: ConfigOpt = None, show_version: VersionOpt = False) -> None:
    """Show the settings the go toolchain currently holds."""
    manager = get_manager(resolve_path(_config_override(ctx, config)))
    try:
        values = manager.current()
    except GoEnvSwitchError as exc:
        _fail(str(exc))

    table = Table(title="Current Go environment")
    table.add_column("Setting", style="bold")
    table.add_column("Value", overflow="fold")
    for name, value in values:
        table.add_row(name, _format_value(value))

    rprint(table)


@app.command("init")
def init_cmd(
    ctx: typer.Context,
    config: ConfigOpt = None,
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing config file")] = False,
    show_version: VersionOpt = False,
) -> None:
    """Write a starter config to ~/.goenv-switch/config.yaml.

    With -c, the given file is copied instead of the built-in template.
    An existing file is left untouched (exit 1) unless --force is given.
    """
    target = USER_CONFIG_PATH
    source = _config_override(ctx, config)

    if target.exists() and not force:
        _fail(f"Config file already exists, nothing was written: {target}", hint="Use --force to overwrite it.")

    try:
        content = read_template(source) if source else DEFAULT_CONFIG_TEMPLATE
        write_default_config(target, content)
    except GoEnvSwitchError as exc:
        _fail(str(exc))

    rprint(f"[green]✓[/green] Config written to {escape(str(target))}")


@app.command("version")
def version_cmd() -> None:
    """Show version."""
    typer.echo(f"goenv-switch version {_version()}")


@app.command("help", hidden=True)
def help_cmd(ctx: typer.Context) -> None:
    """Show help."""
    typer.echo(ctx.find_root().get_help())
