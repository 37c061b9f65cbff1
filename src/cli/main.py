"""repokit command line (Typer).

Commands:
- `init`: provision a local project and its GitHub repository.
- `config`: show or update the stored defaults.
- `orgs`: list the organizations available to `--org`.
- `doctor`: environment diagnostics (see `cli.doctor`).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from adapters.git_client import GitClient
from adapters.github_cli import GitHubCli
from adapters.preferences_store import config_exists, config_path, load_preferences, save_preferences
from adapters.ssh_config import list_github_identities
from cli.doctor import app as doctor_app
from cli.ui_components import StepReporter, print_preferences, print_request_summary, print_success
from core.config import AppSettings
from core.domain.errors import InvalidVisibilityValue, PreflightFailed, RepokitError, StepFailed
from core.domain.models import Visibility
from core.services.provisioning import ProvisioningWorkflow, build_request

__version__ = "1.0.0"

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Automate GitHub repository setup: local dir, first commit, remote, push.",
)
app.add_typer(doctor_app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def configure_logging(settings: AppSettings, *, verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else settings.resolved_log_level()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"repokit {__version__}")
        raise typer.Exit()


def _fail(message: str) -> NoReturn:
    _err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every git/gh command to stderr."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    configure_logging(AppSettings(), verbose=verbose)


@app.command()
def init(
    project_name: str = typer.Argument(..., help="Repository and directory name."),
    public: bool = typer.Option(False, "--public", help="Create a public repository."),
    private: bool = typer.Option(False, "--private", help="Create a private repository (default)."),
    here: bool = typer.Option(False, "--here", help="Use the current directory instead of creating one."),
    force: bool = typer.Option(
        False,
        "--force",
        help="With --here: continue even if a git repo or README.md already exists.",
    ),
    org: str | None = typer.Option(None, "--org", help="GitHub organization that will own the repository."),
) -> None:
    """Initialize a new project with a GitHub repository."""

    settings = AppSettings()
    preferences = load_preferences(settings)

    try:
        request = build_request(
            project_name,
            preferences=preferences,
            cwd=Path.cwd(),
            public=public,
            private=private,
            here=here,
            force=force,
            org=org,
        )
    except RepokitError as exc:
        _fail(str(exc))

    print_request_summary(_console, request)

    reporter = StepReporter(_console, _err_console)
    workflow = ProvisioningWorkflow(
        GitClient(settings),
        GitHubCli(settings),
        hooks=reporter.hooks(),
        settings=settings,
        identities=lambda: list_github_identities(settings.ssh_config_file, hostname=settings.github_host),
    )

    try:
        result = workflow.run(request)
    except StepFailed as exc:
        logger.debug("init aborted at %s", exc.step.value, exc_info=exc.cause)
        if isinstance(exc.cause, PreflightFailed) and exc.cause.hint:
            _err_console.print(f"\n[yellow]{escape(exc.cause.hint)}[/yellow]")
        raise typer.Exit(code=1) from exc

    print_success(_console, request, result)


@app.command(name="config")
def config_command(
    show: bool = typer.Option(False, "--show", help="Show current configuration."),
    org: str | None = typer.Option(None, "--org", help='Set default organization (use "personal" to clear).'),
    visibility: str | None = typer.Option(None, "--visibility", help="Set default visibility (public or private)."),
) -> None:
    """View or set default configuration."""

    settings = AppSettings()
    preferences = load_preferences(settings)

    if show or (not org and not visibility):
        print_preferences(
            _console,
            preferences,
            path=config_path(settings),
            exists=config_exists(settings),
        )
        return

    try:
        if visibility:
            try:
                new_visibility = Visibility(visibility)
            except ValueError:
                raise InvalidVisibilityValue(visibility) from None
        else:
            new_visibility = None

        updates: dict[str, object] = {}
        if org:
            updates["default_org"] = None if org == "personal" else org
        if new_visibility is not None:
            updates["default_visibility"] = new_visibility

        if updates:
            preferences = preferences.model_copy(update=updates)
            save_preferences(preferences, settings)
    except RepokitError as exc:
        _fail(str(exc))

    if org:
        if org == "personal":
            _console.print("[green]Set default org to personal account[/green]")
        else:
            _console.print(f'[green]Set default org to "{escape(org)}"[/green]')
    if new_visibility is not None:
        _console.print(f'[green]Set default visibility to "{new_visibility.value}"[/green]')


@app.command()
def orgs() -> None:
    """List organizations you can pass to --org."""

    github = GitHubCli(AppSettings())
    if not github.is_installed():
        _fail("GitHub CLI (gh) is not installed")
    if not github.is_authenticated():
        _fail("GitHub CLI is not authenticated (run: gh auth login)")

    names = github.list_organizations()
    if not names:
        _console.print("[yellow]No organizations found; repositories go to your personal account.[/yellow]")
        return

    table = Table(title="GitHub organizations")
    table.add_column("Organization", style="cyan", no_wrap=True)
    for name in names:
        table.add_row(name)
    _console.print(table)


def run() -> None:
    app()
