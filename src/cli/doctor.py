"""Doctor command for environment diagnostics."""

from __future__ import annotations

import shutil

import typer
from rich.console import Console
from rich.table import Table

from adapters.github_cli import GitHubCli
from adapters.preferences_store import config_exists, config_path, load_preferences
from adapters.ssh_config import list_github_identities
from cli.ui_components import build_identities_table
from core.config import AppSettings

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_binary(name: str) -> tuple[bool, str]:
    path = shutil.which(name)
    if path:
        return True, path
    return False, "not found on PATH"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="repokit doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    ok_git, detail_git = _check_binary(settings.git_binary)
    table.add_row("git", "OK" if ok_git else "FAIL", detail_git)

    github = GitHubCli(settings)
    ok_gh, detail_gh = _check_binary(settings.gh_binary)
    table.add_row("gh", "OK" if ok_gh else "FAIL", detail_gh)

    ok_auth = ok_gh and github.is_authenticated()
    if ok_gh:
        table.add_row("gh auth", "OK" if ok_auth else "FAIL", "authenticated" if ok_auth else "run: gh auth login")
    else:
        table.add_row("gh auth", "SKIPPED", "gh is not installed")

    # Preferences
    preferences = load_preferences(settings)
    if config_exists(settings):
        table.add_row("Config file", "OK", str(config_path(settings)))
    else:
        table.add_row("Config file", "OPTIONAL", "not created yet -> built-in defaults")
    table.add_row("Default owner", "OK", preferences.default_org or "personal account")
    table.add_row("Default visibility", "OK", preferences.default_visibility.value)

    identities = list_github_identities(settings.ssh_config_file, hostname=settings.github_host)
    if identities:
        table.add_row("SSH keys", "OK", ", ".join(i.name for i in identities))
    else:
        table.add_row("SSH keys", "OPTIONAL", "no GitHub host blocks -> ssh defaults")

    _console.print(table)

    if not ok_gh:
        _console.print("\n[yellow]Note:[/yellow] Install the GitHub CLI with `brew install gh`.")
    elif not ok_auth:
        _console.print("\n[yellow]Note:[/yellow] Authenticate with `gh auth login` before running `repokit init`.")


@app.command(name="ssh")
def ssh_keys() -> None:
    """List GitHub SSH keys found in the SSH client configuration."""

    settings = AppSettings()
    identities = list_github_identities(settings.ssh_config_file, hostname=settings.github_host)
    if not identities:
        _console.print(f"[yellow]No GitHub host blocks found in {settings.ssh_config_file}[/yellow]")
        return
    _console.print(build_identities_table(identities))
