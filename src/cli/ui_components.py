"""UI components for the CLI (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- The workflow only sees `WorkflowHooks`; spinners and prompts live here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import typer
from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.status import Status
from rich.table import Table

from core.domain.models import Preferences, ProvisionRequest, ProvisionResult, SshIdentity
from core.services.provisioning import Step, WorkflowHooks


def print_header(console: Console, title: str) -> None:
    console.print()
    console.print(f"[bold]{title}[/bold]")
    console.print(Rule(style="grey50"), width=40)


def print_request_summary(console: Console, request: ProvisionRequest) -> None:
    print_header(console, "repokit init")
    console.print(f"  Project:    [cyan]{escape(request.project_name)}[/cyan]")
    console.print(f"  Directory:  [cyan]{escape(str(request.target_dir))}[/cyan]", soft_wrap=True)
    console.print(f"  Visibility: [cyan]{request.visibility.value}[/cyan]")
    console.print(f"  Owner:      [cyan]{escape(request.org or 'personal account')}[/cyan]")
    console.print(Rule(style="grey50"), width=40)
    console.print()


def print_success(console: Console, request: ProvisionRequest, result: ProvisionResult) -> None:
    console.print()
    console.print("[bold green]Done![/bold green]")
    console.print()
    console.print(f"  [grey50]Repository:[/grey50] [cyan]{escape(result.web_url)}[/cyan]", soft_wrap=True)
    console.print(f"  [grey50]Remote:[/grey50]     [cyan]{escape(result.repo_url)}[/cyan]", soft_wrap=True)
    console.print(f"  [grey50]Local path:[/grey50] [cyan]{escape(str(result.local_path))}[/cyan]", soft_wrap=True)
    console.print()
    if not request.use_current_dir:
        console.print(f"[grey50]  cd {escape(request.project_name)} to get started[/grey50]")
        console.print()


def print_preferences(console: Console, preferences: Preferences, *, path: Path, exists: bool) -> None:
    print_header(console, "repokit configuration")
    console.print(f"  Config file: [cyan]{escape(str(path))}[/cyan]", soft_wrap=True)
    console.print(f"  File exists: [cyan]{'yes' if exists else 'no'}[/cyan]")
    console.print(Rule(style="grey50"), width=40)
    console.print(f"  Default org:        [cyan]{escape(preferences.default_org or '(personal account)')}[/cyan]")
    console.print(f"  Default visibility: [cyan]{preferences.default_visibility.value}[/cyan]")
    console.print()


def build_identities_table(identities: Sequence[SshIdentity]) -> Table:
    table = Table(title="GitHub SSH keys")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Account", style="cyan", no_wrap=True)
    table.add_column("Host alias", style="white")
    table.add_column("Identity file", style="magenta")
    for index, identity in enumerate(identities, start=1):
        table.add_row(
            str(index),
            identity.name,
            identity.host,
            str(identity.identity_file) if identity.identity_file else "(ssh default)",
        )
    return table


class StepReporter:
    """Renders workflow progress as `in progress -> succeeded/failed` lines."""

    def __init__(self, console: Console, err_console: Console) -> None:
        self._console = console
        self._err_console = err_console
        self._status: Status | None = None

    def _stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def started(self, step: Step) -> None:
        self._stop()
        self._status = self._console.status(step.running_text)
        self._status.start()

    def succeeded(self, step: Step, text: str) -> None:
        self._stop()
        self._console.print(f"[green]✔[/green] {escape(text)}")

    def failed(self, step: Step, message: str) -> None:
        self._stop()
        self._err_console.print(f"[red]✖ {escape(step.label)} failed:[/red] {escape(message)}")

    def skipped(self, step: Step, reason: str) -> None:
        self._stop()
        self._console.print(f"[grey50]- {escape(step.label)}: {escape(reason)}[/grey50]")

    def choose_identity(self, identities: Sequence[SshIdentity]) -> SshIdentity:
        """Ask which key pushes; Ctrl-C aborts the whole run."""

        self._stop()
        self._console.print(build_identities_table(identities))
        while True:
            choice = typer.prompt("Which SSH key should be used to push?", default=1, type=int)
            if 1 <= choice <= len(identities):
                return identities[choice - 1]
            self._err_console.print(f"[yellow]Pick a number between 1 and {len(identities)}[/yellow]")

    def hooks(self) -> WorkflowHooks:
        return WorkflowHooks(
            step_started=self.started,
            step_succeeded=self.succeeded,
            step_failed=self.failed,
            step_skipped=self.skipped,
            choose_identity=self.choose_identity,
        )
