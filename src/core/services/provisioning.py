"""Provisioning workflow behind `repokit init`.

The workflow is a linear sequence of steps; each one runs only if the
previous succeeded. The first failure is raised as `StepFailed` and nothing
already done is undone: a created directory, commit or remote repository is
left in place for the user to inspect or remove.

Side-effects on the terminal (spinners, prompts) stay out of here. The CLI
plugs them in through `WorkflowHooks`.

Known race: the "already exists" preflight and the later `gh repo create`
are independent calls. If someone else creates the same repository in
between, creation fails and is reported like any other step failure.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, Sequence

from core.config import AppSettings
from core.domain.errors import (
    FilesystemError,
    PreflightFailed,
    RepokitError,
    StepFailed,
    UnsafeReuse,
)
from core.domain.models import Preferences, ProvisionRequest, ProvisionResult, SshIdentity
from core.interfaces.hosting import HostingProvider
from core.interfaces.vcs import VersionControl
from core.validation import validate_name, validate_org

logger = logging.getLogger(__name__)

README_FILENAME = "README.md"


class Step(str, Enum):
    PREFLIGHT = "preflight"
    SAFETY_CHECKS = "safety_checks"
    CREATE_DIRECTORY = "create_directory"
    WRITE_README = "write_readme"
    INIT_REPOSITORY = "init_repository"
    INITIAL_COMMIT = "initial_commit"
    CREATE_REMOTE = "create_remote"
    ADD_REMOTE = "add_remote"
    SELECT_IDENTITY = "select_identity"
    PUSH = "push"

    @property
    def label(self) -> str:
        return _LABELS[self][0]

    @property
    def running_text(self) -> str:
        return _LABELS[self][1]

    @property
    def done_text(self) -> str:
        return _LABELS[self][2]


_LABELS: dict[Step, tuple[str, str, str]] = {
    Step.PREFLIGHT: ("Preflight", "Running preflight checks...", "Preflight checks passed"),
    Step.SAFETY_CHECKS: ("Safety checks", "Checking current directory...", "Current directory is safe to use"),
    Step.CREATE_DIRECTORY: ("Create directory", "Creating project directory...", "Created project directory"),
    Step.WRITE_README: ("Write README", "Creating README.md...", "Created README.md"),
    Step.INIT_REPOSITORY: ("Git init", "Initializing git repository...", "Initialized git repository"),
    Step.INITIAL_COMMIT: ("Initial commit", "Creating initial commit...", "Created initial commit"),
    Step.CREATE_REMOTE: ("Create GitHub repository", "Creating GitHub repository...", "Created GitHub repository"),
    Step.ADD_REMOTE: ("Add remote", "Setting up remote...", "Set up remote origin"),
    Step.SELECT_IDENTITY: ("Select SSH key", "Selecting SSH key...", "Selected SSH key"),
    Step.PUSH: ("Push", "Pushing to GitHub...", "Pushed to GitHub"),
}


@dataclass
class WorkflowHooks:
    """Optional callbacks for UI layers (progress, interactive choice)."""

    step_started: Callable[[Step], None] | None = None
    step_succeeded: Callable[[Step, str], None] | None = None
    step_failed: Callable[[Step, str], None] | None = None
    step_skipped: Callable[[Step, str], None] | None = None
    choose_identity: Callable[[Sequence[SshIdentity]], SshIdentity | None] | None = None


def build_request(
    project_name: str,
    *,
    preferences: Preferences,
    cwd: Path,
    public: bool = False,
    private: bool = False,
    here: bool = False,
    force: bool = False,
    org: str | None = None,
) -> ProvisionRequest:
    """Validate inputs and merge flags over preferences (flag > preference > personal)."""

    name = validate_name(project_name)

    if public:
        is_public = True
    elif private:
        is_public = False
    else:
        is_public = preferences.default_visibility.is_public

    effective_org = org if org is not None else preferences.default_org
    if effective_org is not None:
        effective_org = validate_org(effective_org)

    target_dir = cwd if here else cwd / name
    return ProvisionRequest(
        project_name=name,
        is_public=is_public,
        org=effective_org,
        target_dir=target_dir.resolve(),
        use_current_dir=here,
        force=force,
    )


def _owner_from_remote(repo_url: str) -> str:
    # git@github.com:<owner>/<name>.git
    path = repo_url.split(":", 1)[-1]
    return path.split("/", 1)[0]


class ProvisioningWorkflow:
    """Runs every step of `init` against the given adapters."""

    def __init__(
        self,
        git: VersionControl,
        github: HostingProvider,
        *,
        hooks: WorkflowHooks | None = None,
        settings: AppSettings | None = None,
        identities: Callable[[], list[SshIdentity]] | None = None,
    ) -> None:
        self._git = git
        self._github = github
        self._hooks = hooks or WorkflowHooks()
        self._settings = settings or AppSettings()
        self._identities = identities or (lambda: [])

    @contextmanager
    def _step(self, step: Step) -> Iterator[None]:
        hooks = self._hooks
        if hooks.step_started:
            hooks.step_started(step)
        logger.debug("step %s started", step.value)
        try:
            yield
        except RepokitError as exc:
            if hooks.step_failed:
                hooks.step_failed(step, str(exc))
            raise StepFailed(step, exc) from exc
        except BaseException:
            # Ctrl-C and prompt aborts still close the step before propagating.
            if hooks.step_failed:
                hooks.step_failed(step, "Aborted")
            raise
        if hooks.step_succeeded:
            hooks.step_succeeded(step, step.done_text)
        logger.debug("step %s succeeded", step.value)

    def _skip(self, step: Step, reason: str) -> None:
        logger.debug("step %s skipped: %s", step.value, reason)
        if self._hooks.step_skipped:
            self._hooks.step_skipped(step, reason)

    def run(self, request: ProvisionRequest) -> ProvisionResult:
        directory = request.target_dir
        branch = self._settings.default_branch

        with self._step(Step.PREFLIGHT):
            self._preflight(request)

        if request.use_current_dir:
            with self._step(Step.SAFETY_CHECKS):
                self._check_reuse(request)
            self._skip(Step.CREATE_DIRECTORY, "using current directory")
        else:
            with self._step(Step.CREATE_DIRECTORY):
                self._create_directory(request)

        with self._step(Step.WRITE_README):
            self._write_readme(request)

        with self._step(Step.INIT_REPOSITORY):
            if not self._git.is_repo(directory):
                self._git.init(directory)
            self._git.rename_branch(directory, branch)

        with self._step(Step.INITIAL_COMMIT):
            self._git.add_all(directory)
            self._git.commit(directory, self._settings.commit_message)

        with self._step(Step.CREATE_REMOTE):
            repo_url = self._github.create_repo(request.project_name, request.is_public, request.org)

        with self._step(Step.ADD_REMOTE):
            self._git.add_remote(directory, repo_url)

        identity = self._select_identity()

        with self._step(Step.PUSH):
            identity_file = identity.identity_file if identity else None
            self._git.push(directory, branch, identity_file)

        owner = request.org or _owner_from_remote(repo_url)
        return ProvisionResult(
            repo_url=repo_url,
            web_url=self._github.web_url(owner, request.project_name),
            local_path=directory,
            identity=identity,
        )

    def _preflight(self, request: ProvisionRequest) -> None:
        if not self._github.is_installed():
            raise PreflightFailed(
                "GitHub CLI (gh) is not installed",
                hint="Install it with: brew install gh",
            )
        if not self._github.is_authenticated():
            raise PreflightFailed(
                "GitHub CLI is not authenticated",
                hint="Authenticate with: gh auth login",
            )
        if self._github.repo_exists(request.project_name, request.org):
            raise PreflightFailed(f'Repository "{request.display_name}" already exists on GitHub')

    def _check_reuse(self, request: ProvisionRequest) -> None:
        directory = request.target_dir
        if request.force:
            return
        if self._git.is_repo(directory):
            raise UnsafeReuse(
                "Current directory is already a git repository (use --force to continue anyway)"
            )
        if (directory / README_FILENAME).exists():
            raise UnsafeReuse(f"{README_FILENAME} already exists (use --force to overwrite it)")

    def _create_directory(self, request: ProvisionRequest) -> None:
        directory = request.target_dir
        if directory.exists():
            raise FilesystemError(f'Directory "{request.project_name}" already exists')
        try:
            directory.mkdir(parents=True)
        except OSError as exc:
            raise FilesystemError(f"Failed to create directory: {exc}") from exc

    def _write_readme(self, request: ProvisionRequest) -> None:
        try:
            (request.target_dir / README_FILENAME).write_text(f"# {request.project_name}\n", encoding="utf-8")
        except OSError as exc:
            raise FilesystemError(f"Failed to create {README_FILENAME}: {exc}") from exc

    def _select_identity(self) -> SshIdentity | None:
        identities = self._identities()
        if not identities:
            self._skip(Step.SELECT_IDENTITY, "no GitHub SSH keys configured")
            return None
        if len(identities) == 1:
            self._skip(Step.SELECT_IDENTITY, f"using {identities[0].name}")
            return identities[0]

        with self._step(Step.SELECT_IDENTITY):
            chooser = self._hooks.choose_identity
            if chooser is None:
                logger.debug("no identity chooser, pushing with ssh defaults")
                return None
            return chooser(identities)
