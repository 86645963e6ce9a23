"""The release workflow.

One linear sequence of steps, aborted by the first failure:

    load-manifest            read package.json
    check-working-copy       git status --porcelain          (always executed)
    prepublish               npm run prepublish[Only]        (if declared)
    query-published-version  npm view <name> version         (always executed)
    resolve-version          compare + bump
    rewrite-manifest         patch the version text, write it back
    commit                   git commit -m "<msg>" package.json
    tag                      git tag <version>
    push                     git push && git push --tags
    publish                  npm publish --tag=<tag>

In dry-run (noop) mode the two read-only queries still run for real, since
everything after them depends on their answers. Every other command is only
echoed, and package.json is not written.

Nothing is rolled back. A failure after "commit" leaves the repository
committed but untagged (or unpushed, or unpublished) for the operator to
sort out by hand.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from kickout.core.config import Settings
from kickout.core.result import Err, Ok, Result
from kickout.git.repository import Repository
from kickout.output.console import ConsoleProtocol
from kickout.platform.process import CommandRunner
from kickout.registry.npm import Registry
from kickout.release.errors import ReleaseFailure, WorkingCopyNotCleanError
from kickout.release.fsm import Step, StepFailed, run_steps
from kickout.release.manifest import (
    Manifest,
    load_manifest,
    prepublish_script,
    rewrite_version,
    write_manifest,
)
from kickout.release.model import Options
from kickout.release.semver import resolve_version

__all__ = [
    "ReleaseOutcome",
    "WorkflowState",
    "default_commit_message",
    "run_release",
]


def default_commit_message(version: str) -> str:
    return f"release version {version}"


@dataclass(frozen=True, slots=True)
class WorkflowState:
    """Cursor through the release steps plus everything learned so far."""

    step: str = "start"
    manifest: Manifest | None = None
    published_version: str | None = None
    new_version: str | None = None
    new_manifest_text: str | None = None


StepResult = Result[WorkflowState, ReleaseFailure]


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    name: str
    old_version: str
    new_version: str
    dry_run: bool


class _Release:
    def __init__(
        self,
        *,
        options: Options,
        settings: Settings,
        cwd: Path,
        runner: CommandRunner,
    ) -> None:
        self.options = options
        self.settings = settings
        self.cwd = cwd
        self.repo = Repository(runner)
        self.registry = Registry(runner)

    @property
    def dry_run(self) -> bool:
        return self.options.noop

    def steps(self) -> list[Step[WorkflowState, ReleaseFailure]]:
        return [
            Step("load-manifest", self.load_manifest),
            Step("check-working-copy", self.check_working_copy),
            Step("prepublish", self.prepublish),
            Step("query-published-version", self.query_published_version),
            Step("resolve-version", self.resolve_version),
            Step("rewrite-manifest", self.rewrite_manifest),
            Step("commit", self.commit),
            Step("tag", self.tag),
            Step("push", self.push),
            Step("publish", self.publish),
        ]

    def load_manifest(self, state: WorkflowState) -> StepResult:
        loaded = load_manifest(self.cwd, self.settings.manifest_name)
        if isinstance(loaded, Err):
            return loaded
        return Ok(replace(state, manifest=loaded.value))

    def check_working_copy(self, state: WorkflowState) -> StepResult:
        status = self.repo.status()
        if status != "clean":
            return Err(WorkingCopyNotCleanError(status=status))
        return Ok(state)

    def prepublish(self, state: WorkflowState) -> StepResult:
        script = prepublish_script(_manifest(state))
        if script is None:
            return Ok(state)
        ran = self.registry.run_script(script, dry_run=self.dry_run)
        if isinstance(ran, Err):
            return ran
        return Ok(state)

    def query_published_version(self, state: WorkflowState) -> StepResult:
        published = self.registry.published_version(_manifest(state).name)
        if isinstance(published, Err):
            return published
        return Ok(replace(state, published_version=published.value))

    def resolve_version(self, state: WorkflowState) -> StepResult:
        resolved = resolve_version(
            current=_manifest(state).version,
            published=state.published_version or "",
            bump=self.options.bump,
        )
        if isinstance(resolved, Err):
            return resolved
        return Ok(replace(state, new_version=resolved.value))

    def rewrite_manifest(self, state: WorkflowState) -> StepResult:
        manifest = _manifest(state)
        new_version = _new_version(state)
        rewritten = rewrite_version(manifest.raw_text, manifest.version, new_version)
        if isinstance(rewritten, Err):
            return rewritten
        if not self.dry_run:
            written = write_manifest(manifest, rewritten.value)
            if isinstance(written, Err):
                return written
        return Ok(replace(state, new_manifest_text=rewritten.value))

    def commit(self, state: WorkflowState) -> StepResult:
        message = self.options.message or default_commit_message(_new_version(state))
        committed = self.repo.commit(message, _manifest(state).path.name, dry_run=self.dry_run)
        if isinstance(committed, Err):
            return committed
        return Ok(state)

    def tag(self, state: WorkflowState) -> StepResult:
        tagged = self.repo.tag(_new_version(state), dry_run=self.dry_run)
        if isinstance(tagged, Err):
            return tagged
        return Ok(state)

    def push(self, state: WorkflowState) -> StepResult:
        pushed = self.repo.push(dry_run=self.dry_run)
        if isinstance(pushed, Err):
            return pushed
        return Ok(state)

    def publish(self, state: WorkflowState) -> StepResult:
        published = self.registry.publish(self.options.tag, dry_run=self.dry_run)
        if isinstance(published, Err):
            return published
        return Ok(state)


def _manifest(state: WorkflowState) -> Manifest:
    if state.manifest is None:
        raise AssertionError(f"step {state.step!r} ran before load-manifest")
    return state.manifest


def _new_version(state: WorkflowState) -> str:
    if state.new_version is None:
        raise AssertionError(f"step {state.step!r} ran before resolve-version")
    return state.new_version


def _enter(state: WorkflowState, step: str) -> WorkflowState:
    return replace(state, step=step)


def run_release(
    *,
    options: Options,
    settings: Settings,
    cwd: Path,
    runner: CommandRunner,
    console: ConsoleProtocol,
) -> Result[ReleaseOutcome, StepFailed[ReleaseFailure]]:
    """Run the whole release in cwd.

    Returns the outcome, or the step that failed together with its error.
    Never exits the process.
    """
    release = _Release(options=options, settings=settings, cwd=cwd, runner=runner)
    result = run_steps(initial_state=WorkflowState(), steps=release.steps(), enter=_enter)
    if isinstance(result, Err):
        return result

    state = result.value
    manifest = _manifest(state)
    outcome = ReleaseOutcome(
        name=manifest.name,
        old_version=manifest.version,
        new_version=_new_version(state),
        dry_run=options.noop,
    )
    verb = "would release" if outcome.dry_run else "released"
    console.success(f"{verb} {outcome.name} {outcome.new_version}")
    return Ok(outcome)
