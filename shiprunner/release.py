"""Pipeline builders for the check tasks and the multi-branch release."""

from __future__ import annotations

import sys
from datetime import UTC, datetime

from shiprunner.pipeline.schema import Command, Pipeline, Stage
from shiprunner.project.loader import Project
from shiprunner.project.metadata import PackageMetadata

RELEASE_STAGE_ORDER: tuple[str, ...] = (
    "sync-repository",
    "bump-version-and-bundle",
    "generate-and-publish-reports",
    "fast-forward-merge-to-main-branch",
    "push-development-branch",
    "publish-package",
)

_TASK_TITLES = {
    "lint": "Lint...",
    "test": "Run tests...",
    "report": "Generate reports...",
}


def task_stage(project: Project, name: str) -> Stage:
    """Build the single stage behind a check task (``lint``, ``test``, ``report``)."""
    return Stage(
        name=name,
        title=_TASK_TITLES.get(name, name),
        commands=project.spec.tasks.commands_for(name),
    )


def task_pipeline(project: Project, *names: str) -> Pipeline:
    return Pipeline(name="+".join(names), stages=[task_stage(project, n) for n in names])


def watch_pipeline(project: Project) -> Pipeline:
    """The checks rerun on every file change, in configured order."""
    return Pipeline(
        name="watch",
        stages=[task_stage(project, n) for n in project.spec.watch.stages],
    )


def _self_command(project: Project, task: str, *, verbose: bool = False) -> Command:
    """Re-invoke shiprunner as a child process for one task.

    The child sees the same project file and logging level as the parent.
    """
    args = ["-m", "shiprunner"]
    if project.config_file is not None:
        args += ["--config", str(project.config_file)]
    if verbose:
        args.append("--verbose")
    args.append(task)
    return Command(program=sys.executable, args=tuple(args))


def build_release_pipeline(
    project: Project,
    meta: PackageMetadata,
    *,
    now: datetime | None = None,
    verbose: bool = False,
) -> Pipeline:
    """Assemble the release sequence.

    Stage order matters: the version bump and tag happen on the development
    branch before it is merged into the main branch and pushed.
    """
    now = now or datetime.now(UTC)
    release = project.spec.release
    remote, dev, main = release.remote, release.development_branch, release.main_branch
    tag = meta.tag

    def git(*args: str, cwd: str | None = None) -> Command:
        return Command(program="git", args=args, cwd=cwd)

    stages = [
        Stage(
            name="sync-repository",
            title="Sync repository...",
            commands=[git("pull", remote, dev, "--force")],
        ),
        Stage(
            name="bump-version-and-bundle",
            title="Create new version...",
            commands=[
                _self_command(project, "update-version-references", verbose=verbose),
                _self_command(project, "bundle", verbose=verbose),
                git("add", "."),
                git("commit", "-m", release.commit_message.format(version=meta.version, tag=tag)),
                git("tag", "-f", tag),
            ],
        ),
        Stage(
            name="generate-and-publish-reports",
            title="Generate reports...",
            commands=_report_commands(project, now, verbose=verbose),
        ),
        Stage(
            name="fast-forward-merge-to-main-branch",
            title=f"Update {main} branch...",
            commands=[
                git("checkout", main),
                git("merge", "--ff-only", dev),
                git("push", remote, main, "--tags"),
            ],
        ),
        Stage(
            name="push-development-branch",
            title=f"Update {dev} branch...",
            commands=[
                git("checkout", dev),
                git("push", remote, dev, "--tags"),
            ],
        ),
        Stage(
            name="publish-package",
            title="Publish package...",
            commands=list(release.publish),
        ),
    ]
    return Pipeline(name="release", stages=stages)


def _report_commands(project: Project, now: datetime, *, verbose: bool) -> list[Command]:
    reports = project.spec.release.reports
    commands = [_self_command(project, "report", verbose=verbose)]
    if reports.repository is None:
        return commands

    workdir = reports.workdir
    return commands + [
        Command(program="rm", args=("-rf", workdir)),
        Command(
            program="git",
            args=("clone", "--branch", reports.branch, reports.repository, workdir),
        ),
        Command(program="cp", args=("-R", *reports.directories, f"{workdir}/")),
        Command(program="git", args=("add", "-A"), cwd=workdir),
        Command(
            program="git",
            args=("commit", "-m", f"Update reports at {now.isoformat(timespec='seconds')}"),
            cwd=workdir,
        ),
        Command(
            program="git",
            args=("push", project.spec.release.remote, reports.branch),
            cwd=workdir,
        ),
        Command(program="rm", args=("-rf", workdir)),
    ]
