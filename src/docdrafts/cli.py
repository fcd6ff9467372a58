# cli.py
from __future__ import annotations

import functools
import json
import logging
import os
import sys
from pathlib import Path
from typing import Sequence

import click

from docdrafts.config import effective_devbranch, effective_repo, load_deploy_config
from docdrafts.detect import DOC_EXTENSIONS, ci_repo_matches, get_modified_docs, is_pull_request
from docdrafts.drafting import DraftMarking
from docdrafts.errors import DocDraftsError, GitError
from docdrafts.git_facts.git import get_remote_url
from docdrafts.logs import configure_logging
from docdrafts.model import DEFAULT_DEVBRANCH, BuildContext, DraftConfig
from docdrafts.pipeline import RENDER_ORDER, run_pipeline, stage
from docdrafts.report import DraftSummary, summarize
from docdrafts.ui.console import Console, get_console, set_console


def discover_pages(root: Path, source: str, extensions: Sequence[str] = DOC_EXTENSIONS) -> list[str]:
    """
    Find documentation pages under root/source.

    Returns:
        Page ids (posix paths relative to the source dir), sorted.
    """
    src_dir = root / source
    if not src_dir.is_dir():
        return []
    pages = []
    for path in src_dir.rglob("*"):
        if path.is_file() and path.suffix in extensions:
            pages.append(path.relative_to(src_dir).as_posix())
    return sorted(pages)


def host_repo_hint(root: Path, explicit: str | None) -> str:
    """Repository known to the host: --host-repo, else the origin remote URL."""
    if explicit:
        return explicit
    console = get_console()
    try:
        url = get_remote_url("origin", cwd=root)
        console.print_debug(f"Using repository from git remote: {url}")
        return url
    except GitError as e:
        console.print_debug(f"No origin remote: {e}")
        return ""


def build_config(
    always_include: Sequence[str],
    enabled: bool,
    devbranch: str,
    deploy_config: str | None,
    repo: str | None,
    use_ci_env: bool,
) -> DraftConfig:
    return DraftConfig(
        always_include=tuple(always_include),
        enabled=enabled,
        devbranch=devbranch,
        deploy_config=load_deploy_config(deploy_config) if deploy_config else None,
        repo=repo or None,
        use_ci_env=use_ci_env,
    )


def draft_options(fn):
    """Options shared by every command that needs a DraftConfig."""
    options = [
        click.option("--root", default=".", show_default=True,
                     type=click.Path(file_okay=False, path_type=Path),
                     help="Build root; git commands run here"),
        click.option("--source", default="docs", show_default=True,
                     help="Docs source directory, relative to --root"),
        click.option("--always-include", "always_include", multiple=True,
                     envvar="DOCDRAFTS_ALWAYS_INCLUDE",
                     help="Page that is always built fully (repeatable)"),
        click.option("--devbranch", default=DEFAULT_DEVBRANCH, show_default=True,
                     envvar="DOCDRAFTS_DEVBRANCH", help="Trunk branch to compare against"),
        click.option("--repo", default=None, envvar="DOCDRAFTS_REPO",
                     help="Repository slug (owner/name) expected in CI"),
        click.option("--deploy-config", default=None, envvar="DOCDRAFTS_DEPLOY_CONFIG",
                     type=click.Path(dir_okay=False),
                     help="JSON file with settings shared with the deploy step"),
        click.option("--enabled/--disabled", default=True, envvar="DOCDRAFTS_ENABLED",
                     help="Turn draft marking on or off"),
        click.option("--ci-env/--no-ci-env", "use_ci_env", default=True,
                     envvar="DOCDRAFTS_USE_CI_ENV",
                     help="Use CI environment variables to detect PR builds"),
        click.option("--host-repo", default=None,
                     help="Repository the docs build is configured for (defaults to the origin remote)"),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


def handle_errors(fn):
    """Turn exceptions into a structured message and an exit code."""
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        console = get_console()
        try:
            return fn(*args, **kwargs)
        except KeyboardInterrupt:
            console.print_info("\nInterrupted by user")
            sys.exit(130)
        except DocDraftsError as e:
            console.print_error(
                "Invalid configuration",
                str(e),
                suggestion="Run with --help to see the available options.",
            )
            if console.debug:
                console.print_exception(e)
            sys.exit(1)
        except Exception as e:
            console.print_exception(e)
            sys.exit(1)
    return wrapper


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (debug logging and stack traces)",
)
@click.pass_context
def cli(ctx, debug):
    """docdrafts: mark unchanged documentation pages as drafts on PR builds."""
    console = Console(debug=debug)
    set_console(console)
    configure_logging(level=logging.DEBUG if debug else logging.INFO, force=True)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@draft_options
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the plan as JSON")
@handle_errors
def plan(root, source, always_include, devbranch, repo, deploy_config, enabled,
         use_ci_env, host_repo, as_json):
    """Show which pages would be built fully and which as drafts."""
    console = get_console()
    config = build_config(always_include, enabled, devbranch, deploy_config, repo, use_ci_env)

    root = root.resolve()
    context = BuildContext(
        root=root,
        source=source,
        repo=host_repo_hint(root, host_repo),
        env=dict(os.environ),
    )
    for page_id in discover_pages(root, source):
        context.add_page(page_id)

    summaries: list[DraftSummary] = []
    run_pipeline(
        [
            DraftMarking(config),
            stage("report", lambda c: summaries.append(summarize(c.pages)), order=RENDER_ORDER),
        ],
        context,
    )
    summary = summaries[0]

    if as_json:
        payload = {
            "devbranch": effective_devbranch(config),
            "repo": effective_repo(config, context.repo),
            "pages": {name: "draft" if name in summary.draft else "full"
                      for name in summary.full + summary.draft},
            "summary": summary.to_dict(),
        }
        click.echo(json.dumps(payload, indent=2, sort_keys=True))
        return

    console.print_build_started(str(root), source, summary.total)
    console.print_draft_report(summary)


@cli.command()
@draft_options
@handle_errors
def changed(root, source, always_include, devbranch, repo, deploy_config, enabled,
            use_ci_env, host_repo):
    """List docs pages modified since the branch left the devbranch."""
    console = get_console()
    config = build_config(always_include, enabled, devbranch, deploy_config, repo, use_ci_env)
    branch = effective_devbranch(config)
    modified = sorted(get_modified_docs(branch, root=root.resolve(), source=source))
    console.print_info(f"{len(modified)} modified page(s) against {branch}:")
    console.print_files(modified)


@cli.command()
@draft_options
@handle_errors
def status(root, source, always_include, devbranch, repo, deploy_config, enabled,
           use_ci_env, host_repo):
    """Show the effective settings and what was detected about this build."""
    console = get_console()
    config = build_config(always_include, enabled, devbranch, deploy_config, repo, use_ci_env)
    root = root.resolve()
    env = dict(os.environ)

    branch = effective_devbranch(config)
    slug = effective_repo(config, host_repo_hint(root, host_repo))

    console.print_header("docdrafts status")
    console.print_flag("Enabled", config.enabled)
    console.print_settings(branch, slug)
    if slug is not None and config.use_ci_env:
        console.print_flag("Repository matches CI", ci_repo_matches(slug, env=env))
    console.print_flag("Pull request build", is_pull_request(branch, config.use_ci_env, env=env, root=root))
    if config.always_include:
        console.print_info(f"Always included: {', '.join(config.always_include)}")


if __name__ == "__main__":
    cli()
