# detect.py
"""
Build-context detection: is this a pull-request build, is it the right
repository, and which docs changed relative to trunk.

The detectors never raise. Any git failure is logged and resolved to the
answer that builds everything fully.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Sequence, Set

from .errors import GitError
from .git_facts.git import changed_files, current_branch

logger = logging.getLogger(__name__)

# CI provider signals
TRAVIS_PULL_REQUEST = "TRAVIS_PULL_REQUEST"
GITHUB_EVENT_NAME = "GITHUB_EVENT_NAME"
GITLAB_MERGE_REQUEST_ID = "CI_MERGE_REQUEST_ID"
TRAVIS_REPO_SLUG = "TRAVIS_REPO_SLUG"
GITHUB_REPOSITORY = "GITHUB_REPOSITORY"

DOC_EXTENSIONS = (".md",)


def _ci_pull_request_signal(env: Mapping[str, str]) -> Optional[str]:
    """Name of the first CI variable reporting a PR build, or None."""
    travis = env.get(TRAVIS_PULL_REQUEST, "")
    if travis and travis != "false":
        return TRAVIS_PULL_REQUEST

    if env.get(GITHUB_EVENT_NAME, "") == "pull_request":
        return GITHUB_EVENT_NAME

    if env.get(GITLAB_MERGE_REQUEST_ID, ""):
        return GITLAB_MERGE_REQUEST_ID

    return None


def is_pull_request(
    devbranch: str,
    use_ci_env: bool = True,
    *,
    env: Optional[Mapping[str, str]] = None,
    root: Optional[str | Path] = None,
) -> bool:
    """
    True if this build is for a pull request rather than the trunk branch.

    CI signals (Travis, GitHub Actions, GitLab) are checked first when
    `use_ci_env` is set and win outright. Otherwise the checked-out branch is
    compared with `devbranch`. If the branch cannot be read, returns False.
    """
    if use_ci_env:
        signal = _ci_pull_request_signal(os.environ if env is None else env)
        if signal is not None:
            logger.debug("PR build reported by CI (%s)", signal)
            return True

    try:
        branch = current_branch(cwd=root)
    except GitError as e:
        logger.warning("Could not determine git branch, building all pages fully: %s", e)
        return False

    is_pr = branch != devbranch
    logger.debug("Current branch %r vs devbranch %r: pr=%s", branch, devbranch, is_pr)
    return is_pr


def ci_repo_matches(repo_slug: str, env: Optional[Mapping[str, str]] = None) -> bool:
    """
    True if a CI-reported repository contains `repo_slug`.

    Substring match against TRAVIS_REPO_SLUG / GITHUB_REPOSITORY. This is
    permissive ("org/repo" also matches "org/repo-other"); existing setups
    rely on it.
    """
    env = os.environ if env is None else env
    travis_slug = env.get(TRAVIS_REPO_SLUG, "")
    github_repo = env.get(GITHUB_REPOSITORY, "")
    matched = repo_slug in travis_slug or repo_slug in github_repo
    if not matched:
        logger.debug(
            "Repository mismatch: want %r, travis=%r github=%r",
            repo_slug, travis_slug, github_repo,
        )
    return matched


def get_modified_docs(
    devbranch: str,
    *,
    root: Optional[str | Path] = None,
    source: str = "docs",
    extensions: Sequence[str] = DOC_EXTENSIONS,
) -> Set[str]:
    """
    Doc pages changed on this branch since it forked from `devbranch`.

    Runs a three-dot diff limited to `source` (relative to `root`) and returns
    the matching paths with the `source/` prefix removed, so they compare
    equal to page ids. Returns an empty set on any git failure.
    """
    prefix = source.replace(os.sep, "/").strip("/")
    prefix = f"{prefix}/" if prefix else ""

    try:
        files = changed_files(devbranch, "HEAD", cwd=root, paths=[prefix or "."])
    except GitError as e:
        logger.warning("Failed to get git diff, building all pages fully: %s", e)
        return set()

    if not files:
        logger.debug("No modified files detected")
        return set()

    modified: Set[str] = set()
    for f in files:
        f = f.replace("\\", "/")
        if f.startswith(prefix) and f.endswith(tuple(extensions)):
            modified.add(f[len(prefix):])

    return modified
