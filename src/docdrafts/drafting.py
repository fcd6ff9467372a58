# drafting.py
"""
Decide which pages get a full build and mark the rest as drafts.

Only pull-request builds are drafted. A page is built fully when it is in
`always_include` or was modified on the branch; everything else gets
``page.meta["Draft"] = True``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet, Sequence

from .config import effective_devbranch, effective_repo
from .detect import ci_repo_matches, get_modified_docs, is_pull_request
from .model import DRAFT_KEY, BuildContext, DraftConfig

logger = logging.getLogger(__name__)


def should_build_full(
    page_id: str,
    modified: AbstractSet[str],
    always_include: Sequence[str],
) -> bool:
    """Exact-match membership in the allowlist or in the modified set."""
    return page_id in always_include or page_id in modified


def mark_drafts(context: BuildContext, config: DraftConfig) -> int:
    """
    Mark pages of a PR build as drafts. Returns how many were marked.

    Stops early, leaving every page full, when the feature is disabled, the
    CI repository is not the configured one, or this is not a PR build.
    """
    if not config.enabled:
        logger.debug("Draft marking disabled via config")
        return 0

    devbranch = effective_devbranch(config)
    repo_slug = effective_repo(config, context.repo)
    logger.debug("Effective configuration: devbranch=%r repo=%r", devbranch, repo_slug)

    if repo_slug is not None and config.use_ci_env:
        if not ci_repo_matches(repo_slug, env=context.env):
            logger.debug("Repository %r not reported by CI, skipping draft marking", repo_slug)
            return 0

    if not is_pull_request(devbranch, config.use_ci_env, env=context.env, root=context.root):
        logger.debug("Not a PR build, building all pages fully")
        return 0

    modified = get_modified_docs(devbranch, root=context.root, source=context.source)
    logger.info("Found %d modified docs: %s", len(modified), sorted(modified))

    drafted = 0
    for page_id, page in context.pages.items():
        if should_build_full(page_id, modified, config.always_include):
            logger.debug("Building fully: %s", page_id)
            continue
        page.meta[DRAFT_KEY] = True
        drafted += 1
        logger.debug("Marked as draft: %s", page_id)

    logger.info("Marked %d/%d pages as drafts", drafted, len(context.pages))
    return drafted


@dataclass(frozen=True)
class DraftMarking:
    """Pipeline stage wrapping `mark_drafts`; runs before rendering."""
    config: DraftConfig
    name: str = "draft-marking"
    order: float = 0.9

    def run(self, context: BuildContext) -> None:
        mark_drafts(context, self.config)
