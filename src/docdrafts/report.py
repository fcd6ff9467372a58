# report.py
"""Helpers for renderers and reports that read the Draft marker."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Union

from .model import DRAFT_KEY, Page

DRAFT_BANNER = (
    '<div class="docdrafts-banner" '
    'style="background-color: #fff3cd; border: 2px solid #ffc107; padding: 1rem; margin: 1rem 0;">\n'
    "    <strong>DRAFT</strong>: This page is a preview and may not be complete.\n"
    "    Only modified pages are fully rendered in PR builds.\n"
    "</div>\n"
)

ROBOTS_NOINDEX = '<meta name="robots" content="noindex">'


def is_draft(page: Page) -> bool:
    return bool(page.meta.get(DRAFT_KEY, False))


def draft_banner(html: str, page: Page) -> str:
    """Prepend the draft notice to `html` for draft pages."""
    if is_draft(page):
        return DRAFT_BANNER + html
    return html


def robots_meta(page: Page) -> str:
    """A noindex meta tag for drafts so previews stay out of search engines."""
    return ROBOTS_NOINDEX if is_draft(page) else ""


@dataclass(frozen=True)
class DraftSummary:
    full: List[str] = field(default_factory=list)
    draft: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.full) + len(self.draft)

    @property
    def draft_percentage(self) -> int:
        if not self.total:
            return 0
        return round(100 * len(self.draft) / self.total)

    def to_dict(self) -> dict:
        return {
            "full": self.full,
            "draft": self.draft,
            "total": self.total,
            "draft_percentage": self.draft_percentage,
        }


def summarize(pages: Union[Mapping[str, Page], Iterable[Page]]) -> DraftSummary:
    """Split pages into full and draft, each sorted by page id."""
    items = pages.values() if isinstance(pages, Mapping) else pages
    full: List[str] = []
    draft: List[str] = []
    for page in items:
        (draft if is_draft(page) else full).append(page.source)
    return DraftSummary(full=sorted(full), draft=sorted(draft))
