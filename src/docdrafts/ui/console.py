"""Console output formatting utilities for docdrafts."""

from __future__ import annotations

import sys
from typing import Optional

from ..report import DraftSummary


class Console:
    """Centralized console output formatting."""
    
    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.
        
        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug
    
    def print_header(self, title: str) -> None:
        """Print a section header."""
        print(f"\n{title}")
        print("-" * len(title))
    
    def print_build_started(
        self,
        root: str,
        source: str,
        page_count: int,
    ) -> None:
        """Print build start information."""
        print("\nDRAFT PLAN")
        print(f"Root: {root}")
        print(f"Source: {source}")
        print(f"Pages: {page_count}")
        print()

    def print_settings(self, devbranch: str, repo: Optional[str]) -> None:
        print(f"Devbranch: {devbranch}")
        print(f"Repository: {repo or '(not set, validation skipped)'}")

    def print_flag(self, label: str, value: bool) -> None:
        print(f"{label}: {'yes' if value else 'no'}")

    def print_draft_report(self, summary: DraftSummary) -> None:
        """Print one line per page plus a summary."""
        print("=" * 50)
        for name in sorted(summary.full + summary.draft):
            status = "DRAFT" if name in summary.draft else "FULL"
            print(f"  {status:<5}  {name}")
        print("=" * 50)
        print(f"Summary: {len(summary.full)} full, {len(summary.draft)} draft")
        if summary.draft:
            print(f"~{summary.draft_percentage}% of pages marked as drafts")

    def print_files(self, files: list[str]) -> None:
        for f in files:
            print(f"  {f}")
    
    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.
        
        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)
    
    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        else:
            print(f"Error: {exc}", file=sys.stderr)
    
    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)
    
    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
