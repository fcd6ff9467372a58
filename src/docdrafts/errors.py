# errors.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


class DocDraftsError(Exception):
    """Base class for every error raised by docdrafts."""


class ConfigurationError(DocDraftsError, ValueError):
    """Raised when user supplied configuration is malformed."""


@dataclass
class GitError(DocDraftsError):
    """
    A git invocation that failed or could not be started.

    Carries enough context for a one-glance warning:
      - the git arguments that were run
      - the working directory
      - exit code (None if git never started)
      - captured stderr
    """
    command: List[str]
    cwd: Optional[str] = None
    returncode: Optional[int] = None
    stderr: str = ""
    reason: str = "git command failed"

    def __str__(self) -> str:
        lines = [f"{self.reason}: git {' '.join(self.command)}"]
        if self.cwd:
            lines.append(f"cwd={self.cwd}")
        if self.returncode is not None:
            lines.append(f"exit={self.returncode}")
        if self.stderr:
            lines.append(f"stderr={self.stderr.strip()}")
        return "\n".join(lines)
