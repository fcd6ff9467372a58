# git.py
# Small, focused wrapper around the Git CLI.
# This module centralizes all Git interactions so the rest of the codebase
# never needs to call subprocess("git ...") directly.

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from ..errors import GitError

PathLike = str | Path


def _git(args: list[str], cwd: Optional[PathLike] = None, *, strip: bool = True) -> str:
    """
    Execute a git command and return its stdout as a clean string.

    This is the single low-level entry point for all Git operations in this file.

    Args:
        args: List of git arguments (e.g. ["branch", "--show-current"])
        cwd: Directory to run git in. Callers pass the build root explicitly
             so nothing depends on the process-wide working directory.
        strip: Trim surrounding whitespace. Off for NUL-separated output,
             where whitespace belongs to the file names.

    Returns:
        Stdout from the git command (whitespace-trimmed unless strip=False).

    Raises:
        GitError: git exited non-zero or the executable could not be found.
    """
    cwd_str = str(cwd) if cwd is not None else None
    try:
        proc = subprocess.run(
            ["git", *args],
            cwd=cwd_str,
            text=True,
            encoding="utf-8",
            capture_output=True,
        )
    except (FileNotFoundError, NotADirectoryError, PermissionError) as e:
        raise GitError(command=list(args), cwd=cwd_str, reason=f"could not run git ({e})") from e

    if proc.returncode != 0:
        raise GitError(
            command=list(args),
            cwd=cwd_str,
            returncode=proc.returncode,
            stderr=proc.stderr[-2000:],
        )

    return proc.stdout.strip() if strip else proc.stdout


def current_branch(cwd: Optional[PathLike] = None) -> str:
    """
    Return the name of the checked-out branch.

    `git branch --show-current` prints nothing on a detached HEAD; that is
    reported as a GitError too, since there is no branch to compare.
    """
    args = ["branch", "--show-current"]
    name = _git(args, cwd=cwd)
    if not name:
        raise GitError(command=args, cwd=str(cwd) if cwd is not None else None, reason="HEAD is detached")
    return name


def changed_files(
    base: str,
    head: str = "HEAD",
    *,
    cwd: Optional[PathLike] = None,
    paths: Sequence[str] = (),
    merge_base: bool = True,
) -> List[str]:
    """
    Return the files changed between two Git references.

    Paths are relative to ``cwd`` (`--relative`), which keeps them stable when
    the build root is a subdirectory of the repository.

    Args:
        base: The base ref (typically the trunk branch).
        head: The ref to compare (defaults to HEAD).
        cwd: Directory to run git in.
        paths: Optional pathspecs limiting the diff.
        merge_base: Use three-dot `base...head`, i.e. diff against the common
            ancestor, so trunk moving forward does not count as a change.
    """
    dots = "..." if merge_base else ".."
    # -z: NUL-separated, unquoted paths (non-ASCII names stay as they are)
    args = ["diff", "--name-only", "-z", "--relative", f"{base}{dots}{head}"]
    if paths:
        args += ["--", *paths]

    out = _git(args, cwd=cwd, strip=False)

    # No output means no file-level changes
    return [name for name in out.split("\0") if name]


def get_remote_url(remote: str = "origin", cwd: Optional[PathLike] = None) -> str:
    """URL configured for ``remote``."""
    return _git(["remote", "get-url", remote], cwd=cwd)
