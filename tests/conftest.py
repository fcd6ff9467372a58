from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

CI_VARS = (
    "TRAVIS_PULL_REQUEST",
    "GITHUB_EVENT_NAME",
    "CI_MERGE_REQUEST_ID",
    "TRAVIS_REPO_SLUG",
    "GITHUB_REPOSITORY",
)


class GitRepo:
    """Throwaway git repository driven through the git CLI."""

    def __init__(self, root: Path):
        self.root = root

    def git(self, *args: str) -> str:
        proc = subprocess.run(
            ["git", *args],
            cwd=self.root,
            check=True,
            capture_output=True,
            text=True,
        )
        return proc.stdout.strip()

    def write(self, rel: str, text: str) -> Path:
        path = self.root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def commit(self, message: str) -> None:
        self.git("add", "-A")
        self.git("commit", "-q", "-m", message)

    def checkout_new(self, branch: str) -> None:
        self.git("checkout", "-q", "-b", branch)

    def checkout(self, branch: str) -> None:
        self.git("checkout", "-q", branch)


@pytest.fixture
def git_repo(tmp_path, monkeypatch) -> GitRepo:
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    # never walk up into a repository that happens to contain tmp_path
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    root = tmp_path / "project"
    root.mkdir()
    repo = GitRepo(root)
    repo.git("init", "-q")
    repo.git("config", "user.email", "test@example.com")
    repo.git("config", "user.name", "Test User")
    repo.git("config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def docs_repo(git_repo) -> GitRepo:
    """Trunk `main` with docs/src/{index,guide,api,tutorial}.md committed."""
    for name, title in [("index", "Home"), ("guide", "Guide"), ("api", "API"), ("tutorial", "Tutorial")]:
        git_repo.write(f"docs/src/{name}.md", f"# {title}\n")
    git_repo.write("README.md", "# Project\n")
    git_repo.commit("Initial docs")
    git_repo.git("branch", "-M", "main")
    return git_repo


@pytest.fixture
def clean_ci_env(monkeypatch):
    """Remove CI variables from the real environment."""
    for name in CI_VARS:
        monkeypatch.delenv(name, raising=False)
