from __future__ import annotations

import json
import logging

import pytest
from click.testing import CliRunner

from docdrafts.cli import cli, discover_pages


@pytest.fixture(autouse=True)
def restore_logging(clean_ci_env):
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def feature_repo(docs_repo):
    docs_repo.checkout_new("feature")
    docs_repo.write("docs/src/guide.md", "# Guide\n\nUpdated!\n")
    docs_repo.commit("Update guide")
    return docs_repo


def test_discover_pages(tmp_path):
    (tmp_path / "docs" / "guide").mkdir(parents=True)
    (tmp_path / "docs" / "index.md").write_text("# Home")
    (tmp_path / "docs" / "guide" / "basics.md").write_text("# Basics")
    (tmp_path / "docs" / "logo.png").write_bytes(b"")
    assert discover_pages(tmp_path, "docs") == ["guide/basics.md", "index.md"]
    assert discover_pages(tmp_path, "missing") == []


def test_plan_json_on_feature_branch(runner, feature_repo):
    result = runner.invoke(
        cli,
        [
            "plan", "--root", str(feature_repo.root), "--source", "docs/src",
            "--devbranch", "main", "--always-include", "index.md", "--json",
        ],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["devbranch"] == "main"
    assert payload["repo"] is None
    assert payload["pages"] == {
        "index.md": "full",
        "guide.md": "full",
        "api.md": "draft",
        "tutorial.md": "draft",
    }
    assert payload["summary"]["draft_percentage"] == 50


def test_plan_report_text(runner, feature_repo):
    result = runner.invoke(
        cli,
        ["plan", "--root", str(feature_repo.root), "--source", "docs/src", "--devbranch", "main"],
    )
    assert result.exit_code == 0, result.output
    assert "DRAFT PLAN" in result.stdout
    assert "FULL   guide.md" in result.stdout
    assert "DRAFT  api.md" in result.stdout
    assert "Summary: 1 full, 3 draft" in result.stdout


def test_plan_uses_deploy_config_file(runner, feature_repo, tmp_path):
    deploy = tmp_path / "deploy.json"
    deploy.write_text(json.dumps({"devbranch": "main", "repo": "github.com/Test/Pkg.jl", "push_preview": True}))
    result = runner.invoke(
        cli,
        [
            "plan", "--root", str(feature_repo.root), "--source", "docs/src",
            "--deploy-config", str(deploy), "--json",
        ],
        env={"GITHUB_EVENT_NAME": "pull_request", "GITHUB_REPOSITORY": "Test/Pkg.jl"},
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["repo"] == "Test/Pkg.jl"
    assert payload["summary"]["draft"] == ["api.md", "index.md", "tutorial.md"]


def test_plan_repository_mismatch(runner, feature_repo):
    result = runner.invoke(
        cli,
        [
            "plan", "--root", str(feature_repo.root), "--source", "docs/src",
            "--devbranch", "main", "--repo", "Test/Pkg.jl", "--json",
        ],
        env={"GITHUB_EVENT_NAME": "pull_request", "GITHUB_REPOSITORY": "Other/Pkg.jl"},
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["summary"]["draft"] == []


def test_plan_reads_environment_options(runner, feature_repo):
    result = runner.invoke(
        cli,
        ["plan", "--root", str(feature_repo.root), "--source", "docs/src", "--json"],
        env={
            "DOCDRAFTS_DEVBRANCH": "main",
            "DOCDRAFTS_ALWAYS_INCLUDE": "index.md api.md",
            "DOCDRAFTS_USE_CI_ENV": "false",
        },
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["summary"]["draft"] == ["tutorial.md"]


def test_plan_disabled(runner, feature_repo):
    result = runner.invoke(
        cli,
        ["plan", "--root", str(feature_repo.root), "--source", "docs/src", "--devbranch", "main",
         "--disabled", "--json"],
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["summary"]["draft"] == []


def test_plan_bad_deploy_config(runner, feature_repo, tmp_path):
    deploy = tmp_path / "deploy.json"
    deploy.write_text("[]")
    result = runner.invoke(
        cli,
        ["plan", "--root", str(feature_repo.root), "--deploy-config", str(deploy)],
    )
    assert result.exit_code == 1
    assert "Invalid configuration" in result.stderr
    assert "must contain a JSON object" in result.stderr


def test_changed(runner, feature_repo):
    result = runner.invoke(
        cli,
        ["changed", "--root", str(feature_repo.root), "--source", "docs/src", "--devbranch", "main"],
    )
    assert result.exit_code == 0, result.output
    assert "1 modified page(s) against main:" in result.stdout
    assert "  guide.md" in result.stdout


def test_status(runner, feature_repo):
    feature_repo.git("remote", "add", "origin", "https://github.com/Test/Pkg.jl.git")
    result = runner.invoke(
        cli,
        ["status", "--root", str(feature_repo.root), "--devbranch", "main", "--always-include", "index.md"],
        env={"GITHUB_REPOSITORY": "Test/Pkg.jl"},
    )
    assert result.exit_code == 0, result.output
    assert "Devbranch: main" in result.stdout
    assert "Repository: Test/Pkg.jl" in result.stdout
    assert "Repository matches CI: yes" in result.stdout
    assert "Pull request build: yes" in result.stdout
    assert "Always included: index.md" in result.stdout
