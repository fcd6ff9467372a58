# config.py
"""Resolve the trunk branch and repository slug from the configured sources."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError
from .model import DeployConfig, DraftConfig

logger = logging.getLogger(__name__)

_SCHEME = re.compile(r"^https?://")
_HOSTS = ("github.com/", "gitlab.com/")


def normalize_repo_slug(repo_url: str) -> str:
    """
    Reduce a repository reference to its "owner/name" slug.

        "https://github.com/owner/repo.git/" -> "owner/repo"
        "gitlab.com/group/sub/project"       -> "group/sub/project"
        "owner/repo"                         -> "owner/repo"

    Purely textual. Interior path segments are left alone.
    """
    repo = _SCHEME.sub("", repo_url)
    for host in _HOSTS:
        if repo.startswith(host):
            repo = repo[len(host):]
    repo = repo.rstrip("/")
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    return repo.rstrip("/")


def effective_devbranch(config: DraftConfig) -> str:
    """deploy_config.devbranch if set, else config.devbranch."""
    deploy = config.deploy_config
    if deploy is not None and deploy.devbranch is not None:
        return deploy.devbranch
    return config.devbranch


def effective_repo(config: DraftConfig, host_repo_hint: Optional[str] = None) -> Optional[str]:
    """
    Repository slug to validate against, or None to skip validation.

    Priority:
      1. deploy_config.repo (normalized)
      2. config.repo (verbatim)
      3. host_repo_hint (normalized)
    """
    deploy = config.deploy_config
    if deploy is not None and deploy.repo is not None:
        return normalize_repo_slug(deploy.repo)

    if config.repo is not None:
        return config.repo

    if host_repo_hint:
        return normalize_repo_slug(host_repo_hint)

    return None


def load_deploy_config(path: str | Path) -> DeployConfig:
    """Read a deploy configuration from a JSON object file."""
    cfg_path = Path(path).expanduser()
    try:
        raw = cfg_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Could not read deploy config {cfg_path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Deploy config {cfg_path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Deploy config {cfg_path} must contain a JSON object, got {type(data).__name__}"
        )

    logger.debug("Loaded deploy config from %s (keys: %s)", cfg_path, sorted(data))
    return DeployConfig.from_mapping(data)
