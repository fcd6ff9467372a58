# model.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import ConfigurationError

# Metadata key downstream renderers consult. Only ever set to True.
DRAFT_KEY = "Draft"

DEFAULT_DEVBRANCH = "master"


@dataclass(frozen=True)
class DeployConfig:
    """
    Settings shared with a separate deploy step.

    Only `devbranch` and `repo` matter here; every other key is kept in
    `extra` so the same value can be handed back to the deploy step intact.
    """
    devbranch: Optional[str] = None
    repo: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DeployConfig":
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"deploy_config must be a mapping, got {type(data).__name__}"
            )
        known = {}
        for key in ("devbranch", "repo"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(
                    f"deploy_config[{key!r}] must be a string, got {type(value).__name__}"
                )
            known[key] = value
        extra = {k: v for k, v in data.items() if k not in ("devbranch", "repo")}
        return cls(devbranch=known["devbranch"], repo=known["repo"], extra=extra)

    def to_dict(self) -> Dict[str, Any]:
        out = dict(self.extra)
        if self.devbranch is not None:
            out["devbranch"] = self.devbranch
        if self.repo is not None:
            out["repo"] = self.repo
        return out


@dataclass(frozen=True)
class DraftConfig:
    """
    User options for draft marking. Built once per build, never mutated.

    always_include: page ids (relative to the docs source dir) that are
        always built fully.
    enabled: master switch.
    devbranch: trunk branch that PR branches are compared against.
    deploy_config: shared deploy settings; its devbranch/repo win over ours.
    repo: explicit "owner/name" slug used to validate the CI repository.
    use_ci_env: consult CI provider environment variables for PR detection.
    """
    always_include: Tuple[str, ...] = ()
    enabled: bool = True
    devbranch: str = DEFAULT_DEVBRANCH
    deploy_config: Optional[DeployConfig] = None
    repo: Optional[str] = None
    use_ci_env: bool = True

    def __post_init__(self) -> None:
        include = self.always_include
        if isinstance(include, str):
            raise ConfigurationError(
                "always_include must be a list of page paths, not a single string"
            )
        include = tuple(include or ())
        bad = [p for p in include if not isinstance(p, str)]
        if bad:
            raise ConfigurationError(f"always_include entries must be strings: {bad!r}")

        if not isinstance(self.devbranch, str) or not self.devbranch:
            raise ConfigurationError("devbranch must be a non-empty string")
        if self.repo is not None and not isinstance(self.repo, str):
            raise ConfigurationError(f"repo must be a string, got {type(self.repo).__name__}")

        deploy = self.deploy_config
        if deploy is not None and not isinstance(deploy, DeployConfig):
            deploy = DeployConfig.from_mapping(deploy)

        # frozen dataclass: normalise in place
        object.__setattr__(self, "always_include", include)
        object.__setattr__(self, "deploy_config", deploy)


@dataclass
class Page:
    """A documentation page as the host pipeline knows it."""
    source: str                     # path relative to the docs source dir
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass
class BuildContext:
    """
    Everything a build stage may look at.

    root:   build root; git runs here.
    source: docs source dir, relative to root. Page ids are relative to it.
    pages:  page id -> Page.
    repo:   repository hint known to the host (e.g. its own repo setting).
    env:    environment used for CI detection.
    """
    root: Path
    pages: Dict[str, Page] = field(default_factory=dict)
    source: str = "docs"
    repo: str = ""
    env: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))

    def __post_init__(self) -> None:
        self.root = Path(self.root)

    def add_page(self, source: str) -> Page:
        page = Page(source=source)
        self.pages[source] = page
        return page
