from .config import effective_devbranch, effective_repo, load_deploy_config, normalize_repo_slug
from .detect import ci_repo_matches, get_modified_docs, is_pull_request
from .drafting import DraftMarking, mark_drafts, should_build_full
from .errors import ConfigurationError, DocDraftsError, GitError
from .model import DRAFT_KEY, BuildContext, DeployConfig, DraftConfig, Page
from .pipeline import RENDER_ORDER, FunctionStage, Stage, run_pipeline, stage
from .report import DraftSummary, draft_banner, is_draft, robots_meta, summarize

__all__ = [
    "DRAFT_KEY",
    "RENDER_ORDER",
    "BuildContext",
    "ConfigurationError",
    "DeployConfig",
    "DocDraftsError",
    "DraftConfig",
    "DraftMarking",
    "DraftSummary",
    "FunctionStage",
    "GitError",
    "Page",
    "Stage",
    "ci_repo_matches",
    "draft_banner",
    "effective_devbranch",
    "effective_repo",
    "get_modified_docs",
    "is_draft",
    "is_pull_request",
    "load_deploy_config",
    "mark_drafts",
    "normalize_repo_slug",
    "robots_meta",
    "run_pipeline",
    "should_build_full",
    "stage",
    "summarize",
]
