"""Data models for the PR review dashboard."""

from models.config_models import Config, CredentialsConfig, ServerConfig
from models.data_models import (
    AnalyzePRRequest,
    AuthContext,
    FilterConfig,
    GitHubUser,
    PullRequest,
    RepositoryRef,
    ReviewResult,
)

__all__ = [
    "Config",
    "CredentialsConfig",
    "ServerConfig",
    "AnalyzePRRequest",
    "AuthContext",
    "FilterConfig",
    "GitHubUser",
    "PullRequest",
    "RepositoryRef",
    "ReviewResult",
]
