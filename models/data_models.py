"""Data models for GitHub pull requests, filters and sessions."""

from datetime import datetime
from typing import Any, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class RepositoryRef(BaseModel):
    """The repository a pull request belongs to."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str
    full_name: str

    @classmethod
    def from_github(cls, raw: dict[str, Any]) -> "RepositoryRef":
        """Build from a GitHub repository object (as returned by /user/repos)."""
        full_name = raw["full_name"]
        owner = (raw.get("owner") or {}).get("login") or full_name.split("/", 1)[0]
        name = raw.get("name") or full_name.split("/", 1)[-1]
        return cls(owner=owner, name=name, full_name=full_name)


class PullRequest(BaseModel):
    """Snapshot of a pull request as listed by the GitHub API.

    Fetched fresh on every query and never persisted. Instances are frozen:
    filtering and sorting always build new lists.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    number: int
    title: str
    body: Optional[str] = None
    state: Literal["open", "closed"]
    repository: RepositoryRef
    created_at: datetime
    updated_at: datetime
    comments: int = 0
    assignees: list[str] = Field(default_factory=list)
    html_url: str
    author: Optional[str] = None
    draft: bool = False

    @classmethod
    def from_github(cls, raw: dict[str, Any], repository: RepositoryRef) -> "PullRequest":
        """Convert a raw pull request object from the GitHub API.

        The list endpoint does not carry a comment count, so missing
        ``comments`` becomes 0.
        """
        return cls(
            id=raw["id"],
            number=raw["number"],
            title=raw.get("title") or "",
            body=raw.get("body"),
            state=raw["state"],
            repository=repository,
            created_at=raw["created_at"],
            updated_at=raw["updated_at"],
            comments=raw.get("comments") or 0,
            assignees=[a["login"] for a in raw.get("assignees") or [] if a and a.get("login")],
            html_url=raw["html_url"],
            author=(raw.get("user") or {}).get("login"),
            draft=bool(raw.get("draft", False)),
        )


class FilterConfig(BaseModel):
    """Filter and sort options for one pull request query.

    ``sort`` is a free string: anything other than
    ``created`` or ``comments`` sorts by last update.
    """

    sort: str = "updated"
    status: Literal["all", "open", "closed"] = "all"
    assignee: Literal["all", "self"] = "all"
    date_range: Literal["all", "today", "week", "month", "year"] = "all"


class GitHubUser(BaseModel):
    """Trimmed GitHub profile kept in the server-side session."""

    login: str
    id: int
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    html_url: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_github(cls, raw: dict[str, Any]) -> "GitHubUser":
        return cls(**{field: raw.get(field) for field in cls.model_fields})


class AuthContext(BaseModel):
    """Authenticated identity and credential for a single request."""

    model_config = ConfigDict(frozen=True)

    user: GitHubUser
    access_token: str


class AnalyzePRRequest(BaseModel):
    """Request body for the AI review endpoint.

    Every field is optional so that missing values can be answered with 400.
    """

    owner: Optional[str] = None
    repo: Optional[str] = None
    pull_number: Optional[Union[int, str]] = None


class ReviewResult(BaseModel):
    """AI review text plus the pull request it was generated for."""

    analysis: str
    title: str
    number: int
    html_url: str
