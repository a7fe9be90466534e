"""GitHub JSON shapes, validated with pydantic.

Query responses (``GET /repos/.../pulls`` etc.) and event payloads nest the
same data differently, so each gets its own model.  Unknown fields are
ignored; a missing required field is a ``ValidationError``.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ghbridge.models import PullRequestState, StatusState


class _Wire(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


# ── query responses ───────────────────────────────────────────────────────


class GitHubRepository(_Wire):
    name: str
    full_name: str | None = None


class PullHead(_Wire):
    sha: str
    ref: str | None = None


class GitHubPull(_Wire):
    number: int
    state: PullRequestState
    title: str
    head: PullHead


class GitHubStatus(_Wire):
    state: StatusState
    context: str | None = None
    target_url: str | None = None
    description: str | None = None


class GitObject(_Wire):
    sha: str
    type: str | None = None


class GitRef(_Wire):
    ref: str
    obj: GitObject = Field(alias="object")


# ── event payloads ────────────────────────────────────────────────────────


class StatusEventPayload(_Wire):
    sha: str
    state: StatusState
    context: str | None = None
    target_url: str | None = None
    description: str | None = None


class PullRequestEventPayload(_Wire):
    number: int
    pull_request: GitHubPull


class PushEventPayload(_Wire):
    ref: str
    # Events API calls it "head", webhook deliveries "after".
    head: str = Field(validation_alias=AliasChoices("head", "after"))


class GitHubEventRepo(_Wire):
    name: str  # "owner/name"


class GitHubEvent(_Wire):
    """One record of ``GET /repos/{owner}/{repo}/events``."""

    type: str
    repo: GitHubEventRepo
    payload: dict[str, Any] = Field(default_factory=dict)


# ── request bodies ────────────────────────────────────────────────────────


class PullUpdate(_Wire):
    """Body of ``PATCH /repos/{owner}/{repo}/pulls/{number}``."""

    title: str | None = None
    body: str | None = None
    state: PullRequestState | None = None


class NewStatus(_Wire):
    """Body of ``POST /repos/{owner}/{repo}/statuses/{sha}``."""

    state: StatusState
    context: str | None = None
    target_url: str | None = None
    description: str | None = None


def request_body(model: BaseModel) -> dict[str, Any]:
    """JSON body for a request model; unset fields are left out."""
    return model.model_dump(exclude_none=True)
