"""Query and mutation operations over the GitHub REST API.

Every operation takes a :class:`GitHubClient` (which carries the token)
and returns a :class:`~ghbridge.result.Result`: ``Ok`` with canonical
entities, or ``Err`` with a readable message.  Transport and API failures
never escape as exceptions.  Structural problems in GitHub's answers
(a malformed ``owner/name``, an unknown event kind, a record missing
required fields) do raise, because they mean the data cannot be trusted.

Nothing here retries or caches; the client handles retries.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any, TypeVar

import httpx
import structlog

from ghbridge.exceptions import GitHubError, NotFoundError
from ghbridge.github.classifier import EventEnvelope, classify
from ghbridge.github.client import GitHubClient
from ghbridge.github.mappers import (
    pull_request_from_query,
    pull_request_to_update,
    ref_from_query,
    repo_from_query,
    status_from_query,
    status_to_update,
)
from ghbridge.github.policy import dedup_by, merge_partial
from ghbridge.github.wire import GitHubPull, GitHubRepository, GitHubStatus, GitRef, request_body
from ghbridge.models import Commit, Event, PullRequest, Ref, Repo, Status
from ghbridge.result import Err, Ok, Result

log = structlog.get_logger("ghbridge.github")

T = TypeVar("T")

REF_KINDS = ("heads", "tags")


def _failed(operation: str, exc: Exception) -> Err:
    log.warning("github.call_failed", operation=operation, error=str(exc))
    return Err(f"GitHub: {exc}")


async def _run(operation: str, call: Awaitable[T]) -> Result[T]:
    try:
        return Ok(await call)
    except (GitHubError, httpx.HTTPError) as exc:
        return _failed(operation, exc)


async def _collect(
    client: GitHubClient, path: str, params: dict[str, Any] | None = None
) -> list[dict[str, Any]]:
    return [item async for item in client.get_paginated(path, params)]


async def _lookup(client: GitHubClient, operation: str, path: str) -> Result[bool]:
    try:
        await client.get(path)
    except NotFoundError:
        return Ok(False)
    except (GitHubError, httpx.HTTPError) as exc:
        return _failed(operation, exc)
    return Ok(True)


# ── existence checks ──────────────────────────────────────────────────────


async def user_exists(client: GitHubClient, user: str) -> Result[bool]:
    """``Ok(False)`` when GitHub answers 404; other failures are ``Err``."""
    return await _lookup(client, "user_exists", f"/users/{user}")


async def repo_exists(client: GitHubClient, repo: Repo) -> Result[bool]:
    return await _lookup(client, "repo_exists", f"/repos/{repo.user}/{repo.repo}")


# ── queries ───────────────────────────────────────────────────────────────


async def list_repos(client: GitHubClient, user: str) -> Result[list[Repo]]:
    items = await _run("list_repos", _collect(client, f"/users/{user}/repos"))
    return items.map(
        lambda records: [
            repo_from_query(user, GitHubRepository.model_validate(r)) for r in records
        ]
    )


async def list_statuses(client: GitHubClient, commit: Commit) -> Result[list[Status]]:
    """Statuses of *commit*, one per context.

    GitHub lists statuses newest first and repeats a context once per
    update, so the first record seen for each context is the current one.
    """
    user, repo = commit.user_repo
    items = await _run(
        "list_statuses", _collect(client, f"/repos/{user}/{repo}/commits/{commit.id}/statuses")
    )

    def to_statuses(records: list[dict[str, Any]]) -> list[Status]:
        parsed = [GitHubStatus.model_validate(r) for r in records]
        statuses = [status_from_query(commit, s) for s in parsed]
        return dedup_by(statuses, key=lambda s: s.context)

    return items.map(to_statuses)


async def list_pull_requests(client: GitHubClient, repo: Repo) -> Result[list[PullRequest]]:
    """Open pull requests only."""
    items = await _run(
        "list_pull_requests",
        _collect(client, f"/repos/{repo.user}/{repo.repo}/pulls", {"state": "open"}),
    )
    return items.map(
        lambda records: [
            pull_request_from_query(repo, GitHubPull.model_validate(r)) for r in records
        ]
    )


async def _list_refs_of_kind(client: GitHubClient, repo: Repo, kind: str) -> Result[list[Ref]]:
    items = await _run(
        f"list_refs.{kind}",
        _collect(client, f"/repos/{repo.user}/{repo.repo}/git/matching-refs/{kind}"),
    )
    return items.map(
        lambda records: [ref_from_query(repo, GitRef.model_validate(r)) for r in records]
    )


async def list_refs(client: GitHubClient, repo: Repo) -> Result[list[Ref]]:
    """Branches followed by tags.

    Heads and tags are fetched concurrently.  If only one of them fails the
    other is returned on its own and the failure is logged; if both fail
    the error carries both messages.
    """
    heads, tags = await asyncio.gather(
        *(_list_refs_of_kind(client, repo, kind) for kind in REF_KINDS)
    )
    log.debug("github.refs", repo=str(repo), heads=_summary(heads), tags=_summary(tags))

    merged = merge_partial(heads, tags)
    if isinstance(merged, Ok):
        for kind, result in zip(REF_KINDS, (heads, tags)):
            if isinstance(result, Err):
                log.error(
                    "github.refs_partial_failure", repo=str(repo), kind=kind, error=result.message
                )
    return merged


def _summary(result: Result[list[Ref]]) -> int | str:
    """Ref count, or the error message."""
    if isinstance(result, Err):
        return result.message
    return len(result.value)


async def list_events(client: GitHubClient, repo: Repo) -> Result[list[Event]]:
    """Recent repository events, classified.

    Raises :class:`~ghbridge.exceptions.UnknownEventKindError` or
    :class:`~ghbridge.exceptions.InvalidRepoError` on records this layer
    cannot interpret.
    """
    items = await _run("list_events", _collect(client, f"/repos/{repo.user}/{repo.repo}/events"))
    return items.map(lambda records: [classify(EventEnvelope.from_api(r)) for r in records])


# ── mutations ─────────────────────────────────────────────────────────────


async def set_status(client: GitHubClient, status: Status) -> Result[None]:
    """Create or replace the status for *status*'s commit and context."""
    user, repo = status.commit.user_repo
    body = request_body(status_to_update(status))
    result = await _run(
        "set_status", client.post(f"/repos/{user}/{repo}/statuses/{status.commit_id}", body)
    )
    return result.map(lambda _: None)


async def update_pull_request(client: GitHubClient, pr: PullRequest) -> Result[None]:
    """Push *pr*'s title and state; head and number are identity only."""
    body = request_body(pull_request_to_update(pr))
    result = await _run(
        "update_pull_request",
        client.patch(f"/repos/{pr.repo.user}/{pr.repo.repo}/pulls/{pr.number}", body),
    )
    return result.map(lambda _: None)
