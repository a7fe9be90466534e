"""Translate between GitHub wire records and canonical entities.

Every entity has a ``*_from_query`` reader for REST responses and, where
GitHub sends it in events, a ``*_from_event`` reader for event payloads.
Both build the same canonical value.  Mutable entities also get a
``*_to_update`` writer that only carries the fields GitHub accepts on
update; identity fields (head, number, commit) are never sent.
"""

from __future__ import annotations

from ghbridge.codec import decode_context, encode_context, encode_ref
from ghbridge.github.wire import (
    GitHubPull,
    GitHubRepository,
    GitHubStatus,
    GitRef,
    NewStatus,
    PullRequestEventPayload,
    PullUpdate,
    PushEventPayload,
    StatusEventPayload,
)
from ghbridge.models import Commit, PullRequest, Ref, Repo, Status

# ── Repo ──────────────────────────────────────────────────────────────────


def repo_from_query(user: str, record: GitHubRepository) -> Repo:
    return Repo(user=user, repo=record.name)


# ── PullRequest ───────────────────────────────────────────────────────────


def pull_request_from_query(repo: Repo, record: GitHubPull) -> PullRequest:
    return PullRequest(
        head=Commit(repo=repo, id=record.head.sha),
        number=record.number,
        state=record.state,
        title=record.title,
    )


def pull_request_from_event(repo: Repo, payload: PullRequestEventPayload) -> PullRequest:
    pull = payload.pull_request
    return PullRequest(
        head=Commit(repo=repo, id=pull.head.sha),
        number=payload.number,
        state=pull.state,
        title=pull.title,
    )


def pull_request_to_update(pr: PullRequest) -> PullUpdate:
    return PullUpdate(title=pr.title, state=pr.state)


# ── Status ────────────────────────────────────────────────────────────────


def status_from_query(commit: Commit, record: GitHubStatus) -> Status:
    return Status(
        commit=commit,
        context=encode_context(record.context),
        url=record.target_url,
        description=record.description,
        state=record.state,
    )


def status_from_event(repo: Repo, payload: StatusEventPayload) -> Status:
    return Status(
        commit=Commit(repo=repo, id=payload.sha),
        context=encode_context(payload.context),
        url=payload.target_url,
        description=payload.description,
        state=payload.state,
    )


def status_to_update(status: Status) -> NewStatus:
    return NewStatus(
        context=decode_context(status.context),
        target_url=status.url,
        description=status.description,
        state=status.state,
    )


# ── Ref ───────────────────────────────────────────────────────────────────


def ref_from_query(repo: Repo, record: GitRef) -> Ref:
    return Ref(head=Commit(repo=repo, id=record.obj.sha), name=encode_ref(record.ref))


def ref_from_event(repo: Repo, payload: PushEventPayload) -> Ref:
    return Ref(head=Commit(repo=repo, id=payload.head), name=encode_ref(payload.ref))
