"""Turn GitHub events (Events API records or webhook deliveries) into canonical events.

Status, pull request and push events are mapped to full entities.  Every
other kind GitHub defines becomes :class:`OtherEvent` with a stable label.
A kind outside :class:`EventKind` is schema drift and raises
:class:`UnknownEventKindError` instead of being dropped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ghbridge.exceptions import UnknownEventKindError
from ghbridge.github.mappers import pull_request_from_event, ref_from_event, status_from_event
from ghbridge.github.wire import (
    GitHubEvent,
    PullRequestEventPayload,
    PushEventPayload,
    StatusEventPayload,
)
from ghbridge.models import Event, OtherEvent, PullRequestEvent, RefEvent, Repo, StatusEvent

_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")


class EventKind(Enum):
    """Every event kind GitHub reports, named as in ``X-GitHub-Event``."""

    STATUS = "status"
    PULL_REQUEST = "pull_request"
    PUSH = "push"
    COMMIT_COMMENT = "commit_comment"
    CREATE = "create"
    DELETE = "delete"
    DISCUSSION = "discussion"
    DOWNLOAD = "download"
    FOLLOW = "follow"
    FORK = "fork"
    FORK_APPLY = "fork_apply"
    GIST = "gist"
    GOLLUM = "gollum"
    ISSUE_COMMENT = "issue_comment"
    ISSUES = "issues"
    MEMBER = "member"
    PUBLIC = "public"
    PULL_REQUEST_REVIEW = "pull_request_review"
    PULL_REQUEST_REVIEW_COMMENT = "pull_request_review_comment"
    PULL_REQUEST_REVIEW_THREAD = "pull_request_review_thread"
    RELEASE = "release"
    SPONSORSHIP = "sponsorship"
    WATCH = "watch"

    @classmethod
    def parse(cls, name: str) -> EventKind:
        try:
            return cls(name)
        except ValueError:
            raise UnknownEventKindError(name) from None

    @classmethod
    def from_api_type(cls, type_name: str) -> EventKind:
        """``PullRequestReviewCommentEvent`` → ``PULL_REQUEST_REVIEW_COMMENT``."""
        if not type_name.endswith("Event"):
            raise UnknownEventKindError(type_name)
        stem = type_name[: -len("Event")]
        try:
            return cls(_CAMEL_BOUNDARY_RE.sub("_", stem).lower())
        except ValueError:
            raise UnknownEventKindError(type_name) from None


def label_for(kind: EventKind) -> str:
    """Lowercase hyphenated label, e.g. ``issue-comment``."""
    return kind.value.replace("_", "-")


@dataclass(frozen=True)
class EventEnvelope:
    """Repository identity plus a tagged payload, whatever the source."""

    repo_full_name: str
    kind: EventKind
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, record: dict[str, Any]) -> EventEnvelope:
        event = GitHubEvent.model_validate(record)
        return cls(
            repo_full_name=event.repo.name,
            kind=EventKind.from_api_type(event.type),
            payload=event.payload,
        )

    @classmethod
    def from_webhook(cls, event_name: str, body: dict[str, Any]) -> EventEnvelope:
        """Build from an ``X-GitHub-Event`` header value and the delivery body."""
        kind = EventKind.parse(event_name)
        repository = body.get("repository") or {}
        return cls(repo_full_name=repository.get("full_name", ""), kind=kind, payload=body)


def classify(envelope: EventEnvelope) -> Event:
    repo = Repo.parse(envelope.repo_full_name)
    kind = envelope.kind
    if kind is EventKind.STATUS:
        status = StatusEventPayload.model_validate(envelope.payload)
        return StatusEvent(status_from_event(repo, status))
    if kind is EventKind.PULL_REQUEST:
        pull = PullRequestEventPayload.model_validate(envelope.payload)
        return PullRequestEvent(pull_request_from_event(repo, pull))
    if kind is EventKind.PUSH:
        push = PushEventPayload.model_validate(envelope.payload)
        return RefEvent(ref_from_event(repo, push))
    return OtherEvent(label_for(kind))
