"""GitHub adapter — wire records, mappers, event classification and queries."""

from ghbridge.github.api import (
    list_events,
    list_pull_requests,
    list_refs,
    list_repos,
    list_statuses,
    repo_exists,
    set_status,
    update_pull_request,
    user_exists,
)
from ghbridge.github.classifier import EventEnvelope, EventKind, classify, label_for
from ghbridge.github.client import GitHubClient

__all__ = [
    "EventEnvelope",
    "EventKind",
    "GitHubClient",
    "classify",
    "label_for",
    "list_events",
    "list_pull_requests",
    "list_refs",
    "list_repos",
    "list_statuses",
    "repo_exists",
    "set_status",
    "update_pull_request",
    "user_exists",
]
