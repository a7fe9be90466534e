"""ghbridge — canonical GitHub entities for repository synchronization."""

from ghbridge.models import (
    Commit,
    Event,
    OtherEvent,
    PullRequest,
    PullRequestEvent,
    Ref,
    RefEvent,
    Repo,
    Status,
    StatusEvent,
)
from ghbridge.result import Err, Ok, Result

__all__ = [
    "Commit",
    "Err",
    "Event",
    "Ok",
    "OtherEvent",
    "PullRequest",
    "PullRequestEvent",
    "Ref",
    "RefEvent",
    "Repo",
    "Result",
    "Status",
    "StatusEvent",
]
