"""Canonical entities handed to the synchronization engine.

All entities are immutable value objects built fresh from each API response
or webhook delivery.  Field names here are the stable contract; they do not
follow GitHub's JSON naming.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from ghbridge.codec import SEPARATOR, decode_ref
from ghbridge.exceptions import InvalidRepoError

PullRequestState = Literal["open", "closed"]
StatusState = Literal["pending", "success", "error", "failure"]


@dataclass(frozen=True)
class Repo:
    user: str
    repo: str

    @classmethod
    def parse(cls, full_name: str) -> Repo:
        """Build a repo from ``owner/name``.

        Splits on the first ``/``.  Raises :class:`InvalidRepoError` when the
        separator is missing or either side is empty.
        """
        user, sep, repo = full_name.partition(SEPARATOR)
        if not sep or not user or not repo:
            raise InvalidRepoError(full_name)
        return cls(user=user, repo=repo)

    def __str__(self) -> str:
        return f"{self.user}{SEPARATOR}{self.repo}"


@dataclass(frozen=True)
class Commit:
    repo: Repo
    id: str  # SHA

    @property
    def user_repo(self) -> tuple[str, str]:
        return self.repo.user, self.repo.repo

    def __str__(self) -> str:
        return f"{self.repo}:{self.id}"


@dataclass(frozen=True)
class PullRequest:
    head: Commit
    number: int
    state: PullRequestState
    title: str

    @property
    def repo(self) -> Repo:
        return self.head.repo

    def __str__(self) -> str:
        return f"{self.repo}#{self.number}"


@dataclass(frozen=True)
class Status:
    commit: Commit
    context: tuple[str, ...]
    state: StatusState
    url: str | None = None
    description: str | None = None

    @property
    def commit_id(self) -> str:
        return self.commit.id

    def __str__(self) -> str:
        return f"{self.commit}[{SEPARATOR.join(self.context)}]={self.state}"


@dataclass(frozen=True)
class Ref:
    head: Commit
    name: tuple[str, ...]  # without the leading "refs"

    @property
    def repo(self) -> Repo:
        return self.head.repo

    def __str__(self) -> str:
        return f"{self.repo}:{decode_ref(self.name)}={self.head.id}"


# ── events ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class StatusEvent:
    status: Status


@dataclass(frozen=True)
class PullRequestEvent:
    pull_request: PullRequest


@dataclass(frozen=True)
class RefEvent:
    ref: Ref


@dataclass(frozen=True)
class OtherEvent:
    """Any event this layer does not model; *label* is e.g. ``issue-comment``."""

    label: str


Event = Union[StatusEvent, PullRequestEvent, RefEvent, OtherEvent]
