"""Tests for event classification (Events API records and webhook deliveries)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ghbridge.exceptions import InvalidRepoError, UnknownEventKindError
from ghbridge.github.classifier import EventEnvelope, EventKind, classify, label_for
from ghbridge.models import (
    Commit,
    OtherEvent,
    PullRequest,
    PullRequestEvent,
    Ref,
    RefEvent,
    StatusEvent,
)

# ── helpers ───────────────────────────────────────────────────────────────


def _api_event(type_: str, payload: dict | None = None, repo: str = "octo/widgets") -> dict:
    return {
        "id": "1",
        "type": type_,
        "actor": {"login": "dev1"},
        "repo": {"id": 42, "name": repo},
        "payload": payload or {},
        "public": True,
    }


PR_PAYLOAD = {
    "action": "opened",
    "number": 7,
    "pull_request": {
        "number": 7,
        "state": "open",
        "title": "Fix bug",
        "head": {"sha": "abc123", "ref": "fix-bug"},
    },
}


# ── TestEventKind ─────────────────────────────────────────────────────────


class TestEventKind:
    @pytest.mark.parametrize(
        ("type_name", "kind"),
        [
            ("StatusEvent", EventKind.STATUS),
            ("PullRequestEvent", EventKind.PULL_REQUEST),
            ("PushEvent", EventKind.PUSH),
            ("ForkApplyEvent", EventKind.FORK_APPLY),
            ("IssuesEvent", EventKind.ISSUES),
            ("PullRequestReviewCommentEvent", EventKind.PULL_REQUEST_REVIEW_COMMENT),
        ],
    )
    def test_from_api_type(self, type_name, kind):
        assert EventKind.from_api_type(type_name) is kind

    def test_from_api_type_unknown(self):
        with pytest.raises(UnknownEventKindError):
            EventKind.from_api_type("TeleportEvent")

    def test_from_api_type_without_suffix(self):
        with pytest.raises(UnknownEventKindError):
            EventKind.from_api_type("Push")

    def test_parse_webhook_name(self):
        assert EventKind.parse("issue_comment") is EventKind.ISSUE_COMMENT

    def test_parse_unknown(self):
        with pytest.raises(UnknownEventKindError, match="check_run"):
            EventKind.parse("check_run")

    @pytest.mark.parametrize(
        ("kind", "label"),
        [
            (EventKind.ISSUE_COMMENT, "issue-comment"),
            (EventKind.GOLLUM, "gollum"),
            (EventKind.FORK_APPLY, "fork-apply"),
            (EventKind.PULL_REQUEST_REVIEW_COMMENT, "pull-request-review-comment"),
            (EventKind.COMMIT_COMMENT, "commit-comment"),
        ],
    )
    def test_label(self, kind, label):
        assert label_for(kind) == label

    def test_labels_are_unique(self):
        labels = [label_for(kind) for kind in EventKind]
        assert len(labels) == len(set(labels))


# ── TestClassify ──────────────────────────────────────────────────────────


class TestClassify:
    def test_pull_request(self, repo):
        event = classify(EventEnvelope.from_api(_api_event("PullRequestEvent", PR_PAYLOAD)))
        assert event == PullRequestEvent(
            PullRequest(
                head=Commit(repo=repo, id="abc123"), number=7, state="open", title="Fix bug"
            )
        )

    def test_status(self, repo):
        payload = {
            "sha": "abc123",
            "state": "success",
            "context": "ci/build",
            "target_url": "https://ci.example/1",
            "description": "ok",
        }
        event = classify(EventEnvelope.from_api(_api_event("StatusEvent", payload)))
        assert isinstance(event, StatusEvent)
        assert event.status.commit == Commit(repo=repo, id="abc123")
        assert event.status.context == ("ci", "build")
        assert event.status.url == "https://ci.example/1"

    def test_push(self, repo):
        payload = {"ref": "refs/heads/main", "head": "fff000", "before": "eee999"}
        event = classify(EventEnvelope.from_api(_api_event("PushEvent", payload)))
        assert event == RefEvent(Ref(head=Commit(repo=repo, id="fff000"), name=("heads", "main")))

    def test_gollum_is_other_regardless_of_payload(self):
        body = {"pages": [{"page_name": "Home", "action": "edited"}]}
        assert classify(EventEnvelope.from_api(_api_event("GollumEvent", body))) == OtherEvent(
            "gollum"
        )
        assert classify(EventEnvelope.from_api(_api_event("GollumEvent"))) == OtherEvent("gollum")

    @pytest.mark.parametrize(
        ("type_name", "label"),
        [
            ("IssueCommentEvent", "issue-comment"),
            ("CreateEvent", "create"),
            ("DeleteEvent", "delete"),
            ("WatchEvent", "watch"),
            ("ReleaseEvent", "release"),
            ("CommitCommentEvent", "commit-comment"),
        ],
    )
    def test_other_kinds(self, type_name, label):
        assert classify(EventEnvelope.from_api(_api_event(type_name))) == OtherEvent(label)

    def test_malformed_repo_name_is_fatal(self):
        envelope = EventEnvelope.from_api(_api_event("WatchEvent", repo="no-separator"))
        with pytest.raises(InvalidRepoError):
            classify(envelope)

    def test_unknown_kind_is_fatal(self):
        with pytest.raises(UnknownEventKindError):
            EventEnvelope.from_api(_api_event("BrandNewEvent"))

    def test_incomplete_payload_is_fatal(self):
        envelope = EventEnvelope.from_api(_api_event("PullRequestEvent", {"number": 7}))
        with pytest.raises(ValidationError):
            classify(envelope)


# ── TestWebhook ───────────────────────────────────────────────────────────


class TestWebhook:
    def test_push_delivery(self, repo):
        body = {
            "ref": "refs/tags/v1.0",
            "before": "0" * 40,
            "after": "abc123",
            "repository": {"full_name": "octo/widgets", "name": "widgets"},
        }
        event = classify(EventEnvelope.from_webhook("push", body))
        assert event == RefEvent(Ref(head=Commit(repo=repo, id="abc123"), name=("tags", "v1.0")))

    def test_pull_request_delivery(self, repo):
        body = {**PR_PAYLOAD, "repository": {"full_name": "octo/widgets"}}
        event = classify(EventEnvelope.from_webhook("pull_request", body))
        assert isinstance(event, PullRequestEvent)
        assert event.pull_request.head == Commit(repo=repo, id="abc123")

    def test_other_delivery(self):
        body = {"action": "created", "repository": {"full_name": "octo/widgets"}}
        assert classify(EventEnvelope.from_webhook("issue_comment", body)) == OtherEvent(
            "issue-comment"
        )

    def test_missing_repository_is_fatal(self):
        with pytest.raises(InvalidRepoError):
            classify(EventEnvelope.from_webhook("watch", {"action": "started"}))

    def test_unknown_delivery_kind(self):
        with pytest.raises(UnknownEventKindError):
            EventEnvelope.from_webhook("made_up", {})
