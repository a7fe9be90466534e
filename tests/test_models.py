"""Tests for canonical entities."""

from __future__ import annotations

import dataclasses

import pytest

from ghbridge.exceptions import InvalidRepoError
from ghbridge.models import Commit, PullRequest, Ref, Repo, Status


class TestRepo:
    @pytest.mark.parametrize("full_name", ["octo/widgets", "a/b", "my-org/repo.name"])
    def test_parse_inverts_format(self, full_name):
        assert str(Repo.parse(full_name)) == full_name

    def test_parse_fields(self):
        assert Repo.parse("octo/widgets") == Repo(user="octo", repo="widgets")

    def test_parse_splits_on_first_slash(self):
        repo = Repo.parse("octo/widgets/extra")
        assert repo.user == "octo"
        assert repo.repo == "widgets/extra"
        assert str(repo) == "octo/widgets/extra"

    @pytest.mark.parametrize("bad", ["widgets", "", "/widgets", "octo/"])
    def test_parse_rejects_malformed(self, bad):
        with pytest.raises(InvalidRepoError):
            Repo.parse(bad)

    def test_invalid_repo_error_is_value_error(self):
        with pytest.raises(ValueError, match="not a valid repo name"):
            Repo.parse("nope")

    def test_hashable_identity(self):
        assert len({Repo("a", "b"), Repo("a", "b"), Repo("a", "c")}) == 2


class TestEntities:
    def test_frozen(self, commit):
        with pytest.raises(dataclasses.FrozenInstanceError):
            commit.id = "other"  # type: ignore[misc]

    def test_commit_user_repo(self, commit):
        assert commit.user_repo == ("octo", "widgets")

    def test_pull_request_repo(self, commit, repo):
        pr = PullRequest(head=commit, number=7, state="open", title="Fix bug")
        assert pr.repo == repo
        assert str(pr) == "octo/widgets#7"

    def test_status_commit_id(self, commit):
        status = Status(commit=commit, context=("ci", "a"), state="success")
        assert status.commit_id == "abc123"
        assert status.url is None
        assert status.description is None

    def test_ref_str(self, commit):
        ref = Ref(head=commit, name=("heads", "main"))
        assert ref.repo == commit.repo
        assert str(ref) == "octo/widgets:heads/main=abc123"
