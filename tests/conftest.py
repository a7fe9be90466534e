"""Shared fixtures for ghbridge tests (no network needed)."""

from __future__ import annotations

import pytest

from ghbridge.models import Commit, Repo


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def repo() -> Repo:
    return Repo(user="octo", repo="widgets")


@pytest.fixture
def commit(repo: Repo) -> Commit:
    return Commit(repo=repo, id="abc123")
