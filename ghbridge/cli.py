"""CLI entry point: ghbridge.

Subcommands:
    ghbridge repos octocat                      # List a user's repositories
    ghbridge refs octocat/hello-world           # Branches and tags
    ghbridge classify push delivery.json        # Classify a saved webhook body
"""

from __future__ import annotations

import asyncio
import dataclasses
import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import click

from ghbridge.core.logging import setup_logging
from ghbridge.exceptions import GhBridgeError
from ghbridge.github import api
from ghbridge.github.classifier import EventEnvelope, classify
from ghbridge.github.client import GitHubClient
from ghbridge.models import Commit, Repo
from ghbridge.result import Err, Result


def _to_json(value: Any) -> Any:
    """JSON-ready form of canonical entities (dataclasses, tuples, lists)."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        data = {"kind": type(value).__name__}
        data.update({f.name: _to_json(getattr(value, f.name)) for f in dataclasses.fields(value)})
        return data
    if isinstance(value, (list, tuple)):
        return [_to_json(v) for v in value]
    return value


def _emit(result: Result[Any]) -> None:
    if isinstance(result, Err):
        click.echo(result.message, err=True)
        raise SystemExit(1)
    click.echo(json.dumps(_to_json(result.value), indent=2))


def _run(ctx: click.Context, operation: Callable[[GitHubClient], Awaitable[Result[Any]]]) -> None:
    async def _call() -> Result[Any]:
        async with GitHubClient(ctx.obj["token"]) as client:
            return await operation(client)

    _emit(asyncio.run(_call()))


def _parse_repo(value: str) -> Repo:
    try:
        return Repo.parse(value)
    except GhBridgeError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.option("--token", envvar="GITHUB_TOKEN", default=None, help="GitHub token")
@click.pass_context
def main(ctx: click.Context, verbose: bool, token: str | None) -> None:
    """ghbridge: canonical view of GitHub repositories, statuses, PRs, refs and events."""
    setup_logging("DEBUG" if verbose else None)
    ctx.ensure_object(dict)
    ctx.obj["token"] = token


@main.command("user-exists")
@click.argument("user")
@click.pass_context
def user_exists(ctx: click.Context, user: str) -> None:
    """Check whether a GitHub user exists."""
    _run(ctx, lambda client: api.user_exists(client, user))


@main.command("repo-exists")
@click.argument("repo")
@click.pass_context
def repo_exists(ctx: click.Context, repo: str) -> None:
    """Check whether OWNER/NAME exists."""
    target = _parse_repo(repo)
    _run(ctx, lambda client: api.repo_exists(client, target))


@main.command("repos")
@click.argument("user")
@click.pass_context
def repos(ctx: click.Context, user: str) -> None:
    """List a user's repositories."""
    _run(ctx, lambda client: api.list_repos(client, user))


@main.command("statuses")
@click.argument("repo")
@click.argument("sha")
@click.pass_context
def statuses(ctx: click.Context, repo: str, sha: str) -> None:
    """List the latest status per context for a commit."""
    commit = Commit(repo=_parse_repo(repo), id=sha)
    _run(ctx, lambda client: api.list_statuses(client, commit))


@main.command("prs")
@click.argument("repo")
@click.pass_context
def prs(ctx: click.Context, repo: str) -> None:
    """List open pull requests."""
    target = _parse_repo(repo)
    _run(ctx, lambda client: api.list_pull_requests(client, target))


@main.command("refs")
@click.argument("repo")
@click.pass_context
def refs(ctx: click.Context, repo: str) -> None:
    """List branches and tags."""
    target = _parse_repo(repo)
    _run(ctx, lambda client: api.list_refs(client, target))


@main.command("events")
@click.argument("repo")
@click.pass_context
def events(ctx: click.Context, repo: str) -> None:
    """List recent repository events."""
    target = _parse_repo(repo)
    _run(ctx, lambda client: api.list_events(client, target))


@main.command("classify")
@click.argument("event_name")
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False))
def classify_cmd(event_name: str, payload_file: str) -> None:
    """Classify a saved webhook delivery (EVENT_NAME as in X-GitHub-Event)."""
    body = json.loads(Path(payload_file).read_text())
    try:
        event = classify(EventEnvelope.from_webhook(event_name, body))
    except ValueError as exc:  # includes pydantic.ValidationError
        raise click.ClickException(str(exc)) from exc
    click.echo(json.dumps(_to_json(event), indent=2))
