"""Custom exceptions for ghbridge."""


class GhBridgeError(Exception):
    """Base exception for all ghbridge errors."""


class InvalidRepoError(GhBridgeError, ValueError):
    """Raised when an ``owner/name`` string cannot be split into a repo."""

    def __init__(self, full_name: str):
        self.full_name = full_name
        super().__init__(f"{full_name!r} is not a valid repo name")


class UnknownEventKindError(GhBridgeError, ValueError):
    """Raised when GitHub reports an event kind outside the known set."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"unknown GitHub event kind: {kind!r}")


class GitHubError(GhBridgeError):
    """Base exception for failures talking to the GitHub API."""


class GitHubMessageError(GitHubError):
    """GitHub answered with a 4xx and an error message."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code} {message}")


class NotFoundError(GitHubMessageError):
    """GitHub answered 404 for the requested resource."""


class RateLimitError(GitHubError):
    """Raised when GitHub rate limit is exhausted and we need to wait."""

    def __init__(self, retry_after: int) -> None:
        self.retry_after = retry_after
        super().__init__(f"rate limit exceeded, retry after {retry_after}s")


class InvalidResponseError(GitHubError):
    """GitHub (or a proxy in front of it) answered with a body that is not JSON."""

    def __init__(self, status_code: int, snippet: str):
        self.status_code = status_code
        self.snippet = snippet
        super().__init__(f"{status_code} response is not JSON: {snippet!r}")
