"""Exceptions raised by git-pr-tools.

Library code raises these; each command's ``run()`` turns them into an
``Error: ...`` line on stderr and a non-zero exit code.
"""

from __future__ import annotations


class GitPrError(Exception):
    """Base class for every error a git-pr command can surface."""


class InvalidTopic(GitPrError, ValueError):
    """The topic is empty or contains '/' or whitespace."""

    def __init__(self, topic: str) -> None:
        self.topic = topic
        super().__init__(f"Invalid topic {topic!r}: must be non-empty and contain no '/' or whitespace")


class ParseError(GitPrError, ValueError):
    """A string does not look like '<topic>/<index>'."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Not a pull request branch name: {name!r} (expected '<topic>/<index>')")


class AmbiguousTopic(GitPrError):
    """A bare topic matches more than one open pull request."""

    def __init__(self, topic: str, candidates: list[str]) -> None:
        self.topic = topic
        self.candidates = candidates
        super().__init__(
            f"Topic {topic!r} has {len(candidates)} open pull requests: {', '.join(candidates)}. "
            "Pass the full branch name instead."
        )


class UnknownPullRequest(GitPrError):
    """The argument does not name any open pull request."""

    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"No open pull request matches {argument!r}")


class CollaboratorError(GitPrError):
    """A git command failed or could not be started."""

    def __init__(self, cmd: list[str], returncode: int, stderr: str = "") -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        message = f"'{' '.join(cmd)}' failed with exit code {returncode}"
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(message)
