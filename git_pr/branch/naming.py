"""Allocate and parse pull request branch names.

A pull request is a branch called ``<topic>/<index>``, for example
``hotfix/0`` or ``use-git-pr-tool/3``. Every function here is pure: the
caller gathers the branch names from git and passes them in.

Usage as module:
    from git_pr.branch.naming import allocate, parse
    name = allocate("hotfix", ["hotfix/0", "trunk"])
    str(name)  # "hotfix/1"
"""

from __future__ import annotations

import re
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from git_pr.errors import AmbiguousTopic, InvalidTopic, ParseError, UnknownPullRequest

TOPIC_PATTERN = r"[^/\s]+"
INDEX_PATTERN = r"0|[1-9][0-9]*"

_TOPIC_RE = re.compile(TOPIC_PATTERN)
_BRANCH_RE = re.compile(rf"(?P<topic>{TOPIC_PATTERN})/(?P<index>{INDEX_PATTERN})")


@dataclass(frozen=True, order=True)
class BranchName:
    """A parsed pull request branch name."""

    topic: str
    index: int

    def __str__(self) -> str:
        return format_name(self.topic, self.index)


def format_name(topic: str, index: int) -> str:
    """Join a topic and an index into ``<topic>/<index>``."""
    return f"{topic}/{index}"


def validate_topic(topic: str) -> str:
    """Return ``topic`` unchanged, or raise InvalidTopic.

    A topic is non-empty and contains neither '/' nor whitespace.
    """
    if not _TOPIC_RE.fullmatch(topic):
        raise InvalidTopic(topic)
    return topic


def parse(name: str) -> BranchName:
    """Parse ``<topic>/<index>`` into a BranchName.

    Raises:
        ParseError: If ``name`` does not match the grammar. Indices with
            leading zeros ("hotfix/01") are rejected so that formatting a
            parsed name always reproduces the input.
    """
    match = _BRANCH_RE.fullmatch(name)
    if not match:
        raise ParseError(name)
    return BranchName(topic=match.group("topic"), index=int(match.group("index")))


def try_parse(name: str) -> BranchName | None:
    """Parse ``name``, returning None instead of raising."""
    try:
        return parse(name)
    except ParseError:
        return None


def _indices_for(topic: str, existing: Iterable[str]) -> set[int]:
    indices = set()
    for name in existing:
        branch = try_parse(name)
        if branch is not None and branch.topic == topic:
            indices.add(branch.index)
    return indices


def allocate(topic: str, existing: Iterable[str]) -> BranchName:
    """Pick the next free branch name for ``topic``.

    Args:
        topic: The user-supplied topic.
        existing: Branch names known locally and on the remote (remote
            prefix already stripped). Names that do not parse are ignored.

    Returns:
        ``topic/n`` where n is the lowest non-negative index not in use.

    Raises:
        InvalidTopic: If the topic is malformed.
    """
    validate_topic(topic)
    taken = _indices_for(topic, existing)
    index = 0
    while index in taken:
        index += 1
    return BranchName(topic=topic, index=index)


def group_by_topic(names: Iterable[str]) -> tuple[dict[str, list[int]], list[str]]:
    """Group pull request branch names by topic.

    Returns:
        A tuple of (groups, skipped). ``groups`` maps each topic to its
        sorted indices, topics in sorted order. ``skipped`` holds the names
        that did not parse, in input order.
    """
    groups: dict[str, set[int]] = defaultdict(set)
    skipped = []
    for name in names:
        branch = try_parse(name)
        if branch is None:
            skipped.append(name)
            continue
        groups[branch.topic].add(branch.index)
    return {topic: sorted(groups[topic]) for topic in sorted(groups)}, skipped


def matching(argument: str, existing: Iterable[str]) -> list[BranchName]:
    """Return every open pull request the argument refers to.

    A full ``<topic>/<index>`` selects that branch only; a bare topic
    selects all of its indices.

    Raises:
        ParseError: If the argument contains '/' but is not a valid
            ``<topic>/<index>`` name.
        InvalidTopic: If a bare topic is malformed.
        UnknownPullRequest: If nothing in ``existing`` matches.
    """
    existing = list(existing)
    if "/" in argument:
        branch = parse(argument)
        if argument not in existing:
            raise UnknownPullRequest(argument)
        return [branch]

    topic = validate_topic(argument)
    found = [BranchName(topic=topic, index=index) for index in sorted(_indices_for(topic, existing))]
    if not found:
        raise UnknownPullRequest(argument)
    return found


def resolve(argument: str, existing: Iterable[str]) -> BranchName:
    """Resolve a topic or full branch name to exactly one open pull request.

    Raises:
        ParseError: If the argument contains '/' but is not a valid name.
        InvalidTopic: If a bare topic is malformed.
        UnknownPullRequest: If nothing in ``existing`` matches.
        AmbiguousTopic: If a bare topic has more than one open index.
    """
    found = matching(argument, existing)
    if len(found) > 1:
        raise AmbiguousTopic(argument, [str(branch) for branch in found])
    return found[0]
