"""Pull request branch naming.

Usage:
    from git_pr.branch import allocate, parse
    name = allocate("hotfix", existing_branches)
"""

from git_pr.branch.naming import (
    BranchName,
    allocate,
    format_name,
    group_by_topic,
    matching,
    parse,
    resolve,
    try_parse,
    validate_topic,
)

__all__ = [
    "BranchName",
    "allocate",
    "format_name",
    "group_by_topic",
    "matching",
    "parse",
    "resolve",
    "try_parse",
    "validate_topic",
]
