"""
Command specifications for gyros.

A CommandSpec names what to run in every repository. Each variant is a
small frozen dataclass; the dispatcher matches on the variant type and
either turns it into a fixed git argument list or hands it to the
checkout strategy.
"""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class RawArgs:
    """Arbitrary git subcommand and flags, passed through untouched."""
    args: Tuple[str, ...]
    name = "run"

    def git_args(self) -> Tuple[str, ...]:
        return tuple(self.args)


@dataclass(frozen=True)
class FetchAll:
    name = "fetch"

    def git_args(self) -> Tuple[str, ...]:
        return ("fetch", "--all")


@dataclass(frozen=True)
class PullAll:
    name = "pull"

    def git_args(self) -> Tuple[str, ...]:
        return ("pull",)


@dataclass(frozen=True)
class Diff:
    name = "diff"

    def git_args(self) -> Tuple[str, ...]:
        return ("diff",)


@dataclass(frozen=True)
class Show:
    name = "show"

    def git_args(self) -> Tuple[str, ...]:
        return ("show",)


@dataclass(frozen=True)
class Checkout:
    """Checkout a branch, falling back to the fallback branch on failure."""
    branch: str
    name = "checkout"

    def git_args(self) -> Tuple[str, ...]:
        return ("checkout", self.branch)


@dataclass(frozen=True)
class GrepBranches:
    """List all branches and filter them with a text-search pattern."""
    pattern: str
    name = "grep-branches"

    def git_args(self) -> Tuple[str, ...]:
        return ("branch", "-a")


CommandSpec = Union[RawArgs, FetchAll, PullAll, Diff, Show, Checkout, GrepBranches]
