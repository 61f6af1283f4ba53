"""
Dispatch service for gyros.

Runs one CommandSpec in every repository of a resolved set, strictly one
after another. Used by every gyros command.
"""

import logging
from typing import Generator, Iterable, List, Optional

from ..config import DEFAULT_FALLBACK_BRANCH
from ..domain.command import (
    Checkout,
    CommandSpec,
    Diff,
    FetchAll,
    GrepBranches,
    PullAll,
    RawArgs,
    Show,
)
from ..domain.repository import ExecutionResult, RepositoryEntry, RunSummary
from ..infra.command_runner import CommandRunner
from .checkout_service import CheckoutStrategy

logger = logging.getLogger(__name__)


class DispatchService:
    """
    Sequential fan-out of a command over repositories.

    dispatch() is a generator: the command for repository N+1 is not
    started until the consumer has taken (and relayed) the result for
    repository N, so per-repository output never interleaves. A failure
    in one repository never stops the loop.

    Example:
        service = DispatchService(runner)

        for result in service.dispatch(repos, PullAll()):
            reporter.render(result)

        summary = service.last_summary
        print(summary)  # "2 succeeded - 0 failed"
    """

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        fallback_branch: Optional[str] = None,
        grep: str = "grep",
    ):
        """
        Initialize DispatchService.

        Args:
            runner: CommandRunner instance (creates new if None)
            fallback_branch: Branch tried when a checkout fails
            grep: Text-search executable for grep-branches
        """
        self.runner = runner or CommandRunner()
        self.checkout_strategy = CheckoutStrategy(
            self.runner, fallback=fallback_branch or DEFAULT_FALLBACK_BRANCH
        )
        self.grep = grep
        self.last_summary: Optional[RunSummary] = None

    def dispatch(
        self,
        repos: Iterable[RepositoryEntry],
        spec: CommandSpec,
    ) -> Generator[ExecutionResult, None, RunSummary]:
        """
        Run `spec` in each repository, in iteration order.

        Yields:
            One ExecutionResult per repository

        Returns:
            RunSummary with the success/failure tally
        """
        summary = RunSummary(operation=spec.name)
        self.last_summary = summary

        for repo in repos:
            result = self.run_one(repo, spec)
            summary.add(result)
            yield result

        logger.debug(f"{spec.name}: {summary}")
        return summary

    def dispatch_all(self, repos: Iterable[RepositoryEntry], spec: CommandSpec) -> List[ExecutionResult]:
        """Run the whole dispatch and collect the results."""
        return list(self.dispatch(repos, spec))

    def run_one(self, repo: RepositoryEntry, spec: CommandSpec) -> ExecutionResult:
        """Run one spec in one repository."""
        if isinstance(spec, Checkout):
            return self.checkout_strategy.checkout(repo, spec.branch)
        if isinstance(spec, GrepBranches):
            return self._grep_branches(repo, spec.pattern)
        if isinstance(spec, (RawArgs, FetchAll, PullAll, Diff, Show)):
            return self.runner.git(repo, spec.git_args())
        raise TypeError(f"Unknown command spec: {spec!r}")

    def _grep_branches(self, repo: RepositoryEntry, pattern: str) -> ExecutionResult:
        """List branches, then feed the listing to the search tool.

        If listing fails, that result is returned and the search is skipped.
        """
        listing = self.runner.git(repo, GrepBranches(pattern).git_args())
        if not listing.exit_succeeded:
            return listing
        return self.runner.run(
            repo,
            self.grep,
            [pattern],
            input=listing.stdout.encode('utf-8'),
        )
