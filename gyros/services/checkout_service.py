"""
Checkout-with-fallback for gyros.

Repository sets that are split halves of one product rarely share every
branch name. Checking out a feature branch that only exists in some of
them falls back to a fixed branch in the others instead of failing the
whole run.

State machine:

    ATTEMPTING_REQUESTED --ok--> SUCCESS
            |
          failed
            v
    ATTEMPTING_FALLBACK --ok--> FALLBACK_SUCCESS
            |
          failed
            v
          FAILED
"""

import logging
from dataclasses import replace
from typing import List, Optional

from ..config import DEFAULT_FALLBACK_BRANCH
from ..domain.repository import CheckoutState, ExecutionResult, RepositoryEntry
from ..infra.command_runner import CommandRunner

logger = logging.getLogger(__name__)


def fallback_notice(repository: RepositoryEntry, branch: str, fallback: str) -> str:
    return f"'{repository.alias}': could not checkout '{branch}', falling back to '{fallback}'"


class CheckoutStrategy:
    """
    Checks out a branch in one repository, falling back once.

    The returned ExecutionResult is the last git invocation made, tagged
    with the terminal CheckoutState. For FALLBACK_SUCCESS it is exactly
    the fallback checkout's output; the failed first attempt is only
    mentioned in a notice.

    Example:
        strategy = CheckoutStrategy(CommandRunner())
        result = strategy.checkout(repo, "feature/login")
        result.checkout_state  # CheckoutState.FALLBACK_SUCCESS
    """

    def __init__(self, runner: Optional[CommandRunner] = None, fallback: str = DEFAULT_FALLBACK_BRANCH):
        self.runner = runner or CommandRunner()
        self.fallback = fallback
        self.transitions: List[CheckoutState] = []

    def _enter(self, repository: RepositoryEntry, state: CheckoutState) -> None:
        self.transitions.append(state)
        logger.debug(f"{repository.alias}: checkout -> {state.value}")

    def checkout(self, repository: RepositoryEntry, branch: str) -> ExecutionResult:
        """Run the state machine to a terminal state for one repository."""
        self.transitions = []

        self._enter(repository, CheckoutState.ATTEMPTING_REQUESTED)
        requested = self.runner.git(repository, ["checkout", branch])
        if requested.exit_succeeded:
            self._enter(repository, CheckoutState.SUCCESS)
            return replace(requested, checkout_state=CheckoutState.SUCCESS)

        if branch == self.fallback:
            # Retrying the same branch cannot change the outcome
            self._enter(repository, CheckoutState.FAILED)
            return replace(requested, checkout_state=CheckoutState.FAILED)

        notice = fallback_notice(repository, branch, self.fallback)
        self._enter(repository, CheckoutState.ATTEMPTING_FALLBACK)
        fallback = self.runner.git(repository, ["checkout", self.fallback])
        if fallback.exit_succeeded:
            self._enter(repository, CheckoutState.FALLBACK_SUCCESS)
            return replace(
                fallback,
                checkout_state=CheckoutState.FALLBACK_SUCCESS,
                notices=(notice,),
            )

        self._enter(repository, CheckoutState.FAILED)
        return replace(
            fallback,
            checkout_state=CheckoutState.FAILED,
            notices=(notice,),
        )
