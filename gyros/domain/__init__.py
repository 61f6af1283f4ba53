"""
Domain layer for gyros.

Contains pure domain objects with no I/O or side effects:
- RepositoryEntry: A configured alias and working-copy path
- ExecutionResult: Captured outcome of one command in one repository
- RunSummary: Success/failure tally for a dispatch
- CommandSpec variants: What to run in each repository
"""

from .repository import RepositoryEntry, ExecutionResult, RunSummary, CheckoutState
from .command import (
    CommandSpec,
    RawArgs,
    FetchAll,
    PullAll,
    Diff,
    Show,
    Checkout,
    GrepBranches,
)

__all__ = [
    'RepositoryEntry',
    'ExecutionResult',
    'RunSummary',
    'CheckoutState',
    'CommandSpec',
    'RawArgs',
    'FetchAll',
    'PullAll',
    'Diff',
    'Show',
    'Checkout',
    'GrepBranches',
]
