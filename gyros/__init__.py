"""
gyros - Run git commands in multiple repos.

gyros fans a single git subcommand out across a configured set of local
working copies (for example split "community" and "enterprise"
checkouts), relays each repository's output in order and reports how
many succeeded.

Quick Start:
    from gyros import load, DispatchService, PullAll

    repos = load({"svc-a": "/repos/a", "svc-b": "/repos/b"})
    service = DispatchService()

    for result in service.dispatch(repos, PullAll()):
        print(result.repository.alias, result.exit_succeeded)

    print(service.last_summary)  # "2 succeeded - 0 failed"

Configuration (.gyros.toml in the working directory):
    [repos]
    community = "../community"
    enterprise = "../enterprise"
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    RepositoryEntry,
    ExecutionResult,
    RunSummary,
    CheckoutState,
    CommandSpec,
    RawArgs,
    FetchAll,
    PullAll,
    Diff,
    Show,
    Checkout,
    GrepBranches,
)

# Registry
from .registry import load, filter_by_alias

# Services
from .infra import CommandRunner
from .services import CheckoutStrategy, DispatchService

# Errors
from .exit_codes import CommandError, ConfigError, NotFoundError

# Configuration
from .config import load_config, repos_from_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "RepositoryEntry",
    "ExecutionResult",
    "RunSummary",
    "CheckoutState",
    "CommandSpec",
    "RawArgs",
    "FetchAll",
    "PullAll",
    "Diff",
    "Show",
    "Checkout",
    "GrepBranches",
    # Registry
    "load",
    "filter_by_alias",
    # Services
    "CommandRunner",
    "CheckoutStrategy",
    "DispatchService",
    # Errors
    "CommandError",
    "ConfigError",
    "NotFoundError",
    # Configuration
    "load_config",
    "repos_from_config",
]
