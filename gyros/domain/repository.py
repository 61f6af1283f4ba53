"""
Repository and result domain objects for gyros.

RepositoryEntry is one configured working copy. ExecutionResult records
what happened when a command ran in it, and RunSummary tallies a whole
dispatch. All of them are immutable or append-only and serializable for
JSONL output.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, Tuple


@dataclass(frozen=True)
class RepositoryEntry:
    """A configured repository: a short alias and the directory git runs in."""
    alias: str
    path: str

    @property
    def label(self) -> str:
        """Header label used when reporting this repository."""
        return f"{self.alias} ({self.path})"

    def to_dict(self) -> Dict[str, Any]:
        return {'alias': self.alias, 'path': self.path}


class CheckoutState(Enum):
    """States of the checkout-with-fallback state machine."""
    ATTEMPTING_REQUESTED = "attempting_requested"
    SUCCESS = "success"
    ATTEMPTING_FALLBACK = "attempting_fallback"
    FALLBACK_SUCCESS = "fallback_success"
    FAILED = "failed"


@dataclass(frozen=True)
class ExecutionResult:
    """
    Outcome of one command in one repository.

    A non-zero exit is represented by exit_succeeded=False with the
    captured output. spawn_error is set only when the process could not
    be started at all; stdout and stderr are then empty.
    """
    repository: RepositoryEntry
    args: Tuple[str, ...] = ()
    exit_succeeded: bool = False
    returncode: Optional[int] = None
    stdout: str = ""
    stderr: str = ""
    spawn_error: Optional[str] = None
    checkout_state: Optional[CheckoutState] = None
    notices: Tuple[str, ...] = ()

    @property
    def spawned(self) -> bool:
        return self.spawn_error is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'alias': self.repository.alias,
            'path': self.repository.path,
            'args': list(self.args),
            'success': self.exit_succeeded,
            'returncode': self.returncode,
            'stdout': self.stdout,
            'stderr': self.stderr,
        }
        if self.spawn_error:
            result['spawn_error'] = self.spawn_error
        if self.checkout_state:
            result['checkout_state'] = self.checkout_state.value
        if self.notices:
            result['notices'] = list(self.notices)
        return result


@dataclass
class RunSummary:
    """
    Tally of one dispatch.

    succeeded + failed always equals the number of results added, since
    spawn failures count as failures.
    """
    operation: str = "run"
    succeeded: int = 0
    failed: int = 0
    failures: list = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.succeeded + self.failed

    @property
    def success(self) -> bool:
        """True if no failures occurred."""
        return self.failed == 0

    def add(self, result: ExecutionResult) -> None:
        """Count a result."""
        if result.exit_succeeded:
            self.succeeded += 1
        else:
            self.failed += 1
            self.failures.append(result.repository.alias)

    def __str__(self) -> str:
        return f"{self.succeeded} succeeded - {self.failed} failed"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'type': 'summary',
            'operation': self.operation,
            'total': self.total,
            'succeeded': self.succeeded,
            'failed': self.failed,
            'failures': list(self.failures),
        }
