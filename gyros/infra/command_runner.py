"""
Command runner infrastructure for gyros.

Provides a clean abstraction over external process execution.
Every git (and grep) invocation goes through this runner, making it:
- Easy to mock for testing
- Consistent in how failures are represented
- Isolated from dispatch and reporting logic

A non-zero exit is a normal outcome, never an exception. Only a process
that cannot be started at all produces a spawn_error.
"""

import logging
import os
import subprocess
from typing import Optional, Sequence

from ..domain.repository import ExecutionResult, RepositoryEntry

logger = logging.getLogger(__name__)


def decode_output(data: Optional[bytes]) -> str:
    """Decode captured bytes, replacing anything that is not UTF-8."""
    if not data:
        return ""
    return data.decode('utf-8', errors='replace')


class CommandRunner:
    """
    Runs one external command in one working directory.

    Output is fully captured; nothing reaches the terminal until the
    process has exited and the caller relays the result.

    Example:
        runner = CommandRunner()
        result = runner.run(repo, "git", ["status", "-s"])
        if not result.exit_succeeded:
            print(result.stderr)
    """

    def __init__(self, git: str = "git", env: Optional[dict] = None):
        """
        Initialize CommandRunner.

        Args:
            git: git executable used by git() (default: "git")
            env: Environment for spawned processes (inherits if None)
        """
        self.git_executable = git
        self.env = env

    def run(
        self,
        repository: RepositoryEntry,
        command: str,
        args: Sequence[str] = (),
        input: Optional[bytes] = None,
    ) -> ExecutionResult:
        """
        Run `command args...` inside the repository's directory.

        Args:
            repository: Repository whose path is the working directory
            command: Executable name or path
            args: Argument list, passed through without shell interpretation
            input: Bytes fed to the process's stdin

        Returns:
            ExecutionResult with captured stdout/stderr
        """
        argv = [command, *args]
        cwd = os.path.expanduser(repository.path)
        logger.debug(f"Running {argv} in {cwd}")

        try:
            completed = subprocess.run(
                argv,
                cwd=cwd,
                input=input,
                stdin=None if input is not None else subprocess.DEVNULL,
                capture_output=True,
                env=self.env,
            )
        except OSError as e:
            # Missing binary, missing directory, permission denied
            logger.debug(f"Could not start {command} in {cwd}: {e}")
            return ExecutionResult(
                repository=repository,
                args=tuple(args),
                exit_succeeded=False,
                spawn_error=str(e),
            )

        logger.debug(f"{command} exited with {completed.returncode} in {cwd}")
        return ExecutionResult(
            repository=repository,
            args=tuple(args),
            exit_succeeded=completed.returncode == 0,
            returncode=completed.returncode,
            stdout=decode_output(completed.stdout),
            stderr=decode_output(completed.stderr),
        )

    def git(self, repository: RepositoryEntry, args: Sequence[str]) -> ExecutionResult:
        """Run a git subcommand in the repository."""
        return self.run(repository, self.git_executable, args)
