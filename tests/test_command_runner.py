"""
Tests for the CommandRunner.

The running Python interpreter stands in for git so these tests spawn
real processes without depending on git being installed.
"""

import os
import sys

import pytest

from gyros.domain.repository import RepositoryEntry
from gyros.infra.command_runner import CommandRunner, decode_output


@pytest.fixture
def repo(tmp_path):
    return RepositoryEntry(alias="svc-a", path=str(tmp_path))


@pytest.fixture
def runner():
    return CommandRunner(git=sys.executable)


class TestCommandRunner:

    def test_captures_stdout_and_stderr(self, runner, repo):
        result = runner.run(repo, sys.executable, [
            "-c", "import sys; sys.stdout.write('out'); sys.stderr.write('err')",
        ])

        assert result.exit_succeeded is True
        assert result.returncode == 0
        assert result.stdout == "out"
        assert result.stderr == "err"
        assert result.spawn_error is None
        assert result.repository is repo

    def test_non_zero_exit_is_a_result_not_an_error(self, runner, repo):
        result = runner.run(repo, sys.executable, [
            "-c", "import sys; sys.stderr.write('fatal: nope'); sys.exit(3)",
        ])

        assert result.exit_succeeded is False
        assert result.returncode == 3
        assert result.stderr == "fatal: nope"
        assert result.spawned is True

    def test_runs_in_repository_directory(self, runner, repo):
        result = runner.run(repo, sys.executable, ["-c", "import os; print(os.getcwd())"])

        assert os.path.realpath(result.stdout.strip()) == os.path.realpath(repo.path)

    def test_missing_binary_is_spawn_error(self, runner, repo):
        result = runner.run(repo, "gyros-no-such-binary-xyz", ["status"])

        assert result.exit_succeeded is False
        assert result.spawn_error
        assert result.returncode is None
        assert result.stdout == ""
        assert result.stderr == ""

    def test_missing_directory_is_spawn_error(self, runner, tmp_path):
        missing = RepositoryEntry(alias="gone", path=str(tmp_path / "does-not-exist"))

        result = runner.run(missing, sys.executable, ["-c", "print(1)"])

        assert result.exit_succeeded is False
        assert result.spawn_error

    def test_non_utf8_output_is_replaced(self, runner, repo):
        result = runner.run(repo, sys.executable, [
            "-c", "import sys; sys.stdout.buffer.write(b'ok \\xff')",
        ])

        assert result.stdout == "ok \ufffd"

    def test_input_is_fed_to_stdin(self, runner, repo):
        result = runner.run(
            repo,
            sys.executable,
            ["-c", "import sys; print(sys.stdin.read().upper(), end='')"],
            input=b"feature/login\n",
        )

        assert result.stdout == "FEATURE/LOGIN\n"

    def test_stdin_closed_without_input(self, runner, repo):
        result = runner.run(repo, sys.executable, ["-c", "import sys; print(repr(sys.stdin.read()))"])

        assert result.stdout.strip() == "''"

    def test_git_uses_configured_executable(self, runner, repo):
        result = runner.git(repo, ["-c", "print('from git')"])

        assert result.stdout.strip() == "from git"
        assert result.args == ("-c", "print('from git')")

    def test_large_output_is_captured_whole(self, runner, repo):
        result = runner.run(repo, sys.executable, ["-c", "print('x' * 500000)"])

        assert len(result.stdout.strip()) == 500000


class TestDecodeOutput:

    def test_empty(self):
        assert decode_output(b"") == ""
        assert decode_output(None) == ""

    def test_utf8(self):
        assert decode_output("héllo".encode("utf-8")) == "héllo"
