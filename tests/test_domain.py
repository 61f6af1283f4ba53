"""
Tests for gyros domain objects.

Tests cover:
- RepositoryEntry immutability and labels
- ExecutionResult serialization
- RunSummary counting
- CommandSpec argument lists
"""

import dataclasses

import pytest

from gyros.domain import (
    CheckoutState,
    Checkout,
    Diff,
    ExecutionResult,
    FetchAll,
    GrepBranches,
    PullAll,
    RawArgs,
    RepositoryEntry,
    RunSummary,
    Show,
)


class TestRepositoryEntry:
    """Tests for RepositoryEntry dataclass."""

    def test_fields_and_label(self):
        entry = RepositoryEntry(alias="svc-a", path="/repos/a")

        assert entry.alias == "svc-a"
        assert entry.path == "/repos/a"
        assert entry.label == "svc-a (/repos/a)"

    def test_is_immutable(self):
        entry = RepositoryEntry(alias="svc-a", path="/repos/a")

        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.alias = "other"

    def test_to_dict(self):
        entry = RepositoryEntry(alias="svc-a", path="/repos/a")
        assert entry.to_dict() == {'alias': 'svc-a', 'path': '/repos/a'}


class TestExecutionResult:
    """Tests for ExecutionResult dataclass."""

    def test_successful_result_to_dict(self):
        result = ExecutionResult(
            repository=RepositoryEntry("svc-a", "/repos/a"),
            args=("pull",),
            exit_succeeded=True,
            returncode=0,
            stdout="Already up to date.\n",
        )

        d = result.to_dict()

        assert d['alias'] == "svc-a"
        assert d['path'] == "/repos/a"
        assert d['args'] == ["pull"]
        assert d['success'] is True
        assert d['returncode'] == 0
        assert d['stdout'] == "Already up to date.\n"
        assert 'spawn_error' not in d
        assert 'checkout_state' not in d

    def test_spawn_failure(self):
        result = ExecutionResult(
            repository=RepositoryEntry("svc-a", "/missing"),
            args=("status",),
            spawn_error="No such file or directory",
        )

        assert result.spawned is False
        assert result.exit_succeeded is False
        assert result.stdout == ""
        assert result.to_dict()['spawn_error'] == "No such file or directory"

    def test_checkout_fields_serialized(self):
        result = ExecutionResult(
            repository=RepositoryEntry("svc-a", "/repos/a"),
            args=("checkout", "master"),
            exit_succeeded=True,
            returncode=0,
            checkout_state=CheckoutState.FALLBACK_SUCCESS,
            notices=("falling back",),
        )

        d = result.to_dict()

        assert d['checkout_state'] == "fallback_success"
        assert d['notices'] == ["falling back"]


class TestCheckoutState:

    def test_enum_values(self):
        assert CheckoutState.SUCCESS.value == "success"
        assert CheckoutState.FALLBACK_SUCCESS.value == "fallback_success"
        assert CheckoutState.FAILED.value == "failed"


class TestRunSummary:
    """Tests for RunSummary dataclass."""

    def _result(self, alias, ok, spawn_error=None):
        return ExecutionResult(
            repository=RepositoryEntry(alias, f"/repos/{alias}"),
            exit_succeeded=ok,
            spawn_error=spawn_error,
        )

    def test_empty_summary(self):
        summary = RunSummary()

        assert summary.total == 0
        assert summary.success is True
        assert str(summary) == "0 succeeded - 0 failed"

    def test_counts_add_up_for_mixed_outcomes(self):
        summary = RunSummary(operation="pull")
        results = [
            self._result("a", True),
            self._result("b", False),
            self._result("c", False, spawn_error="not found"),
            self._result("d", True),
        ]

        for result in results:
            summary.add(result)

        assert summary.succeeded == 2
        assert summary.failed == 2
        assert summary.succeeded + summary.failed == len(results)
        assert summary.failures == ["b", "c"]
        assert summary.success is False
        assert str(summary) == "2 succeeded - 2 failed"

    def test_to_dict(self):
        summary = RunSummary(operation="fetch")
        summary.add(self._result("a", True))

        d = summary.to_dict()

        assert d['type'] == "summary"
        assert d['operation'] == "fetch"
        assert d['total'] == 1
        assert d['succeeded'] == 1
        assert d['failed'] == 0
        assert d['failures'] == []

    def test_to_dict_lists_failed_aliases(self):
        summary = RunSummary(operation="pull")
        summary.add(self._result("a", True))
        summary.add(self._result("b", False))

        assert summary.to_dict()['failures'] == ["b"]


class TestCommandSpecs:
    """Built-in operations map to fixed argument lists."""

    def test_fixed_argument_lists(self):
        assert FetchAll().git_args() == ("fetch", "--all")
        assert PullAll().git_args() == ("pull",)
        assert Diff().git_args() == ("diff",)
        assert Show().git_args() == ("show",)
        assert Checkout("dev").git_args() == ("checkout", "dev")
        assert GrepBranches("rel").git_args() == ("branch", "-a")

    def test_raw_args_pass_through(self):
        spec = RawArgs(("log", "--oneline", "-5"))
        assert spec.git_args() == ("log", "--oneline", "-5")
        assert spec.name == "run"

    def test_specs_compare_by_value(self):
        assert PullAll() == PullAll()
        assert Checkout("dev") == Checkout("dev")
        assert Checkout("dev") != Checkout("main")
