#!/usr/bin/env python3

import logging
import sys
from pathlib import Path
from typing import List, Tuple

import click

from . import __version__
from . import registry
from .config import load_config, repos_from_config, get_fallback_branch, get_executables
from .domain.command import (
    Checkout,
    CommandSpec,
    Diff,
    FetchAll,
    GrepBranches,
    PullAll,
    RawArgs,
    Show,
)
from .domain.repository import RepositoryEntry
from .exit_codes import CommandError, PartialSuccessError, INTERRUPTED
from .infra.command_runner import CommandRunner
from .render import JsonReporter, Reporter
from .services.dispatch_service import DispatchService

logger = logging.getLogger("gyros")


class PassthroughGroup(click.Group):
    """Group that sends unknown subcommands to `run` as git arguments.

    `gyros status -s` is the same as `gyros run status -s`.
    """

    def resolve_command(self, ctx, args):
        if args and self.get_command(ctx, args[0]) is None:
            args = ['run', *args]
        return super().resolve_command(ctx, args)


@click.group(cls=PassthroughGroup)
@click.version_option(version=__version__, prog_name='gyros')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Config file (default: .gyros.toml in the current directory, or $GYROS_CONFIG)')
@click.option('--only', help='Only run in the repo with this alias (exact match)')
@click.option('--json', 'output_json', is_flag=True, help='Output results as JSONL')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, config_path, only, output_json, debug):
    """gyros - Run git commands in multiple repos.

    Repositories are read from the `repos` table of .gyros.toml in the
    current directory. Commands run in each repository one after another;
    output is shown per repository, followed by a summary.

    \b
    Examples:
        gyros status -s
        gyros --only svc-a log --oneline -5
        gyros checkout feature/login
        gyros grep-branches release
    """
    if debug:
        logger.setLevel(logging.DEBUG)
    ctx.ensure_object(dict)
    ctx.obj.update(
        config_path=config_path,
        only=only,
        output_json=output_json,
    )


def _make_reporter(obj) -> Reporter:
    return JsonReporter() if obj.get('output_json') else Reporter()


def _resolve_repos(obj) -> Tuple[dict, List[RepositoryEntry]]:
    """Load the config and apply --only. Raises CommandError."""
    config = load_config(obj.get('config_path'))
    repos = registry.load(repos_from_config(config))
    if obj.get('only') is not None:
        repos = registry.filter_by_alias(repos, obj['only'])
    return config, repos


def _dispatch(obj, spec: CommandSpec) -> None:
    """Resolve repositories, run `spec` in each and exit with the outcome."""
    reporter = _make_reporter(obj)

    try:
        config, repos = _resolve_repos(obj)
        executables = get_executables(config)
        fallback_branch = get_fallback_branch(config)
    except CommandError as e:
        reporter.render_error(str(e))
        sys.exit(e.exit_code)

    service = DispatchService(
        runner=CommandRunner(git=executables['git']),
        fallback_branch=fallback_branch,
        grep=executables['grep'],
    )

    try:
        for result in service.dispatch(repos, spec):
            reporter.render(result)
    except KeyboardInterrupt:
        # Report what finished before the interrupt
        if service.last_summary is not None:
            reporter.render_summary(service.last_summary)
        reporter.render_error("Interrupted")
        sys.exit(INTERRUPTED)

    summary = service.last_summary
    reporter.render_summary(summary)

    if not summary.success:
        error = PartialSuccessError(str(summary), summary.succeeded, summary.failed)
        sys.exit(error.exit_code)


@cli.command('run', context_settings={'ignore_unknown_options': True, 'allow_interspersed_args': False})
@click.argument('git_args', nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_obj
def run_handler(obj, git_args):
    """Run an arbitrary git subcommand in every repository.

    \b
    Examples:
        gyros run status -s
        gyros run log --oneline -5
    """
    _dispatch(obj, RawArgs(tuple(git_args)))


@cli.command('fetch')
@click.pass_obj
def fetch_handler(obj):
    """Fetch all remotes in every repository (git fetch --all)."""
    _dispatch(obj, FetchAll())


@cli.command('pull')
@click.pass_obj
def pull_handler(obj):
    """Pull in every repository (git pull)."""
    _dispatch(obj, PullAll())


@cli.command('diff')
@click.pass_obj
def diff_handler(obj):
    """Show unstaged changes in every repository (git diff)."""
    _dispatch(obj, Diff())


@cli.command('show')
@click.pass_obj
def show_handler(obj):
    """Show the HEAD commit of every repository (git show)."""
    _dispatch(obj, Show())


@cli.command('checkout')
@click.argument('branch')
@click.pass_obj
def checkout_handler(obj, branch):
    """Checkout BRANCH everywhere, falling back to master where it is missing.

    The fallback branch can be changed with `fallback_branch` in the config.
    """
    _dispatch(obj, Checkout(branch))


@cli.command('grep-branches')
@click.argument('pattern')
@click.pass_obj
def grep_branches_handler(obj, pattern):
    """List branches matching PATTERN in every repository.

    Equivalent to `git branch -a | grep PATTERN` in each repository.
    """
    _dispatch(obj, GrepBranches(pattern))


@cli.command('list')
@click.pass_obj
def list_handler(obj):
    """List the configured repositories."""
    reporter = _make_reporter(obj)
    try:
        _config, repos = _resolve_repos(obj)
    except CommandError as e:
        reporter.render_error(str(e))
        sys.exit(e.exit_code)

    reporter.render_entries(repos)


def main():
    cli()

if __name__ == "__main__":
    main()
