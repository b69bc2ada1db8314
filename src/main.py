"""Main entry point for taskboard.

    taskboard                      Show every board
    taskboard add buy milk         Add a task to the default board
    taskboard board work           Create a board
    taskboard done 3 -b work       Mark task 3 on board "work" done
    taskboard show mlk             Show tasks fuzzy-matching "mlk"
    taskboard shell                Interactive mode
"""
from pathlib import Path
from typing import Optional, Tuple

import click

from cli import CLI
from errors import TaskboardError
from logging_setup import logging_requested, resolve_level, setup_logging
from storage import FILE_ENV, Storage
from store import DEFAULT_BOARD, TaskStore
from theme import Theme


class Context:
    def __init__(self, storage: Storage):
        self.storage = storage
        self._store: Optional[TaskStore] = None

    @property
    def store(self) -> TaskStore:
        if self._store is None:
            self._store = self.storage.load()
        return self._store

    def save(self) -> None:
        self.storage.save(self.store)


pass_context = click.make_pass_decorator(Context)


def _fail(e: TaskboardError) -> click.ClickException:
    return click.ClickException(str(e))


@click.group(invoke_without_command=True)
@click.option('--file', 'path', type=click.Path(dir_okay=False, path_type=Path),
              envvar=FILE_ENV, default=None, help='Task document (default ~/.taskboard.json).')
@click.option('-v', '--verbose', is_flag=True, help='Debug logging to stderr.')
@click.pass_context
def cli(ctx: click.Context, path: Optional[Path], verbose: bool) -> None:
    """Personal task boards in the terminal."""
    if logging_requested(verbose):
        setup_logging(resolve_level(verbose))
    ctx.obj = Context(Storage(path))
    if ctx.invoked_subcommand is None:
        ctx.invoke(show)


@cli.command()
@click.argument('text', nargs=-1, required=True)
@click.option('-b', '--board', 'board_name', default=DEFAULT_BOARD, show_default=True)
@pass_context
def add(obj: Context, text: Tuple[str, ...], board_name: str) -> None:
    """Add a task."""
    try:
        task = obj.store.add_task(' '.join(text), board_name)
        obj.save()
    except TaskboardError as e:
        raise _fail(e) from e
    click.echo(f'Task {task.id} added.')


@cli.command()
@click.argument('name')
@click.option('--active', is_flag=True, help='Mark the board active.')
@pass_context
def board(obj: Context, name: str, active: bool) -> None:
    """Create a board."""
    try:
        created = obj.store.add_board(name, active)
        obj.save()
    except TaskboardError as e:
        raise _fail(e) from e
    click.echo(f'Board "{created.name}" created.')


@cli.command()
@click.argument('task_id', type=click.IntRange(min=1))
@click.option('-b', '--board', 'board_name', default=DEFAULT_BOARD, show_default=True)
@pass_context
def done(obj: Context, task_id: int, board_name: str) -> None:
    """Mark a task done."""
    try:
        obj.store.mark_done(task_id, board_name)
        obj.save()
    except TaskboardError as e:
        raise _fail(e) from e


@cli.command()
@click.argument('pattern', default='')
@pass_context
def show(obj: Context, pattern: str) -> None:
    """Show boards, filtering tasks by a fuzzy pattern."""
    try:
        store = obj.store
    except TaskboardError as e:
        raise _fail(e) from e
    store.render(pattern, Theme.from_env())


@cli.command()
@pass_context
def stats(obj: Context) -> None:
    """Print completion statistics."""
    try:
        store = obj.store
    except TaskboardError as e:
        raise _fail(e) from e
    click.echo(store.summary(Theme.from_env()))


@cli.command()
@pass_context
def shell(obj: Context) -> None:
    """Interactive mode."""
    try:
        CLI(obj.store, obj.storage, Theme.from_env()).run()
    except TaskboardError as e:
        raise _fail(e) from e


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
