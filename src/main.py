"""Main entry point for TaskMan.

Loads settings and tasks, runs the interactive loop, saves on exit.
"""
import logging
from pathlib import Path
from typing import Optional, Tuple

import click

from cli import CLI
from logging_setup import setup_logging
from settings import load_settings
from storage import Storage, StorageError, TaskFileNotFound, TaskFileParseError
from tasklist import TaskList

logger = logging.getLogger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


def set_aside(data_file: str) -> Optional[Path]:
    """Move a data file that failed to parse to <name>.bak; None if the move fails."""
    src = Path(data_file)
    backup = src.with_name(src.name + '.bak')
    try:
        src.replace(backup)
    except OSError as e:
        logger.error('Could not move %s aside: %s', src, e)
        return None
    logger.warning('Moved unparsable data file %s to %s', src, backup)
    return backup


def load_or_empty(data_file: str) -> Tuple[TaskList, bool]:
    """Load the data file, falling back to an empty list on failure.

    Returns (tasks, read_only). A file that fails to parse is moved to
    <name>.bak first; when it cannot be moved, or could not be read at
    all, the session is read-only so quitting cannot overwrite it.
    """
    try:
        return Storage.load_tasks(data_file), False
    except TaskFileNotFound:
        logger.info('No data file at %s yet; starting empty', data_file)
        click.echo(f"\nError opening '{data_file}'. Starting with an empty task list.\n")
        return TaskList(), False
    except TaskFileParseError as e:
        logger.warning('Could not parse %s: %s', data_file, e)
        backup = set_aside(data_file)
        if backup is not None:
            click.echo(f"\nCould not load '{data_file}': {e}. Original kept as '{backup}'.\n")
            return TaskList(), False
        click.echo(f"\nCould not load '{data_file}': {e}. Changes this session will not be saved.\n")
    except StorageError as e:
        logger.warning('Could not load %s: %s', data_file, e)
        click.echo(f"\nCould not load '{data_file}': {e}. Changes this session will not be saved.\n")
    return TaskList(), True


@click.command()
@click.option('--data-file', type=click.Path(dir_okay=False, path_type=Path), default=None,
              help='Data file to use for this session (config file is not changed).')
@click.option('--config', 'config_file', type=click.Path(dir_okay=False, path_type=Path), default=None,
              help='Config file location (default ~/TaskManConfig.txt).')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False), default='WARNING',
              show_default=True, help='Console log level.')
def main(data_file, config_file, log_level):
    """Terminal task tracker with recurring tasks."""
    setup_logging(console_level=getattr(logging, log_level.upper()))
    if data_file is None:
        settings = load_settings(path=config_file.expanduser() if config_file else None)
        data_file = settings.file_path
    target = str(data_file)
    tasks, read_only = load_or_empty(target)
    CLI(tasks, target, read_only=read_only).run()


if __name__ == "__main__":
    main()
