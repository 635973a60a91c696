"""Logging configuration for the interactive tracker.

Everything goes to a log file; the console only gets WARNING and above by
default so log lines do not break up the task table.
"""
from __future__ import annotations
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

LOG_NAME = 'taskman.log'
LOG_FORMAT = '%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def default_log_dir() -> Path:
    override = os.environ.get('TASKMAN_LOG_DIR')
    if override and override.strip():
        return Path(override.strip()).expanduser()
    return Path.home() / '.taskman'


def setup_logging(
    *,
    log_dir: Optional[Union[str, Path]] = None,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Optional[Path]:
    """Install console + file handlers on the root logger.

    Call once, before the first log call. Returns the log file path, or
    None when the log directory cannot be created (console only then).
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    log_dir = Path(log_dir) if log_dir else default_log_dir()
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_dir / LOG_NAME), encoding='utf-8')
    except OSError as e:
        logging.getLogger(__name__).warning('File logging disabled (%s): %s', log_dir, e)
        return None
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)
    logging.captureWarnings(True)
    return log_dir / LOG_NAME
