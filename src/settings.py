"""Where the data file lives.

The config file (default ~/TaskManConfig.txt) holds three lines: the
storage folder, the full data file path, and one reserved line that is
preserved as-is. On first run the user is asked for a folder and the
config file is created.

Environment:
    TASKMAN_CONFIG     alternative config file location
    TASKMAN_DATA_FILE  data file for this session only (config untouched)
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)

CONFIG_NAME = 'TaskManConfig.txt'
DATA_NAME = 'TaskMan.txt'
FOLDER_PROMPT_LIMIT = 150

Prompt = Callable[[str], str]


@dataclass
class Settings:
    folder_path: str
    file_path: str
    extra: str = ''


def config_path() -> Path:
    override = os.environ.get('TASKMAN_CONFIG')
    if override and override.strip():
        return Path(override.strip()).expanduser()
    return Path.home() / CONFIG_NAME


def read_settings(path: Path) -> Optional[Settings]:
    """Parse the config file; None when it does not exist or cannot be read."""
    try:
        lines = path.read_text(encoding='utf-8').splitlines()
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning('Cannot read config %s: %s', path, e)
        return None
    data = [line.strip() for line in lines[:3]]
    data += [''] * (3 - len(data))
    folder, file_path, extra = data
    if not folder and not file_path:
        return None
    if not file_path:
        file_path = str(Path(folder) / DATA_NAME)
    if not folder:
        folder = str(Path(file_path).parent)
    return Settings(folder_path=folder, file_path=file_path, extra=extra)


def write_settings(settings: Settings, path: Optional[Path] = None) -> bool:
    """Persist settings; logs and returns False on failure."""
    path = path or config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f'{settings.folder_path}\n{settings.file_path}\n{settings.extra}\n',
                        encoding='utf-8')
    except OSError as e:
        logger.warning('Error creating config file %s: %s', path, e)
        return False
    logger.info('Wrote config %s', path)
    return True


def ask_folder(prompt: Prompt) -> str:
    """Ask where to store the data file; fall back to the home directory."""
    print("\nWhere do you want to store your data file?")
    print("Eg. /Users/name/Documents or C:\\Users\\name\\Documents")
    answer = prompt("Enter path: ").strip()[:FOLDER_PROMPT_LIMIT]
    folder = Path(answer).expanduser() if answer else None
    if folder is None or not folder.is_dir():
        home = str(Path.home())
        print("Invalid path! Using home directory:", home)
        return home
    return str(folder)


def load_settings(prompt: Prompt = input, path: Optional[Path] = None) -> Settings:
    """Return settings from the config file, creating it on first run."""
    path = path or config_path()
    settings = read_settings(path)
    if settings is None:
        folder = ask_folder(prompt)
        settings = Settings(folder_path=folder, file_path=str(Path(folder) / DATA_NAME))
        write_settings(settings, path)
    override = os.environ.get('TASKMAN_DATA_FILE')
    if override and override.strip():
        file_path = Path(override.strip()).expanduser()
        settings = Settings(folder_path=str(file_path.parent), file_path=str(file_path),
                            extra=settings.extra)
    return settings
