"""Color & style helpers.

Decisions:
- Done tasks green, overdue red, due today blue; header in primary.
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or project .env file.
"""
from __future__ import annotations
import os, sys
from pathlib import Path

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

PALETTE_KEYS = ('TASKMAN_PRIMARY', 'TASKMAN_DONE', 'TASKMAN_OVERDUE', 'TASKMAN_TODAY')


def _code(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''


def _is_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)


def _hex_to_rgb(hex_code: str) -> tuple[int, int, int]:
    h = hex_code.lstrip('#')
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _fg_truecolor(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"


def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    return f"\033[38;5;{16 + 36 * r6 + 6 * g6 + b6}m"


def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return _fg_truecolor(r, g, b)
    return _fg_256(r, g, b)


def read_env_file(path: Path) -> dict[str, str]:
    """Palette overrides from a KEY=#RRGGBB file; unknown keys and bad values skipped."""
    overrides: dict[str, str] = {}
    if not path.exists():
        return overrides
    try:
        text = path.read_text()
    except OSError:
        return overrides
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = (part.strip() for part in line.split('=', 1))
        if k in PALETTE_KEYS and _is_hex(v):
            overrides[k] = '#' + v.lstrip('#')
    return overrides


def _resolve(key: str, default: str) -> str:
    # priority: real env var > .env override > default
    env = os.environ.get(key)
    if env and _is_hex(env):
        return '#' + env.lstrip('#')
    return _ENV_OVERRIDES.get(key, default)


RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')

HEX_PRIMARY_DEFAULT = '#476EAE'
HEX_DONE_DEFAULT = '#4CAF50'
HEX_OVERDUE_DEFAULT = '#E53935'
HEX_TODAY_DEFAULT = '#1E88E5'

_ENV_OVERRIDES = read_env_file(Path(__file__).resolve().parent.parent / '.env')

HEX_PRIMARY = _resolve('TASKMAN_PRIMARY', HEX_PRIMARY_DEFAULT)
HEX_DONE = _resolve('TASKMAN_DONE', HEX_DONE_DEFAULT)
HEX_OVERDUE = _resolve('TASKMAN_OVERDUE', HEX_OVERDUE_DEFAULT)
HEX_TODAY = _resolve('TASKMAN_TODAY', HEX_TODAY_DEFAULT)

HEADER_COLOR = _from_hex(HEX_PRIMARY)
DONE_COLOR = _from_hex(HEX_DONE)
OVERDUE_COLOR = _from_hex(HEX_OVERDUE)
TODAY_COLOR = _from_hex(HEX_TODAY)


def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE or not any(styles):
        return text
    return ''.join(styles) + text + RESET


__all__ = [
    'color', 'RESET', 'BOLD', 'DIM', 'HEADER_COLOR', 'DONE_COLOR', 'OVERDUE_COLOR', 'TODAY_COLOR',
    'HEX_PRIMARY', 'HEX_DONE', 'HEX_OVERDUE', 'HEX_TODAY', 'read_env_file', '_ENABLE',
]
