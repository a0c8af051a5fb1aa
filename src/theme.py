"""Color & style helpers.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or project .env file.
"""
from __future__ import annotations
import os, sys
from pathlib import Path

from models import Priority

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

PALETTE_KEYS = ('TODO_PRIMARY', 'TODO_DONE', 'TODO_LOW', 'TODO_MEDIUM', 'TODO_HIGH')

def _code(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _fg_truecolor(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    idx = 16 + 36 * r6 + 6 * g6 + b6
    return f"\033[38;5;{idx}m"

def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return _fg_truecolor(r, g, b)
    return _fg_256(r, g, b)

def _valid_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

def parse_env_file(text: str) -> dict[str, str]:
    """Extract palette overrides (KEY=#rrggbb) from .env content."""
    overrides: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        v = v.strip()
        if k in PALETTE_KEYS and _valid_hex(v):
            overrides[k] = '#' + v.lstrip('#')
    return overrides

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')
STRIKE = _code('9')

HEX_PRIMARY_DEFAULT = '#476EAE'
HEX_DONE_DEFAULT = '#A7E399'
HEX_LOW_DEFAULT = '#48B3AF'
HEX_MEDIUM_DEFAULT = '#F6FF99'
HEX_HIGH_DEFAULT = '#E5737A'

_ENV_OVERRIDES: dict[str, str] = {}
_env_path = Path(__file__).resolve().parent.parent / '.env'
if _env_path.exists():
    try:
        _ENV_OVERRIDES = parse_env_file(_env_path.read_text())
    except OSError:
        _ENV_OVERRIDES = {}  # unreadable .env leaves defaults

def _resolve(key: str, default: str) -> str:
    """Priority: real env var > .env override > default."""
    value = os.environ.get(key)
    if value and _valid_hex(value):
        return '#' + value.lstrip('#')
    return _ENV_OVERRIDES.get(key, default)

HEX_PRIMARY = _resolve('TODO_PRIMARY', HEX_PRIMARY_DEFAULT)
HEX_DONE = _resolve('TODO_DONE', HEX_DONE_DEFAULT)
HEX_LOW = _resolve('TODO_LOW', HEX_LOW_DEFAULT)
HEX_MEDIUM = _resolve('TODO_MEDIUM', HEX_MEDIUM_DEFAULT)
HEX_HIGH = _resolve('TODO_HIGH', HEX_HIGH_DEFAULT)

PRIMARY = _from_hex(HEX_PRIMARY)
C_DONE = _from_hex(HEX_DONE)

PRIORITY_COLOR = {
    Priority.LOW: _from_hex(HEX_LOW),
    Priority.MEDIUM: _from_hex(HEX_MEDIUM),
    Priority.HIGH: _from_hex(HEX_HIGH),
}

HEADER_COLOR = PRIMARY
INDEX_COLOR = PRIMARY + BOLD
DONE_COLOR = DIM + STRIKE
EMPTY_COLOR = DIM + PRIMARY

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET

__all__ = [
    'color','parse_env_file','RESET','BOLD','DIM','STRIKE','PRIORITY_COLOR','HEADER_COLOR',
    'INDEX_COLOR','DONE_COLOR','EMPTY_COLOR','C_DONE','HEX_PRIMARY','HEX_DONE','HEX_LOW',
    'HEX_MEDIUM','HEX_HIGH','_ENABLE','_USE_TRUECOLOR','_FORCE'
]
