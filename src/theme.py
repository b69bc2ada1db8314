"""Color & style helpers.

Decisions:
- A Theme is a plain value passed to rendering; nothing here is global.
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disabled when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or a .env file in the cwd.
"""
from __future__ import annotations
import os, sys
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Mapping, Optional

RESET = '\033[0m'
BOLD = '\033[1m'
DIM = '\033[2m'
UNDERLINE = '\033[4m'

HEX_DONE_DEFAULT = '#A7E399'
HEX_PENDING_DEFAULT = '#C678DD'

PALETTE_KEYS = ('TASKBOARD_DONE', 'TASKBOARD_PENDING')
_TRUTHY = {"1", "true", "yes", "on"}


def _valid_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    """Convert a hex color code to an RGB tuple."""
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _fg_truecolor(r: int, g: int, b: int) -> str:
    """Generate ANSI escape code for truecolor foreground."""
    return f"\033[38;2;{r};{g};{b}m"

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    idx = 16 + 36 * r6 + 6 * g6 + b6
    return f"\033[38;5;{idx}m"

def read_dotenv(path: Path) -> dict[str, str]:
    """Palette overrides from a KEY=VALUE file; unknown keys and bad hex are skipped."""
    overrides: dict[str, str] = {}
    if not path.exists():
        return overrides
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        v = v.strip().strip('"\'')
        if k in PALETTE_KEYS and _valid_hex(v):
            overrides[k] = '#' + v.lstrip('#')
    return overrides


@dataclass(frozen=True)
class Theme:
    """Styling capability handed to TaskStore.render.

    `done_hex` colors completed glyphs and the done count, `pending_hex`
    the open glyphs and the in-progress count.
    """
    enabled: bool = True
    truecolor: bool = False
    done_hex: str = HEX_DONE_DEFAULT
    pending_hex: str = HEX_PENDING_DEFAULT

    @classmethod
    def plain(cls) -> Theme:
        return cls(enabled=False)

    @classmethod
    def from_env(cls, stream: Optional[IO[str]] = None,
                 env: Optional[Mapping[str, str]] = None,
                 dotenv: Optional[Path] = None) -> Theme:
        """Build a theme from the terminal and environment.

        Priority for palette values: real env var > .env override > default.
        """
        env = os.environ if env is None else env
        stream = sys.stdout if stream is None else stream
        force = env.get("FORCE_COLOR", "").lower() in _TRUTHY
        isatty = getattr(stream, 'isatty', None)
        tty = bool(isatty and isatty())
        enabled = (force or tty) and env.get("NO_COLOR") is None
        colorterm = env.get("COLORTERM", "").lower()
        truecolor = enabled and any(tok in colorterm for tok in ("truecolor", "24bit"))

        file_overrides = read_dotenv(dotenv if dotenv is not None else Path.cwd() / '.env')

        def pick(key: str, default: str) -> str:
            value = env.get(key)
            if value and _valid_hex(value):
                return '#' + value.lstrip('#')
            return file_overrides.get(key, default)

        return cls(
            enabled=enabled,
            truecolor=truecolor,
            done_hex=pick('TASKBOARD_DONE', HEX_DONE_DEFAULT),
            pending_hex=pick('TASKBOARD_PENDING', HEX_PENDING_DEFAULT),
        )

    def _from_hex(self, hex_code: str) -> str:
        """Convert a hex color code to an ANSI escape sequence."""
        if not self.enabled:
            return ''
        r, g, b = _hex_to_rgb(hex_code)
        if self.truecolor:
            return _fg_truecolor(r, g, b)
        return _fg_256(r, g, b)

    def paint(self, text: str, *styles: str) -> str:
        """Apply ANSI styles to a given text."""
        if not self.enabled:
            return text
        return ''.join(styles) + text + RESET

    def done(self, text: str) -> str:
        return self.paint(text, self._from_hex(self.done_hex))

    def pending(self, text: str) -> str:
        return self.paint(text, self._from_hex(self.pending_hex))

    def muted(self, text: str) -> str:
        return self.paint(text, DIM)

    def underline(self, text: str) -> str:
        return self.paint(text, UNDERLINE, BOLD)
