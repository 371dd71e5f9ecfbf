"""Terminal Output Formatting Package"""

import os
import shutil
import sys
import textwrap
import threading

STYLES = {
    'bold': '\033[1m',
    'dim': '\033[2m',
    'red': '\033[31m',
    'green': '\033[32m',
    'yellow': '\033[33m',
    'magenta': '\033[35m',
    'cyan': '\033[36m',
}
RESET = '\033[0m'


def _supports_color(stream=sys.stdout) -> bool:
    # NO_COLOR wins over FORCE_COLOR (https://no-color.org)
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    return hasattr(stream, 'isatty') and stream.isatty()


def _supports_unicode(stream=sys.stdout) -> bool:
    try:
        '┌─┐⚠✗⠋'.encode(getattr(stream, 'encoding', None) or 'utf-8')
        return True
    except (UnicodeEncodeError, LookupError):
        return False


COLORS_ENABLED = _supports_color()
UNICODE_ENABLED = _supports_unicode()


def _paint(text: str, style: str) -> str:
    return f"{STYLES[style]}{text}{RESET}" if COLORS_ENABLED else text


def bold(text: str) -> str:
    return _paint(text, 'bold')


def dim(text: str) -> str:
    return _paint(text, 'dim')


def error(text: str) -> str:
    return _paint(text, 'red')


def success(text: str) -> str:
    return _paint(text, 'green')


def warning(text: str) -> str:
    return _paint(text, 'yellow')


def highlight(text: str) -> str:
    return _paint(text, 'magenta')


def info(text: str) -> str:
    return _paint(text, 'cyan')


def print_error(message: str) -> None:
    mark = '✗' if UNICODE_ENABLED else '[X]'
    print(error(f"{mark} {message}"), file=sys.stderr)


def print_warning(message: str) -> None:
    mark = '⚠' if UNICODE_ENABLED else '[!]'
    print(warning(f"{mark} {message}"), file=sys.stderr)


def render_box(text: str, title: str = "", width: int | None = None, unicode: bool = UNICODE_ENABLED) -> list[str]:
    """
    Lay out `text` inside a frame and return the rows, uncolored.

    Lines longer than the frame wrap with a two-space hanging indent.
    `title` is set into the top border. `width` defaults to 80% of the terminal.
    """
    if width is None:
        width = max(int(shutil.get_terminal_size((80, 24)).columns * 0.8), 40)
    inner = width - 4

    rows = []
    for line in text.split('\n'):
        rows.extend(textwrap.wrap(line, width=inner, subsequent_indent='  ') or [''])
    span = max(max(len(row) for row in rows), len(title) + 2)

    h, v, corners = ('─', '│', '┌┐└┘') if unicode else ('-', '|', '++++')
    top = h * (span + 2)
    if title:
        top = f"{h} {title} {top[len(title) + 3:]}"
    return (
        [f"{corners[0]}{top}{corners[1]}"]
        + [f"{v} {row.ljust(span)} {v}" for row in rows]
        + [f"{corners[2]}{h * (span + 2)}{corners[3]}"]
    )


def print_box(text: str, title: str = "") -> None:
    rows = render_box(text, title)
    print(dim(rows[0]))
    for row in rows[1:-1]:
        print(f"{dim(row[0])}{row[1:-1]}{dim(row[-1])}")
    print(dim(rows[-1]))


def format_syllable_counts(counts: tuple[int, ...] | None, target: tuple[int, ...] = (5, 7, 5)) -> str:
    """Render counts like '5-7-5', green where a line hits its target and yellow where it misses."""
    if counts is None:
        return warning("incomplete")
    parts = [
        success(str(n)) if i < len(target) and n == target[i] else warning(str(n))
        for i, n in enumerate(counts)
    ]
    return dim('-').join(parts)


class Spinner:
    """Spinner on stderr while a request is in flight. Use as context manager.

    Drawn only when stderr is a terminal, so piped stdout stays clean.
    """

    FRAMES = '⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏' if UNICODE_ENABLED else '-\\|/'
    INTERVAL = 0.08

    def __init__(self, stream=None):
        self._stream = stream or sys.stderr
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def _run(self):
        frame = 0
        while not self._stop.wait(self.INTERVAL if frame else 0):
            self._stream.write(f"\r\033[K{self.FRAMES[frame % len(self.FRAMES)]} ")
            self._stream.flush()
            frame += 1

    def __enter__(self):
        if self._stream.isatty():
            self._stop.clear()
            self._thread = threading.Thread(target=self._run, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, *exc_info):
        self._stop.set()
        if self._thread:
            self._thread.join()
            self._thread = None
            self._stream.write('\r\033[K')
            self._stream.flush()


__all__ = [
    "COLORS_ENABLED", "UNICODE_ENABLED",
    "bold", "dim", "error", "success", "warning", "highlight", "info",
    "print_error", "print_warning", "render_box", "print_box",
    "format_syllable_counts", "Spinner",
]
