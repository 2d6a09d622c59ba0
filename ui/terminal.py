"""curses renderer and run loop for the terminal session."""
import curses
import logging

from core.events import Key, KeyEvent
from core.layout import ERROR, LayoutDescription

logger = logging.getLogger(__name__)

CTRL_Q = 17
ESCAPE = 27

SPECIAL_KEYS = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_BTAB: Key.BACKTAB,
    curses.KEY_ENTER: Key.ENTER,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
}

CONTROL_CHARS = {
    "\t": Key.TAB,
    "\n": Key.ENTER,
    "\r": Key.ENTER,
    "\x7f": Key.BACKSPACE,
    "\b": Key.BACKSPACE,
    chr(ESCAPE): Key.ESC,
    chr(CTRL_Q): Key.QUIT,
}

# color pair ids
TITLE, FOCUS, ERROR_PAIR, SUCCESS_PAIR, MUTED = 1, 2, 3, 4, 5


def translate_key(key) -> KeyEvent | None:
    """Map a value from ``get_wch`` to a KeyEvent; None for keys we ignore."""
    if isinstance(key, int):
        if key in SPECIAL_KEYS:
            return KeyEvent(SPECIAL_KEYS[key])
        if key in (ESCAPE, CTRL_Q, 9, 10, 13, 127, 8):
            return translate_key(chr(key))
        return None
    if key in CONTROL_CHARS:
        return KeyEvent(CONTROL_CHARS[key])
    if key.isprintable():
        return KeyEvent.text(key)
    return None


def _init_colors() -> None:
    if not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(TITLE, curses.COLOR_CYAN, -1)
    curses.init_pair(FOCUS, curses.COLOR_BLACK, curses.COLOR_YELLOW)
    curses.init_pair(ERROR_PAIR, curses.COLOR_RED, -1)
    curses.init_pair(SUCCESS_PAIR, curses.COLOR_GREEN, -1)
    curses.init_pair(MUTED, curses.COLOR_WHITE, -1)


def _put(win, y: int, x: int, text: str, attr=0) -> int:
    height, width = win.getmaxyx()
    if 0 <= y < height - 1 and x < width:
        win.addnstr(y, x, text, max(width - x - 1, 0), attr)
    return y + 1


def _table(win, y: int, layout: LayoutDescription) -> int:
    widths = [len(c) for c in layout.columns]
    for row in layout.rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]
    fmt = "  ".join(f"{{:<{min(w, 30)}}}" for w in widths)

    y = _put(win, y, 2, fmt.format(*layout.columns), curses.A_BOLD | curses.A_UNDERLINE)
    for index, row in enumerate(layout.rows):
        cells = [cell[:30] for cell in row]
        attr = curses.color_pair(FOCUS) if index == layout.selected else 0
        y = _put(win, y, 2, fmt.format(*cells), attr)
    if not layout.rows:
        y = _put(win, y, 2, "(nothing to show)", curses.color_pair(MUTED))
    return y


def draw(win, layout: LayoutDescription) -> None:
    win.erase()
    y = _put(win, 0, 2, layout.title, curses.color_pair(TITLE) | curses.A_BOLD)
    y += 1

    if layout.filter is not None:
        y = _put(win, y, 2, f"Search: {layout.filter}")

    for index, f in enumerate(layout.fields):
        marker = "*" if f.required else " "
        attr = curses.color_pair(FOCUS) if index == layout.focus else 0
        hint = f"  <{'/'.join(f.choices)}>" if f.choices else ""
        y = _put(win, y, 2, f"{f.label}{marker}: {f.value}{hint}", attr)
        if f.error:
            y = _put(win, y, 6, f.error, curses.color_pair(ERROR_PAIR))

    if layout.buttons:
        x = 2
        for index, label in enumerate(layout.buttons):
            focused = index + len(layout.fields) == layout.focus
            attr = curses.color_pair(FOCUS) if focused else curses.A_BOLD
            _put(win, y + 1, x, f"[ {label} ]", attr)
            x += len(label) + 6
        y += 3

    if layout.columns:
        y = _table(win, y, layout) + 1

    for line in layout.detail:
        y = _put(win, y, 2, line)

    if layout.banner:
        pair = ERROR_PAIR if layout.banner_kind == ERROR else SUCCESS_PAIR
        y = _put(win, y + 1, 2, layout.banner, curses.color_pair(pair) | curses.A_BOLD)

    if layout.dialog:
        d = layout.dialog
        y = _put(win, y + 1, 2, d.prompt, curses.A_BOLD)
        x = 4
        for index, option in enumerate(d.options):
            attr = curses.color_pair(FOCUS) if index == d.selected else 0
            _put(win, y, x, f" {option} ", attr)
            x += len(option) + 4

    height, _ = win.getmaxyx()
    help_lines = layout.help.splitlines()
    for offset, line in enumerate(help_lines):
        _put(win, height - 1 - len(help_lines) + offset, 2, line, curses.color_pair(MUTED))
    win.refresh()


def _loop(stdscr, navigator) -> None:
    # short ESC delay so Esc is not mistaken for the start of a sequence
    curses.set_escdelay(25)
    curses.curs_set(0)
    stdscr.keypad(True)
    _init_colors()

    layout = navigator.render()
    while navigator.running:
        draw(stdscr, layout)
        event = translate_key(stdscr.get_wch())
        if event is None:
            continue
        layout = navigator.dispatch(event)


def run(navigator) -> None:
    """Run the interactive session until the navigator stops."""
    try:
        curses.wrapper(_loop, navigator)
    finally:
        navigator.close()
    logger.info("Terminal session ended")
