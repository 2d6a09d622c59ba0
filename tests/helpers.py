"""Drive a Navigator the way a keyboard would."""
from core.events import Key, KeyEvent, type_text
from screens.home import MENU

JANE = {
    "first_name": "Jane",
    "last_name": "Doe",
    "date_of_birth": "1990-01-01",
    "gender": "Female",
    "address": "1 Main Street",
    "phone_number": "555-010-0199",
    "email": "jane@example.com",
}


def press(nav, *keys):
    """Send keys; plain strings are typed one character at a time."""
    for key in keys:
        events = [KeyEvent(key)] if isinstance(key, Key) else type_text(key)
        for event in events:
            nav.dispatch(event)
    return nav.render()


def focus(nav, index):
    layout = nav.render()
    total = len(layout.fields) + len(layout.buttons)
    press(nav, *[Key.TAB] * ((index - layout.focus) % total))


def fill(nav, values):
    for name, value in values.items():
        layout = nav.render()
        index = [f.name for f in layout.fields].index(name)
        focus(nav, index)
        f = layout.fields[index]
        if f.choices:
            press(nav, Key.BACKSPACE)
            if value:
                press(nav, value[0])
        else:
            press(nav, *[Key.BACKSPACE] * len(f.value), value)
    return nav.render()


def submit(nav, values=None):
    if values:
        fill(nav, values)
    return press(nav, Key.ENTER)


def press_button(nav, label):
    layout = nav.render()
    focus(nav, len(layout.fields) + layout.buttons.index(label))
    return press(nav, Key.ENTER)


def login(nav, username="root", password="root"):
    return submit(nav, {"username": username, "password": password})


def open_menu(nav, feature, action):
    """From Home, walk the two-panel menu to ``action`` and open it."""
    home = nav.active
    names = [name for name, _ in MENU]
    f = names.index(feature)
    actions = [label for label, _ in MENU[f][1]]
    a = actions.index(action)

    press(nav, Key.LEFT, *[Key.DOWN] * ((f - home.feature) % len(MENU)))
    press(nav, Key.RIGHT, *[Key.DOWN] * ((a - home.actions[f]) % len(actions)))
    return press(nav, Key.ENTER)


def select_row(nav, row_id):
    """Move the picker selection onto the row whose first cell is ``row_id``."""
    layout = nav.render()
    target = [row[0] for row in layout.rows].index(str(row_id))
    current = layout.selected or 0
    key = Key.DOWN if target >= current else Key.UP
    return press(nav, *[key] * abs(target - current))
