"""Browser renderer: ``streamlit run ui/web.py``.

The navigator lives in ``st.session_state``. Widget edits are turned back into
the KeyEvents a terminal user would have typed, so every transition still goes
through ``Navigator.dispatch``.
"""
import streamlit as st

from core.config import get_settings
from core.errors import StoreError
from core.events import Key, KeyEvent, type_text
from core.layout import ERROR, LayoutDescription

KEYPAD = (
    ("↑", Key.UP), ("↓", Key.DOWN), ("←", Key.LEFT), ("→", Key.RIGHT),
    ("Tab", Key.TAB), ("Enter", Key.ENTER), ("Esc", Key.ESC),
)


# -----------------------------
# Widget edits -> key events
# -----------------------------
def edit_events(old: str, new: str, choices: tuple[str, ...] = ()) -> list[KeyEvent]:
    """Keystrokes that turn a field showing ``old`` into ``new``."""
    if old == new:
        return []
    if choices:
        events = [KeyEvent(Key.BACKSPACE)]
        return events + ([KeyEvent.text(new[0])] if new else [])

    prefix = 0
    while prefix < min(len(old), len(new)) and old[prefix] == new[prefix]:
        prefix += 1
    return [KeyEvent(Key.BACKSPACE)] * (len(old) - prefix) + type_text(new[prefix:])


def focus_events(current: int, target: int, total: int) -> list[KeyEvent]:
    return [KeyEvent(Key.TAB)] * ((target - current) % total)


def select_events(current: int | None, target: int) -> list[KeyEvent]:
    current = current or 0
    key = Key.DOWN if target > current else Key.UP
    return [KeyEvent(key)] * abs(target - current)


def form_events(layout: LayoutDescription, submitted: dict[str, str], button: int) -> list[KeyEvent]:
    """Type every changed field, then press the chosen button."""
    events = []
    focus = layout.focus
    total = len(layout.fields) + len(layout.buttons)
    for index, f in enumerate(layout.fields):
        edits = edit_events(f.value, submitted.get(f.name, f.value), f.choices)
        if edits:
            events += focus_events(focus, index, total) + edits
            focus = index
    target = len(layout.fields) + button
    return events + focus_events(focus, target, total) + [KeyEvent(Key.ENTER)]


# -----------------------------
# Streamlit page
# -----------------------------
def get_navigator():
    if "navigator" not in st.session_state:
        from app import open_navigator
        st.session_state.navigator = open_navigator(get_settings())
    return st.session_state.navigator


def send(navigator, events) -> None:
    for event in events:
        navigator.dispatch(event)
    st.rerun()


def render_form(navigator, layout: LayoutDescription) -> None:
    with st.form(f"form_{layout.title}"):
        submitted = {}
        for f in layout.fields:
            label = f"{f.label}{' *' if f.required else ''}"
            if f.choices:
                options = ("",) + f.choices
                index = options.index(f.value) if f.value in options else 0
                submitted[f.name] = st.selectbox(label, options, index=index)
            else:
                kind = "password" if f.secret else "default"
                submitted[f.name] = st.text_input(label, value=f.value, type=kind)
            if f.error:
                st.caption(f":red[{f.error}]")

        cols = st.columns(max(len(layout.buttons), 1))
        for index, label in enumerate(layout.buttons):
            if cols[index].form_submit_button(label):
                send(navigator, form_events(layout, submitted, index))


def render_table(navigator, layout: LayoutDescription) -> None:
    query = st.text_input("Search", value=layout.filter or "")
    if query != (layout.filter or ""):
        send(navigator, edit_events(layout.filter or "", query))

    st.dataframe([dict(zip(layout.columns, row)) for row in layout.rows], use_container_width=True)

    if layout.rows and layout.filter is not None:
        labels = [" | ".join(row[:2]) for row in layout.rows]
        choice = st.selectbox("Select", range(len(labels)), index=layout.selected or 0,
                              format_func=lambda i: labels[i])
        if st.button("Open"):
            send(navigator, select_events(layout.selected, choice) + [KeyEvent(Key.ENTER)])


def main():
    st.set_page_config(page_title="Hospital Records", page_icon="🏥", layout="wide")

    try:
        navigator = get_navigator()
    except StoreError as exc:
        st.error(f"Application Error: {exc}")
        st.stop()

    if not navigator.running:
        st.info("Session ended.")
        if st.button("Start again"):
            st.session_state.pop("navigator", None)
            st.rerun()
        st.stop()

    layout = navigator.render()
    st.title(layout.title)

    if layout.banner:
        (st.error if layout.banner_kind == ERROR else st.success)(layout.banner)

    if layout.fields:
        render_form(navigator, layout)
    if layout.columns:
        render_table(navigator, layout)
    for line in layout.detail:
        st.write(line)

    if layout.dialog:
        st.warning(layout.dialog.prompt)
        cols = st.columns(len(layout.dialog.options))
        for index, option in enumerate(layout.dialog.options):
            if cols[index].button(option):
                steps = (index - layout.dialog.selected) % len(layout.dialog.options)
                send(navigator, [KeyEvent(Key.RIGHT)] * steps + [KeyEvent(Key.ENTER)])

    with st.sidebar:
        st.markdown("### Keys")
        for label, key in KEYPAD:
            if st.button(label, use_container_width=True):
                send(navigator, [KeyEvent(key)])
        st.divider()
        if st.button("Quit", use_container_width=True):
            send(navigator, [KeyEvent(Key.QUIT)])
        st.caption(layout.help)


if __name__ == "__main__":
    main()
