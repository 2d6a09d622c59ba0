"""Building blocks shared by every screen.

A screen owns its input buffers and turns one KeyEvent into exactly one
Outcome. It never holds on to the store handle: the navigator lends it a
ScreenContext for the duration of a single call.
"""
from dataclasses import dataclass, field

from core.errors import AuthError, ValidationError
from core.events import Key, KeyEvent
from core.layout import ERROR, SUCCESS, DialogView, FieldView, LayoutDescription
from core.outcomes import STAY, Outcome, Pop
from core.session_manager import ScreenContext

FORM_HELP = "Tab/Arrows: Switch Fields | Enter: Submit | Esc: Back"
PICKER_HELP = "Type: Search | Up/Down: Select | Enter: Open | Esc: Back"


class Screen:
    title = ""
    help_text = ""
    requires_session = True

    def __init__(self):
        self.banner: str | None = None
        self.banner_kind: str | None = None

    def on_enter(self, ctx: ScreenContext) -> None:
        """Called each time the screen becomes the top of the stack."""

    def handle_event(self, event: KeyEvent, ctx: ScreenContext) -> Outcome:
        raise NotImplementedError

    def render_model(self) -> LayoutDescription:
        raise NotImplementedError

    def show_error(self, message: str) -> None:
        self.banner, self.banner_kind = message, ERROR

    def show_success(self, message: str) -> None:
        self.banner, self.banner_kind = message, SUCCESS

    def clear_banner(self) -> None:
        self.banner = self.banner_kind = None

    def __repr__(self):
        return f"<{type(self).__name__}>"


# -----------------------------
# Forms
# -----------------------------
@dataclass
class Field:
    name: str
    label: str
    required: bool = False
    secret: bool = False
    choices: tuple[str, ...] = ()
    value: str = ""

    def type_char(self, char: str) -> None:
        if self.choices:
            # choice fields pick by first letter: 'M' for Male, 'N' for Nurse
            for choice in self.choices:
                if choice.lower().startswith(char.lower()):
                    self.value = choice
                    return
            return
        self.value += char

    def backspace(self) -> None:
        self.value = "" if self.choices else self.value[:-1]

    def cycle(self, step: int) -> None:
        index = self.choices.index(self.value) if self.value in self.choices else -1
        self.value = self.choices[(index + step) % len(self.choices)]

    def view(self, error: str | None) -> FieldView:
        shown = "*" * len(self.value) if self.secret else self.value
        return FieldView(self.name, self.label, shown, self.required, error, self.choices, self.secret)


@dataclass(frozen=True)
class Button:
    label: str
    action: str  # name of the FormScreen method to call with the context


class FormScreen(Screen):
    """A column of text fields followed by buttons.

    Subclasses supply ``make_fields`` and ``commit``; the submit path runs
    ``validator`` first and calls ``commit`` only with a clean field set.
    """

    help_text = FORM_HELP
    submit_label = "Submit"
    back_label = "Back"
    validator = None

    def __init__(self, values: dict | None = None):
        super().__init__()
        self.fields: list[Field] = self.make_fields()
        self.focus = 0
        self.errors: dict[str, str] = {}
        if values:
            self.load(values)

    def make_fields(self) -> list[Field]:
        raise NotImplementedError

    def buttons(self) -> list[Button]:
        return [Button(self.submit_label, "submit"), Button(self.back_label, "cancel")]

    @property
    def values(self) -> dict[str, str]:
        return {f.name: f.value for f in self.fields}

    def load(self, values: dict) -> None:
        for f in self.fields:
            if f.name in values:
                value = values[f.name]
                f.value = "" if value is None else str(value)

    def reset(self) -> None:
        for f in self.fields:
            f.value = ""
        self.errors = {}
        self.focus = 0

    @property
    def focused_field(self) -> Field | None:
        return self.fields[self.focus] if self.focus < len(self.fields) else None

    def handle_event(self, event: KeyEvent, ctx: ScreenContext) -> Outcome:
        total = len(self.fields) + len(self.buttons())
        current = self.focused_field

        if event.key in (Key.TAB, Key.DOWN):
            self.focus = (self.focus + 1) % total
        elif event.key in (Key.BACKTAB, Key.UP):
            self.focus = (self.focus - 1) % total
        elif event.key in (Key.LEFT, Key.RIGHT):
            step = 1 if event.key is Key.RIGHT else -1
            if current is not None and current.choices:
                current.cycle(step)
                self._edited(current)
            elif current is None:
                n = len(self.fields)
                self.focus = n + (self.focus - n + step) % len(self.buttons())
        elif event.key is Key.ESC:
            return self.cancel(ctx)
        elif event.key is Key.ENTER:
            if current is not None:
                return self.submit(ctx)
            button = self.buttons()[self.focus - len(self.fields)]
            return getattr(self, button.action)(ctx)
        elif event.key is Key.CHAR and current is not None:
            current.type_char(event.char)
            self._edited(current)
        elif event.key is Key.BACKSPACE and current is not None:
            current.backspace()
            self._edited(current)
        return STAY

    def _edited(self, f: Field) -> None:
        self.errors.pop(f.name, None)
        self.clear_banner()

    def validate(self, values: dict, db) -> dict[str, str]:
        if self.validator is None:
            return {}
        return self.validator(values, db)

    def submit(self, ctx: ScreenContext) -> Outcome:
        values = self.values
        errors = self.validate(values, ctx.db)
        if errors:
            return self._reject(errors)

        self.errors = {}
        try:
            return self.commit(values, ctx)
        except ValidationError as exc:
            return self._reject(exc.errors)
        except AuthError as exc:
            self.show_error(str(exc))
            return STAY

    def _reject(self, errors: dict[str, str]) -> Outcome:
        self.errors = dict(errors)
        names = [f.name for f in self.fields]
        first = min((names.index(n) for n in errors if n in names), default=self.focus)
        self.focus = first
        self.show_error("Please correct the highlighted fields.")
        return STAY

    def commit(self, values: dict, ctx: ScreenContext) -> Outcome:
        raise NotImplementedError

    def cancel(self, ctx: ScreenContext) -> Outcome:
        return Pop()

    def detail_lines(self) -> tuple[str, ...]:
        return ()

    def render_model(self) -> LayoutDescription:
        return LayoutDescription(
            title=self.title,
            fields=tuple(f.view(self.errors.get(f.name)) for f in self.fields),
            focus=self.focus,
            buttons=tuple(b.label for b in self.buttons()),
            detail=self.detail_lines(),
            banner=self.banner,
            banner_kind=self.banner_kind,
            help=self.help_text,
        )


# -----------------------------
# Pickers (searchable tables)
# -----------------------------
@dataclass
class Row:
    id: int
    cells: tuple[str, ...]
    search_text: str = field(default="", repr=False)

    def matches(self, query: str) -> bool:
        return query in (self.search_text or " ".join(self.cells)).lower()


class PickerScreen(Screen):
    """Table of store rows, filtered as the user types."""

    help_text = PICKER_HELP
    columns: tuple[str, ...] = ()
    empty_message = "No rows found."

    def __init__(self):
        super().__init__()
        self.rows: list[Row] = []
        self.filter_text = ""
        self.selected = 0
        self.detail: tuple[str, ...] = ()

    def load_rows(self, db) -> list[Row]:
        raise NotImplementedError

    def on_enter(self, ctx: ScreenContext) -> None:
        self.refresh(ctx)

    def refresh(self, ctx: ScreenContext) -> None:
        self.rows = self.load_rows(ctx.db)
        self.detail = ()
        self._clamp()

    @property
    def visible(self) -> list[Row]:
        query = self.filter_text.strip().lower()
        if not query:
            return self.rows
        return [r for r in self.rows if r.matches(query)]

    @property
    def selected_row(self) -> Row | None:
        rows = self.visible
        return rows[self.selected] if rows else None

    def _clamp(self) -> None:
        count = len(self.visible)
        self.selected = min(self.selected, count - 1) if count else 0

    def handle_event(self, event: KeyEvent, ctx: ScreenContext) -> Outcome:
        count = len(self.visible)
        if event.key is Key.UP and count:
            self.selected = (self.selected - 1) % count
        elif event.key is Key.DOWN and count:
            self.selected = (self.selected + 1) % count
        elif event.key is Key.CHAR:
            self.filter_text += event.char
            self._filter_changed()
        elif event.key is Key.BACKSPACE:
            self.filter_text = self.filter_text[:-1]
            self._filter_changed()
        elif event.key is Key.ENTER:
            row = self.selected_row
            if row is None:
                self.show_error(self.empty_message)
                return STAY
            return self.choose(row.id, ctx)
        elif event.key is Key.ESC:
            return self.cancel(ctx)
        return STAY

    def _filter_changed(self) -> None:
        self.selected = 0
        self.detail = ()
        self.clear_banner()

    def choose(self, row_id: int, ctx: ScreenContext) -> Outcome:
        self.detail = tuple(self.describe(row_id, ctx.db))
        return STAY

    def describe(self, row_id: int, db) -> list[str]:
        return []

    def cancel(self, ctx: ScreenContext) -> Outcome:
        return Pop()

    def dialog(self) -> DialogView | None:
        return None

    def render_model(self) -> LayoutDescription:
        rows = self.visible
        return LayoutDescription(
            title=self.title,
            columns=self.columns,
            rows=tuple(r.cells for r in rows),
            selected=self.selected if rows else None,
            filter=self.filter_text,
            detail=self.detail,
            banner=self.banner,
            banner_kind=self.banner_kind,
            dialog=self.dialog(),
            help=self.help_text,
        )


# -----------------------------
# Update / delete workflows
# -----------------------------
class _EditForm(FormScreen):
    submit_label = "Save"

    def __init__(self, owner: "EntityEditScreen", values: dict):
        self.owner = owner
        self.title = f"{owner.title} #{owner.editing_id}"
        super().__init__(values)

    def make_fields(self) -> list[Field]:
        return self.owner.make_fields()

    def validate(self, values, db):
        return self.owner.validate(values, db)

    def commit(self, values, ctx):
        return self.owner.save_form(values, ctx)

    def cancel(self, ctx):
        return self.owner.back_to_picker(ctx)


class EntityEditScreen(PickerScreen):
    """Pick a row, edit it in a form pre-loaded with its current values."""

    entity_label = "Entity"
    validator = None

    def __init__(self):
        super().__init__()
        self.editing_id: int | None = None
        self.form: _EditForm | None = None

    def make_fields(self) -> list[Field]:
        raise NotImplementedError

    def fetch_values(self, db, row_id: int) -> dict:
        raise NotImplementedError

    def save(self, db, row_id: int, values: dict) -> None:
        raise NotImplementedError

    def validate(self, values, db):
        return self.validator(values, db) if self.validator else {}

    def choose(self, row_id, ctx):
        values = self.fetch_values(ctx.db, row_id)
        self.editing_id = row_id
        self.form = _EditForm(self, values)
        return STAY

    def save_form(self, values, ctx):
        row_id = self.editing_id
        self.save(ctx.db, row_id, values)
        self.back_to_picker(ctx)
        self.show_success(f"{self.entity_label} {row_id} updated successfully!")
        return STAY

    def back_to_picker(self, ctx):
        self.form = None
        self.editing_id = None
        self.clear_banner()
        self.refresh(ctx)
        return STAY

    def handle_event(self, event, ctx):
        if self.form is not None:
            return self.form.handle_event(event, ctx)
        return super().handle_event(event, ctx)

    def show_error(self, message):
        if self.form is not None:
            self.form.show_error(message)
        else:
            super().show_error(message)

    def render_model(self):
        if self.form is not None:
            return self.form.render_model()
        return super().render_model()


class EntityDeleteScreen(PickerScreen):
    """Pick a row, then confirm its id before it is physically removed."""

    entity_label = "Entity"
    OPTIONS = ("Yes", "No")

    def __init__(self):
        super().__init__()
        self.confirm_id: int | None = None
        self.confirm_choice = 1

    def remove(self, db, row_id: int) -> None:
        raise NotImplementedError

    def describe_target(self, row: Row) -> str:
        return row.cells[1] if len(row.cells) > 1 else ""

    def choose(self, row_id, ctx):
        self.confirm_id = row_id
        self.confirm_choice = 1  # default to "No"
        self.clear_banner()
        return STAY

    def handle_event(self, event, ctx):
        if self.confirm_id is None:
            return super().handle_event(event, ctx)

        if event.key in (Key.LEFT, Key.RIGHT, Key.TAB):
            self.confirm_choice = 1 - self.confirm_choice
        elif event.key is Key.ESC or (event.key is Key.CHAR and event.char.lower() == "n"):
            self.confirm_id = None
        elif event.key is Key.CHAR and event.char.lower() == "y":
            return self._delete(ctx)
        elif event.key is Key.ENTER:
            if self.confirm_choice == 0:
                return self._delete(ctx)
            self.confirm_id = None
        return STAY

    def _delete(self, ctx):
        target, self.confirm_id = self.confirm_id, None
        self.remove(ctx.db, target)
        self.refresh(ctx)
        self.show_success(f"{self.entity_label} {target} deleted successfully!")
        return STAY

    def dialog(self):
        if self.confirm_id is None:
            return None
        row = next((r for r in self.rows if r.id == self.confirm_id), None)
        name = self.describe_target(row) if row else ""
        target = f"#{self.confirm_id} ({name})" if name else f"#{self.confirm_id}"
        prompt = f"Delete {self.entity_label.lower()} {target}? This cannot be undone."
        return DialogView(prompt, self.OPTIONS, self.confirm_choice)
