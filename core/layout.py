"""Declarative render models handed to a renderer.

Everything here is frozen and compared by value so two snapshots of an
unchanged screen are equal.
"""
from dataclasses import dataclass

ERROR = "error"
SUCCESS = "success"


@dataclass(frozen=True)
class FieldView:
    name: str
    label: str
    value: str
    required: bool = False
    error: str | None = None
    choices: tuple[str, ...] = ()
    secret: bool = False


@dataclass(frozen=True)
class DialogView:
    prompt: str
    options: tuple[str, ...]
    selected: int


@dataclass(frozen=True)
class LayoutDescription:
    title: str
    fields: tuple[FieldView, ...] = ()
    focus: int = 0
    buttons: tuple[str, ...] = ()
    columns: tuple[str, ...] = ()
    rows: tuple[tuple[str, ...], ...] = ()
    selected: int | None = None
    filter: str | None = None
    detail: tuple[str, ...] = ()
    banner: str | None = None
    banner_kind: str | None = None
    dialog: DialogView | None = None
    help: str = ""

    @property
    def errors(self) -> dict[str, str]:
        return {f.name: f.error for f in self.fields if f.error}

    @property
    def focused_button(self) -> str | None:
        """Label of the focused button, if focus sits past the fields."""
        index = self.focus - len(self.fields)
        if 0 <= index < len(self.buttons):
            return self.buttons[index]
        return None
