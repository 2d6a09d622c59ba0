from dataclasses import dataclass
from enum import Enum


class Key(str, Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    TAB = "tab"
    BACKTAB = "backtab"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    ESC = "esc"
    QUIT = "quit"


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    char: str = ""

    @classmethod
    def text(cls, char: str) -> "KeyEvent":
        return cls(Key.CHAR, char)


def type_text(text: str) -> list[KeyEvent]:
    """One CHAR event per character of ``text``."""
    return [KeyEvent.text(c) for c in text]
