"""What a screen tells the navigator after handling one event."""
from dataclasses import dataclass, field
from typing import Any


class Outcome:
    name = "outcome"


@dataclass(frozen=True)
class Stay(Outcome):
    name = "stay"


@dataclass(frozen=True)
class Push(Outcome):
    screen: Any = field(compare=False)
    name = "push"


@dataclass(frozen=True)
class Replace(Outcome):
    screen: Any = field(compare=False)
    name = "replace"


@dataclass(frozen=True)
class Pop(Outcome):
    name = "pop"


@dataclass(frozen=True)
class Quit(Outcome):
    name = "quit"


@dataclass(frozen=True)
class Error(Outcome):
    kind: str
    message: str
    name = "error"


STAY = Stay()
