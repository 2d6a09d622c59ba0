from dataclasses import dataclass

from sqlalchemy.orm import Session as DbSession

from core.auth import DEFAULT_ROUNDS


@dataclass(frozen=True)
class Session:
    """In-memory proof of a successful login; lives as long as the process."""

    user_id: int
    username: str


@dataclass
class ScreenContext:
    """What a screen may touch during one handle_event call.

    Built fresh by the navigator for every call; screens must not keep it.
    Login and logout change ``session`` and the navigator reads it back.
    """

    db: DbSession
    session: Session | None = None
    bcrypt_rounds: int = DEFAULT_ROUNDS

    def login(self, session: Session) -> None:
        self.session = session

    def logout(self) -> None:
        self.session = None
