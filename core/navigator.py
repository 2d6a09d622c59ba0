import logging

from sqlalchemy.orm import Session as DbSession

from core.auth import DEFAULT_ROUNDS
from core.database import close_store
from core.errors import NavigationGuardError, StoreError
from core.events import Key, KeyEvent
from core.layout import LayoutDescription
from core.outcomes import STAY, Error, Outcome, Pop, Push, Quit, Replace, Stay
from core.session_manager import ScreenContext, Session

logger = logging.getLogger(__name__)

GUARD_MESSAGE = "Please log in to access this page."


def _login_screen(notice: str | None = None):
    from screens.login import LoginScreen
    return LoginScreen(notice=notice)


class Navigator:
    """Owns the screen stack, the session and the one store handle.

    ``dispatch`` feeds one event to the top screen and applies the Outcome it
    returns. Screens borrow the store through a ScreenContext that lives for
    that single call.
    """

    def __init__(self, db: DbSession, *, bcrypt_rounds: int = DEFAULT_ROUNDS, root_screen=None):
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds
        self.session: Session | None = None
        self.stack = [root_screen or _login_screen()]
        self.running = True
        self._closed = False
        self._enter(self.active)

    @property
    def active(self):
        return self.stack[-1]

    @property
    def depth(self) -> int:
        return len(self.stack)

    def _context(self) -> ScreenContext:
        return ScreenContext(db=self.db, session=self.session, bcrypt_rounds=self.bcrypt_rounds)

    def render(self) -> LayoutDescription:
        return self.active.render_model()

    # -----------------------------
    # Dispatch
    # -----------------------------
    def dispatch(self, event: KeyEvent) -> LayoutDescription:
        if not self.running:
            return self.render()

        if event.key is Key.QUIT:
            self.apply(Quit())
            return self.render()

        if self.active.requires_session and self.session is None:
            self._reset_to_login(f"{type(self.active).__name__} reached without a session")
            return self.render()

        ctx = self._context()
        try:
            outcome = self.active.handle_event(event, ctx)
        except StoreError as exc:
            logger.error("Store error on %s: %s", type(self.active).__name__, exc)
            outcome = Error("store", str(exc))

        if ctx.session != self.session:
            logger.info("Session changed: %s -> %s", self._who(self.session), self._who(ctx.session))
            self.session = ctx.session

        self.apply(outcome)
        return self.render()

    def apply(self, outcome: Outcome) -> None:
        if not isinstance(outcome, Stay):
            logger.info("Outcome %s from %s", self._describe(outcome), type(self.active).__name__)

        try:
            if isinstance(outcome, Stay):
                return
            if isinstance(outcome, Quit):
                self.running = False
                self.close()
            elif isinstance(outcome, Error):
                self.active.show_error(outcome.message)
            elif isinstance(outcome, Pop):
                if len(self.stack) == 1:
                    self.apply(Quit())
                    return
                self.stack.pop()
                self._enter(self.active)
            elif isinstance(outcome, Push):
                self._guard(outcome.screen)
                self.stack.append(outcome.screen)
                self._enter(outcome.screen)
            elif isinstance(outcome, Replace):
                self._guard(outcome.screen)
                self.stack[-1] = outcome.screen
                self._enter(outcome.screen)
            else:
                raise TypeError(f"Unknown outcome: {outcome!r}")
        except NavigationGuardError as exc:
            self._reset_to_login(str(exc))

    def _guard(self, screen) -> None:
        if screen.requires_session and self.session is None:
            raise NavigationGuardError(f"{type(screen).__name__} requires a logged-in session")

    def _enter(self, screen) -> None:
        try:
            screen.on_enter(self._context())
        except StoreError as exc:
            logger.error("Store error entering %s: %s", type(screen).__name__, exc)
            screen.show_error(str(exc))

    def _reset_to_login(self, reason: str) -> None:
        logger.warning("Navigation guard: %s; returning to login", reason)
        self.session = None
        self.stack = [_login_screen()]
        self.active.show_error(GUARD_MESSAGE)

    # -----------------------------
    # Lifecycle
    # -----------------------------
    def close(self) -> None:
        if not self._closed:
            self._closed = True
            close_store(self.db)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.running = False
        self.close()

    @staticmethod
    def _who(session: Session | None) -> str:
        return session.username if session else "anonymous"

    @staticmethod
    def _describe(outcome: Outcome) -> str:
        if isinstance(outcome, (Push, Replace)):
            return f"{outcome.name}({type(outcome.screen).__name__})"
        if isinstance(outcome, Error):
            return f"error({outcome.kind}: {outcome.message})"
        return outcome.name
