import logging

import pytest

from core import navigator as navigator_module
from core.errors import StoreError
from core.events import Key, KeyEvent
from core.layout import ERROR, LayoutDescription
from core.navigator import GUARD_MESSAGE, Navigator
from core.outcomes import STAY, Error, Pop, Push, Replace
from screens.base import Screen
from screens.home import HomeScreen
from screens.login import LoginScreen
from screens.patients import PatientListScreen
from tests.conftest import ROUNDS
from tests.helpers import login, press

ENTER = KeyEvent(Key.ENTER)


class ScriptedScreen(Screen):
    """Returns whatever ``script`` produces and counts activations."""

    requires_session = False

    def __init__(self, script=None, name="scripted"):
        super().__init__()
        self.script = script
        self.name = name
        self.entered = 0

    def on_enter(self, ctx):
        self.entered += 1

    def handle_event(self, event, ctx):
        return self.script() if self.script else STAY

    def render_model(self):
        return LayoutDescription(title=self.name, banner=self.banner, banner_kind=self.banner_kind)


def _nav(db, root):
    return Navigator(db, bcrypt_rounds=ROUNDS, root_screen=root)


def test_starts_on_login_without_session(navigator):
    assert navigator.depth == 1
    assert isinstance(navigator.active, LoginScreen)
    assert navigator.session is None
    assert navigator.running


def test_login_replaces_login_with_home(navigator):
    login(navigator)
    assert navigator.depth == 1
    assert isinstance(navigator.active, HomeScreen)
    assert navigator.session.username == "root"


def test_failed_login_keeps_session_empty(navigator):
    layout = login(navigator, password="nope")
    assert isinstance(navigator.active, LoginScreen)
    assert navigator.session is None
    assert layout.banner == "Invalid credentials. Try again."
    assert layout.banner_kind == ERROR


def test_quit_stops_loop_and_closes_store(db, monkeypatch):
    closed = []
    monkeypatch.setattr(navigator_module, "close_store", closed.append)
    nav = _nav(db, ScriptedScreen())

    nav.dispatch(KeyEvent(Key.QUIT))
    assert not nav.running
    assert closed == [db]

    nav.close()
    assert closed == [db]


def test_escape_on_login_quits(navigator):
    press(navigator, Key.ESC)
    assert not navigator.running


def test_pop_on_root_quits(db, monkeypatch):
    monkeypatch.setattr(navigator_module, "close_store", lambda db: None)
    nav = _nav(db, ScriptedScreen(Pop))
    nav.dispatch(ENTER)
    assert not nav.running


def test_pop_resumes_previous_screen_and_refetches(db):
    child = ScriptedScreen(Pop, name="child")
    root = ScriptedScreen(lambda: Push(child), name="root")
    nav = _nav(db, root)
    assert root.entered == 1

    nav.dispatch(ENTER)
    assert nav.active is child
    assert nav.depth == 2
    assert child.entered == 1

    layout = nav.dispatch(ENTER)
    assert nav.active is root
    assert root.entered == 2
    assert layout.title == "root"


def test_replace_swaps_top_in_one_step(db):
    other = ScriptedScreen(name="other")
    nav = _nav(db, ScriptedScreen(lambda: Replace(other)))
    nav.dispatch(ENTER)
    assert nav.stack == [other]


def test_error_outcome_sets_banner_and_keeps_stack(db):
    root = ScriptedScreen(lambda: Error("store", "disk on fire"))
    nav = _nav(db, root)
    layout = nav.dispatch(ENTER)
    assert nav.depth == 1
    assert layout.banner == "disk on fire"
    assert layout.banner_kind == ERROR


def test_store_error_from_screen_becomes_banner(db):
    def boom():
        raise StoreError(StoreError.CONSTRAINT, "still referenced")

    nav = _nav(db, ScriptedScreen(boom))
    layout = nav.dispatch(ENTER)
    assert nav.running
    assert layout.banner == "still referenced"


@pytest.mark.parametrize("outcome", [Push, Replace])
def test_guard_blocks_protected_screen_without_session(db, outcome):
    nav = _nav(db, ScriptedScreen(lambda: outcome(HomeScreen())))
    layout = nav.dispatch(ENTER)
    assert nav.depth == 1
    assert isinstance(nav.active, LoginScreen)
    assert layout.banner == GUARD_MESSAGE


def test_guard_resets_stack_when_session_is_missing(db):
    nav = _nav(db, PatientListScreen())
    layout = nav.dispatch(KeyEvent(Key.DOWN))
    assert nav.depth == 1
    assert isinstance(nav.active, LoginScreen)
    assert layout.banner == GUARD_MESSAGE


def test_guard_after_session_is_lost(logged_in):
    press(logged_in, Key.RIGHT, Key.ENTER)
    assert logged_in.depth == 2

    logged_in.session = None
    press(logged_in, "x")
    assert logged_in.depth == 1
    assert isinstance(logged_in.active, LoginScreen)


def test_non_stay_outcomes_are_logged(navigator, caplog):
    caplog.set_level(logging.INFO, logger="core.navigator")
    login(navigator)
    assert "replace(HomeScreen) from LoginScreen" in caplog.text

    caplog.clear()
    press(navigator, "a")
    assert "Outcome" not in caplog.text


def test_render_is_idempotent(navigator):
    press(navigator, "roo")
    assert navigator.render() == navigator.render()
    assert navigator.active.render_model() == navigator.active.render_model()


def test_dispatch_after_quit_is_inert(navigator):
    press(navigator, Key.QUIT)
    before = navigator.render()
    assert navigator.dispatch(KeyEvent.text("a")) == before
