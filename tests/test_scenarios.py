"""Whole sessions driven key by key through the navigator."""
from datetime import date

from core.events import Key
from core.layout import ERROR
from screens.home import HomeScreen
from screens.login import LoginScreen
from screens.patients import PatientListScreen
from screens.staff import StaffDeleteScreen
from services.staff_service import assign_shift, create_staff, list_staff
from services.user_service import get_user_by_username
from tests.helpers import JANE, login, open_menu, press, press_button, select_row, submit


def test_register_login_and_add_patient(navigator, db):
    press_button(navigator, "Register")
    layout = submit(navigator, {"username": "alice", "password": "pw123", "confirm_password": "pw123"})
    assert isinstance(navigator.active, LoginScreen)
    assert layout.banner == "Registration successful! Please log in."
    assert get_user_by_username(db, "alice") is not None

    press_button(navigator, "Register")
    layout = submit(navigator, {"username": "alice", "password": "other", "confirm_password": "other"})
    assert layout.banner == "Username already exists."
    press(navigator, Key.ESC)

    login(navigator, "alice", "pw123")
    assert isinstance(navigator.active, HomeScreen)
    assert navigator.session.username == "alice"

    open_menu(navigator, "Patient Management", "Add Patient")
    layout = submit(navigator, {**JANE, "last_name": ""})
    assert "last_name" in layout.errors
    assert navigator.depth == 2

    layout = submit(navigator, {"last_name": "Doe"})
    assert isinstance(navigator.active, PatientListScreen)
    assert navigator.depth == 2
    assert layout.banner == "Patient Jane Doe added with ID 1."
    assert ("1", "Jane Doe", "1990-01-01", "Female", "555-010-0199") in layout.rows

    press(navigator, Key.ESC)
    assert isinstance(navigator.active, HomeScreen)
    assert navigator.depth == 1


def test_staff_with_shifts_cannot_be_removed(logged_in, db):
    for name in ("Dr Grey", "Dr House", "Nurse Jackie"):
        create_staff(db, name=name, role="Doctor", phone_number="5550100400", address="General Hospital")
    assign_shift(db, 3, date(2024, 5, 1), "Morning")

    open_menu(logged_in, "Staff Scheduling", "Remove Staff")
    select_row(logged_in, 3)
    layout = press(logged_in, Key.ENTER)
    assert layout.dialog.prompt == "Delete staff member #3 (Nurse Jackie)? This cannot be undone."

    layout = press(logged_in, Key.LEFT, Key.ENTER)
    assert isinstance(logged_in.active, StaffDeleteScreen)
    assert layout.banner_kind == ERROR
    assert "shift" in layout.banner
    assert [row[0] for row in layout.rows] == ["1", "2", "3"]
    assert len(list_staff(db)) == 3

    select_row(logged_in, 1)
    layout = press(logged_in, Key.ENTER, "y")
    assert layout.banner == "Staff member 1 deleted successfully!"
    assert [row[0] for row in layout.rows] == ["2", "3"]


def test_logout_then_login_as_someone_else(logged_in):
    press(logged_in, Key.ESC, Key.RIGHT, Key.ENTER)
    assert logged_in.session is None

    layout = login(logged_in, "root", "wrong")
    assert layout.banner == "Invalid credentials. Try again."
    layout = login(logged_in, "nobody", "root")
    assert layout.banner == "Unknown username."

    login(logged_in)
    assert isinstance(logged_in.active, HomeScreen)
    assert logged_in.session.username == "root"


def test_quit_from_deep_in_the_stack(logged_in):
    open_menu(logged_in, "Billing & Finance", "View Invoices")
    press(logged_in, Key.QUIT)
    assert not logged_in.running
