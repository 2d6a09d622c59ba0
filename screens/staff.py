from dataclasses import replace

from core.events import Key
from core.layout import DialogView
from core.outcomes import STAY, Replace
from core.time_utils import today
from screens.base import EntityDeleteScreen, EntityEditScreen, Field, FormScreen, PickerScreen, Row
from services.staff_service import (
    SHIFT_HOURS,
    SHIFTS,
    STAFF_ROLES,
    assign_shift,
    create_staff,
    delete_staff,
    get_staff,
    list_shifts_for_staff,
    list_staff,
    update_staff,
)
from services.validators import parse_date, validate_shift, validate_staff

STAFF_HELP = (
    "Tab/Arrows: Switch Fields | Enter: Submit | Esc: Back\n"
    "For Role: Type 'D' for Doctor, 'N' for Nurse, 'A' for Admin, 'T' for Technician"
)
STAFF_COLUMNS = ("ID", "Name", "Role", "Phone", "Email")


def staff_fields():
    return [
        Field("name", "Name", required=True),
        Field("role", "Role", required=True, choices=STAFF_ROLES, value=STAFF_ROLES[0]),
        Field("phone_number", "Phone Number", required=True),
        Field("email", "Email"),
        Field("address", "Address", required=True),
    ]


def staff_payload(values: dict) -> dict:
    return {name: value.strip() for name, value in values.items()}


def staff_rows(db):
    return [
        Row(s.id, (str(s.id), s.name, s.role, s.phone_number, s.email or "-"))
        for s in list_staff(db)
    ]


def shift_lines(db, staff_id: int) -> list[str]:
    shifts = list_shifts_for_staff(db, staff_id)
    if not shifts:
        return ["No shifts assigned."]
    return [f"{s.date.isoformat()}  {s.shift} ({SHIFT_HOURS.get(s.shift, '')})" for s in shifts]


class StaffAddScreen(FormScreen):
    title = "Add Staff Member"
    help_text = STAFF_HELP
    validator = staticmethod(validate_staff)

    def make_fields(self):
        return staff_fields()

    def commit(self, values, ctx):
        member = create_staff(ctx.db, **staff_payload(values))
        listing = StaffListScreen()
        listing.show_success(f"Staff member {member.name} added with ID {member.id}.")
        return Replace(listing)


class StaffListScreen(PickerScreen):
    title = "Staff List"
    columns = STAFF_COLUMNS
    empty_message = "No staff members found."

    def load_rows(self, db):
        return staff_rows(db)

    def describe(self, row_id, db):
        s = get_staff(db, row_id)
        return [
            f"Staff #{s.id}: {s.name} ({s.role})",
            f"Phone: {s.phone_number}    Email: {s.email or '-'}",
            f"Address: {s.address}",
            "Assigned Shifts:",
            *("  " + line for line in shift_lines(db, s.id)),
        ]


class StaffUpdateScreen(EntityEditScreen):
    title = "Update Staff"
    entity_label = "Staff member"
    columns = STAFF_COLUMNS
    empty_message = "No staff members found."
    validator = staticmethod(validate_staff)

    def load_rows(self, db):
        return staff_rows(db)

    def make_fields(self):
        return staff_fields()

    def fetch_values(self, db, row_id):
        s = get_staff(db, row_id)
        return {
            "name": s.name,
            "role": s.role,
            "phone_number": s.phone_number,
            "email": s.email,
            "address": s.address,
        }

    def save(self, db, row_id, values):
        update_staff(db, row_id, **staff_payload(values))


class StaffDeleteScreen(EntityDeleteScreen):
    title = "Remove Staff"
    help_text = "Type: Search | Up/Down: Select | Enter: Remove | Esc: Back"
    entity_label = "Staff member"
    columns = STAFF_COLUMNS
    empty_message = "No staff members found."

    def load_rows(self, db):
        return staff_rows(db)

    def remove(self, db, row_id):
        delete_staff(db, row_id)


# -----------------------------
# Shift assignment
# -----------------------------
class _AssignForm(FormScreen):
    help_text = (
        "Tab/Arrows: Switch Fields | Enter: Assign | Esc: Back to Staff\n"
        "For Shift: Type 'M' for Morning, 'A' for Afternoon, 'N' for Night"
    )
    submit_label = "Assign"
    OPTIONS = ("Yes", "No")

    def __init__(self, owner: "StaffAssignScreen", staff_name: str):
        self.owner = owner
        self.staff_name = staff_name
        self.title = f"Assign Shift - {staff_name}"
        super().__init__({"date": today().isoformat(), "shift": SHIFTS[0]})
        self.assigned: tuple[str, ...] = ()
        self.pending: dict | None = None
        self.confirm_choice = 0

    def make_fields(self):
        return [
            Field("date", "Date (YYYY-MM-DD)", required=True),
            Field("shift", "Shift", required=True, choices=SHIFTS),
        ]

    def validate(self, values, db):
        return validate_shift({**values, "staff_id": str(self.owner.staff_id)}, db)

    def commit(self, values, ctx):
        # nothing is written until the dialog is answered
        self.pending = dict(values)
        self.confirm_choice = 0
        self.clear_banner()
        return STAY

    def handle_event(self, event, ctx):
        if self.pending is None:
            return super().handle_event(event, ctx)

        if event.key in (Key.LEFT, Key.RIGHT, Key.TAB):
            self.confirm_choice = 1 - self.confirm_choice
        elif event.key is Key.ESC or (event.key is Key.CHAR and event.char.lower() == "n"):
            self.pending = None
        elif event.key is Key.CHAR and event.char.lower() == "y":
            return self._confirm(ctx)
        elif event.key is Key.ENTER:
            if self.confirm_choice == 0:
                return self._confirm(ctx)
            self.pending = None
        return STAY

    def _confirm(self, ctx):
        values, self.pending = self.pending, None
        return self.owner.assign(values, ctx)

    def cancel(self, ctx):
        return self.owner.back_to_picker(ctx)

    def detail_lines(self):
        return ("Assigned Shifts:", *self.assigned)

    def render_model(self):
        layout = super().render_model()
        if self.pending is None:
            return layout
        shift = self.pending["shift"]
        prompt = (
            f"Assign {shift} ({SHIFT_HOURS.get(shift, '')}) shift to "
            f"{self.staff_name} on {self.pending['date'].strip()}?"
        )
        return replace(layout, dialog=DialogView(prompt, self.OPTIONS, self.confirm_choice))


class StaffAssignScreen(PickerScreen):
    title = "Assign Shift"
    help_text = "Type: Search | Up/Down: Select Staff | Enter: Assign | Esc: Back"
    columns = STAFF_COLUMNS
    empty_message = "No staff members found."

    def __init__(self):
        super().__init__()
        self.staff_id: int | None = None
        self.form: _AssignForm | None = None

    def load_rows(self, db):
        return staff_rows(db)

    def on_enter(self, ctx):
        super().on_enter(ctx)
        if self.form is not None:
            self.form.assigned = tuple(shift_lines(ctx.db, self.staff_id))

    def choose(self, row_id, ctx):
        member = get_staff(ctx.db, row_id)
        self.staff_id = member.id
        self.form = _AssignForm(self, member.name)
        self.form.assigned = tuple(shift_lines(ctx.db, member.id))
        return STAY

    def assign(self, values, ctx):
        shift = assign_shift(ctx.db, self.staff_id, parse_date(values["date"]), values["shift"])
        self.form.assigned = tuple(shift_lines(ctx.db, self.staff_id))
        self.form.show_success(f"{shift.shift} shift on {shift.date.isoformat()} assigned successfully!")
        return STAY

    def back_to_picker(self, ctx):
        self.form = None
        self.staff_id = None
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
