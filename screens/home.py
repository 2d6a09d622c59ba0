from core.events import Key
from core.layout import DialogView, LayoutDescription
from core.outcomes import STAY, Push, Replace
from screens.base import Screen
from screens import finance, patients, records, staff

# Feature -> [(action label, screen class)]
MENU = (
    ("Patient Management", (
        ("Add Patient", patients.PatientAddScreen),
        ("List Patients", patients.PatientListScreen),
        ("Update Patient", patients.PatientUpdateScreen),
        ("Delete Patient", patients.PatientDeleteScreen),
    )),
    ("Staff Scheduling", (
        ("Add Staff", staff.StaffAddScreen),
        ("Assign Shift", staff.StaffAssignScreen),
        ("List Staff", staff.StaffListScreen),
        ("Update Staff", staff.StaffUpdateScreen),
        ("Remove Staff", staff.StaffDeleteScreen),
    )),
    ("Medical Records", (
        ("Store Record", records.RecordStoreScreen),
        ("Retrieve Records", records.RecordRetrieveScreen),
        ("Update Record", records.RecordUpdateScreen),
        ("Delete Record", records.RecordDeleteScreen),
    )),
    ("Billing & Finance", (
        ("Generate Invoice", finance.InvoiceCreateScreen),
        ("View Invoices", finance.InvoiceViewScreen),
        ("Update Invoice", finance.InvoiceUpdateScreen),
    )),
)

FEATURES = 0
ACTIONS = 1


class HomeScreen(Screen):
    """Two-panel menu: features on the left, their actions on the right."""

    title = "Hospital Records"
    help_text = "Arrows: Navigate | Enter: Select | Esc: Back/Logout | Ctrl-Q: Quit"

    def __init__(self, username: str = ""):
        super().__init__()
        self.username = username
        self.panel = FEATURES
        self.feature = 0
        self.actions = [0] * len(MENU)
        self.logout_dialog = False
        self.logout_choice = 1

    def handle_event(self, event, ctx):
        if self.logout_dialog:
            return self._handle_logout_dialog(event, ctx)

        key = event.key
        if key is Key.LEFT:
            self.panel = FEATURES
        elif key is Key.RIGHT:
            self.panel = ACTIONS
        elif key in (Key.UP, Key.DOWN):
            step = 1 if key is Key.DOWN else -1
            if self.panel == FEATURES:
                self.feature = (self.feature + step) % len(MENU)
            else:
                options = MENU[self.feature][1]
                self.actions[self.feature] = (self.actions[self.feature] + step) % len(options)
        elif key is Key.ENTER:
            if self.panel == FEATURES:
                self.panel = ACTIONS
            else:
                _, screen_class = MENU[self.feature][1][self.actions[self.feature]]
                return Push(screen_class())
        elif key is Key.ESC:
            if self.panel == ACTIONS:
                self.panel = FEATURES
            else:
                self.logout_dialog = True
                self.logout_choice = 1  # default to "No"
        return STAY

    def _handle_logout_dialog(self, event, ctx):
        if event.key in (Key.LEFT, Key.RIGHT):
            self.logout_choice = 1 - self.logout_choice
        elif event.key is Key.ESC:
            self.logout_dialog = False
        elif event.key is Key.ENTER:
            self.logout_dialog = False
            if self.logout_choice == 0:
                ctx.logout()
                from screens.login import LoginScreen
                return Replace(LoginScreen(notice="You have been logged out."))
        return STAY

    @property
    def selected_action(self) -> str:
        return MENU[self.feature][1][self.actions[self.feature]][0]

    def render_model(self):
        features = tuple(name for name, _ in MENU)
        options = tuple(label for label, _ in MENU[self.feature][1])
        rows = tuple(
            (feature, options[i] if i < len(options) else "")
            for i, feature in enumerate(features)
        ) + tuple(("", label) for label in options[len(features):])

        dialog = None
        if self.logout_dialog:
            dialog = DialogView("Are you sure you want to log out?", ("Yes", "No"), self.logout_choice)

        return LayoutDescription(
            title=f"{self.title} - Welcome, {self.username}" if self.username else self.title,
            columns=("Features", "Actions"),
            rows=rows,
            selected=self.feature if self.panel == FEATURES else self.actions[self.feature],
            focus=self.panel,
            detail=(f"> {features[self.feature]} / {self.selected_action}",),
            banner=self.banner,
            banner_kind=self.banner_kind,
            dialog=dialog,
            help=self.help_text,
        )
