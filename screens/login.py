from core.outcomes import Quit, Replace
from screens.base import Button, Field, FormScreen
from services.user_service import login
from services.validators import validate_credentials


class LoginScreen(FormScreen):
    title = "Hospital Records - Login"
    help_text = "Tab: Switch Fields | Enter: Login | Esc: Quit"
    requires_session = False
    submit_label = "Login"
    validator = staticmethod(validate_credentials)

    def __init__(self, notice: str | None = None):
        super().__init__()
        if notice:
            self.show_success(notice)

    def make_fields(self):
        return [
            Field("username", "Username", required=True),
            Field("password", "Password", required=True, secret=True),
        ]

    def buttons(self):
        return [Button("Login", "submit"), Button("Register", "register")]

    def commit(self, values, ctx):
        session = login(ctx.db, values["username"], values["password"])
        ctx.login(session)

        # imported here: home imports this module for logout
        from screens.home import HomeScreen
        return Replace(HomeScreen(session.username))

    def register(self, ctx):
        from screens.register import RegisterScreen
        return Replace(RegisterScreen())

    def cancel(self, ctx):
        return Quit()
