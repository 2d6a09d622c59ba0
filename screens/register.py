from core.outcomes import Replace
from screens.base import Button, Field, FormScreen
from screens.login import LoginScreen
from services.user_service import register
from services.validators import validate_registration


class RegisterScreen(FormScreen):
    title = "Hospital Records - Register"
    help_text = "Tab: Switch Fields | Enter: Register | Esc: Back to Login"
    requires_session = False
    validator = staticmethod(validate_registration)

    def make_fields(self):
        return [
            Field("username", "Username", required=True),
            Field("password", "Password", required=True, secret=True),
            Field("confirm_password", "Confirm Password", required=True, secret=True),
        ]

    def buttons(self):
        return [Button("Register", "submit"), Button("Back to Login", "cancel")]

    def commit(self, values, ctx):
        register(ctx.db, values["username"], values["password"], rounds=ctx.bcrypt_rounds)
        return Replace(LoginScreen(notice="Registration successful! Please log in."))

    def cancel(self, ctx):
        return Replace(LoginScreen())
