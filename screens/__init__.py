from .base import Screen, FormScreen, PickerScreen
from .login import LoginScreen
from .register import RegisterScreen

__all__ = ["Screen", "FormScreen", "PickerScreen", "LoginScreen", "RegisterScreen"]
