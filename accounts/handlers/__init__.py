from accounts.handlers.views import LoginView, MeView, SignupView, UserAdminView

__all__ = [
    "LoginView",
    "MeView",
    "SignupView",
    "UserAdminView",
]
