from django.urls import path

from accounts.handlers import LoginView, MeView, SignupView, UserAdminView

urlpatterns = [
    path("auth/signup", SignupView.as_view(), name="auth-signup"),
    path("auth/login", LoginView.as_view(), name="auth-login"),
    path("auth/me", MeView.as_view(), name="auth-me"),
    path("users/<int:user_id>", UserAdminView.as_view(), name="user-admin"),
]
