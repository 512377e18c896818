from django.urls import path
from . import views

app_name = "accounts"

urlpatterns = [
    path("auth/register", views.register, name="register"),
    path("auth/login", views.login, name="login"),
    path("auth/verify-email", views.verify_email, name="verify_email"),
    path("auth/forgot-password", views.forgot_password, name="forgot_password"),
    path("auth/reset-password/<str:token>", views.reset_password, name="reset_password"),
    path("auth/me", views.me, name="me"),
]
