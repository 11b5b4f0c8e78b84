"""Account routes under /api/v1/account/."""

from django.urls import path

from .views import profile, register

urlpatterns = [
    path("profile/", profile, name="profile"),
    path("register/", register, name="register"),
]
