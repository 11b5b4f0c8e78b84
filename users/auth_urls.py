"""Authentication routes under /api/v1/auth/."""

from django.urls import path

from .views import RefreshView, SignInView, SignOutAllView, SignOutOthersView, SignOutView

urlpatterns = [
    path("signin/", SignInView.as_view(), name="signin"),
    path("refresh/", RefreshView.as_view(), name="token_refresh"),
    path("signout/", SignOutView.as_view(), name="signout"),
    path("signout-all/", SignOutAllView.as_view(), name="signout_all"),
    path("signout-others/", SignOutOthersView.as_view(), name="signout_others"),
]
