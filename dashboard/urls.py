from django.urls import path

from .views import DashboardStatsView

app_name = "dashboard"

urlpatterns = [
    path("", DashboardStatsView.as_view(), name="stats"),
]
