from django.apps import AppConfig


class CustomerConfig(AppConfig):
    """Customer addresses."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "customer"
