"""Read-only data access helpers for the customer app."""

from django.db.models import QuerySet

from .models import Address


def list_addresses(*, user) -> QuerySet[Address]:
    """The user's addresses, default first then newest."""

    return Address.objects.filter(user=user).order_by("-is_default", "-created_at", "-id")
