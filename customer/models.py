"""Customer shipping addresses."""

from common.models import TimeStampedModel
from django.conf import settings
from django.core.validators import RegexValidator
from django.db import models


class Address(TimeStampedModel):
    """Delivery address owned by a user; at most one is the default."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="addresses")
    full_name = models.CharField(max_length=150)
    phone = models.CharField(
        max_length=16,
        validators=[RegexValidator(r"^\+?[0-9]{7,15}$", message="Use only digits, optionally prefixed with +")],
    )
    address_line1 = models.CharField(max_length=200)
    address_line2 = models.CharField(max_length=200, blank=True)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    zip_code = models.CharField(max_length=20, blank=True)
    country = models.CharField(max_length=100, default="Colombia")
    is_default = models.BooleanField(default=False)

    class Meta:
        ordering = ["-is_default", "-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "is_default"], name="address_user_default_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        parts = [self.address_line1, self.address_line2, self.city, self.state, self.country]
        return f"{self.full_name} - " + ", ".join(p for p in parts if p)
