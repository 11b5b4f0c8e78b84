"""User model for authentication and account management.

The custom `User` extends Django's `AbstractUser` with a unique, normalized
email, a display name and an optional phone number. Staff users
(`is_staff=True`) are the store administrators.
"""

from django.contrib.auth.models import AbstractUser
from django.core.validators import RegexValidator
from django.db import models


class User(AbstractUser):
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True)
    phone = models.CharField(
        max_length=16,
        blank=True,
        validators=[RegexValidator(r"^\+?[1-9]\d{1,14}$", message="Use E.164 format (e.g., +573001234567)")],
        help_text="Contact number in E.164 format",
    )

    class Meta:
        ordering = ["-date_joined"]

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        if self.phone:
            self.phone = self.phone.strip()
        if not self.name:
            self.name = self.get_full_name() or self.username
        super().save(*args, **kwargs)

    @property
    def is_admin(self) -> bool:
        return self.is_staff

    def __str__(self) -> str:  # pragma: no cover
        return self.email or self.username
