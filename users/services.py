"""Account mutations used by the users views."""

from django.contrib.auth.password_validation import validate_password
from django.db import transaction
from django.utils.text import slugify
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken

from .models import User


def _unique_username(email: str) -> str:
    """Derive a username from the email's local part, suffixing on collision."""
    base = slugify(email.split("@", 1)[0])[:140] or "user"
    candidate = base
    n = 1
    while User.objects.filter(username__iexact=candidate).exists():
        n += 1
        candidate = f"{base}{n}"
    return candidate


@transaction.atomic
def register_user(*, email: str, name: str, password: str, phone: str = "") -> User:
    email = email.strip().lower()
    user = User(username=_unique_username(email), email=email, name=name.strip(), phone=phone)
    validate_password(password, user=user)
    user.set_password(password)
    user.full_clean(exclude=["password"])
    user.save()
    return user


@transaction.atomic
def update_user(*, user: User, acting_user: User, **fields) -> User:
    """Apply profile or admin edits to `user`.

    Only staff may touch `is_staff` / `is_active`; other keys are ignored
    for non-staff callers.
    """
    allowed = {"name", "phone"}
    if acting_user.is_staff:
        allowed |= {"is_staff", "is_active"}
    changed = []
    for key, value in fields.items():
        if key in allowed:
            setattr(user, key, value)
            changed.append(key)
    if changed:
        user.save(update_fields=changed)
    return user


@transaction.atomic
def revoke_refresh_tokens(*, user: User, keep_jti: str | None = None) -> int:
    """Blacklist the user's outstanding refresh tokens, optionally sparing one by jti."""
    tokens = OutstandingToken.objects.filter(user=user, blacklistedtoken__isnull=True)
    if keep_jti:
        tokens = tokens.exclude(jti=keep_jti)
    revoked = 0
    for token in tokens:
        BlacklistedToken.objects.get_or_create(token=token)
        revoked += 1
    return revoked
