"""Address mutations keeping a single default address per user."""

import logging

from django.db import transaction

from .models import Address

logger = logging.getLogger("refrielectricos.customer")


def _unset_other_defaults(address: Address) -> None:
    Address.objects.filter(user_id=address.user_id, is_default=True).exclude(pk=address.pk).update(
        is_default=False
    )


@transaction.atomic
def create_address(*, user, **data) -> Address:
    """Create an address; the user's first address always becomes the default."""

    if not Address.objects.filter(user=user).exists():
        data["is_default"] = True
    address = Address.objects.create(user=user, **data)
    if address.is_default:
        _unset_other_defaults(address)
    logger.info(
        "address.created",
        extra={"event": "address.created", "address_id": address.id, "user_id": user.id},
    )
    return address


@transaction.atomic
def update_address(*, address: Address, **data) -> Address:
    for key, value in data.items():
        setattr(address, key, value)
    address.save()
    if address.is_default:
        _unset_other_defaults(address)
    return address


@transaction.atomic
def delete_address(*, address: Address) -> None:
    """Delete an address; if it was the default, the newest remaining one takes over."""

    user_id, was_default = address.user_id, address.is_default
    address.delete()
    if was_default:
        successor = Address.objects.filter(user_id=user_id).order_by("-created_at", "-id").first()
        if successor is not None:
            successor.is_default = True
            successor.save(update_fields=["is_default", "updated_at"])
