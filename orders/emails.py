"""Customer emails for the orders app, linking back to FRONTEND_URL."""

from django.conf import settings
from django.core.mail import send_mail


def order_url(order) -> str:
    frontend = (getattr(settings, "FRONTEND_URL", "") or "").rstrip("/")
    return f"{frontend}/profile/orders/{order.id}" if frontend else ""


def send_order_paid_email(order) -> None:
    """Confirm payment to the customer; no-op when the order has no email."""
    to_email = order.email or getattr(order.user, "email", "")
    if not to_email:
        return

    reference = order.number or order.id
    name = getattr(order.user, "name", "")
    lines = [
        f"Hola {name}," if name else "Hola,",
        "",
        f"Recibimos el pago de tu pedido {reference}.",
        f"Total: ${order.total:,.0f} COP",
    ]
    link = order_url(order)
    if link:
        lines += ["", f"Puedes ver el estado de tu pedido aquí: {link}"]
    lines += ["", "Gracias por comprar en Refrielectricos."]

    send_mail(
        f"Pedido {reference} confirmado",
        "\n".join(lines) + "\n",
        getattr(settings, "DEFAULT_FROM_EMAIL", None),
        [to_email],
        fail_silently=True,
    )
