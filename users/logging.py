import logging

logger = logging.getLogger("auth")


def log_auth_event(action: str, request, user=None, status: str = "success", extra: dict | None = None):
    """Log an auth event as a dict message (action, status, client ip, user)."""
    payload = {
        "action": action,
        "status": status,
        "ip": request.META.get("REMOTE_ADDR"),
    }
    if user is not None and getattr(user, "pk", None) is not None:
        payload.update({"user_id": user.pk, "email": user.email})
    if extra:
        payload.update(extra)
    logger.info(payload)
