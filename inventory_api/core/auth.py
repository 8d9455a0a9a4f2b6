# inventory_api/core/auth.py

import logging

from fastapi import Depends, Request

from inventory_api.core.exceptions import Forbidden, InvalidToken, Unauthenticated
from inventory_api.core.jwt import token_service
from inventory_api.core.security import token_header
from inventory_api.schemas.user import Identity

logger = logging.getLogger("app")


def get_current_user(
    request: Request,
    token: str | None = Depends(token_header),
) -> Identity:
    if not token:
        raise Unauthenticated("No token, authorization denied")

    try:
        payload = token_service.verify(token)
    except InvalidToken:
        logger.warning(f"Rejected invalid token on {request.method} {request.url.path}")
        raise

    try:
        identity = Identity(
            id=int(payload["sub"]),
            username=payload.get("username", ""),
            is_admin=bool(payload.get("is_admin", False)),
        )
    except ValueError:
        raise InvalidToken("Token is not valid")

    request.state.user = identity

    return identity


def get_admin_user(
    request: Request,
    current_user: Identity = Depends(get_current_user),
) -> Identity:
    # Identity is attached by get_current_user
    if getattr(request.state, "user", None) is None:
        raise Unauthenticated("Authentication required")

    # Ensure the user has admin privileges
    if not current_user.is_admin:
        raise Forbidden("Admin access required")

    return current_user


def ensure_owner_or_admin(identity: Identity, owner_user_id: int | None, message: str = "Access denied"):
    """Allow admins, or the user account that owns the resource."""
    if identity.is_admin:
        return

    if owner_user_id is None or identity.id != owner_user_id:
        raise Forbidden(message)
