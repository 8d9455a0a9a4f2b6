# inventory_api/routers/admin_bootstrap.py

import hmac
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from inventory_api.database import get_db
from inventory_api.models.users import User
from inventory_api.schemas.user import PromoteAdmin
from inventory_api.core.config import settings
from inventory_api.core.exceptions import Forbidden, NotFound

router = APIRouter(prefix="/internal", tags=["Internal"])

logger = logging.getLogger("app")


@router.post("/promote-admin")
def promote_admin(
    data: PromoteAdmin,
    db: Session = Depends(get_db),
):
    """
    Makes a user admin by username.
    Disabled unless INTERNAL_ADMIN_SECRET is configured.
    """

    # Protect this route with a secret key
    if not settings.INTERNAL_ADMIN_SECRET or not hmac.compare_digest(
        data.secret, settings.INTERNAL_ADMIN_SECRET
    ):
        logger.warning(f"Rejected admin promotion for {data.username}")
        raise Forbidden("Unauthorized")

    user = db.query(User).filter(User.username == data.username).first()

    if not user:
        raise NotFound("User not found")

    user.is_admin = True
    db.commit()

    logger.info(f"{data.username} promoted to admin")

    return {"message": f"{data.username} promoted to admin"}
