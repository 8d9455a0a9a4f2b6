from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from inventory_api.database import get_db
from inventory_api.models.users import User
from inventory_api.schemas.user import TokenResponse, UserCreate, UserLogin
from inventory_api.core.exceptions import Conflict, Internal, Unauthenticated
from inventory_api.core.hashing import hash_password, verify_password
from inventory_api.core.jwt import token_service
from inventory_api.core.rate_limiter import limiter
from inventory_api.core.config import settings

router = APIRouter(prefix="/auth", tags=["Authentication"])

logger = logging.getLogger("app")


def _issue_token(user: User) -> str:
    return token_service.issue(user.id, user.username, user.is_admin)


# ---------------- REGISTER ----------------
@router.post("/register", response_model=TokenResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
def register(request: Request, user_data: UserCreate, db: Session = Depends(get_db)):
    if db.query(User).filter(User.username == user_data.username).first():
        raise Conflict("User already exists")

    try:
        user = User(
            username=user_data.username,
            password_hash=hash_password(user_data.password),
            is_admin=False,
        )
        db.add(user)
        db.commit()
        db.refresh(user)

    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Unable to create account: {e}")
        raise Internal("Unable to create account")

    logger.info(f"Registered user {user.username}")

    return {"token": _issue_token(user)}

# ---------------- LOGIN ----------------
@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
def login(
    request: Request,
    credentials: UserLogin,
    db: Session = Depends(get_db),
):
    user = db.query(User).filter(User.username == credentials.username).first()

    if not user or not verify_password(credentials.password, user.password_hash):
        logger.warning(f"Failed login for {credentials.username}")
        raise Unauthenticated("Invalid credentials")

    return {"token": _issue_token(user)}
