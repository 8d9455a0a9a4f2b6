from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError

from inventory_api.core.config import settings
from inventory_api.core.exceptions import InvalidToken


class TokenService:
    def __init__(self, secret_key: str, algorithm: str, expires_minutes: int):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expires_minutes)

    def issue(self, user_id: int, username: str, is_admin: bool,
              expires_delta: timedelta | None = None) -> str:
        expire = datetime.now(timezone.utc) + (expires_delta or self.expires_delta)
        to_encode = {
            "sub": str(user_id),
            "username": username,
            "is_admin": is_admin,
            "exp": expire,
            "type": "access",
        }

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict:
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm]
            )
        except JWTError:
            raise InvalidToken("Token is not valid")

        # Ensure the token type is "access"
        if payload.get("type") != "access" or payload.get("sub") is None:
            raise InvalidToken("Token is not valid")

        return payload


token_service = TokenService(
    settings.SECRET_KEY,
    settings.ALGORITHM,
    settings.ACCESS_TOKEN_EXPIRE_MINUTES,
)
