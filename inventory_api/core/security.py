from fastapi.security import APIKeyHeader

from inventory_api.core.config import settings

# Clients send the bearer token in a custom header, not Authorization
token_header = APIKeyHeader(name=settings.AUTH_TOKEN_HEADER, auto_error=False)
