from pydantic import BaseModel, Field

class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=150, description="Unique login name")
    password: str = Field(..., min_length=1, max_length=72, description="Plain password (will be hashed)")

class UserLogin(BaseModel):
    username: str
    password: str

class TokenResponse(BaseModel):
    token: str

class PromoteAdmin(BaseModel):
    username: str
    secret: str

class Identity(BaseModel):
    """Caller identity decoded from the access token."""
    id: int
    username: str
    is_admin: bool = False
