from pydantic import BaseModel, ConfigDict


class CustomerCreate(BaseModel):
    # Admins may link the record to a user account; users always get their own
    user_id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    address: str | None = None

class CustomerUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    address: str | None = None

class CustomerResponse(BaseModel):
    id: int
    user_id: int | None
    first_name: str | None
    last_name: str | None
    email: str | None
    phone_number: str | None
    address: str | None

    model_config = ConfigDict(from_attributes=True)
