# inventory_api/models/users.py

from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.sql import func

from inventory_api.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    # Admin flag gates every mutating catalogue route
    is_admin = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
