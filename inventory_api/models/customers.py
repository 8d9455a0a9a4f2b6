# inventory_api/models/customers.py

from sqlalchemy import Column, ForeignKey, Integer, String

from inventory_api.database import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)

    # Set for self-service profiles; admin-made records may have no account
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        unique=True,
        nullable=True,
        index=True,
    )

    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    email = Column(String, nullable=True, index=True)
    phone_number = Column(String, nullable=True)
    address = Column(String, nullable=True)
