# inventory_api/models/inventory.py

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, ForeignKey, String
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from inventory_api.database import Base


class Inventory(Base):
    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="SET NULL"), nullable=True, index=True)
    quantity_received = Column(Integer, nullable=False)
    date_received = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    remarks = Column(String, nullable=True)

    product = relationship("Product")
    supplier = relationship("Supplier")

    __table_args__ = (
        CheckConstraint("quantity_received >= 0", name="ck_inventory_quantity_received_non_negative"),
    )
