# inventory_api/models/products.py

from sqlalchemy import CheckConstraint, Column, Date, Integer, String, Numeric, DateTime
from sqlalchemy.sql import func

from inventory_api.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=True)
    artist = Column(String, nullable=True)
    genre = Column(String, nullable=True)
    release_date = Column(Date, nullable=True)
    sku = Column(String, nullable=True, index=True)
    location = Column(String, nullable=True, index=True)
    category = Column(String, nullable=True, index=True)

    price = Column(Numeric(10, 2), nullable=False)
    list_price = Column(Numeric(10, 2), nullable=False)
    cost_price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("list_price >= 0", name="ck_list_price_non_negative"),
        CheckConstraint("cost_price >= 0", name="ck_cost_price_non_negative"),
        CheckConstraint("quantity >= 0", name="ck_product_quantity_non_negative"),
    )

    @property
    def profit_margin(self) -> float:
        list_price = float(self.list_price or 0)
        if list_price == 0:
            return 0.0
        return round((list_price - float(self.cost_price or 0)) / list_price * 100, 2)
