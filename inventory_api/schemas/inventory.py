from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime

from inventory_api.schemas.product import ProductResponse
from inventory_api.schemas.supplier import SupplierResponse


class InventoryCreate(BaseModel):
    product_id: int
    supplier_id: int | None = None
    quantity_received: int = Field(..., ge=0)
    date_received: datetime | None = None
    remarks: str | None = None

class InventoryUpdate(BaseModel):
    product_id: int | None = None
    supplier_id: int | None = None
    quantity_received: int | None = Field(None, ge=0)
    date_received: datetime | None = None
    remarks: str | None = None

class InventoryResponse(BaseModel):
    id: int
    product_id: int | None
    supplier_id: int | None
    quantity_received: int
    date_received: datetime | None
    remarks: str | None

    model_config = ConfigDict(from_attributes=True)

class InventoryDetailResponse(InventoryResponse):
    product: ProductResponse | None = None
    supplier: SupplierResponse | None = None
