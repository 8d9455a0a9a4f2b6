from decimal import Decimal
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from datetime import date, datetime


def _camel(name: str, camel: str):
    # Accept the wire name or the column name, always emit the wire name
    return {
        "validation_alias": AliasChoices(camel, name),
        "serialization_alias": camel,
    }


class ProductCreate(BaseModel):
    title: str | None = None
    artist: str | None = None
    genre: str | None = None
    release_date: date | None = Field(None, **_camel("release_date", "releaseDate"))
    sku: str | None = None
    location: str | None = None
    category: str | None = None

    price: Decimal | None = Field(None, ge=0, lt=100_000_000)

    list_price: Decimal = Field(
        ...,
        lt=100_000_000,
        description="List price must be below 100 million",
        **_camel("list_price", "listPrice"),
    )

    cost_price: Decimal = Field(
        ...,
        lt=100_000_000,
        description="Cost price must be below 100 million",
        **_camel("cost_price", "costPrice"),
    )

    quantity: int = Field(0, ge=0)


class ProductUpdate(BaseModel):
    title: str | None = None
    artist: str | None = None
    genre: str | None = None
    release_date: date | None = Field(None, **_camel("release_date", "releaseDate"))
    sku: str | None = None
    location: str | None = None
    category: str | None = None
    price: Decimal | None = Field(None, ge=0, lt=100_000_000)
    list_price: Decimal | None = Field(None, lt=100_000_000, **_camel("list_price", "listPrice"))
    cost_price: Decimal | None = Field(None, lt=100_000_000, **_camel("cost_price", "costPrice"))
    quantity: int | None = Field(None, ge=0)


class ProductResponse(BaseModel):
    id: int
    title: str | None
    artist: str | None
    genre: str | None
    release_date: date | None = Field(None, **_camel("release_date", "releaseDate"))
    sku: str | None
    location: str | None
    category: str | None
    price: float
    list_price: float = Field(..., **_camel("list_price", "listPrice"))
    cost_price: float = Field(..., **_camel("cost_price", "costPrice"))
    quantity: int
    profit_margin: float = Field(..., **_camel("profit_margin", "profitMargin"))
    created_at: datetime | None = Field(None, **_camel("created_at", "createdAt"))
    updated_at: datetime | None = Field(None, **_camel("updated_at", "updatedAt"))

    model_config = ConfigDict(from_attributes=True)


class ProductMessageResponse(BaseModel):
    message: str
    product: ProductResponse


class ProductBatchDelete(BaseModel):
    product_ids: list[int] = Field(default_factory=list, **_camel("product_ids", "productIds"))


class ProductBatchDeleteResponse(BaseModel):
    message: str
    deleted_count: int = Field(..., **_camel("deleted_count", "deletedCount"))
