# inventory_api/routers/products.py

from decimal import Decimal

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from inventory_api.database import get_db
from inventory_api.core.auth import get_admin_user, get_current_user
from inventory_api.core.exceptions import NotFound, ValidationFailed
from inventory_api.models.products import Product
from inventory_api.schemas.product import (
    ProductBatchDelete,
    ProductBatchDeleteResponse,
    ProductCreate,
    ProductMessageResponse,
    ProductUpdate,
    ProductResponse,
)

router = APIRouter(
    prefix="/products",
    tags=["Products"],
    dependencies=[Depends(get_current_user)],
)


def _validate_prices(list_price: Decimal | None, cost_price: Decimal | None):
    if list_price is None or list_price < 0:
        raise ValidationFailed("Valid list price is required")

    if cost_price is None or cost_price < 0:
        raise ValidationFailed("Valid cost price is required")

    # Business rule: cost price must not exceed list price
    if cost_price > list_price:
        raise ValidationFailed("Cost price cannot be greater than list price")


def _get_product_or_404(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()

    if not product:
        raise NotFound("Product not found")

    return product


@router.get("", response_model=list[ProductResponse])
def list_products(db: Session = Depends(get_db)):
    return db.query(Product).order_by(Product.id).all()


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    _validate_prices(product_data.list_price, product_data.cost_price)

    values = product_data.model_dump()
    if values["price"] is None:
        values["price"] = product_data.list_price

    product = Product(**values)

    db.add(product)
    db.commit()
    db.refresh(product)

    return product


@router.get("/location/{location}", response_model=list[ProductResponse])
def products_by_location(location: str, db: Session = Depends(get_db)):
    return db.query(Product).filter(Product.location == location).all()


@router.get("/category/{category}", response_model=list[ProductResponse])
def products_by_category(category: str, db: Session = Depends(get_db)):
    return db.query(Product).filter(Product.category == category).all()


@router.get("/sku/{sku}", response_model=list[ProductResponse])
def products_by_sku(sku: str, db: Session = Depends(get_db)):
    return db.query(Product).filter(Product.sku == sku).all()


@router.delete("/batch/delete", response_model=ProductBatchDeleteResponse)
def batch_delete_products(
    batch: ProductBatchDelete,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    if not batch.product_ids:
        raise ValidationFailed("Please provide an array of product IDs")

    deleted_count = (
        db.query(Product)
        .filter(Product.id.in_(batch.product_ids))
        .delete(synchronize_session=False)
    )

    if deleted_count == 0:
        db.rollback()
        raise NotFound("No products found to delete")

    db.commit()

    return {"message": "Products deleted successfully", "deleted_count": deleted_count}


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return _get_product_or_404(db, product_id)


@router.put("/{product_id}", response_model=ProductMessageResponse)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    product = _get_product_or_404(db, product_id)

    # Validate prices if either is being updated
    changes = product_data.model_dump(exclude_unset=True)
    if "list_price" in changes or "cost_price" in changes:
        new_list_price = changes.get("list_price", product.list_price)
        new_cost_price = changes.get("cost_price", product.cost_price)
        _validate_prices(new_list_price, new_cost_price)

    for field, value in changes.items():
        if value is None and field in ("price", "list_price", "cost_price", "quantity"):
            continue
        setattr(product, field, value)

    db.commit()
    db.refresh(product)

    return {"message": "Product updated successfully", "product": product}


@router.delete("/{product_id}", response_model=ProductMessageResponse)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    product = _get_product_or_404(db, product_id)
    deleted = ProductResponse.model_validate(product)

    db.delete(product)
    db.commit()

    return {"message": "Product deleted successfully", "product": deleted}
