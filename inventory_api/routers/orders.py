# =========================================================
# ORDERS ROUTER
#
# ADMINS:
# - Can list, update and delete any order
#
# CUSTOMERS:
# - Can place, view and list items of their own orders only
# - An order belongs to the user linked to its customer
#
# Stock is reconciled by core.stock on create and delete
# =========================================================

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, joinedload

from inventory_api.database import get_db
from inventory_api.core.auth import ensure_owner_or_admin, get_admin_user, get_current_user
from inventory_api.core.exceptions import NotFound
from inventory_api.core.stock import cancel_order, place_order
from inventory_api.models.customers import Customer
from inventory_api.models.order_items import OrderItem
from inventory_api.models.orders import Order
from inventory_api.schemas.order import (
    OrderCreate,
    OrderDetailResponse,
    OrderItemDetailResponse,
    OrderResponse,
    OrderUpdate,
)
from inventory_api.schemas.user import Identity

router = APIRouter(prefix="/orders", tags=["Orders"])


def _get_order_or_404(db: Session, order_id: int, with_items: bool = False) -> Order:
    query = db.query(Order)
    if with_items:
        query = query.options(joinedload(Order.items).joinedload(OrderItem.product))

    order = query.filter(Order.id == order_id).first()

    if not order:
        raise NotFound("Order not found")

    return order


def _owner_of(order: Order) -> int | None:
    return order.customer.user_id if order.customer else None


# =========================================================
# LIST ORDERS
# =========================================================
@router.get("", response_model=list[OrderResponse])
def list_orders(
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    return db.query(Order).order_by(Order.order_date.desc()).all()


# =========================================================
# GET SINGLE ORDER (WITH ITEMS)
# =========================================================
@router.get("/{order_id}", response_model=OrderDetailResponse)
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    order = _get_order_or_404(db, order_id, with_items=True)
    ensure_owner_or_admin(current_user, _owner_of(order))

    return order


# =========================================================
# CREATE ORDER
# =========================================================
@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    order_data: OrderCreate,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    return place_order(db, order_data, current_user)


# =========================================================
# UPDATE ORDER
# =========================================================
@router.put("/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: int,
    order_data: OrderUpdate,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    order = _get_order_or_404(db, order_id)
    changes = order_data.model_dump(exclude_none=True)

    if "customer_id" in changes and db.get(Customer, changes["customer_id"]) is None:
        raise NotFound("Customer not found")

    for field, value in changes.items():
        setattr(order, field, value)

    db.commit()
    db.refresh(order)

    return order


# =========================================================
# DELETE ORDER (RESTOCKS PRODUCTS)
# =========================================================
@router.delete("/{order_id}")
def delete_order(
    order_id: int,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    order = _get_order_or_404(db, order_id)
    cancel_order(db, order)

    return {"message": "Order and related items deleted successfully"}


@router.get("/{order_id}/items", response_model=list[OrderItemDetailResponse])
def get_order_items(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    order = _get_order_or_404(db, order_id)
    ensure_owner_or_admin(current_user, _owner_of(order))

    return (
        db.query(OrderItem)
        .options(joinedload(OrderItem.product))
        .filter(OrderItem.order_id == order_id)
        .order_by(OrderItem.id)
        .all()
    )
