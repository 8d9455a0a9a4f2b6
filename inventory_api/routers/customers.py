# inventory_api/routers/customers.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from inventory_api.database import get_db
from inventory_api.core.auth import ensure_owner_or_admin, get_admin_user, get_current_user
from inventory_api.core.exceptions import Conflict, NotFound
from inventory_api.core.stock import remove_customer
from inventory_api.models.customers import Customer
from inventory_api.models.orders import Order
from inventory_api.models.users import User
from inventory_api.schemas.customer import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
)
from inventory_api.schemas.order import OrderResponse
from inventory_api.schemas.user import Identity

router = APIRouter(
    prefix="/customers",
    tags=["Customers"],
)


def _get_customer_or_404(db: Session, customer_id: int) -> Customer:
    customer = db.query(Customer).filter(Customer.id == customer_id).first()

    if not customer:
        raise NotFound("Customer not found")

    return customer


def _get_owned_customer(db: Session, customer_id: int, current_user: Identity) -> Customer:
    # Users are refused before existence is revealed
    customer = db.get(Customer, customer_id)
    ensure_owner_or_admin(current_user, customer.user_id if customer else None)

    return _get_customer_or_404(db, customer_id)


@router.get("", response_model=list[CustomerResponse])
def list_customers(
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    return db.query(Customer).order_by(Customer.id).all()


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    return _get_owned_customer(db, customer_id, current_user)


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    customer_data: CustomerCreate,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    values = customer_data.model_dump(exclude_none=True)

    # Non-admin users may only create their own customer profile
    if not current_user.is_admin:
        values.setdefault("user_id", current_user.id)
        ensure_owner_or_admin(current_user, values["user_id"], "Can only create your own customer profile")

    user_id = values.get("user_id")
    if user_id is not None:
        if db.get(User, user_id) is None:
            raise NotFound("User not found")

        if db.query(Customer).filter(Customer.user_id == user_id).first():
            raise Conflict("Customer already exists")

    customer = Customer(**values)

    db.add(customer)
    db.commit()
    db.refresh(customer)

    return customer


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int,
    customer_data: CustomerUpdate,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    customer = _get_owned_customer(db, customer_id, current_user)

    for field, value in customer_data.model_dump(exclude_unset=True).items():
        setattr(customer, field, value)

    db.commit()
    db.refresh(customer)

    return customer


@router.delete("/{customer_id}")
def delete_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    customer = _get_customer_or_404(db, customer_id)
    remove_customer(db, customer)

    return {"message": "Customer and related orders deleted successfully"}


@router.get("/{customer_id}/orders", response_model=list[OrderResponse])
def customer_orders(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    _get_owned_customer(db, customer_id, current_user)

    return (
        db.query(Order)
        .filter(Order.customer_id == customer_id)
        .order_by(Order.order_date.desc())
        .all()
    )
