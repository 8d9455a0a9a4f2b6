# =========================================================
# STOCK RECONCILIATION
# Keeps Product.quantity in step with inventory receipts and orders.
#
# Each workflow runs in a single transaction:
# - product rows are locked (SELECT ... FOR UPDATE) in id order before they are read
# - any failure rolls back every write of the workflow
# =========================================================

import logging
from contextlib import contextmanager
from collections import Counter
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_api.core.auth import ensure_owner_or_admin
from inventory_api.core.exceptions import ApiError, InsufficientStock, Internal, NotFound, ValidationFailed
from inventory_api.models.customers import Customer
from inventory_api.models.inventory import Inventory
from inventory_api.models.order_items import OrderItem
from inventory_api.models.orders import Order
from inventory_api.models.products import Product
from inventory_api.models.suppliers import Supplier
from inventory_api.schemas.inventory import InventoryCreate, InventoryUpdate
from inventory_api.schemas.order import OrderCreate
from inventory_api.schemas.user import Identity

logger = logging.getLogger("app")


@contextmanager
def transaction(db: Session, failure_message: str):
    try:
        yield
        db.commit()

    except ApiError:
        db.rollback()
        raise

    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{failure_message}: {e}")
        raise Internal(failure_message)


def _lock_products(db: Session, product_ids: Iterable[int | None]) -> dict[int, Product]:
    """Lock every listed product in one statement, always in id order."""
    ids = sorted({product_id for product_id in product_ids if product_id is not None})
    if not ids:
        return {}

    products = (
        db.query(Product)
        .filter(Product.id.in_(ids))
        .order_by(Product.id)
        .with_for_update()
        .all()
    )

    return {product.id: product for product in products}


def _adjust_quantity(product: Product, delta: int):
    new_quantity = product.quantity + delta

    if new_quantity < 0:
        raise InsufficientStock(
            f"Insufficient quantity for product {product.title or product.id}"
        )

    product.quantity = new_quantity


# =========================================================
# INVENTORY RECEIPTS
# =========================================================
def receive_stock(db: Session, data: InventoryCreate) -> Inventory:
    with transaction(db, "Error creating inventory entry"):
        product = _lock_products(db, [data.product_id]).get(data.product_id)
        if not product:
            raise NotFound("Product not found")

        if data.supplier_id is not None and db.get(Supplier, data.supplier_id) is None:
            raise NotFound("Supplier not found")

        inventory = Inventory(**data.model_dump(exclude_none=True))
        db.add(inventory)

        _adjust_quantity(product, data.quantity_received)

    db.refresh(inventory)
    logger.info(
        f"Received {inventory.quantity_received} units of product {product.id} "
        f"(receipt {inventory.id})"
    )

    return inventory


def adjust_receipt(db: Session, inventory: Inventory, data: InventoryUpdate) -> Inventory:
    # Explicit nulls leave the required fields untouched
    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field not in ("product_id", "quantity_received", "date_received")
    }

    with transaction(db, "Error updating inventory"):
        old_product_id = inventory.product_id
        new_product_id = changes.get("product_id", old_product_id)
        old_quantity = inventory.quantity_received
        new_quantity = changes.get("quantity_received", old_quantity)

        products = _lock_products(db, [old_product_id, new_product_id])

        if new_product_id != old_product_id:
            # Move the whole receipt from one product to the other
            new_product = products.get(new_product_id)
            if not new_product:
                raise NotFound("Product not found")

            old_product = products.get(old_product_id)
            if old_product:
                _adjust_quantity(old_product, -old_quantity)
            _adjust_quantity(new_product, new_quantity)

        elif new_quantity != old_quantity:
            product = products.get(old_product_id)
            if product:
                _adjust_quantity(product, new_quantity - old_quantity)

        supplier_id = changes.get("supplier_id")
        if supplier_id is not None and db.get(Supplier, supplier_id) is None:
            raise NotFound("Supplier not found")

        for field, value in changes.items():
            setattr(inventory, field, value)

    db.refresh(inventory)

    return inventory


def reverse_receipt(db: Session, inventory: Inventory):
    with transaction(db, "Error deleting inventory entry"):
        product = _lock_products(db, [inventory.product_id]).get(inventory.product_id)
        if product:
            _adjust_quantity(product, -inventory.quantity_received)

        db.delete(inventory)

    logger.info(f"Reversed inventory receipt {inventory.id}")


# =========================================================
# ORDERS
# =========================================================
def _resolve_customer(db: Session, identity: Identity, customer_id: int | None) -> Customer:
    """
    Find the customer an order is placed for.

    Admins must name an existing customer. Users always order against their
    own profile: they may name it by its id, by their own user id, or not at
    all. A user without a profile gets one created in the same transaction.
    """
    if identity.is_admin:
        if customer_id is None:
            raise ValidationFailed("customer_id is required")

        customer = db.get(Customer, customer_id)
        if customer is None:
            raise NotFound("Customer not found")

        return customer

    own = db.query(Customer).filter(Customer.user_id == identity.id).first()

    if customer_id is not None and customer_id != identity.id and (own is None or customer_id != own.id):
        other = db.get(Customer, customer_id)
        ensure_owner_or_admin(
            identity,
            other.user_id if other else None,
            "Can only create orders for yourself",
        )

    if own is None:
        own = Customer(user_id=identity.id)
        db.add(own)
        db.flush()
        logger.info(f"Created customer profile {own.id} for user {identity.id}")

    return own


def place_order(db: Session, data: OrderCreate, identity: Identity) -> Order:
    with transaction(db, "Error creating order"):
        customer = _resolve_customer(db, identity, data.customer_id)

        if not data.items:
            raise ValidationFailed("Order must contain items")

        # Lines for the same product are checked against their combined quantity
        requested = Counter()
        for item in data.items:
            requested[item.product_id] += item.quantity

        products = _lock_products(db, requested)
        for product_id in sorted(requested):
            product = products.get(product_id)
            if not product:
                raise NotFound(f"Product {product_id} not found")
            if product.quantity < requested[product_id]:
                raise InsufficientStock(
                    f"Insufficient quantity for product {product.title or product.id}"
                )

        total_amount = Decimal("0.00")
        for item in data.items:
            total_amount += products[item.product_id].price * item.quantity

        order = Order(
            customer_id=customer.id,
            order_date=datetime.now(timezone.utc),
            total_amount=total_amount,
        )
        db.add(order)
        db.flush()

        for item in data.items:
            product = products[item.product_id]
            db.add(
                OrderItem(
                    order_id=order.id,
                    product_id=product.id,
                    quantity=item.quantity,
                    price=product.price,
                )
            )
            product.quantity -= item.quantity

    db.refresh(order)
    logger.info(
        f"Order {order.id} placed for customer {order.customer_id} "
        f"({len(data.items)} items, total {order.total_amount})"
    )

    return order


def _restock_and_remove(db: Session, orders: list[Order]):
    items = [item for order in orders for item in order.items]
    products = _lock_products(db, [item.product_id for item in items])

    for item in items:
        product = products.get(item.product_id)
        if product:
            product.quantity += item.quantity

    # Items go with their order (delete-orphan cascade)
    for order in orders:
        db.delete(order)


def cancel_order(db: Session, order: Order):
    order_id = order.id

    with transaction(db, "Error deleting order"):
        _restock_and_remove(db, [order])

    logger.info(f"Order {order_id} deleted and stock restored")


def remove_customer(db: Session, customer: Customer) -> int:
    """
    Delete a customer together with their orders.

    Every order is restocked and its items removed before the order itself,
    so a customer delete leaves stock exactly as if each order was cancelled.
    """
    customer_id = customer.id

    with transaction(db, "Error deleting customer"):
        orders = db.query(Order).filter(Order.customer_id == customer_id).all()
        _restock_and_remove(db, orders)

        db.delete(customer)

    logger.info(f"Customer {customer_id} deleted with {len(orders)} orders")

    return len(orders)
