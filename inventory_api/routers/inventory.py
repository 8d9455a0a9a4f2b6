# inventory_api/routers/inventory.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, joinedload

from inventory_api.database import get_db
from inventory_api.core.auth import get_admin_user, get_current_user
from inventory_api.core.exceptions import NotFound
from inventory_api.core.stock import adjust_receipt, receive_stock, reverse_receipt
from inventory_api.models.inventory import Inventory
from inventory_api.schemas.inventory import (
    InventoryCreate,
    InventoryDetailResponse,
    InventoryUpdate,
    InventoryResponse,
)

router = APIRouter(
    prefix="/inventory",
    tags=["Inventory"],
    dependencies=[Depends(get_current_user)],
)


def _get_inventory_or_404(db: Session, inventory_id: int, populate: bool = False) -> Inventory:
    query = db.query(Inventory)
    if populate:
        query = query.options(joinedload(Inventory.product), joinedload(Inventory.supplier))

    inventory = query.filter(Inventory.id == inventory_id).first()

    if not inventory:
        raise NotFound("Inventory item not found")

    return inventory


@router.get("", response_model=list[InventoryDetailResponse])
def list_inventory(db: Session = Depends(get_db)):
    return (
        db.query(Inventory)
        .options(joinedload(Inventory.product), joinedload(Inventory.supplier))
        .order_by(Inventory.id)
        .all()
    )


@router.get("/{inventory_id}", response_model=InventoryDetailResponse)
def get_inventory(inventory_id: int, db: Session = Depends(get_db)):
    return _get_inventory_or_404(db, inventory_id, populate=True)


@router.post("", response_model=InventoryResponse, status_code=status.HTTP_201_CREATED)
def add_inventory(
    inventory_data: InventoryCreate,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    return receive_stock(db, inventory_data)


@router.put("/{inventory_id}", response_model=InventoryResponse)
def update_inventory(
    inventory_id: int,
    inventory_data: InventoryUpdate,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    inventory = _get_inventory_or_404(db, inventory_id)

    return adjust_receipt(db, inventory, inventory_data)


@router.delete("/{inventory_id}")
def delete_inventory(
    inventory_id: int,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    inventory = _get_inventory_or_404(db, inventory_id)
    reverse_receipt(db, inventory)

    return {"message": "Inventory entry deleted successfully"}
