# inventory_api/routers/suppliers.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, joinedload

from inventory_api.database import get_db
from inventory_api.core.auth import get_admin_user, get_current_user
from inventory_api.core.exceptions import NotFound
from inventory_api.models.inventory import Inventory
from inventory_api.models.suppliers import Supplier
from inventory_api.schemas.inventory import InventoryDetailResponse
from inventory_api.schemas.supplier import (
    SupplierCreate,
    SupplierUpdate,
    SupplierResponse,
)

router = APIRouter(
    prefix="/suppliers",
    tags=["Suppliers"],
    dependencies=[Depends(get_current_user)],
)


def _get_supplier_or_404(db: Session, supplier_id: int) -> Supplier:
    supplier = db.query(Supplier).filter(Supplier.id == supplier_id).first()

    if not supplier:
        raise NotFound("Supplier not found")

    return supplier


@router.get("", response_model=list[SupplierResponse])
def list_suppliers(db: Session = Depends(get_db)):
    return db.query(Supplier).order_by(Supplier.id).all()


@router.get("/{supplier_id}", response_model=SupplierResponse)
def get_supplier(supplier_id: int, db: Session = Depends(get_db)):
    return _get_supplier_or_404(db, supplier_id)


@router.post("", response_model=SupplierResponse, status_code=status.HTTP_201_CREATED)
def create_supplier(
    supplier_data: SupplierCreate,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    supplier = Supplier(**supplier_data.model_dump())

    db.add(supplier)
    db.commit()
    db.refresh(supplier)

    return supplier


@router.put("/{supplier_id}", response_model=SupplierResponse)
def update_supplier(
    supplier_id: int,
    supplier_data: SupplierUpdate,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    supplier = _get_supplier_or_404(db, supplier_id)

    for field, value in supplier_data.model_dump(exclude_unset=True).items():
        if field == "name" and value is None:
            continue
        setattr(supplier, field, value)

    db.commit()
    db.refresh(supplier)

    return supplier


@router.delete("/{supplier_id}")
def delete_supplier(
    supplier_id: int,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    supplier = _get_supplier_or_404(db, supplier_id)

    db.delete(supplier)
    db.commit()

    return {"message": "Supplier deleted successfully"}


@router.get("/{supplier_id}/inventory", response_model=list[InventoryDetailResponse])
def supplier_inventory(supplier_id: int, db: Session = Depends(get_db)):
    return (
        db.query(Inventory)
        .options(joinedload(Inventory.product), joinedload(Inventory.supplier))
        .filter(Inventory.supplier_id == supplier_id)
        .order_by(Inventory.id)
        .all()
    )
