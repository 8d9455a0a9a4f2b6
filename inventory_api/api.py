# inventory_api/api.py

from fastapi import APIRouter

from inventory_api.routers import (
    auth,
    products,
    inventory,
    orders,
    customers,
    suppliers,
    notifications,
    admin_bootstrap,
)

# Every REST route lives under /api
api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router)
api_router.include_router(products.router)
api_router.include_router(inventory.router)
api_router.include_router(orders.router)
api_router.include_router(customers.router)
api_router.include_router(suppliers.router)
api_router.include_router(notifications.router)
api_router.include_router(admin_bootstrap.router)
