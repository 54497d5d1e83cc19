"""API v1 router composition."""

from fastapi import APIRouter

from restodesk.api.v1.endpoints import auth, changes, inventory, menu, orders, reservations, tables, waiters

api_router: APIRouter = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(tables.router, prefix="/tables", tags=["tables"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(menu.router, prefix="/menu", tags=["menu"])
api_router.include_router(inventory.router, prefix="/inventory", tags=["inventory"])
api_router.include_router(reservations.router, prefix="/reservations", tags=["reservations"])
api_router.include_router(waiters.router, prefix="/waiters", tags=["waiters"])
api_router.include_router(changes.router, prefix="/changes", tags=["changes"])
