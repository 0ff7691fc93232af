"""API route aggregation.

All routers registered here get mounted in main.py.

Read access (USER role) is applied at the include_router level; write
routes add the ADMIN requirement on their own decorators. Health and
auth routers are open.
"""

from fastapi import APIRouter, Depends

from tienda.api.auth import router as auth_router
from tienda.api.categories import router as categories_router
from tienda.api.clients import router as clients_router
from tienda.api.employees import router as employees_router
from tienda.api.health import router as health_router
from tienda.api.products import router as products_router
from tienda.api.suppliers import router as suppliers_router
from tienda.auth.dependencies import require_user

_user = [Depends(require_user)]

api_router = APIRouter(prefix="/api/v1")

# Open routes — no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes — USER to read, ADMIN to write
api_router.include_router(products_router, tags=["products"], dependencies=_user)
api_router.include_router(categories_router, tags=["categories"], dependencies=_user)
api_router.include_router(suppliers_router, tags=["suppliers"], dependencies=_user)
api_router.include_router(clients_router, tags=["clients"], dependencies=_user)
api_router.include_router(employees_router, tags=["employees"], dependencies=_user)
