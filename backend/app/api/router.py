from fastapi import APIRouter

from backend.app.api.endpoints.suppliers import router as suppliers_router
from backend.app.api.endpoints.categories import router as categories_router
from backend.app.api.endpoints.medications import router as medications_router
from backend.app.api.endpoints.dispensaries import router as dispensaries_router
from backend.app.api.endpoints.orders import router as orders_router
from backend.app.api.endpoints.notifications import router as notifications_router

router = APIRouter()
router.include_router(suppliers_router, tags=["fournisseurs"])
router.include_router(categories_router, tags=["categories"])
router.include_router(medications_router, tags=["medicaments"])
router.include_router(dispensaries_router, tags=["dispensaires"])
router.include_router(orders_router, tags=["commandes"])
router.include_router(notifications_router, tags=["notifications"])
