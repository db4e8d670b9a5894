# cost_basis_engine/api/v1/router.py

from fastapi import APIRouter
from cost_basis_engine.api.v1.cost_basis import router as cost_basis_router
from cost_basis_engine.api.v1.lots import router as lots_router
from cost_basis_engine.api.v1.disposals import router as disposals_router

# Create a main router for API version 1
router = APIRouter()

# Include individual routers for v1 endpoints, applying tags here for clarity
router.include_router(cost_basis_router, prefix="/cost-basis", tags=["Cost Basis"])
router.include_router(lots_router, prefix="/lots", tags=["Lots"])
router.include_router(disposals_router, prefix="/disposals", tags=["Disposals"])
