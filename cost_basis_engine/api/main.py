# cost_basis_engine/api/main.py

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
import uvicorn
import logging
from decimal import getcontext

from cost_basis_engine.api.v1.router import router as v1_router
from cost_basis_engine.core.config.settings import settings
from cost_basis_engine.core.exceptions import CostBasisError

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(settings.APP_NAME)

# Set global Decimal precision at application startup
getcontext().prec = settings.DECIMAL_PRECISION

# Create FastAPI app instance
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG_MODE,
    description="API for lot selection, cost basis, gain/loss and holding period calculations "
                "over crypto asset lots (FIFO, LIFO, HIFO, SpecificID and AvgCost)."
)

@app.exception_handler(CostBasisError)
async def cost_basis_error_handler(request: Request, exc: CostBasisError) -> JSONResponse:
    """Rejected calculations are caller-input errors: 422 with the error code and message."""
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.error_code}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=exc.to_dict()
    )

# Include API routers
app.include_router(v1_router, prefix=settings.API_V1_STR)

@app.get("/", include_in_schema=False)
async def root():
    """Redirects to the API documentation."""
    return RedirectResponse(url="/docs")

# Entry point for running with Uvicorn directly (for development)
if __name__ == "__main__":
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION} in {'DEBUG' if settings.DEBUG_MODE else 'PRODUCTION'} mode...")
    uvicorn.run(
        "cost_basis_engine.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG_MODE,
        log_level=settings.LOG_LEVEL.lower()
    )
