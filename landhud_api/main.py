"""
Main FastAPI application entry point.
Configures and initializes the LandHud Lead List API.
"""
from fastapi import FastAPI, Request
from loguru import logger
from mangum import Mangum
from landhud_api.core.config import settings
from landhud_api.core.exception_handler import register_exception_handlers
from landhud_api.core.log_config import configure_logging
from landhud_api.api.routes import health_routes, lead_list_routes

configure_logging(settings.log_level)

# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="Lead list upload, processing status and cleanup for LandHud",
    root_path=f"/{settings.environment}"
)

# Register exception handlers
register_exception_handlers(app)

# Register routes
app.include_router(health_routes.router)
app.include_router(lead_list_routes.router)

# Middleware to log request paths
@app.middleware("http")
async def log_request(request: Request, call_next):
    logger.debug(f"Request {request.method} {request.url.path}")
    response = await call_next(request)
    return response

# Lambda handler for AWS
handler = Mangum(app, lifespan="off")


# For local development
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
