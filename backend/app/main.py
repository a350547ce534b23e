import logging
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.config import Config
from app.db.database import db
from app.routers import products, health
from app.exceptions import (
    AppException,
    app_exception_handler,
    generic_exception_handler,
    request_validation_exception_handler,
)

# Configure logging
logging.basicConfig(
    level=Config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup fails if the database is unreachable or the schema cannot be created
    app.state.db = db
    await db.connect()
    logger.info("Products API ready")
    yield
    logger.info("Products API shutting down")
    await db.disconnect()


app = FastAPI(
    title="Products API",
    version="1.0.0",
    description="CRUD service for products with pagination and search",
    lifespan=lifespan
)

app.state.db = db

# Register exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(products.router)


def run():
    """Start the HTTP server."""
    import uvicorn

    logger.info(f"Server is running on http://{Config.HOST}:{Config.PORT}")
    uvicorn.run(app, host=Config.HOST, port=Config.PORT, log_level=Config.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
