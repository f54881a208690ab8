from fastapi import FastAPI

from car_dealership.entrypoints.http.exception_handlers import register_exception_handlers
from car_dealership.entrypoints.http.routes.cars import router as cars_router
from car_dealership.entrypoints.http.routes.health import router as health_router
from car_dealership.entrypoints.http.routes.reference import router as reference_router
from car_dealership.infra.logging_config import configure_logging


def build_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Car Dealership API",
        description="""
        Dealership marketplace API for browsing and searching the car inventory.

        ## Features
        - Search available cars with filters, sorting and pagination
        - Filter options derived from the current inventory
        - Car details and listing status changes
        - Makes, colours and body types for forms

        ## Responses
        Every endpoint answers with an envelope:
        `{"success": true, "data": ...}` or
        `{"success": false, "error": ..., "code": ..., "errors": [...]}`.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
    )

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(cars_router, prefix="/v1")
    app.include_router(reference_router, prefix="/v1")

    return app


app = build_app()
