"""
OGP Image Service FastAPI application entry point.
This service renders Open Graph preview images for wiki pages and serves share/redirect pages.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .core.config import settings
from .core.errors import OGPError
from .routes import og_routes, share_routes
from .utils.debug import configure_logging, print_step


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application for the OGP service.

    Returns:
        Configured FastAPI application
    """
    configure_logging(settings.DEBUG)

    app = FastAPI(
        title="OGP Image Service",
        version=__version__,
        description="Dynamic OGP image generation and share redirects for wiki pages",
        debug=settings.DEBUG
    )

    print_step("CORS Configuration", {"origins": settings.CORS_ORIGINS}, "input")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALL_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(OGPError)
    async def ogp_error_handler(request: Request, exc: OGPError):
        print_step("Request Failed", {
            "path": request.url.path,
            "error": type(exc).__name__,
            "status": exc.status_code,
            "detail": exc.message
        }, "error")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    # Health check endpoints
    @app.get("/")
    def read_root():
        return {"status": "OGP Image Service is online", "service": "ogp"}

    @app.get("/health")
    def health_check():
        return {"status": "healthy", "service": "ogp"}

    app.include_router(og_routes.router)
    app.include_router(share_routes.router)
    print_step("FastAPI App Initialization", "FastAPI app, routes and error handlers configured", "output")

    return app


# Create the app instance
app = create_app()

print_step("OGP Service Startup", {
    "endpoints": [
        "GET  /         - Health check",
        "GET  /health   - Health check",
        "GET  /image    - Render OGP image (page, variant, subtitle, nocache)",
        "GET  /share    - OGP share page redirecting to the wiki (page, variant)"
    ],
    "storage_mode": settings.STORAGE_MODE
}, "output")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("ogp_service.main:app", host="0.0.0.0", port=8001)
