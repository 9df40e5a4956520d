"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog_api.api import images, websocket
from blog_api.config import get_settings
from blog_api.database import init_db
from blog_api.errors import BlogError
from blog_api.gql.schema import graphql_router
from blog_api.services.notifier import PostNotifier

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    init_db()
    app.state.notifier = PostNotifier(settings.redis_url)
    yield
    app.state.notifier.close()


app = FastAPI(
    title="Blog API",
    description="Blog backend with GraphQL posts and image uploads",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(BlogError)
async def blog_error_handler(request: Request, exc: BlogError) -> JSONResponse:
    """Translate application errors into the JSON error envelope."""
    logger.info(f"{request.method} {request.url.path} failed: {exc.status_code} {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message, "data": exc.data})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed REST requests in the same envelope as application errors."""
    return JSONResponse(
        status_code=422,
        content={"message": "Invalid input.", "data": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} crashed: {exc!r}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "An error occurred.", "data": None},
    )


# Register routers
app.include_router(graphql_router, prefix="/graphql")
app.include_router(images.router)
app.include_router(websocket.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}


def run() -> None:
    """Serve the API on the configured port."""
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)  # noqa: S104


if __name__ == "__main__":
    run()
