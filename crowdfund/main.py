from contextlib import asynccontextmanager
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from crowdfund.api import auth, projects
from crowdfund.core.config import UPLOADS_URL_PREFIX, Settings, get_settings
from crowdfund.core.database import create_db_engine, create_session_factory, init_db
from crowdfund.core.errors import AppError
from crowdfund.core.logging import configure_logging, logging_middleware
from crowdfund.utils.storage import ensure_upload_dir

logger = structlog.get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    engine = create_db_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings)
        logger.info("Starting Crowdfund API", environment=settings.environment)
        init_db(bind=engine)
        ensure_upload_dir(settings.upload_dir)
        yield
        logger.info("Shutting down Crowdfund API")
        engine.dispose()

    app = FastAPI(title="Crowdfund API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        return await logging_middleware(request, call_next)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            error_type=type(exc).__name__,
            method=request.method,
            url=str(request.url),
        )
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    # Include routers
    app.include_router(auth.router, prefix="/api", tags=["Authentication"])
    app.include_router(projects.router, prefix="/api", tags=["Projects"])

    # The directory is created in lifespan, so don't require it at import time
    app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")

    @app.get("/")
    def root():
        return {"message": "Crowdfund API is running"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("crowdfund.main:app", host="0.0.0.0", port=get_settings().port)
