import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from dotenv import load_dotenv

from app.api import tasks
from app.core.config import settings
from app.core.database import build_engine, build_session_factory, create_schema
from app.core.logging import configure_logging
from app.services.task_collection import TaskCollection
from app.services.task_store import TaskStore

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    status: str
    tasks: int


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    configure_logging(settings.log_level)
    backend_port = os.getenv('BACKEND_PORT', '8000')
    logger.info(f"Starting {settings.project_name} on port {backend_port}...")

    engine = build_engine(settings.database_url)
    if settings.create_schema:
        await create_schema(engine)

    collection = TaskCollection(TaskStore(build_session_factory(engine)))
    await collection.load()
    app.state.task_collection = collection

    yield

    # Shutdown
    logger.info("Shutting down task service...")
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.project_name,
        description="Eisenhower matrix task management",
        version="0.1.0",
        lifespan=lifespan
    )

    # CORS configuration
    allowed_origins = list(dict.fromkeys([settings.frontend_url, *settings.allowed_origins]))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(tasks.form_router)
    app.include_router(tasks.router)

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        """Check API health and report how many tasks are loaded."""
        collection = request.app.state.task_collection
        return HealthResponse(status="ok", tasks=len(collection))

    return app


app = create_app()
