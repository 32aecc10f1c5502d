import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .core.config import get_settings
from .core.database import init_db, check_db_connection
from .core.exceptions import TaskServiceError
from .routers import tasks

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize application on startup"""
    logger.info("Starting Task Service...")
    if init_db():
        logger.info("Database initialized successfully")
    else:
        logger.error("Database initialization failed")
    logger.info("Task Service startup completed")
    yield
    logger.info("Task Service shutdown completed")


# Create FastAPI application; /tasks/ is not an alias of /tasks
app = FastAPI(
    title="Task Service",
    description="Single-resource task tracking service",
    version=__version__,
    lifespan=lifespan,
    redirect_slashes=False
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(
    tasks.router,
    prefix=settings.api_prefix + "/tasks",
    tags=["tasks"]
)


@app.exception_handler(TaskServiceError)
async def task_service_error_handler(request: Request, exc: TaskServiceError):
    """Render domain errors as {"detail": message}"""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": settings.service_name,
        "version": __version__,
        "status": "running",
        "message": "Task Service is operational"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    db_healthy = check_db_connection()

    return {
        "service": settings.service_name,
        "version": __version__,
        "status": "healthy" if db_healthy else "unhealthy",
        "database": "connected" if db_healthy else "disconnected",
        "timestamp": time.time()
    }


def run():
    """Serve the application with uvicorn"""
    import uvicorn
    uvicorn.run("task_service.main:app", host=settings.host, port=settings.port, reload=settings.debug)


if __name__ == "__main__":
    run()
