# taskapi/main.py
"""FastAPI application for the task service."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from taskapi import config
from taskapi.database import create_db_and_tables
from taskapi.errors import register_error_handlers
from taskapi.routes.tasks import router as tasks_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tasks table on startup."""
    create_db_and_tables()
    yield


app = FastAPI(title="Task Service", lifespan=lifespan)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=config.CORS_METHODS,
    allow_headers=["Content-Type"],
)

app.include_router(tasks_router)


@app.get("/", response_class=PlainTextResponse)
def root():
    return "Hello from the task service!"


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "task-service"}


def run() -> None:
    """Console entry point: configure logging and serve on HOST:PORT."""
    logging.basicConfig(level=config.LOG_LEVEL)
    logger.info("Server listening on port %s", config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT)
