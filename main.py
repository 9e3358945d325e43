# main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from category_routes import router as category_router
from config import get_settings
from database import create_tables, engine
from errors import register_error_handlers
from middleware import add_request_context
from post_routes import router as post_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# --- Lifespan Management (for DB setup/teardown) ---

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup: creating database tables...")
    await create_tables()
    yield
    logger.info("Application shutdown.")
    await engine.dispose()

# --- FastAPI App ---

app = FastAPI(lifespan=lifespan, title=settings.app_name, version=settings.version)

add_request_context(app)
register_error_handlers(app)

app.include_router(post_router)
app.include_router(category_router)

# --- Root Endpoint ---

@app.get("/")
async def root():
    return {"message": f"Welcome to the {settings.app_name}. Go to /docs for documentation."}

# --- Run with Uvicorn (for local testing) ---
# Use: uvicorn main:app --reload
