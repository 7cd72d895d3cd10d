from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from pathlib import Path

from habitflow.database import engine, Base, SessionLocal
from habitflow import models  # Import all models to register them with Base
from habitflow.constants import (
    CORS_ALLOWED_ORIGINS, DEFAULT_LOG_DIRECTORY_PROD, DEFAULT_LOG_DIRECTORY_DEV
)
from habitflow.routes import auth, categories, goals, habits, users
from habitflow.services.category_service import CategoryService
from habitflow.services.scheduler_service import start_scheduler, stop_scheduler

LOG_DIR = os.getenv("HABITFLOW_LOG_DIR", DEFAULT_LOG_DIRECTORY_PROD)
LOG_FILE = os.getenv("HABITFLOW_LOG_FILE", "app.log")

# Create log directory if it doesn't exist (for development)
try:
    Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
    log_path = Path(LOG_DIR) / LOG_FILE
except PermissionError:
    # Fallback to local directory if no permissions for /var/log
    LOG_DIR = DEFAULT_LOG_DIRECTORY_DEV
    Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
    log_path = Path(LOG_DIR) / LOG_FILE

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(log_path),
        logging.StreamHandler()  # Also log to console
    ]
)

logger = logging.getLogger("habitflow")

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="HabitFlow API",
    description="Habit tracker with weekly streaks and streak goals",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(habits.router)
app.include_router(goals.router)
app.include_router(categories.router)


@app.on_event("startup")
async def startup_event():
    logger.info(f"HabitFlow API started. Logging to: {log_path}")
    db = SessionLocal()
    try:
        CategoryService(db).seed_defaults()
    finally:
        db.close()
    start_scheduler()


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down HabitFlow API")
    stop_scheduler()


# Health check (no auth required)
@app.get("/api/health")
async def health():
    return {"status": "active", "message": "Habit Tracker API is running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("habitflow.main:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)), reload=False)
