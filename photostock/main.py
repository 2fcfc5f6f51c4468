"""
Photostock backend: FastAPI application entry-point.
"""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from photostock.config import settings
from photostock.database import Base, engine, get_db

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(name)-30s  %(levelname)-5s  %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: ensure data dirs + tables exist
    os.makedirs(settings.DATA_DIR, exist_ok=True)
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    # Import models so Base.metadata knows about them
    import photostock.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready (%s)", settings.DATABASE_URL)
    yield
    logger.info("Shutting down")


app = FastAPI(
    title="Photostock",
    description="Invoice text + build photos → validated, searchable catalog",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount(
    settings.UPLOAD_URL_PREFIX,
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


@app.get("/")
async def root():
    return {"service": "Photostock", "version": "0.1.0", "status": "running"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.get("/api/test-connection")
def test_connection(db: Session = Depends(get_db)):
    try:
        result = db.execute(text("SELECT 1 + 1 AS result")).scalar()
    except SQLAlchemyError as exc:
        logger.error("Database connection error: %s", exc)
        raise HTTPException(status_code=500, detail="Error connecting to the database") from exc
    return {"message": "Connected successfully!", "result": result}


# ── Register API routers ─────────────────────────────────────────────────
from photostock.routers.entries import router as entries_router  # noqa: E402
from photostock.routers.results import router as results_router  # noqa: E402

app.include_router(entries_router, prefix="/api", tags=["Entries"])
app.include_router(results_router, prefix="/api", tags=["Results"])
