import json
import logging
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import Depends, FastAPI, UploadFile, File, HTTPException

from .config import Settings
from .errors import DecodeError
from .logging_config import setup_logging
from .models import HealthResponse, Report
from .pipeline import process_bytes

logger = logging.getLogger(__name__)


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_environment()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(use_json=settings.log_json, log_level=settings.log_level)
    logger.info("csv-fingerprint starting up")
    yield


app = FastAPI(
    title="csv-fingerprint",
    description="Row validation and SHA-256 fingerprinting for CSV uploads",
    version="0.1.0",
    lifespan=lifespan,
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/process", response_model=Report, response_model_by_alias=True)
async def process_csv(file: UploadFile = File(...), settings: Settings = Depends(get_settings)):
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read(settings.max_upload_bytes + 1)
    if len(raw) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="CSV file is too large")

    try:
        result = json.loads(process_bytes(raw, strict_width=settings.strict_width))
    except DecodeError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    if "processed_rows" not in result:
        logger.error("Report for %s could not be serialized", file.filename)
        raise HTTPException(status_code=500, detail=result["errors"][0])

    return result
