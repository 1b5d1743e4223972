import logging
import time
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tripwise.config import settings

# ─── Logging setup (file + console) ───
_LOG_DIR = Path(settings.log_dir)
_LOG_DIR.mkdir(parents=True, exist_ok=True)

_log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[
        logging.StreamHandler(),
        RotatingFileHandler(
            _LOG_DIR / "tripwise.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        ),
    ],
)

# Quiet noisy libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

from tripwise.routers import inventory, planning
from tripwise.services.errors import SearchTimeoutError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"TripWise starting (search concurrency {settings.search_concurrency}, "
        f"timeout {settings.search_timeout_seconds}s)"
    )
    yield
    logger.info("TripWise stopped")


app = FastAPI(
    title="TripWise",
    description="Flexible-date, destination, budget and itinerary trip planning",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.monotonic()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        if request.url.path != "/api/health":
            logger.info(f"{request.method} {request.url.path} -> {status_code} ({elapsed_ms}ms)")


@app.exception_handler(SearchTimeoutError)
async def search_timeout_handler(request: Request, exc: SearchTimeoutError):
    logger.warning(f"{request.method} {request.url.path} timed out: {exc}")
    return JSONResponse(status_code=504, content={"detail": str(exc)})


app.include_router(planning.router, prefix="/api/planning", tags=["planning"])
app.include_router(inventory.router, prefix="/api/inventory", tags=["inventory"])


@app.get("/api/health")
async def health_check():
    return {"status": "ok", "service": "tripwise"}
