import logging
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .routers import charts as charts_router
from .middleware.logging import LoggingMiddleware
from .services import ephem

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

# Ephemeris files are located once per process
EPHEMERIS_DIR = ephem.ephemeris_dir()
ephem.init_paths(EPHEMERIS_DIR)


app = FastAPI(title="vedic-chart", version=__version__)

# Configure CORS - localhost for development, explicit origins otherwise
app_env = os.getenv("APP_ENV")
is_dev = app_env is None or app_env.lower() in {"dev", "development"}

if is_dev:
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        max_age=86400,
    )
else:
    allowed = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        max_age=86400,
    )

app.add_middleware(LoggingMiddleware)

app.include_router(charts_router.router)


@app.get("/__health")
def health():
    return {
        "ok": True,
        "ephemeris_path": EPHEMERIS_DIR,
        "backend": ephem.backend_name(),
        "engine_version": ephem.ENGINE_VERSION,
    }


@app.get("/")
def root():
    return {
        "service": "vedic-chart",
        "version": __version__,
        "endpoints": [
            {"route": "/v1/charts/compute", "method": "POST", "description": "Full sidereal chart"},
            {"route": "/v1/charts/fullchart", "method": "POST", "description": "Alias of /v1/charts/compute"},
            {"route": "/v1/charts/planets", "method": "POST", "description": "Classified body positions"},
            {"route": "/v1/charts/houses", "method": "POST", "description": "Whole-sign houses"},
            {"route": "/v1/charts/ascendant", "method": "POST", "description": "Sidereal ascendant"},
            {"route": "/v1/charts/dashas", "method": "POST", "description": "Vimshottari mahadasha schedule"},
            {"route": "/v1/charts/nakshatra?planet=Moon", "method": "POST", "description": "Nakshatra of one body"},
            {"route": "/__health", "method": "GET", "description": "Health check"},
        ],
    }
