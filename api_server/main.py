# api_server/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from secure_random.config import load_settings
from secure_random.entropy_source import create_entropy_source

from .routers import random_integer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    # Startup: settings and the entropy source are shared by all requests via app.state
    settings = load_settings()
    logging.getLogger("secure_random").setLevel(settings.log_level)
    logging.getLogger("api_server").setLevel(settings.log_level)

    app_instance.state.settings = settings
    app_instance.state.entropy_source = create_entropy_source(settings.entropy_backend)
    logger.info("API Startup: entropy backend '%s', timeout %.1fs.",
                settings.entropy_backend, settings.timeout_sec)

    yield # Application runs here

    logger.info("API Shutdown: releasing entropy source.")
    app_instance.state.entropy_source = None


# --- Initialize FastAPI app ---
app = FastAPI(
    title="Secure Random Integer API",
    description="API for generating cryptographically secure, unbiased random integers.",
    version="0.1.0",
    lifespan=lifespan # Manages startup and shutdown events
)

# --- CORS Middleware Configuration ---
origins = [
    "http://localhost",
    "http://localhost:8080",
    "http://127.0.0.1",
    "null", # Allow requests from file:/// origins (for local HTML files)
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],    # Allow all headers (including X-API-Key)
)

app.include_router(random_integer.router, prefix="/api/v1")


@app.get("/", tags=["Root"])
async def read_root():
    return {"message": "Welcome to the Secure Random Integer API!"}

# To run this API server from the repository root:
#   SERVER_API_KEY=... uvicorn api_server.main:app --reload
