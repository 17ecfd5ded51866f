import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.deps import get_rules, get_settings
from src.app_shell.config import prepare_database, validate_ops_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules and prepare storage on startup (fail-fast)
    rules = get_rules()
    validate_ops_rules(rules)
    prepare_database(settings.data_dir, settings.db_path, settings.migrations_dir)
    logger.info("Rules loaded from %s", settings.rules_path)

    yield
    # Shutdown cleanup if needed


app = FastAPI(
    title="eBizCard Engine API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from src.api.routes import card_stats, public_cards  # noqa: E402

app.include_router(public_cards.router, prefix="/api/public", tags=["Public Cards"])
app.include_router(card_stats.router, prefix="/api/cards", tags=["Card Stats"])


# CORS (Allow Frontend)
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
