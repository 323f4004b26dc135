import logging
import os
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.api.deps import get_settings
from src.app_shell.config import validate_ops_rules
from src.rules.loader import load_rules

logging.basicConfig(
    level=os.environ.get("LINKHUB_LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules and validate on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.critical("Rules load failed: %s", e)
        sys.exit(1)
    validate_ops_rules(rules)
    logger.info("Rules loaded from %s", settings.rules_path)

    if settings.page_store == "sqlite":
        applied = SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()
        if applied:
            logger.info("Applied migrations: %s", ", ".join(applied))

    yield
    # Shutdown cleanup if needed


app = FastAPI(
    title="Linkify Bio API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from src.api.routes import admin_links, admin_pages, assets, public  # noqa: E402

app.include_router(admin_pages.router, prefix="/api/admin/pages", tags=["Admin Pages"])
app.include_router(admin_links.router, prefix="/api/admin/pages", tags=["Admin Links"])
app.include_router(assets.router, prefix="/api/admin/pages", tags=["Profile Images"])
app.include_router(public.router, prefix="/api", tags=["Public"])


# CORS (Allow Frontend)
origins = [
    origin.strip()
    for origin in os.environ.get(
        "LINKHUB_CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    if origin.strip()
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


def run() -> None:
    """Serve the API with uvicorn."""
    uvicorn.run(
        app,
        host=os.environ.get("LINKHUB_HOST", "127.0.0.1"),
        port=int(os.environ.get("LINKHUB_PORT", "8000")),
    )


if __name__ == "__main__":
    run()
