import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from richtext_guard.api.deps import get_settings
from richtext_guard.rules.loader import load_rules

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Validate rules on startup (fail-fast). A missing file means defaults.
    if settings.rules_path.exists():
        try:
            load_rules(settings.rules_path)
            logger.info("Rules loaded from %s", settings.rules_path)
        except (FileNotFoundError, ValueError) as e:
            logger.critical("Rules load failed: %s", e)
            sys.exit(1)
    else:
        logger.info("No rules file at %s, using defaults", settings.rules_path)

    yield


app = FastAPI(
    title="Rich Text Guard API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from richtext_guard.api.routes import preview  # noqa: E402

app.include_router(preview.router, prefix="/api/content", tags=["Content"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    return {"status": "ok"}
