"""FastAPI application for SBC Copilot.

Logging: Uses structured JSON logging.
Set LOG_FORMAT=pretty for development-friendly output.
"""

from contextlib import asynccontextmanager

# Configure structured logging BEFORE importing anything else
from src.utils.logging import configure_logging, get_logger, log  # noqa: E402

configure_logging()

MODULE = "api"
logger = get_logger()

from fastapi import FastAPI  # noqa: E402

from src import config  # noqa: E402
from src.api.routes.chat import router as chat_router  # noqa: E402
from src.api.routes.estimates import router as estimates_router  # noqa: E402
from src.api.routes.explorer import router as explorer_router  # noqa: E402
from src.api.routes.health import router as health_router  # noqa: E402
from src.api.routes.policies import router as policies_router  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown."""
    log.info(logger, MODULE, "startup", "API starting",
             primary_model=config.PRIMARY_MODEL,
             extraction_model=config.EXTRACTION_MODEL,
             analysis_model=config.ANALYSIS_MODEL,
             situation_model=config.SITUATION_MODEL,
             fallback_model=config.FALLBACK_MODEL,
             chat_model=config.CHAT_MODEL)
    if not config.UNSTRUCTURED_API_KEY:
        log.warning(logger, MODULE, "unstructured_key_missing",
                    "UNSTRUCTURED_API_KEY not set, SBC uploads will fail")

    yield

    log.info(logger, MODULE, "shutdown", "Application shutdown complete")


app = FastAPI(
    title="SBC Copilot",
    description="Health insurance Summary of Benefits and Coverage assistant",
    version=config.VERSION,
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(policies_router, prefix="/policies", tags=["policies"])
app.include_router(explorer_router, prefix="/explorer", tags=["explorer"])
app.include_router(estimates_router, tags=["estimates"])
app.include_router(chat_router, prefix="/chat", tags=["chat"])
