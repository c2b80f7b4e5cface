import logging
import logging.config

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from pagesense.routers.analyze import limiter, router as analyze_router
from pagesense.routers.groups import router as groups_router
from pagesense.routers.mode import router as mode_router
from pagesense.routers.similarity import router as similarity_router
from pagesense.services.processor import ContentProcessor

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": "INFO", "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="PageSense – Page Content Analysis API",
    description=(
        "Summarizes, classifies and extracts keywords from web pages, and groups "
        "and cross-recommends batches of pages."
    ),
    version="1.0.0",
)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# One processor per app; its mode is shared by every request
app.state.processor = ContentProcessor()


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


app.include_router(analyze_router)
app.include_router(similarity_router)
app.include_router(groups_router)
app.include_router(mode_router)


@app.get("/", summary="Health check")
async def root() -> dict:
    return {"message": "Hello from PageSense"}
