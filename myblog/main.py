from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from .api.api import api_router
from .api.errors import log_error, register_exception_handlers, remote_address
from .core.config import get_settings
from .db.database import create_tables, get_session_maker
from .services.categories import CategoryRegistry
import asyncio
import logging
import traceback

logger = logging.getLogger("fastapi")

def seed_categories(names):
    """Create the configured categories; posts can only reference existing ones"""
    if not names:
        return
    session = get_session_maker()()
    try:
        CategoryRegistry(session).ensure(names)
    finally:
        session.close()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # make sure tables are created
    create_tables()
    seed_categories(get_settings().categories)
    yield

app = FastAPI(title="myblog", lifespan=lifespan)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        # execute the request, giving up after WRITE_TIMEOUT seconds
        response = await asyncio.wait_for(call_next(request), timeout=get_settings().write_timeout)
    except asyncio.TimeoutError:
        log_error(request, "request timed out: %s %s", request.method, request.url.path)
        return JSONResponse(
            content={"detail": "request timed out"},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE
        )
    except Exception as e:
        log_error(
            request,
            "request failed with exception: %s %s\nError: %s\nTraceback: %s",
            request.method, request.url.path, str(e), traceback.format_exc()
        )
        raise

    logger.info(
        "[%s] - %s %s -> %d",
        remote_address(request), request.method, request.url.path, response.status_code
    )
    return response

# register the API router
app.include_router(api_router)
