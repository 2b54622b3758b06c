"""捲簾報價系統 API 入口.

啟動時載入價目表；工作階段存放於記憶體（閒置逾時自動清除）。
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import settings
from .services.rate_catalog import get_rate_catalog
from .store import get_store
from .utils import APIError, ErrorCode, log_error
from .models import ErrorResponse


logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


store = get_store(session_ttl=settings.session_ttl, max_sessions=settings.max_sessions)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """啟動時預先載入價目表並記錄狀態."""
    logger.info(f"blindquote {__version__} starting on {settings.backend_host}:{settings.backend_port}")
    logger.info(f"Rate source: {settings.rate_source_file}")

    catalog = get_rate_catalog()
    if catalog.is_ready:
        logger.info(f"Fabric types: {catalog.get_fabric_type_sequence()}")
    else:
        logger.error("Rate catalog not loaded; new sessions will be refused")
    logger.info(f"Sessions: {store.get_stats()}")

    yield

    logger.info("blindquote stopped")


app = FastAPI(
    title="捲簾報價系統",
    description="捲簾報價核心：報價單編輯、一致性規則與價格矩陣計價",
    version=__version__,
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """APIError -> ErrorResponse."""
    log_error(exc, context=f"{request.method} {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(**exc.to_dict()).model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """未預期的例外一律回 500，不外洩內部訊息."""
    log_error(exc, context=f"{request.method} {request.url.path}")
    error = APIError(ErrorCode.INTERNAL_ERROR)
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(**error.to_dict()).model_dump(mode="json"),
    )


from .api.routes import health, sessions, quick_quote, detail

app.include_router(health.router)
app.include_router(sessions.router)
app.include_router(quick_quote.router)
app.include_router(detail.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.backend_debug,
    )
