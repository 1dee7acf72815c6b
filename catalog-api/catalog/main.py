"""FastAPI entrypoint for the mental model catalog service."""
from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings
from .content.store import ContentStore
from .errors import CatalogError, ErrorType
from .http import content as content_routes
from .http import search as search_routes

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = {
    ErrorType.ITEM_NOT_FOUND: 404,
    ErrorType.INVALID_QUERY: 400,
    ErrorType.CATALOG_NOT_FOUND: 503,
    ErrorType.CATALOG_INVALID: 503,
    ErrorType.UNKNOWN: 500,
}


def configure_logging(level: str) -> None:
    package_logger = logging.getLogger("catalog")
    package_logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))

    package_logger.handlers.clear()  # avoid duplicate logs if reloading
    package_logger.addHandler(handler)
    package_logger.propagate = False


def load_store(settings: Settings) -> Optional[ContentStore]:
    try:
        return ContentStore.from_path(
            settings.catalog_path,
            threshold=settings.search_threshold,
            limit=settings.search_limit,
        )
    except CatalogError as exc:
        logger.error("Catalog unavailable (%s): %s", exc.error_type.value, exc.message)
        return None


def create_app(settings: Optional[Settings] = None, store: Optional[ContentStore] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    application = FastAPI(title="HUMMBL Catalog Search")
    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.state.settings = settings
    application.state.content_store = store if store is not None else load_store(settings)

    @application.exception_handler(CatalogError)
    async def _catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
        status = _STATUS_BY_ERROR.get(exc.error_type, 500)
        if status >= 500:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=status, content=exc.to_dict())

    @application.get("/health")
    def health() -> Dict[str, Any]:
        current: Optional[ContentStore] = application.state.content_store
        if current is None:
            return {"status": "degraded", "models": 0, "narratives": 0}
        return {
            "status": "ok",
            "version": current.version,
            "models": len(current.models()),
            "narratives": len(current.narratives()),
        }

    application.include_router(content_routes.router)
    application.include_router(search_routes.router)
    return application


app = create_app()


def run() -> None:  # pragma: no cover - manual entrypoint
    import uvicorn

    uvicorn.run("catalog.main:app", host="0.0.0.0", port=8000, reload=False)


if __name__ == "__main__":  # pragma: no cover
    run()
