"""
FastAPI application - Main entry point

    uvicorn storefront.api.main:app --host 127.0.0.1 --port 8000
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api.admin_router import router as admin_router
from storefront.api.live_updates import live_updates
from storefront.api.products_router import router as products_router
from storefront.auth.admin import AdminAuth
from storefront.catalog.seed import default_catalog
from storefront.catalog.store import CatalogStore
from storefront.database.credentials import CredentialStore
from storefront.error_handler import ErrorHandler
from storefront.errors import AuthFailure, CatalogValidationError, ProductNotFoundError
from storefront.notifier.broadcaster import ChangeNotifier
from storefront.utils.config_loader import StorefrontConfig, load_storefront_config

logger = logging.getLogger(__name__)

error_handler = ErrorHandler()


# ============================================================================
# ERROR RESPONSES
# ============================================================================
async def _catalog_validation_error(request: Request, exc: CatalogValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.message, "details": exc.field_errors},
    )


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


async def _product_not_found(request: Request, exc: ProductNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Product not found"})


async def _auth_failure(request: Request, exc: AuthFailure) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"error": exc.message})


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    payload = error_handler.handle_exception(exc, request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)


# ============================================================================
# APPLICATION FACTORY
# ============================================================================
def create_app(
    config: Optional[StorefrontConfig] = None,
    store: Optional[CatalogStore] = None,
    notifier: Optional[ChangeNotifier] = None,
    credentials: Optional[CredentialStore] = None,
) -> FastAPI:
    """
    Build the API around one store, notifier and credential table.

    Anything not passed in is created from `config`, so tests can inject a
    fresh (or empty) store per case.
    """
    cfg = config or load_storefront_config()

    if store is None:
        seed = default_catalog() if cfg.catalog.seed_default_catalog else None
        store = CatalogStore(
            seed=seed,
            default_price=cfg.catalog.default_price,
            placeholder_image=cfg.catalog.placeholder_image,
        )
    if notifier is None:
        notifier = ChangeNotifier(max_queue_size=cfg.live_updates.max_queue_size)

    app = FastAPI(
        title=cfg.app.title,
        description="Product catalog with admin editing and live updates for connected viewers",
        version=cfg.app.version,
    )
    app.state.config = cfg
    app.state.store = store
    app.state.notifier = notifier
    app.state.admin_auth = AdminAuth(
        credentials or CredentialStore(),
        username=cfg.admin.username,
        default_password=cfg.admin.default_password,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.app.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CatalogValidationError, _catalog_validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ProductNotFoundError, _product_not_found)
    app.add_exception_handler(AuthFailure, _auth_failure)
    app.add_exception_handler(Exception, _unhandled_error)

    app.include_router(products_router, prefix="/api")
    app.include_router(admin_router, prefix="/api/admin")
    app.add_api_websocket_route(cfg.live_updates.path, live_updates)

    @app.get("/", tags=["Health"])
    async def root():
        """Health check endpoint."""
        return {"service": cfg.app.title, "status": "healthy", "version": cfg.app.version, "timestamp": datetime.now().isoformat()}

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Detailed health check (catalog size, connected viewers)."""
        return {
            "status": "healthy",
            "catalog": {"products": store.count()},
            "live_updates": {"viewers": notifier.viewer_count},
            "timestamp": datetime.now().isoformat(),
        }

    logger.info("Storefront API ready: %d products, live updates on %s", store.count(), cfg.live_updates.path)
    return app


_config = load_storefront_config()
logging.basicConfig(level=getattr(logging, _config.app.log_level, logging.INFO))
app = create_app(_config)
