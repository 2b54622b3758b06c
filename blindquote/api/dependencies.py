"""API dependencies and injection."""

from typing import Annotated
from fastapi import Depends, Path
import logging

from ..config import settings
from ..services.pricing_strategy import ProductFactory, get_product_factory
from ..services.rate_catalog import RateCatalog, get_rate_catalog
from ..services.session import QuoteSession
from ..store import SessionStore, get_store
from ..utils import ErrorCode, raise_error


logger = logging.getLogger(__name__)


def get_store_dependency() -> SessionStore:
    """
    Dependency to get the session store.

    Returns:
        SessionStore instance
    """
    return get_store(session_ttl=settings.session_ttl, max_sessions=settings.max_sessions)


def get_catalog_dependency() -> RateCatalog:
    """
    Dependency to get the loaded rate catalog.

    Raises:
        APIError: If the rate source could not be loaded
    """
    catalog = get_rate_catalog()
    if not catalog.is_ready:
        raise_error(ErrorCode.CATALOG_NOT_READY)
    return catalog


def get_product_factory_dependency() -> ProductFactory:
    return get_product_factory()


def get_session_dependency(
    store: Annotated[SessionStore, Depends(get_store_dependency)],
    session_id: str = Path(..., description="工作階段 ID"),
) -> QuoteSession:
    """
    Dependency to resolve the session in the path.

    Raises:
        APIError: If session not found
    """
    return store.get_session(session_id)


# Type aliases for common dependencies
StoreDep = Annotated[SessionStore, Depends(get_store_dependency)]
CatalogDep = Annotated[RateCatalog, Depends(get_catalog_dependency)]
ProductFactoryDep = Annotated[ProductFactory, Depends(get_product_factory_dependency)]
SessionDep = Annotated[QuoteSession, Depends(get_session_dependency)]
