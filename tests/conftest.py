"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from blindquote.main import app
from blindquote.models import (
    AccessoryPrice,
    LineItem,
    QuoteDocument,
    RateMatrix,
    RateSource,
)
from blindquote.services.calculation_service import CalculationService
from blindquote.services.pricing_strategy import ProductFactory, RollerBlindStrategy
from blindquote.services.quote_service import QuoteService
from blindquote.services.rate_catalog import RateCatalog
from blindquote.services.session import QuoteSession
from blindquote.services.ui_service import UIService
from blindquote.store import SessionStore, reset_store

# API version prefix
API_PREFIX = "/api/v1"


@pytest.fixture
def sample_matrix() -> RateMatrix:
    """3 個寬度級距 x 2 個高度級距的價格矩陣."""
    return RateMatrix(
        widths=[1000, 2000, 3000],
        drops=[1000, 2000],
        prices=[[100, 150, 200], [120, 170, 220]],
    )


@pytest.fixture
def rate_source(sample_matrix: RateMatrix) -> RateSource:
    """測試用價目表（BO / BO1 / SN）."""
    return RateSource(
        matrices={
            "BO": sample_matrix,
            "BO1": RateMatrix(
                widths=[1000, 2000, 3000],
                drops=[1000, 2000],
                prices=[[110, 160, 210], [130, 180, 230]],
            ),
            "SN": RateMatrix(
                widths=[1000, 2000, 3000],
                drops=[1000, 2000],
                prices=[[130, 180, 230], [150, 200, 250]],
            ),
        },
        accessories={
            "winderHD": AccessoryPrice(price=100),
            "motorStandard": AccessoryPrice(price=250),
            "remoteStandard": AccessoryPrice(price=100),
            "chargerStandard": AccessoryPrice(price=50),
            "cord3m": AccessoryPrice(price=15),
            "comboBracket": AccessoryPrice(price=100),
        },
        fabric_type_sequence=["BO", "BO1", "SN"],
    )


@pytest.fixture
def catalog(rate_source: RateSource) -> RateCatalog:
    return RateCatalog(rate_source)


@pytest.fixture
def product_factory() -> ProductFactory:
    return ProductFactory()


@pytest.fixture
def strategy() -> RollerBlindStrategy:
    return RollerBlindStrategy()


@pytest.fixture
def quote_service(product_factory: ProductFactory, catalog: RateCatalog) -> QuoteService:
    return QuoteService(product_factory, catalog)


@pytest.fixture
def calculation_service(product_factory: ProductFactory, catalog: RateCatalog) -> CalculationService:
    return CalculationService(product_factory, catalog)


@pytest.fixture
def ui_service() -> UIService:
    return UIService()


@pytest.fixture
def session(product_factory: ProductFactory, catalog: RateCatalog) -> QuoteSession:
    return QuoteSession(product_factory, catalog)


@pytest.fixture
def make_document():
    """以 (width, height, fabric_type) 建立文件（結尾自動補空白列）."""

    def _make(*rows, **item_fields) -> QuoteDocument:
        items = [
            LineItem(width=width, height=height, fabric_type=fabric_type, **item_fields)
            for width, height, fabric_type in rows
        ]
        items.append(LineItem())
        return QuoteDocument(items=items)

    return _make


@pytest.fixture
def mock_store() -> SessionStore:
    """Create an isolated session store."""
    return SessionStore(session_ttl=60, max_sessions=10)


@pytest.fixture
def client():
    """Create FastAPI test client with a fresh global store."""
    reset_store()
    yield TestClient(app)
    reset_store()
