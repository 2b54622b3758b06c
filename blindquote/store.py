"""In-memory store for quote sessions."""

import logging
from typing import Dict, Optional
from cachetools import TTLCache

from .models import QuoteDocument, UIState
from .services.pricing_strategy import ProductFactory, ProductType
from .services.rate_catalog import RateCatalog
from .services.session import QuoteSession
from .utils import ErrorCode, raise_error


logger = logging.getLogger(__name__)


class SessionStore:
    """In-memory storage for quote sessions (idle sessions expire)."""

    def __init__(self, session_ttl: int = 8 * 3600, max_sessions: int = 256):
        """
        Initialize SessionStore.

        Args:
            session_ttl: Session time-to-live in seconds
            max_sessions: Maximum number of live sessions
        """
        self.sessions: TTLCache = TTLCache(maxsize=max_sessions, ttl=session_ttl)
        logger.info(f"SessionStore initialized (ttl={session_ttl}s, max={max_sessions})")

    def create_session(
        self,
        product_factory: ProductFactory,
        rate_catalog: RateCatalog,
        initial_document: Optional[QuoteDocument] = None,
        initial_ui_state: Optional[UIState] = None,
        product_type: str = ProductType.ROLLER_BLIND.value,
    ) -> QuoteSession:
        """
        Create and register a new quote session.

        Raises:
            APIError: If the product type has no pricing strategy
        """
        if product_factory.get_product_strategy(product_type) is None:
            raise_error(ErrorCode.PRODUCT_NOT_SUPPORTED, f"不支援的產品類型: {product_type}")

        session = QuoteSession(
            product_factory,
            rate_catalog,
            initial_document=initial_document,
            initial_ui_state=initial_ui_state,
            product_type=product_type,
        )
        self.sessions[session.session_id] = session
        logger.info(f"Session added: {session.session_id}")
        return session

    def get_session(self, session_id: str) -> QuoteSession:
        """
        Get a session by ID (refreshes its expiry).

        Raises:
            APIError: If session not found or expired
        """
        session = self.sessions.get(session_id)
        if session is None:
            raise_error(ErrorCode.SESSION_NOT_FOUND)
        # 重新寫入以延長存活時間
        self.sessions[session_id] = session
        return session

    def delete_session(self, session_id: str) -> None:
        if session_id not in self.sessions:
            raise_error(ErrorCode.SESSION_NOT_FOUND)
        del self.sessions[session_id]
        logger.info(f"Session deleted: {session_id}")

    def get_stats(self) -> Dict[str, int]:
        """
        Get store statistics.

        Returns:
            Dictionary with session counts
        """
        self.sessions.expire()
        return {
            "sessions": len(self.sessions),
            "max_sessions": int(self.sessions.maxsize),
        }


# Global store instance (singleton pattern)
_store: Optional[SessionStore] = None


def get_store(session_ttl: int = 8 * 3600, max_sessions: int = 256) -> SessionStore:
    """
    Get or create global store instance.

    Args:
        session_ttl: Session time-to-live in seconds
        max_sessions: Maximum number of live sessions

    Returns:
        SessionStore instance
    """
    global _store
    if _store is None:
        _store = SessionStore(session_ttl=session_ttl, max_sessions=max_sessions)
    return _store


def reset_store() -> None:
    """Drop the global store (used by tests)."""
    global _store
    _store = None
