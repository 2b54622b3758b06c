"""Quote session - 單一使用者的報價工作階段.

組合文件服務、UI 狀態服務、計價服務與各操作流程，持有事件通道與
等待確認的延遲變更。
"""

import logging
import uuid
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple, Union

from ..models.quote import QuoteDocument
from ..models.responses import SessionSnapshot
from ..models.results import CalculationResult, ConfirmationRequest, Notification, PricingError
from ..models.ui_state import QUICK_QUOTE_COLUMNS, UIState, View
from ..utils.events import EventAggregator, EventType
from .calculation_service import CalculationService
from .detail_config import DetailConfigWorkflow
from .drive_accessories import DriveAccessoriesWorkflow
from .dual_chain import DualChainWorkflow
from .pricing_strategy import ProductFactory, ProductType
from .quick_quote import QuickQuoteWorkflow
from .quote_service import QuoteService
from .rate_catalog import RateCatalog
from .ui_service import UIService

logger = logging.getLogger(__name__)


class QuoteSession:
    """報價工作階段."""

    def __init__(
        self,
        product_factory: ProductFactory,
        rate_catalog: RateCatalog,
        session_id: Optional[str] = None,
        initial_document: Optional[QuoteDocument] = None,
        initial_ui_state: Optional[UIState] = None,
        product_type: Union[ProductType, str] = ProductType.ROLLER_BLIND,
    ):
        """
        Initialize QuoteSession.

        Args:
            product_factory: 產品策略註冊表
            rate_catalog: 價目表
            session_id: 工作階段 ID；None 時自動產生
            initial_document: 初始文件（如匯入的快照）
            initial_ui_state: 初始 UI 狀態
            product_type: 產品類型

        Raises:
            ValueError: 找不到產品策略
        """
        self.session_id = session_id or uuid.uuid4().hex
        self.created_at = datetime.now()
        self.product_type = ProductType(product_type)

        self.events = EventAggregator()
        self.quote_service = QuoteService(
            product_factory, rate_catalog, initial_document, self.product_type
        )
        self.ui_service = UIService(initial_ui_state)
        self.calculation_service = CalculationService(product_factory, rate_catalog)

        self._pending: Dict[str, Tuple[ConfirmationRequest, Callable[[], None]]] = {}
        self._notifications: List[Notification] = []
        self.last_error: Optional[PricingError] = None
        self.events.subscribe(EventType.SHOW_NOTIFICATION, self._notifications.append)

        workflow_args = dict(
            quote_service=self.quote_service,
            ui_service=self.ui_service,
            calculation_service=self.calculation_service,
            product_factory=product_factory,
            events=self.events,
            request_confirmation=self.request_confirmation,
            publish_state=self.publish_state,
            product_type=self.product_type,
        )
        self.quick_quote = QuickQuoteWorkflow(**workflow_args)
        self.dual_chain = DualChainWorkflow(**workflow_args)
        self.drive_accessories = DriveAccessoriesWorkflow(**workflow_args)
        self.detail_config = DetailConfigWorkflow(
            dual_chain=self.dual_chain,
            drive_accessories=self.drive_accessories,
            **workflow_args,
        )

        logger.info(f"Quote session created: {self.session_id}")

    # ===== 事件 =====

    def publish_state(self) -> None:
        """送出完整快照給 STATE_CHANGED 訂閱者."""
        self.events.publish(EventType.STATE_CHANGED, self.snapshot())

    def request_confirmation(
        self,
        message: str,
        on_confirm: Callable[[], None],
        confirm_label: str = "確定",
        cancel_label: str = "取消",
    ) -> ConfirmationRequest:
        """
        建立確認請求；變更延遲到 confirm() 接受後才執行.

        Returns:
            已送出的 ConfirmationRequest
        """
        request = ConfirmationRequest(
            message=message, confirm_label=confirm_label, cancel_label=cancel_label
        )
        self._pending[request.id] = (request, on_confirm)
        self.events.publish(EventType.SHOW_CONFIRMATION, request)
        logger.debug(f"Confirmation requested: {request.id} {message}")
        return request

    def confirm(self, request_id: str, accepted: bool) -> bool:
        """
        回應確認請求.

        Args:
            request_id: 確認請求 ID
            accepted: True 執行延遲變更，False 捨棄

        Returns:
            是否找到該請求
        """
        entry = self._pending.pop(request_id, None)
        if entry is None:
            logger.warning(f"Unknown confirmation request: {request_id}")
            return False

        _, on_confirm = entry
        if accepted:
            on_confirm()
        return True

    def pending_confirmations(self) -> List[ConfirmationRequest]:
        return [request for request, _ in self._pending.values()]

    def drain_notifications(self) -> List[Notification]:
        """取出並清除累積的通知."""
        notifications = list(self._notifications)
        self._notifications.clear()
        return notifications

    # ===== 操作 =====

    def switch_view(self, view: Union[View, str]) -> None:
        """切換快速報價 / 明細設定畫面."""
        view = View(view)
        self.ui_service.set_current_view(view)
        if view is View.DETAIL_CONFIG:
            self.detail_config.activate_tab(self.ui_service.get_state().active_tab_id)
        else:
            self.ui_service.set_visible_columns(QUICK_QUOTE_COLUMNS)
            self.publish_state()

    def calculate_and_sum(self) -> CalculationResult:
        result = self.quick_quote.calculate_and_sum()
        self.last_error = result.first_error
        return result

    def snapshot(self, notifications: Optional[List[Notification]] = None) -> SessionSnapshot:
        """
        取得工作階段快照.

        Args:
            notifications: 附帶的通知；None 時附上目前累積的通知（不清除）
        """
        return SessionSnapshot(
            session_id=self.session_id,
            document=self.quote_service.get_quote_data(),
            ui=self.ui_service.get_state(),
            notifications=list(self._notifications) if notifications is None else notifications,
            pending_confirmations=self.pending_confirmations(),
            first_error=self.last_error,
        )
