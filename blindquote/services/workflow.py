"""Workflow base - 使用者操作流程的共用部分.

各流程（快速報價、明細設定、雙層支架 / 拉繩、驅動與配件）把使用者操作轉為
文件與 UI 狀態的變更，並透過事件通道送出通知與確認請求。
"""

import logging
from typing import Callable, Optional

from ..models.results import ConfirmationRequest, Notification, NotificationType
from ..utils.events import EventAggregator, EventType
from .calculation_service import CalculationService
from .pricing_strategy import PricingStrategy, ProductFactory, ProductType
from .quote_service import QuoteService
from .ui_service import UIService

logger = logging.getLogger(__name__)


ConfirmationRequester = Callable[..., ConfirmationRequest]


class Workflow:
    """流程共用的協作物件與通知方法."""

    def __init__(
        self,
        *,
        quote_service: QuoteService,
        ui_service: UIService,
        calculation_service: CalculationService,
        product_factory: ProductFactory,
        events: EventAggregator,
        request_confirmation: ConfirmationRequester,
        publish_state: Optional[Callable[[], None]] = None,
        product_type: ProductType = ProductType.ROLLER_BLIND,
    ):
        self.quote_service = quote_service
        self.ui_service = ui_service
        self.calculation_service = calculation_service
        self.product_factory = product_factory
        self.events = events
        self.request_confirmation = request_confirmation
        self._publish_state = publish_state
        self.product_type = ProductType(product_type)

    @property
    def strategy(self) -> Optional[PricingStrategy]:
        return self.product_factory.get_product_strategy(self.product_type)

    def publish(self) -> None:
        """送出狀態變更事件."""
        if self._publish_state is not None:
            self._publish_state()

    def notify(self, message: str, type: NotificationType = NotificationType.INFO) -> None:
        """送出通知."""
        logger.debug(f"Notification ({type.value}): {message}")
        self.events.publish(
            EventType.SHOW_NOTIFICATION, Notification(message=message, type=type)
        )

    def notify_error(self, message: str) -> None:
        self.notify(message, NotificationType.ERROR)
