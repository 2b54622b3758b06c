"""Pricing Orchestrator - 計價服務.

逐列呼叫產品策略計價並彙總總價；配件價格透過價目表單價計算。
產品專屬邏輯全部委派給 PricingStrategy。
"""

import logging
from typing import Callable, Dict, Optional, Sequence, Union

from ..models.line_item import DUAL_BRACKET, WINDER_HEAVY_DUTY, LineItem
from ..models.quote import AccessoryEntry, AccessoryKind, AccessorySummary, QuoteDocument, RemoteEntry
from ..models.results import CalculationResult, PricingError
from .pricing_strategy import PricingStrategy, ProductFactory, ProductType
from .rate_catalog import RateCatalog

logger = logging.getLogger(__name__)


# 配件種類 -> 價目表單價 key
ACCESSORY_PRICE_KEYS: Dict[AccessoryKind, str] = {
    AccessoryKind.DUAL: "comboBracket",
    AccessoryKind.WINDER: "winderHD",
    AccessoryKind.MOTOR: "motorStandard",
    AccessoryKind.REMOTE: "remoteStandard",
    AccessoryKind.CHARGER: "chargerStandard",
    AccessoryKind.CORD: "cord3m",
}

# 以項目列表計價；其餘種類以數量計價
ITEM_PRICED_KINDS = (AccessoryKind.DUAL, AccessoryKind.WINDER, AccessoryKind.MOTOR)


def _strategy_method(strategy: PricingStrategy, kind: AccessoryKind) -> Callable:
    if kind is AccessoryKind.DUAL:
        return strategy.calculate_dual_price
    if kind is AccessoryKind.WINDER:
        return strategy.calculate_winder_price
    if kind is AccessoryKind.MOTOR:
        return strategy.calculate_motor_price
    if kind is AccessoryKind.REMOTE:
        return strategy.calculate_remote_price
    if kind is AccessoryKind.CHARGER:
        return strategy.calculate_charger_price
    if kind is AccessoryKind.CORD:
        return strategy.calculate_cord_price
    raise AssertionError(f"Unhandled accessory kind: {kind}")


class CalculationService:
    """計價服務."""

    def __init__(self, product_factory: ProductFactory, rate_catalog: RateCatalog):
        """
        Initialize CalculationService.

        Args:
            product_factory: 產品策略註冊表
            rate_catalog: 價目表

        Raises:
            ValueError: 缺少必要的協作物件
        """
        if product_factory is None or rate_catalog is None:
            raise ValueError("CalculationService requires product_factory and rate_catalog")
        self.product_factory = product_factory
        self.rate_catalog = rate_catalog

    def calculate_and_sum(
        self, document: QuoteDocument, strategy: Optional[PricingStrategy]
    ) -> CalculationResult:
        """
        計算所有列的價格與總價.

        不修改傳入的文件，回傳新的文件值。所有列都會嘗試計價，
        但只回報第一個錯誤；資料不完整的列略過，不視為錯誤。

        Args:
            document: 目前的報價單文件
            strategy: 產品計價策略

        Returns:
            CalculationResult（新文件與第一個錯誤）
        """
        if strategy is None:
            logger.error("calculate_and_sum called without a product strategy")
            return CalculationResult(
                document=document.model_copy(deep=True),
                first_error=PricingError(message="Product strategy not provided."),
            )

        first_error: Optional[PricingError] = None
        items = []

        for index, source_item in enumerate(document.items):
            item = source_item.model_copy(update={"line_price": None})

            if item.is_priceable:
                matrix = self.rate_catalog.get_rate_matrix(item.fabric_type)
                result = strategy.calculate_price(item, matrix)

                if result.ok:
                    item.line_price = result.price
                elif result.error and first_error is None:
                    column = "width" if "width" in result.error.lower() else "height"
                    first_error = PricingError(
                        message=f"Row {index + 1}: {result.error}",
                        row_index=index,
                        column=column,
                    )
            items.append(item)

        items_total = sum(item.line_price or 0 for item in items)
        accessories = document.summary.accessories.model_copy(deep=True)
        total_sum = items_total + accessories.total_price

        summary = document.summary.model_copy(
            update={"total_sum": total_sum, "accessories": accessories}
        )
        updated = document.model_copy(
            update={"items": items, "summary": summary}, deep=True
        )

        if first_error is not None:
            logger.info(f"Calculation finished with error: {first_error.message}")
        else:
            logger.debug(f"Calculation finished: total_sum={total_sum}")

        return CalculationResult(document=updated, first_error=first_error)

    def calculate_accessory_price(
        self,
        product_type: Union[ProductType, str],
        kind: Union[AccessoryKind, str],
        items: Optional[Sequence[LineItem]] = None,
        count: Optional[int] = None,
    ) -> float:
        """
        計算配件價格.

        策略、單價 key 或單價無法取得時回傳 0，不影響其他計價。

        Args:
            product_type: 產品類型
            kind: 配件種類
            items: 以項目列表計價的配件（dual / winder / motor）
            count: 以數量計價的配件（remote / charger / cord）

        Returns:
            配件總價
        """
        strategy = self.product_factory.get_product_strategy(product_type)
        if strategy is None:
            return 0

        try:
            kind = AccessoryKind(kind)
        except ValueError:
            logger.warning(f"Unknown accessory kind: {kind}")
            return 0

        price_key = ACCESSORY_PRICE_KEYS.get(kind)
        if price_key is None:
            return 0

        unit_price = self.rate_catalog.get_accessory_unit_price(price_key)
        if unit_price is None:
            return 0

        method = _strategy_method(strategy, kind)
        if kind in ITEM_PRICED_KINDS:
            return method(items, unit_price) if items is not None else 0
        return method(count or 0, unit_price)

    def build_accessory_summary(
        self,
        product_type: Union[ProductType, str],
        items: Sequence[LineItem],
        remote_count: int = 0,
        charger_count: int = 0,
        cord_count: int = 0,
        dual_price: Optional[float] = None,
    ) -> AccessorySummary:
        """
        重新計算所有配件彙總（整批覆寫文件中的 accessories 用）.

        Args:
            product_type: 產品類型
            items: 目前的項目列表
            remote_count: 遙控器數量
            charger_count: 充電器數量
            cord_count: 延長線數量
            dual_price: 已確認的雙層支架價格；None 時依項目重新計算

        Returns:
            新的 AccessorySummary
        """
        winder_count = sum(1 for item in items if item.winder == WINDER_HEAVY_DUTY)
        motor_count = sum(1 for item in items if item.motor)
        dual_count = sum(1 for item in items if item.dual == DUAL_BRACKET)

        if dual_price is None:
            dual_price = self.calculate_accessory_price(product_type, AccessoryKind.DUAL, items=items)

        return AccessorySummary(
            winder=AccessoryEntry(
                count=winder_count,
                price=self.calculate_accessory_price(product_type, AccessoryKind.WINDER, items=items),
            ),
            motor=AccessoryEntry(
                count=motor_count,
                price=self.calculate_accessory_price(product_type, AccessoryKind.MOTOR, items=items),
            ),
            remote=RemoteEntry(
                count=remote_count,
                price=self.calculate_accessory_price(product_type, AccessoryKind.REMOTE, count=remote_count),
            ),
            charger=AccessoryEntry(
                count=charger_count,
                price=self.calculate_accessory_price(product_type, AccessoryKind.CHARGER, count=charger_count),
            ),
            cord3m=AccessoryEntry(
                count=cord_count,
                price=self.calculate_accessory_price(product_type, AccessoryKind.CORD, count=cord_count),
            ),
            dual=AccessoryEntry(count=dual_count // 2, price=dual_price),
        )
