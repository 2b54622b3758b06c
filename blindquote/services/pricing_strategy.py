"""Pricing strategies - 產品計價策略.

每個產品系列實作 PricingStrategy 介面，由 ProductFactory 依產品類型選用。
目前只有捲簾（RollerBlindStrategy）一種實作。
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional, Sequence, Type, Union

from ..models.line_item import DUAL_BRACKET, WINDER_HEAVY_DUTY, LineItem
from ..models.rates import RateMatrix, ValidationRule
from ..models.results import PriceResult
from .service_factory import service_factory

logger = logging.getLogger(__name__)


class ProductType(str, Enum):
    """產品類型."""

    ROLLER_BLIND = "roller_blind"


class PricingStrategy(ABC):
    """產品計價策略介面."""

    @abstractmethod
    def calculate_price(self, item: LineItem, matrix: Optional[RateMatrix]) -> PriceResult:
        """以價格矩陣計算單行價格."""

    @abstractmethod
    def get_validation_rules(self) -> Dict[str, ValidationRule]:
        """手動輸入尺寸的驗證規則（key 為欄位名稱）."""

    @abstractmethod
    def get_initial_item_data(self) -> LineItem:
        """建立新的空白列."""

    @abstractmethod
    def calculate_dual_price(self, items: Sequence[LineItem], unit_price: float) -> float:
        ...

    @abstractmethod
    def calculate_winder_price(self, items: Sequence[LineItem], unit_price: float) -> float:
        ...

    @abstractmethod
    def calculate_motor_price(self, items: Sequence[LineItem], unit_price: float) -> float:
        ...

    @abstractmethod
    def calculate_remote_price(self, count: int, unit_price: float) -> float:
        ...

    @abstractmethod
    def calculate_charger_price(self, count: int, unit_price: float) -> float:
        ...

    @abstractmethod
    def calculate_cord_price(self, count: int, unit_price: float) -> float:
        ...

    def get_cycle_options(self, column: str) -> Optional[List[str]]:
        """欄位的循環選項；無則回傳 None."""
        return None


class RollerBlindStrategy(PricingStrategy):
    """捲簾計價策略.

    價格查表規則：
    1. 寬、高、布料類型皆需有值，且需有價格矩陣
    2. 寬度取第一個 >= 寬度的級距；超出最大級距即錯誤
    3. 高度同上，對照 drops 級距
    4. 回傳 prices[高度索引][寬度索引]，不四捨五入、不內插
    """

    # 雙層支架每對的固定價格（未由價目表提供）
    DUAL_PAIR_RATE = 100

    VALIDATION_RULES = {
        "width": ValidationRule(min=250, max=3300, name="Width"),
        "height": ValidationRule(min=300, max=3300, name="Height"),
    }

    CYCLE_OPTIONS = {
        "over": ["", "O"],
        "oi": ["IN", "OUT"],
        "lr": ["L", "R"],
    }

    def calculate_price(self, item: LineItem, matrix: Optional[RateMatrix]) -> PriceResult:
        """
        計算單一捲簾價格.

        Args:
            item: 報價項目
            matrix: 該布料類型的價格矩陣

        Returns:
            PriceResult（成功含價格，失敗含錯誤訊息）
        """
        if item is None or not item.width or not item.height or not item.fabric_type:
            return PriceResult.failure("Incomplete item data.")
        if matrix is None:
            return PriceResult.failure(
                f"Price matrix not found for fabric type: {item.fabric_type}"
            )

        width_index = self._find_breakpoint(matrix.widths, item.width)
        drop_index = self._find_breakpoint(matrix.drops, item.height)

        if width_index is None:
            return PriceResult.failure(
                f"Width {item.width} exceeds the maximum width in the price matrix."
            )
        if drop_index is None:
            return PriceResult.failure(
                f"Height {item.height} exceeds the maximum height in the price matrix."
            )

        try:
            price = matrix.prices[drop_index][width_index]
        except IndexError:
            return PriceResult.failure("Price not found for the given dimensions.")

        return PriceResult.success(price)

    @staticmethod
    def _find_breakpoint(breakpoints: Sequence[int], value: int) -> Optional[int]:
        return next((i for i, bp in enumerate(breakpoints) if value <= bp), None)

    def get_validation_rules(self) -> Dict[str, ValidationRule]:
        return dict(self.VALIDATION_RULES)

    def get_initial_item_data(self) -> LineItem:
        return LineItem()

    def get_cycle_options(self, column: str) -> Optional[List[str]]:
        options = self.CYCLE_OPTIONS.get(column)
        return list(options) if options is not None else None

    # ===== 配件計價 =====

    def calculate_dual_price(self, items: Sequence[LineItem], unit_price: float) -> float:
        """雙層支架以「對」計價：floor(數量 / 2) × DUAL_PAIR_RATE（不使用 unit_price）."""
        count = sum(1 for item in items if item.dual == DUAL_BRACKET)
        return (count // 2) * self.DUAL_PAIR_RATE

    def calculate_winder_price(self, items: Sequence[LineItem], unit_price: float) -> float:
        count = sum(1 for item in items if item.winder == WINDER_HEAVY_DUTY)
        return count * unit_price

    def calculate_motor_price(self, items: Sequence[LineItem], unit_price: float) -> float:
        count = sum(1 for item in items if item.motor)
        return count * unit_price

    def calculate_remote_price(self, count: int, unit_price: float) -> float:
        return count * unit_price

    def calculate_charger_price(self, count: int, unit_price: float) -> float:
        return count * unit_price

    def calculate_cord_price(self, count: int, unit_price: float) -> float:
        return count * unit_price


class ProductFactory:
    """產品策略註冊表."""

    def __init__(self):
        self._registry: Dict[ProductType, Type[PricingStrategy]] = {
            ProductType.ROLLER_BLIND: RollerBlindStrategy,
        }
        self._instances: Dict[ProductType, PricingStrategy] = {}

    def register(self, product_type: ProductType, strategy_cls: Type[PricingStrategy]) -> None:
        """註冊（或取代）產品策略."""
        self._registry[product_type] = strategy_cls
        self._instances.pop(product_type, None)
        logger.info(f"Registered pricing strategy: {product_type.value} -> {strategy_cls.__name__}")

    def get_product_strategy(
        self, product_type: Union[ProductType, str, None]
    ) -> Optional[PricingStrategy]:
        """
        取得產品策略.

        Args:
            product_type: 產品類型（enum 或其字串值）

        Returns:
            PricingStrategy，未註冊時回傳 None
        """
        try:
            key = ProductType(product_type)
        except ValueError:
            logger.warning(f"Unknown product type: {product_type}")
            return None

        if key not in self._instances:
            strategy_cls = self._registry.get(key)
            if strategy_cls is None:
                logger.warning(f"No pricing strategy registered for: {key.value}")
                return None
            self._instances[key] = strategy_cls()
        return self._instances[key]


@service_factory
def get_product_factory() -> ProductFactory:
    """取得 ProductFactory 單例."""
    return ProductFactory()
