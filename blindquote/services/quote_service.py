"""Quote Document Store - 報價單文件服務.

報價單資料的唯一真實來源，所有結構與欄位變更都經由此服務：
- 列的新增 / 刪除 / 清除 / 整併
- 欄位更新（含捲軸器 / 馬達互斥、面積自動設定 HD）
- 批次欄位更新

不變條件：任何變更完成後，列表最後恰有一列空白列（寬、高、布料類型皆未設定）。
欄位更新回傳是否實際變更，呼叫端據此決定是否將總價標記為過期。
"""

import logging
from typing import Any, Callable, Iterable, List, Optional

from ..models.line_item import LineItem, PRICING_FIELDS, WINDER_HEAVY_DUTY
from ..models.quote import AccessorySummary, QuoteDocument
from .pricing_strategy import PricingStrategy, ProductFactory, ProductType
from .rate_catalog import RateCatalog

logger = logging.getLogger(__name__)


# 面積超過此值 (mm²) 且未設定馬達時，自動設定 HD 捲軸器
WINDER_AREA_THRESHOLD = 4_000_000

EDITABLE_FIELDS = frozenset(LineItem.model_fields) - {"id", "line_price"}
DRIVE_FIELDS = ("winder", "motor")
LF_FABRIC_PREFIX = "L-Filter"


class QuoteService:
    """報價單文件服務."""

    def __init__(
        self,
        product_factory: ProductFactory,
        rate_catalog: RateCatalog,
        initial_document: Optional[QuoteDocument] = None,
        product_type: ProductType = ProductType.ROLLER_BLIND,
    ):
        """
        Initialize QuoteService.

        Args:
            product_factory: 產品策略註冊表
            rate_catalog: 價目表（提供布料類型循環順序）
            initial_document: 初始文件（如從前次工作階段還原），會複製一份
            product_type: 產品類型

        Raises:
            ValueError: 找不到產品策略或缺少必要的協作物件
        """
        if product_factory is None or rate_catalog is None:
            raise ValueError("QuoteService requires product_factory and rate_catalog")

        strategy = product_factory.get_product_strategy(product_type)
        if strategy is None:
            raise ValueError(f"No pricing strategy for product type: {product_type}")

        self.product_type = ProductType(product_type)
        self.strategy: PricingStrategy = strategy
        self.rate_catalog = rate_catalog

        if initial_document is None:
            initial_document = QuoteDocument(items=[strategy.get_initial_item_data()])
        self._document = initial_document.model_copy(deep=True)
        self._initial_summary = self._document.summary.model_copy(deep=True)

        if not self._document.items:
            self._document.items.append(strategy.get_initial_item_data())
        self.consolidate_empty_rows()

        logger.info(f"QuoteService initialized with {len(self._items)} row(s)")

    @property
    def _items(self) -> List[LineItem]:
        return self._document.items

    def _get_item(self, index: int) -> Optional[LineItem]:
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def _new_item(self) -> LineItem:
        return self.strategy.get_initial_item_data()

    @staticmethod
    def _check_field(field: str) -> bool:
        if field not in EDITABLE_FIELDS:
            logger.warning(f"Ignoring update of non-editable field: {field}")
            return False
        return True

    # ===== 讀取 =====

    def get_quote_data(self) -> QuoteDocument:
        """取得文件快照（深拷貝，修改不影響內部狀態）."""
        return self._document.model_copy(deep=True)

    def get_items(self) -> List[LineItem]:
        """取得項目列表快照."""
        return [item.model_copy() for item in self._items]

    def get_item(self, index: int) -> Optional[LineItem]:
        item = self._get_item(index)
        return item.model_copy() if item is not None else None

    def row_count(self) -> int:
        return len(self._items)

    def find_index(self, item_id: str) -> Optional[int]:
        """依識別碼找目前的列索引；已刪除時回傳 None."""
        return next((i for i, item in enumerate(self._items) if item.id == item_id), None)

    def has_data(self) -> bool:
        """多於一列，或唯一一列已輸入尺寸."""
        items = self._items
        return len(items) > 1 or (len(items) == 1 and items[0].has_dimensions)

    def replace_document(self, document: QuoteDocument) -> None:
        """以計價服務產生的新文件取代目前文件."""
        self._document = document.model_copy(deep=True)
        logger.debug("Quote document replaced")

    # ===== 列結構 =====

    def insert_row(self, after_index: int) -> Optional[int]:
        """
        在指定列之後插入空白列.

        Args:
            after_index: 插入位置的前一列

        Returns:
            新列索引；索引超出範圍時回傳 None
        """
        if self._get_item(after_index) is None:
            return None
        new_index = after_index + 1
        self._items.insert(new_index, self._new_item())
        logger.debug(f"Row inserted at {new_index}")
        return new_index

    def _delete_row(self, index: int) -> bool:
        item = self._get_item(index)
        if item is None:
            return False

        is_last_row = index == len(self._items) - 1
        if (is_last_row and not item.is_empty) or len(self._items) == 1:
            self._clear_row(index)
            return True

        del self._items[index]
        return True

    def delete_row(self, index: int) -> bool:
        """
        刪除列.

        最後一列有資料或僅剩一列時改為清除內容，不移除。
        """
        deleted = self._delete_row(index)
        if deleted:
            self.consolidate_empty_rows()
            logger.debug(f"Row {index} deleted")
        return deleted

    def delete_multiple_rows(self, indexes: Iterable[int]) -> bool:
        """由大到小刪除多列，最後整併一次."""
        changed = False
        for index in sorted(set(indexes), reverse=True):
            changed = self._delete_row(index) or changed
        self.consolidate_empty_rows()
        if changed:
            logger.info(f"Deleted multiple rows, {len(self._items)} row(s) remain")
        return changed

    def _clear_row(self, index: int) -> bool:
        item = self._get_item(index)
        if item is None:
            return False
        new_item = self._new_item()
        new_item.id = item.id
        self._items[index] = new_item
        return True

    def clear_row(self, index: int) -> bool:
        """清除列內容，只保留識別碼."""
        cleared = self._clear_row(index)
        if cleared:
            self.consolidate_empty_rows()
        return cleared

    def consolidate_empty_rows(self) -> None:
        """
        整併尾端空白列.

        尾端兩列皆空白時移除最後一列；最後一列有資料時補一列空白列。
        中間的空白列不處理。
        """
        items = self._items
        while len(items) > 1 and items[-1].is_empty and items[-2].is_empty:
            items.pop()

        if not items:
            items.append(self._new_item())
        elif not items[-1].is_empty:
            items.append(self._new_item())

    # ===== 欄位更新 =====

    def update_item_value(self, index: int, field: str, value: Any) -> bool:
        """
        更新欄位值（手動輸入），並整併空白列.

        寬或高變更後，若面積超過 WINDER_AREA_THRESHOLD 且未設定馬達，自動設定 HD 捲軸器。

        Returns:
            是否實際變更
        """
        item = self._get_item(index)
        if item is None or not self._check_field(field):
            return False
        if getattr(item, field) == value:
            return False

        setattr(item, field, value)
        item.line_price = None

        if field in ("width", "height"):
            area = item.area
            if area is not None and area > WINDER_AREA_THRESHOLD and not item.motor:
                item.winder = WINDER_HEAVY_DUTY
                logger.debug(f"Row {index}: area {area} exceeds threshold, winder set to HD")

        self.consolidate_empty_rows()
        return True

    def update_item_property(self, index: int, field: str, value: Any) -> bool:
        """更新明細欄位（不整併）."""
        item = self._get_item(index)
        if item is None or not self._check_field(field):
            return False
        if getattr(item, field) == value:
            return False

        setattr(item, field, value)
        if field in PRICING_FIELDS:
            item.line_price = None
        return True

    def update_winder_motor_property(self, index: int, field: str, value: str) -> bool:
        """
        更新捲軸器或馬達；設定其一為非空值時清除另一個.

        Returns:
            是否實際變更
        """
        if field not in DRIVE_FIELDS:
            logger.warning(f"update_winder_motor_property called with field: {field}")
            return False
        item = self._get_item(index)
        if item is None or getattr(item, field) == value:
            return False

        setattr(item, field, value)
        if value:
            if field == "winder":
                item.motor = ""
            else:
                item.winder = ""
        return True

    def cycle_item_property(self, index: int, field: str, options: List[Any]) -> bool:
        """依選項列表循環欄位值（到底後回到第一個）."""
        item = self._get_item(index)
        if item is None or not options or not self._check_field(field):
            return False

        current = getattr(item, field)
        current_index = options.index(current) if current in options else -1
        next_value = options[(current_index + 1) % len(options)]

        if current == next_value:
            return False
        setattr(item, field, next_value)
        return True

    def cycle_k3_property(self, index: int, column: str) -> bool:
        """
        K3 欄位循環.

        - over: '' <-> 'O'
        - oi: '' -> IN -> OUT -> IN
        - lr: '' -> L -> R -> L
        """
        item = self._get_item(index)
        if item is None:
            return False

        current = getattr(item, column, None) or ""
        if column == "over":
            next_value = "O" if current == "" else ""
        elif column == "oi":
            next_value = "OUT" if current == "IN" else "IN"
        elif column == "lr":
            next_value = "R" if current == "L" else "L"
        else:
            return False

        if current == next_value:
            return False
        setattr(item, column, next_value)
        return True

    def _next_fabric_type(self, current: Optional[str]) -> Optional[str]:
        sequence = self.rate_catalog.get_fabric_type_sequence()
        if not sequence:
            return None
        # 未設定或不在順序中時視為最後一個，下一個即為第一個
        current_index = sequence.index(current) if current in sequence else len(sequence) - 1
        return sequence[(current_index + 1) % len(sequence)]

    def cycle_item_type(self, index: int) -> bool:
        """切換至下一個布料類型（需已輸入寬或高）."""
        item = self._get_item(index)
        if item is None or not item.has_dimensions:
            return False

        next_type = self._next_fabric_type(item.fabric_type)
        if next_type is None or item.fabric_type == next_type:
            return False

        item.fabric_type = next_type
        item.line_price = None
        return True

    def set_item_type(self, index: int, fabric_type: Optional[str]) -> bool:
        """直接設定布料類型（None 表示清除）."""
        item = self._get_item(index)
        if item is None or item.fabric_type == fabric_type:
            return False
        if fabric_type is not None and fabric_type not in self.rate_catalog.get_fabric_type_sequence():
            logger.warning(f"Unknown fabric type rejected: {fabric_type}")
            return False

        item.fabric_type = fabric_type
        item.line_price = None
        self.consolidate_empty_rows()
        return True

    # ===== 批次更新 =====

    def _apply_to_rows(
        self, predicate: Callable[[int, LineItem], bool], field: str, value: Any
    ) -> bool:
        if not self._check_field(field):
            return False
        changed = False
        for index, item in enumerate(self._items):
            if predicate(index, item) and getattr(item, field) != value:
                setattr(item, field, value)
                if field in PRICING_FIELDS:
                    item.line_price = None
                changed = True
        return changed

    def batch_update_property(self, field: str, value: Any) -> bool:
        """更新所有已輸入尺寸的列."""
        return self._apply_to_rows(lambda _, item: item.has_dimensions, field, value)

    def batch_update_property_by_type(self, fabric_type: str, field: str, value: Any) -> bool:
        """更新指定布料類型的所有列."""
        return self._apply_to_rows(lambda _, item: item.fabric_type == fabric_type, field, value)

    def batch_update_property_by_indexes(self, indexes: Iterable[int], field: str, value: Any) -> bool:
        """更新指定索引的列."""
        targets = set(indexes)
        return self._apply_to_rows(lambda index, _: index in targets, field, value)

    def batch_cycle_item_type(self) -> bool:
        """所有寬高皆有值的列，切換為第一列目前類型的下一個類型."""
        eligible = [item for item in self._items if item.width and item.height]
        if not eligible:
            return False

        next_type = self._next_fabric_type(eligible[0].fabric_type)
        if next_type is None:
            return False

        changed = False
        for item in eligible:
            if item.fabric_type != next_type:
                item.fabric_type = next_type
                item.line_price = None
                changed = True
        return changed

    def batch_update_lf_properties(self, indexes: Iterable[int], fabric_name: str, color: str) -> bool:
        """將指定列設為 Light-Filter 布料."""
        new_fabric_name = f"{LF_FABRIC_PREFIX} {fabric_name}"
        changed = False
        for index in indexes:
            item = self._get_item(index)
            if item is None:
                continue
            if item.fabric != new_fabric_name:
                item.fabric = new_fabric_name
                changed = True
            if item.color != color:
                item.color = color
                changed = True
        return changed

    def remove_lf_properties(self, indexes: Iterable[int]) -> bool:
        """清除指定列的布料名稱與顏色."""
        changed = False
        for index in indexes:
            item = self._get_item(index)
            if item is None:
                continue
            if item.fabric != "":
                item.fabric = ""
                changed = True
            if item.color != "":
                item.color = ""
                changed = True
        return changed

    # ===== 總結 =====

    def update_accessory_summary(self, accessories: AccessorySummary) -> None:
        """整批覆寫配件彙總（由計價服務產生），總價標記為過期."""
        self._document.summary.accessories = accessories.model_copy(deep=True)
        self.mark_sum_outdated()

    def mark_sum_outdated(self) -> None:
        self._document.summary.total_sum = None

    def reset(self) -> None:
        """重設為單一空白列，總結還原為建立時的狀態."""
        self._document.items = [self._new_item()]
        self._document.summary = self._initial_summary.model_copy(deep=True)
        logger.info("Quote document reset")
