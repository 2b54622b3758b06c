"""UI/View State Store - UI 狀態服務.

保存所有暫時性的互動狀態（作用中儲存格、輸入緩衝、選取、模式旗標、
配件數量與顯示用價格）。不含任何計價資料，列只以索引參照。
"""

import logging
from typing import Iterable, List, Optional, Union

from ..models.ui_state import (
    AccessoryPrices,
    Cell,
    DetailTab,
    DriveAccessoryMode,
    DualChainMode,
    EditMode,
    UIState,
    View,
)

logger = logging.getLogger(__name__)


COUNT_FIELDS = {
    DriveAccessoryMode.REMOTE: "drive_remote_count",
    DriveAccessoryMode.CHARGER: "drive_charger_count",
    DriveAccessoryMode.CORD: "drive_cord_count",
}


class UIService:
    """UI 狀態服務."""

    def __init__(self, initial_state: Optional[UIState] = None):
        """
        Initialize UIService.

        Args:
            initial_state: 初始狀態，會複製一份；None 時使用預設值
        """
        self._initial_state = (initial_state or UIState()).model_copy(deep=True)
        self._state = self._initial_state.model_copy(deep=True)

    def get_state(self) -> UIState:
        """取得狀態快照."""
        return self._state.model_copy(deep=True)

    def reset(self) -> None:
        """還原為建立時的狀態."""
        self._state = self._initial_state.model_copy(deep=True)
        logger.debug("UI state reset")

    # ===== 作用中儲存格與輸入緩衝 =====

    def set_active_cell(self, row_index: int, column: str) -> None:
        self._state.active_cell = Cell(row_index=row_index, column=column)
        self._state.input_mode = column

    def set_input_value(self, value: Optional[Union[str, int]]) -> None:
        self._state.input_value = "" if value is None else str(value)

    def append_input_value(self, key: str) -> None:
        self._state.input_value += key

    def delete_last_input_char(self) -> None:
        self._state.input_value = self._state.input_value[:-1]

    def clear_input_value(self) -> None:
        self._state.input_value = ""

    # ===== 列選取 =====

    def toggle_row_selection(self, row_index: int) -> None:
        """選取列；再次選取同一列則取消."""
        if self._state.selected_row_index == row_index:
            self._state.selected_row_index = None
        else:
            self._state.selected_row_index = row_index

    def clear_row_selection(self) -> None:
        self._state.selected_row_index = None

    def toggle_multi_delete_mode(self) -> bool:
        """
        切換多列刪除模式.

        進入時以目前選取的列作為初始選取；無論進入或離開都清除單列選取。

        Returns:
            是否為進入模式
        """
        entering = not self._state.is_multi_delete_mode
        self._state.is_multi_delete_mode = entering
        self._state.multi_delete_selected_indexes = set()

        if entering and self._state.selected_row_index is not None:
            self._state.multi_delete_selected_indexes.add(self._state.selected_row_index)

        self.clear_row_selection()
        return entering

    def toggle_multi_delete_selection(self, row_index: int) -> None:
        selected = self._state.multi_delete_selected_indexes
        if row_index in selected:
            selected.discard(row_index)
        else:
            selected.add(row_index)

    def set_sum_outdated(self, is_outdated: bool) -> None:
        self._state.is_sum_outdated = is_outdated

    # ===== 畫面 / 頁籤 =====

    def set_current_view(self, view: View) -> None:
        self._state.current_view = View(view)

    def set_visible_columns(self, columns: List[str]) -> None:
        self._state.visible_columns = list(columns)

    def set_active_tab(self, tab: DetailTab) -> None:
        self._state.active_tab_id = DetailTab(tab)

    # ===== K1 / K2 / K3 =====

    def set_location_input_value(self, value: str) -> None:
        self._state.location_input_value = value

    def set_target_cell(self, cell: Optional[Cell]) -> None:
        self._state.target_cell = cell

    def set_active_edit_mode(self, mode: EditMode) -> None:
        self._state.active_edit_mode = EditMode(mode)

    def toggle_lf_selection(self, row_index: int) -> None:
        selected = self._state.lf_selected_row_indexes
        if row_index in selected:
            selected.discard(row_index)
        else:
            selected.add(row_index)

    def clear_lf_selection(self) -> None:
        self._state.lf_selected_row_indexes = set()

    def add_lf_modified_rows(self, row_indexes: Iterable[int]) -> None:
        self._state.lf_modified_row_indexes.update(row_indexes)

    def remove_lf_modified_rows(self, row_indexes: Iterable[int]) -> None:
        self._state.lf_modified_row_indexes.difference_update(row_indexes)

    def has_lf_modified_rows(self) -> bool:
        return bool(self._state.lf_modified_row_indexes)

    def set_lf_rows(self, selected: Iterable[int], modified: Iterable[int]) -> None:
        """列結構變更後重新設定 Light-Filter 的選取與已修改列."""
        self._state.lf_selected_row_indexes = set(selected)
        self._state.lf_modified_row_indexes = set(modified)

    # ===== 雙層支架 / 拉繩長度 =====

    def set_dual_chain_mode(self, mode: DualChainMode) -> None:
        self._state.dual_chain_mode = DualChainMode(mode)

    def set_dual_chain_input_value(self, value: Optional[Union[str, int]]) -> None:
        self._state.dual_chain_input_value = "" if value is None else str(value)

    def clear_dual_chain_input_value(self) -> None:
        self._state.dual_chain_input_value = ""

    def set_dual_price(self, price: Optional[float]) -> None:
        self._state.dual_price = price

    # ===== 驅動與配件 =====

    def set_drive_accessory_mode(self, mode: DriveAccessoryMode) -> None:
        self._state.drive_accessory_mode = DriveAccessoryMode(mode)

    def get_drive_accessory_count(self, accessory: DriveAccessoryMode) -> int:
        field = COUNT_FIELDS.get(DriveAccessoryMode(accessory))
        return getattr(self._state, field) if field else 0

    def set_drive_accessory_count(self, accessory: DriveAccessoryMode, count: int) -> None:
        """設定配件數量；負數以 0 計."""
        field = COUNT_FIELDS.get(DriveAccessoryMode(accessory))
        if field is None:
            logger.warning(f"No counter for accessory: {accessory}")
            return
        setattr(self._state, field, max(0, int(count)))

    def set_drive_accessory_total_price(self, accessory: DriveAccessoryMode, price: Optional[float]) -> None:
        accessory = DriveAccessoryMode(accessory)
        if accessory is DriveAccessoryMode.NONE:
            return
        setattr(self._state.drive_total_prices, accessory.value, price)

    def set_drive_grand_total(self, price: Optional[float]) -> None:
        self._state.drive_grand_total = price

    # ===== 配件總結顯示值 =====

    def set_summary_prices(self, prices: AccessoryPrices) -> None:
        self._state.summary_prices = prices.model_copy()

    def set_summary_accessories_total(self, value: Optional[float]) -> None:
        self._state.summary_accessories_total = value
