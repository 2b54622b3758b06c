"""Detail config workflow - 明細設定畫面（K1-K5 頁籤）.

K1 安裝處所、K2 布料（含 Light-Filter 批次設定）、K3 捲向 / 安裝 / 拉繩；
K4、K5 的操作交給 DriveAccessoriesWorkflow 與 DualChainWorkflow。
"""

import logging
from typing import Optional, Union

from ..models.results import ConfirmationRequest
from ..models.ui_state import Cell, DetailTab, DriveAccessoryMode, DualChainMode, EditMode
from .drive_accessories import DriveAccessoriesWorkflow
from .dual_chain import DualChainWorkflow
from .workflow import Workflow

logger = logging.getLogger(__name__)


TAB_COLUMNS = {
    DetailTab.K1: ["sequence", "fabricTypeDisplay", "location"],
    DetailTab.K2: ["sequence", "fabricTypeDisplay", "fabric", "color"],
    DetailTab.K3: ["sequence", "fabricTypeDisplay", "location", "over", "oi", "lr"],
}

K3_COLUMNS = ("over", "oi", "lr")
LF_MODES = (EditMode.LF_SELECT, EditMode.LF_DELETE_SELECT)


class DetailConfigWorkflow(Workflow):
    """明細設定流程."""

    def __init__(
        self,
        *,
        dual_chain: DualChainWorkflow,
        drive_accessories: DriveAccessoriesWorkflow,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.dual_chain = dual_chain
        self.drive_accessories = drive_accessories

    def activate_tab(self, tab: Union[DetailTab, str]) -> None:
        tab = DetailTab(tab)
        self.ui_service.set_active_tab(tab)

        if tab is DetailTab.K4:
            self.drive_accessories.activate()
        elif tab is DetailTab.K5:
            self.dual_chain.activate()
        else:
            self.ui_service.set_visible_columns(TAB_COLUMNS[tab])
        self.publish()

    # ===== 儲存格點選分派 =====

    def handle_table_cell_click(self, row_index: int, column: str) -> Optional[ConfirmationRequest]:
        """依目前模式分派儲存格點選."""
        state = self.ui_service.get_state()

        if state.drive_accessory_mode is not DriveAccessoryMode.NONE:
            return self.drive_accessories.handle_table_cell_click(row_index, column)
        if state.active_edit_mode is EditMode.K1:
            self._select_location_row(row_index)
        elif state.active_edit_mode is EditMode.K3:
            self._cycle_k3_cell(row_index, column)
        elif state.dual_chain_mode is not DualChainMode.NONE:
            self.dual_chain.handle_table_cell_click(row_index, column)
        return None

    def handle_sequence_cell_click(self, row_index: int) -> None:
        if self.ui_service.get_state().active_edit_mode in LF_MODES:
            if self.quote_service.get_item(row_index) is None:
                return
            self.ui_service.toggle_lf_selection(row_index)
            self.publish()

    # ===== K1 安裝處所 =====

    def toggle_location_mode(self) -> bool:
        """
        切換安裝處所輸入模式.

        Returns:
            是否為進入模式
        """
        entering = self.ui_service.get_state().active_edit_mode is not EditMode.K1
        if entering:
            self.ui_service.set_active_edit_mode(EditMode.K1)
            self._select_location_row(0)
        else:
            self._exit_location_mode()
        self.publish()
        return entering

    def _exit_location_mode(self) -> None:
        self.ui_service.set_active_edit_mode(EditMode.NONE)
        self.ui_service.set_target_cell(None)
        self.ui_service.set_location_input_value("")

    def _select_location_row(self, row_index: int) -> None:
        item = self.quote_service.get_item(row_index)
        if item is None:
            return
        self.ui_service.set_target_cell(Cell(row_index=row_index, column="location"))
        self.ui_service.set_location_input_value(item.location)
        self.publish()

    def handle_location_enter(self, value: str) -> bool:
        """
        寫入安裝處所，並移到下一個有資料的列；已是最後一列時離開輸入模式.

        Returns:
            是否寫入
        """
        target = self.ui_service.get_state().target_cell
        if target is None:
            return False

        self.quote_service.update_item_property(target.row_index, "location", (value or "").strip())

        next_index = target.row_index + 1
        next_item = self.quote_service.get_item(next_index)
        if next_item is not None and not next_item.is_empty:
            self._select_location_row(next_index)
        else:
            self._exit_location_mode()
            self.publish()
        return True

    # ===== K2 布料 =====

    def update_fabric_by_type(self, fabric_type: str, fabric: str, color: str) -> bool:
        """以布料類型批次設定布料名稱與顏色."""
        changed = self.quote_service.batch_update_property_by_type(fabric_type, "fabric", fabric)
        changed = self.quote_service.batch_update_property_by_type(fabric_type, "color", color) or changed
        if changed:
            self.publish()
        return changed

    def toggle_lf_edit_mode(self) -> bool:
        """切換 Light-Filter 選取模式."""
        return self._toggle_lf_mode(EditMode.LF_SELECT)

    def toggle_lf_delete_mode(self) -> bool:
        """切換 Light-Filter 移除選取模式."""
        if not self.ui_service.has_lf_modified_rows():
            self.notify("No Light-Filter rows to remove.")
            return False
        return self._toggle_lf_mode(EditMode.LF_DELETE_SELECT)

    def _toggle_lf_mode(self, mode: EditMode) -> bool:
        entering = self.ui_service.get_state().active_edit_mode is not mode
        self.ui_service.set_active_edit_mode(mode if entering else EditMode.NONE)
        self.ui_service.clear_lf_selection()
        self.publish()
        return entering

    def apply_lf_properties(self, fabric_name: str, color: str) -> bool:
        """將選取的列設為 Light-Filter 布料，並離開選取模式."""
        selected = self.ui_service.get_state().lf_selected_row_indexes
        if not selected:
            self.notify_error("Please select rows first.")
            return False

        self.quote_service.batch_update_lf_properties(selected, fabric_name, color)
        self.ui_service.add_lf_modified_rows(selected)
        self._finish_lf_mode()
        return True

    def remove_lf_properties(self) -> bool:
        """清除選取列的 Light-Filter 設定，並離開選取模式."""
        selected = self.ui_service.get_state().lf_selected_row_indexes
        if not selected:
            self.notify_error("Please select rows first.")
            return False

        self.quote_service.remove_lf_properties(selected)
        self.ui_service.remove_lf_modified_rows(selected)
        self._finish_lf_mode()
        return True

    def _finish_lf_mode(self) -> None:
        self.ui_service.set_active_edit_mode(EditMode.NONE)
        self.ui_service.clear_lf_selection()
        self.publish()

    # ===== K3 捲向 / 安裝 / 拉繩 =====

    def toggle_k3_edit_mode(self) -> bool:
        entering = self.ui_service.get_state().active_edit_mode is not EditMode.K3
        self.ui_service.set_active_edit_mode(EditMode.K3 if entering else EditMode.NONE)
        self.publish()
        return entering

    def _cycle_k3_cell(self, row_index: int, column: str) -> None:
        if column in K3_COLUMNS and self.quote_service.cycle_k3_property(row_index, column):
            self.publish()

    def batch_cycle(self, column: str) -> bool:
        """
        以第一列目前的值為準，將所有已輸入尺寸的列設為下一個選項.

        Args:
            column: over / oi / lr
        """
        strategy = self.strategy
        options = strategy.get_cycle_options(column) if strategy else None
        first_item = self.quote_service.get_item(0)
        if not options or first_item is None:
            return False

        current = getattr(first_item, column)
        current_index = options.index(current) if current in options else -1
        next_value = options[(current_index + 1) % len(options)]

        changed = self.quote_service.batch_update_property(column, next_value)
        if changed:
            self.publish()
        return changed
