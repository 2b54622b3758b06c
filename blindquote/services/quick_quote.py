"""Quick quote workflow - 快速報價畫面的操作流程.

數字鍵輸入、尺寸驗證、列的插入 / 刪除 / 清除、多列刪除、布料類型切換與計價。
"""

import logging
from typing import Any, Callable, Iterable, List, Optional

from ..models.results import CalculationResult, ConfirmationRequest
from .workflow import Workflow

logger = logging.getLogger(__name__)


DIMENSION_COLUMNS = ("width", "height")
TYPE_COLUMN = "TYPE"

RESET_CONFIRM_MESSAGE = "This will clear all data. Are you sure?"


class QuickQuoteWorkflow(Workflow):
    """快速報價流程."""

    # ===== 數字鍵盤 =====

    def handle_numeric_key(self, key: str) -> None:
        """
        處理數字鍵盤按鍵.

        Args:
            key: 數字、'DEL'（刪除一字）、'W' / 'H'（跳到第一個空白的寬 / 高）、'ENT'（送出）
        """
        if key.isdecimal():
            self.ui_service.append_input_value(key)
        elif key == "DEL":
            self.ui_service.delete_last_input_char()
        elif key in ("W", "H"):
            self._focus_first_empty_cell("width" if key == "W" else "height")
        elif key == "ENT":
            self.commit_value()
            return
        else:
            logger.warning(f"Ignoring unknown key: {key}")
            return
        self.publish()

    def commit_value(self) -> bool:
        """
        將輸入緩衝寫入作用中儲存格.

        超出驗證範圍時送出錯誤通知並清除緩衝，不修改文件。

        Returns:
            文件是否實際變更
        """
        state = self.ui_service.get_state()
        raw_value = state.input_value.strip()
        value: Optional[int] = int(raw_value) if raw_value.isdecimal() else None

        strategy = self.strategy
        rule = strategy.get_validation_rules().get(state.input_mode) if strategy else None

        if rule is not None and raw_value and (value is None or not rule.accepts(value)):
            self.notify_error(rule.message)
            self.ui_service.clear_input_value()
            self.publish()
            return False

        cell = state.active_cell
        changed = self.quote_service.update_item_value(cell.row_index, cell.column, value)
        if changed:
            self.ui_service.set_sum_outdated(True)

        self.ui_service.clear_input_value()
        self.publish()
        return changed

    def _focus_first_empty_cell(self, column: str) -> None:
        items = self.quote_service.get_items()
        index = next(
            (i for i, item in enumerate(items) if not getattr(item, column)),
            len(items) - 1,
        )
        self.ui_service.set_active_cell(index, column)
        self.ui_service.clear_input_value()

    # ===== 儲存格點選 =====

    def handle_table_cell_click(self, row_index: int, column: str) -> None:
        """點選寬 / 高：設為作用中並載入目前值；點選 TYPE：切換布料類型."""
        item = self.quote_service.get_item(row_index)
        if item is None:
            return

        self.ui_service.clear_row_selection()
        if column in DIMENSION_COLUMNS:
            self.ui_service.set_active_cell(row_index, column)
            self.ui_service.set_input_value(getattr(item, column))
        elif column == TYPE_COLUMN:
            self.ui_service.set_active_cell(row_index, column)
            if self.quote_service.cycle_item_type(row_index):
                self.ui_service.set_sum_outdated(True)
        self.publish()

    def handle_sequence_cell_click(self, row_index: int) -> None:
        """點選序號：一般模式切換單列選取，多列刪除模式切換勾選."""
        state = self.ui_service.get_state()
        if state.is_multi_delete_mode:
            item = self.quote_service.get_item(row_index)
            if item is None:
                return
            is_last_row = row_index == self.quote_service.row_count() - 1
            if is_last_row and not item.has_dimensions:
                self.notify_error("Cannot select the final empty row.")
                return
            self.ui_service.toggle_multi_delete_selection(row_index)
        else:
            self.ui_service.toggle_row_selection(row_index)
        self.publish()

    def cycle_type(self) -> bool:
        """所有寬高皆有值的列切換為下一個布料類型."""
        changed = self.quote_service.batch_cycle_item_type()
        if changed:
            self.ui_service.set_sum_outdated(True)
            self.publish()
        return changed

    # ===== 列操作 =====

    def insert_row(self) -> Optional[int]:
        """
        在選取列之後插入空白列.

        Returns:
            新列索引；無選取或被拒絕時回傳 None
        """
        selected = self.ui_service.get_state().selected_row_index
        if selected is None:
            return None

        if selected == self.quote_service.row_count() - 1:
            self.notify_error("Cannot insert after the last row.")
            return None

        next_item = self.quote_service.get_item(selected + 1)
        if next_item is not None and next_item.is_empty:
            self.notify_error("Cannot insert before an empty row.")
            return None

        new_index = self._remap_lf_rows(lambda: self.quote_service.insert_row(selected))
        if new_index is None:
            return None
        self.ui_service.set_active_cell(new_index, "width")
        self.ui_service.clear_row_selection()
        self.publish()
        return new_index

    def toggle_multi_delete_mode(self) -> bool:
        entering = self.ui_service.toggle_multi_delete_mode()
        if not entering:
            self._focus_first_empty_cell("width")
        self.publish()
        return entering

    def delete_row(self) -> bool:
        """刪除選取列；多列刪除模式下刪除所有勾選的列並離開該模式."""
        state = self.ui_service.get_state()

        if state.is_multi_delete_mode:
            if not state.multi_delete_selected_indexes:
                self.notify("Please select rows to delete.")
                return False
            self._remap_lf_rows(
                lambda: self.quote_service.delete_multiple_rows(state.multi_delete_selected_indexes)
            )
            self.ui_service.toggle_multi_delete_mode()
        else:
            if state.selected_row_index is None:
                return False
            self._remap_lf_rows(lambda: self.quote_service.delete_row(state.selected_row_index))
            self.ui_service.clear_row_selection()

        self.ui_service.set_sum_outdated(True)
        self._focus_first_empty_cell("width")
        self.publish()
        return True

    def _remap_lf_rows(self, mutate: Callable[[], Any]) -> Any:
        """
        執行會移動列的變更，並依識別碼重新對應 Light-Filter 的選取與已修改列.

        已被刪除的列不再保留。
        """
        state = self.ui_service.get_state()
        items = self.quote_service.get_items()

        def ids(indexes: Iterable[int]) -> List[str]:
            return [items[i].id for i in indexes if 0 <= i < len(items)]

        selected_ids = ids(state.lf_selected_row_indexes)
        modified_ids = ids(state.lf_modified_row_indexes)

        result = mutate()

        def indexes(item_ids: List[str]) -> List[int]:
            found = (self.quote_service.find_index(item_id) for item_id in item_ids)
            return [index for index in found if index is not None]

        self.ui_service.set_lf_rows(indexes(selected_ids), indexes(modified_ids))
        return result

    def clear_row(self) -> bool:
        selected = self.ui_service.get_state().selected_row_index
        if selected is None:
            self.notify_error("Please select a row to clear.")
            return False

        self.quote_service.clear_row(selected)
        self.ui_service.clear_row_selection()
        self.ui_service.set_sum_outdated(True)
        self._focus_first_empty_cell("width")
        self.publish()
        return True

    # ===== 計價與重設 =====

    def calculate_and_sum(self) -> CalculationResult:
        """
        計算所有列價格與總價，結果取代目前文件.

        有錯誤時總價維持過期、送出錯誤通知，並將作用中儲存格移到錯誤位置。
        """
        result = self.calculation_service.calculate_and_sum(
            self.quote_service.get_quote_data(), self.strategy
        )
        self.quote_service.replace_document(result.document)

        error = result.first_error
        if error is not None:
            self.ui_service.set_sum_outdated(True)
            self.notify_error(error.message)
            if error.row_index is not None and error.column is not None:
                self.ui_service.set_active_cell(error.row_index, error.column)
        else:
            self.ui_service.set_sum_outdated(False)

        self.publish()
        return result

    def reset(self) -> ConfirmationRequest:
        """要求確認後清除所有資料."""
        return self.request_confirmation(RESET_CONFIRM_MESSAGE, self._do_reset)

    def _do_reset(self) -> None:
        self.quote_service.reset()
        self.ui_service.reset()
        self.publish()
        self.notify("Quote has been reset.")
