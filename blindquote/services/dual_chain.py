"""Dual / chain workflow - 雙層支架與拉繩長度（K5 頁籤）.

離開雙層支架模式時檢查 D 的總數必須為偶數，並計算雙層支架價格；
拉繩長度只接受正整數或空白。
"""

import logging
from typing import Optional, Union

from ..models.line_item import DUAL_BRACKET
from ..models.quote import AccessoryKind
from ..models.ui_state import AccessoryPrices, Cell, DualChainMode
from .workflow import Workflow

logger = logging.getLogger(__name__)


DUAL_CHAIN_COLUMNS = ["sequence", "fabricTypeDisplay", "location", "dual", "chain"]

ODD_DUAL_MESSAGE = "雙層支架(D)的總數必須為偶數，請修正後再退出。"
POSITIVE_INTEGER_MESSAGE = "僅能輸入正整數。"


class DualChainWorkflow(Workflow):
    """雙層支架 / 拉繩長度流程."""

    def activate(self) -> None:
        """進入頁籤：顯示欄位，並將驅動配件價格同步到配件總結."""
        self.ui_service.set_visible_columns(DUAL_CHAIN_COLUMNS)

        state = self.ui_service.get_state()
        self.ui_service.set_summary_prices(AccessoryPrices(**state.drive_total_prices.model_dump()))
        self._update_summary_accessories_total()

    def _update_summary_accessories_total(self) -> None:
        state = self.ui_service.get_state()
        total = (state.dual_price or 0) + state.drive_total_prices.total
        self.ui_service.set_summary_accessories_total(total)

    def handle_mode_change(self, mode: Union[DualChainMode, str]) -> bool:
        """
        切換模式（再次選取同一模式即離開）.

        Args:
            mode: DUAL 或 CHAIN

        Returns:
            是否切換成功；離開雙層支架模式時 D 的數量為奇數則拒絕
        """
        mode = DualChainMode(mode)
        current = self.ui_service.get_state().dual_chain_mode

        if current is DualChainMode.DUAL and not self._exit_dual_mode():
            return False

        new_mode = DualChainMode.NONE if current is mode else mode
        self.ui_service.set_dual_chain_mode(new_mode)

        if new_mode is DualChainMode.DUAL:
            self.ui_service.set_dual_price(None)
        if new_mode is DualChainMode.NONE:
            self.ui_service.set_target_cell(None)
            self.ui_service.clear_dual_chain_input_value()

        self.publish()
        return True

    def _exit_dual_mode(self) -> bool:
        items = self.quote_service.get_items()
        dual_count = sum(1 for item in items if item.dual == DUAL_BRACKET)
        if dual_count % 2 != 0:
            logger.info(f"Dual mode exit rejected: odd bracket count {dual_count}")
            self.notify_error(ODD_DUAL_MESSAGE)
            return False

        price = self.calculation_service.calculate_accessory_price(
            self.product_type, AccessoryKind.DUAL, items=items
        )
        self.ui_service.set_dual_price(price)

        state = self.ui_service.get_state()
        accessories = self.calculation_service.build_accessory_summary(
            self.product_type,
            items,
            remote_count=state.drive_remote_count,
            charger_count=state.drive_charger_count,
            cord_count=state.drive_cord_count,
            dual_price=price,
        )
        self.quote_service.update_accessory_summary(accessories)
        self.ui_service.set_sum_outdated(True)
        self._update_summary_accessories_total()
        return True

    def handle_table_cell_click(self, row_index: int, column: str) -> None:
        """雙層支架模式點選 dual 欄切換 D；拉繩模式點選 chain 欄設為輸入目標."""
        item = self.quote_service.get_item(row_index)
        if item is None:
            return

        mode = self.ui_service.get_state().dual_chain_mode
        if mode is DualChainMode.DUAL and column == "dual":
            new_value = "" if item.dual == DUAL_BRACKET else DUAL_BRACKET
            self.quote_service.update_item_property(row_index, "dual", new_value)
            self.publish()
        elif mode is DualChainMode.CHAIN and column == "chain":
            self.ui_service.set_target_cell(Cell(row_index=row_index, column="chain"))
            self.ui_service.set_dual_chain_input_value(item.chain)
            self.publish()

    def handle_chain_enter(self, value: str) -> bool:
        """
        寫入拉繩長度.

        Args:
            value: 輸入字串；空白表示清除

        Returns:
            是否寫入
        """
        target = self.ui_service.get_state().target_cell
        if target is None:
            return False

        value = (value or "").strip()
        chain: Optional[int] = None
        if value:
            if not value.isdecimal() or int(value) <= 0:
                self.notify_error(POSITIVE_INTEGER_MESSAGE)
                return False
            chain = int(value)

        self.quote_service.update_item_property(target.row_index, target.column, chain)
        self.ui_service.set_target_cell(None)
        self.ui_service.clear_dual_chain_input_value()
        self.publish()
        return True
