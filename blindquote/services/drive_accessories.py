"""Drive / accessories workflow - 驅動與配件（K4 頁籤）.

捲軸器 / 馬達設定（互斥，切換已設定的另一種需確認）、遙控器 / 充電器 /
延長線數量，以及離開模式時重新計算所有配件價格。
"""

import logging
from typing import Optional, Union

from ..models.line_item import WINDER_HEAVY_DUTY
from ..models.results import ConfirmationRequest
from ..models.ui_state import COUNTED_ACCESSORY_MODES, DriveAccessoryMode
from .workflow import Workflow

logger = logging.getLogger(__name__)


DRIVE_ACCESSORY_COLUMNS = ["sequence", "fabricTypeDisplay", "location", "winder", "motor"]

MOTOR_VALUE = "Motor"

HINT_MESSAGES = {
    DriveAccessoryMode.WINDER: "請點擊第二表 Winder 欄位下的儲存格以設定 HD。",
    DriveAccessoryMode.MOTOR: "請點擊第二表 Motor 欄位下的儲存格以設定 Motor。",
    DriveAccessoryMode.REMOTE: "請點擊 + 或 - 來增加或減少遙控器的數量。",
    DriveAccessoryMode.CHARGER: "請點擊 + 或 - 來增加或減少充電器的數量。",
    DriveAccessoryMode.CORD: "請點擊 + 或 - 來增加或減少延長線的數量。",
}
DEFAULT_HINT = "請進行您的設定。"

MOTOR_TO_WINDER_MESSAGE = "該捲簾已經設定為電動，確定要改為HD？"
WINDER_TO_MOTOR_MESSAGE = "該捲簾已經設定為HD，確定要改為電動？"

ACCESSORY_NAMES = {
    DriveAccessoryMode.REMOTE: "遙控器",
    DriveAccessoryMode.CHARGER: "充電器",
}


class DriveAccessoriesWorkflow(Workflow):
    """驅動與配件流程."""

    def activate(self) -> None:
        self.ui_service.set_visible_columns(DRIVE_ACCESSORY_COLUMNS)

    def _has_motor(self) -> bool:
        return any(item.motor for item in self.quote_service.get_items())

    def handle_mode_change(self, mode: Union[DriveAccessoryMode, str]) -> None:
        """
        切換模式（再次選取同一模式即離開）.

        離開任一模式時重新計算所有配件價格；進入模式時送出操作提示，
        有電動馬達且遙控器 / 充電器數量為 0 時自動設為 1。
        """
        mode = DriveAccessoryMode(mode)
        current = self.ui_service.get_state().drive_accessory_mode
        new_mode = DriveAccessoryMode.NONE if current is mode else mode

        if current is not DriveAccessoryMode.NONE:
            self.recalculate_prices()

        self.ui_service.set_drive_accessory_mode(new_mode)

        if new_mode is not DriveAccessoryMode.NONE:
            self.notify(HINT_MESSAGES.get(new_mode, DEFAULT_HINT))

            if new_mode in ACCESSORY_NAMES and self._has_motor():
                if self.ui_service.get_drive_accessory_count(new_mode) == 0:
                    self.ui_service.set_drive_accessory_count(new_mode, 1)

        self.publish()

    def recalculate_prices(self) -> None:
        """重新計算所有配件價格，並整批覆寫文件中的配件彙總."""
        items = self.quote_service.get_items()
        state = self.ui_service.get_state()

        accessories = self.calculation_service.build_accessory_summary(
            self.product_type,
            items,
            remote_count=state.drive_remote_count,
            charger_count=state.drive_charger_count,
            cord_count=state.drive_cord_count,
            dual_price=state.dual_price,
        )

        self.ui_service.set_drive_accessory_total_price(DriveAccessoryMode.WINDER, accessories.winder.price)
        self.ui_service.set_drive_accessory_total_price(DriveAccessoryMode.MOTOR, accessories.motor.price)
        self.ui_service.set_drive_accessory_total_price(DriveAccessoryMode.REMOTE, accessories.remote.price)
        self.ui_service.set_drive_accessory_total_price(DriveAccessoryMode.CHARGER, accessories.charger.price)
        self.ui_service.set_drive_accessory_total_price(DriveAccessoryMode.CORD, accessories.cord3m.price)
        self.ui_service.set_drive_grand_total(
            sum(
                entry.price
                for entry in (
                    accessories.winder,
                    accessories.motor,
                    accessories.remote,
                    accessories.charger,
                    accessories.cord3m,
                )
            )
        )

        self.quote_service.update_accessory_summary(accessories)
        self.ui_service.set_sum_outdated(True)
        logger.debug(f"Accessory prices recalculated: {accessories.total_price}")

    def handle_table_cell_click(self, row_index: int, column: str) -> Optional[ConfirmationRequest]:
        """
        在 winder / motor 模式點選對應欄位切換設定.

        已設定為另一種驅動方式時不直接修改，改為送出確認請求。

        Returns:
            需要確認時回傳確認請求
        """
        mode = self.ui_service.get_state().drive_accessory_mode
        if column not in ("winder", "motor") or mode.value != column:
            return None

        item = self.quote_service.get_item(row_index)
        if item is None:
            return None

        if column == "winder":
            if item.motor:
                return self.request_confirmation(
                    MOTOR_TO_WINDER_MESSAGE, lambda: self._toggle_winder_by_id(item.id)
                )
            self._toggle_winder(row_index)
        else:
            if item.winder:
                return self.request_confirmation(
                    WINDER_TO_MOTOR_MESSAGE, lambda: self._toggle_motor_by_id(item.id)
                )
            self._toggle_motor(row_index)
        return None

    def _toggle_winder(self, row_index: int) -> None:
        item = self.quote_service.get_item(row_index)
        if item is None:
            return
        new_value = "" if item.winder else WINDER_HEAVY_DUTY
        self.quote_service.update_winder_motor_property(row_index, "winder", new_value)
        self.publish()

    def _toggle_motor(self, row_index: int) -> None:
        item = self.quote_service.get_item(row_index)
        if item is None:
            return
        new_value = "" if item.motor else MOTOR_VALUE
        self.quote_service.update_winder_motor_property(row_index, "motor", new_value)
        self.publish()

    def _toggle_winder_by_id(self, item_id: str) -> None:
        row_index = self.quote_service.find_index(item_id)
        if row_index is not None:
            self._toggle_winder(row_index)

    def _toggle_motor_by_id(self, item_id: str) -> None:
        row_index = self.quote_service.find_index(item_id)
        if row_index is not None:
            self._toggle_motor(row_index)

    def handle_counter_change(
        self, accessory: Union[DriveAccessoryMode, str], direction: str
    ) -> Optional[ConfirmationRequest]:
        """
        增減配件數量（最小為 0）.

        有電動馬達時，將遙控器或充電器減為 0 需先確認。

        Args:
            accessory: remote / charger / cord
            direction: 'add' 或 'subtract'

        Returns:
            需要確認時回傳確認請求
        """
        accessory = DriveAccessoryMode(accessory)
        if accessory not in COUNTED_ACCESSORY_MODES:
            logger.warning(f"Counter change ignored for accessory: {accessory.value}")
            return None

        current = self.ui_service.get_drive_accessory_count(accessory)
        new_count = current + 1 if direction == "add" else max(0, current - 1)

        if new_count == 0 and accessory in ACCESSORY_NAMES and self._has_motor():
            message = f"系統偵測到有電動馬達，確定不要{ACCESSORY_NAMES[accessory]}？"
            return self.request_confirmation(
                message,
                lambda: self._set_count(accessory, 0),
                confirm_label="確定不要",
            )

        self._set_count(accessory, new_count)
        return None

    def _set_count(self, accessory: DriveAccessoryMode, count: int) -> None:
        self.ui_service.set_drive_accessory_count(accessory, count)
        self.publish()
