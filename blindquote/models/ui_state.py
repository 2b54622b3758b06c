"""UI/view state data model.

Transient interaction state read and written by the cross-field rules.
Rows are referenced by index only; nothing here is pricing data.
"""

from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional, Set


class View(str, Enum):
    """畫面."""

    QUICK_QUOTE = "QUICK_QUOTE"
    DETAIL_CONFIG = "DETAIL_CONFIG"


class DetailTab(str, Enum):
    """明細設定頁籤."""

    K1 = "k1-tab"  # 安裝處所
    K2 = "k2-tab"  # 布料
    K3 = "k3-tab"  # 捲向 / 安裝 / 拉繩
    K4 = "k4-tab"  # 捲軸器 / 馬達 / 配件
    K5 = "k5-tab"  # 雙層支架 / 拉繩長度 / 配件總結


class EditMode(str, Enum):
    """明細頁的編輯模式."""

    NONE = "none"
    K1 = "K1"
    K3 = "K3"
    LF_SELECT = "K2_LF_SELECT"
    LF_DELETE_SELECT = "K2_LF_DELETE_SELECT"


class DualChainMode(str, Enum):
    """雙層支架 / 拉繩長度模式."""

    NONE = "none"
    DUAL = "dual"
    CHAIN = "chain"


class DriveAccessoryMode(str, Enum):
    """驅動與配件模式."""

    NONE = "none"
    WINDER = "winder"
    MOTOR = "motor"
    REMOTE = "remote"
    CHARGER = "charger"
    CORD = "cord"


COUNTED_ACCESSORY_MODES = (
    DriveAccessoryMode.REMOTE,
    DriveAccessoryMode.CHARGER,
    DriveAccessoryMode.CORD,
)

QUICK_QUOTE_COLUMNS = ["sequence", "width", "height", "TYPE", "Price"]


class Cell(BaseModel):
    """表格儲存格位置."""

    row_index: int = Field(..., ge=0)
    column: str


class AccessoryPrices(BaseModel):
    """各配件總價（顯示用）."""

    winder: Optional[float] = None
    motor: Optional[float] = None
    remote: Optional[float] = None
    charger: Optional[float] = None
    cord: Optional[float] = None

    @property
    def total(self) -> float:
        return sum(
            price or 0
            for price in (self.winder, self.motor, self.remote, self.charger, self.cord)
        )


class UIState(BaseModel):
    """UI 狀態."""

    # 畫面
    current_view: View = View.QUICK_QUOTE
    visible_columns: List[str] = Field(default_factory=lambda: list(QUICK_QUOTE_COLUMNS))
    active_tab_id: DetailTab = DetailTab.K1

    # 輸入與選取
    input_value: str = ""
    input_mode: str = "width"
    active_cell: Cell = Field(default_factory=lambda: Cell(row_index=0, column="width"))
    selected_row_index: Optional[int] = None
    is_sum_outdated: bool = False

    # 多列刪除
    is_multi_delete_mode: bool = False
    multi_delete_selected_indexes: Set[int] = Field(default_factory=set)

    # K1 / K2 / K3
    location_input_value: str = ""
    target_cell: Optional[Cell] = None
    active_edit_mode: EditMode = EditMode.NONE
    lf_selected_row_indexes: Set[int] = Field(default_factory=set)
    lf_modified_row_indexes: Set[int] = Field(default_factory=set)

    # 雙層支架 / 拉繩長度
    dual_chain_mode: DualChainMode = DualChainMode.NONE
    dual_chain_input_value: str = ""
    dual_price: Optional[float] = None

    # 驅動與配件
    drive_accessory_mode: DriveAccessoryMode = DriveAccessoryMode.NONE
    drive_remote_count: int = Field(0, ge=0)
    drive_charger_count: int = Field(0, ge=0)
    drive_cord_count: int = Field(0, ge=0)
    drive_total_prices: AccessoryPrices = Field(default_factory=AccessoryPrices)
    drive_grand_total: Optional[float] = None

    # 配件總結（K5 顯示值）
    summary_prices: AccessoryPrices = Field(default_factory=AccessoryPrices)
    summary_accessories_total: Optional[float] = None
